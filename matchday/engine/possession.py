# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Possession resolution: which player, if any, controls the ball."""

from __future__ import annotations

from typing import Iterable, Optional

from matchday.engine.config import ENGINE_CONFIG
from matchday.engine.physics import BallState
from matchday.models.player import Player


def find_possessor(
    players: Iterable[Player],
    ball: BallState,
    radius: Optional[float] = None,
) -> Optional[Player]:
    """Return the player closest to the ball within the possession radius.

    Ties keep the first player encountered, so the result is stable for a
    given iteration order.

    Parameters
    ----------
    players : Iterable[Player]
        Candidate players in a stable order.
    ball : BallState
        Ball whose controller is being resolved.
    radius : float | None, optional
        Possession radius; a player must be strictly closer than this.
        Defaults to ``ENGINE_CONFIG.possession.radius``.

    Returns
    -------
    Player | None
        Closest qualifying player, or ``None`` when nobody is close enough.
    """
    limit = radius if radius is not None else ENGINE_CONFIG.possession.radius
    best: Optional[Player] = None
    best_distance = float("inf")
    for player in players:
        distance = player.distance_to(ball.position)
        if distance < limit and distance < best_distance:
            best = player
            best_distance = distance
    return best
