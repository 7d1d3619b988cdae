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
"""Domain model for a player on the pitch."""
from dataclasses import dataclass, field

from matchday.engine.physics import Vector2D
from matchday.models.team import Team


@dataclass
class Player:
    """Runtime record for a single player.

    Players carry no possession flag: whether a player is dribbling is derived
    from the ball's attachment, so the two can never disagree.

    Parameters
    ----------
    player_id : str
        Identifier unique within a match, for example ``"h0"`` or ``"a3"``.
    team : Team
        Side the player belongs to.
    position : Vector2D
        Current position on the pitch.
    velocity : Vector2D, optional
        Current velocity in pitch units per tick; defaults to rest.
    """

    player_id: str
    team: Team
    position: Vector2D
    velocity: Vector2D = field(default_factory=lambda: Vector2D(0.0, 0.0))

    def distance_to(self, point: Vector2D) -> float:
        """Return the distance from the player's centre to ``point``.

        Parameters
        ----------
        point : Vector2D
            Location to measure against, typically the ball.

        Returns
        -------
        float
            Euclidean distance in pitch units.
        """
        return self.position.distance_to(point)

    def is_teammate(self, other: "Player") -> bool:
        """Return whether ``other`` is a different player on the same side.

        Parameters
        ----------
        other : Player
            Player to compare against.

        Returns
        -------
        bool
            ``True`` for teammates, ``False`` for opponents and for ``self``.
        """
        return other.team is self.team and other.player_id != self.player_id
