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
"""Utilities that seed squads in their kickoff formation."""
import random
from typing import List, Optional

from matchday.engine.config import ENGINE_CONFIG, FormationConfig
from matchday.engine.physics import Pitch, Vector2D
from matchday.models.player import Player
from matchday.models.team import Team


def formation_slot(
    team: Team,
    index: int,
    count: int,
    pitch: Pitch,
    config: Optional[FormationConfig] = None,
) -> Vector2D:
    """Return the un-jittered formation position of one squad member.

    The squad is staggered diagonally: x steps from near the own goal line
    towards the halfway line while y steps evenly down the pitch.

    Parameters
    ----------
    team : Team
        Side of the player.
    index : int
        Zero-based position of the player within the squad.
    count : int
        Squad size.
    pitch : Pitch
        Pitch the squad is placed on.
    config : FormationConfig | None, optional
        Placement references; defaults to ``ENGINE_CONFIG.formation``.

    Returns
    -------
    Vector2D
        Base position before jitter.
    """
    cfg = config if config is not None else ENGINE_CONFIG.formation
    spacing_x = (pitch.width / 2 - cfg.halfway_gap) / ((count - 1) or 1)
    spacing_y = pitch.height / (count + 1)
    depth = cfg.edge_inset + index * spacing_x
    x = depth if team is Team.HOME else pitch.width - depth
    return Vector2D(x, spacing_y * (index + 1))


def generate_squad(
    team: Team,
    count: int,
    pitch: Pitch,
    rng: Optional[random.Random] = None,
    config: Optional[FormationConfig] = None,
) -> List[Player]:
    """Create a squad at its formation slots with a little random jitter.

    Parameters
    ----------
    team : Team
        Side to generate.
    count : int
        Number of players.
    pitch : Pitch
        Pitch the squad is placed on.
    rng : random.Random | None, optional
        Random source for the jitter; the module-level generator when omitted.
    config : FormationConfig | None, optional
        Placement references; defaults to ``ENGINE_CONFIG.formation``.

    Returns
    -------
    List[Player]
        Players with identifiers ``<prefix>0`` to ``<prefix><count - 1>``, at rest.
    """
    cfg = config if config is not None else ENGINE_CONFIG.formation
    source = rng if rng is not None else random.Random()
    squad = []
    for index in range(count):
        base = formation_slot(team, index, count, pitch, cfg)
        jitter = Vector2D((source.random() - 0.5) * cfg.jitter_x, (source.random() - 0.5) * cfg.jitter_y)
        squad.append(Player(f"{team.id_prefix}{index}", team, base + jitter))
    return squad


def generate_players(
    count: int,
    pitch: Pitch,
    rng: Optional[random.Random] = None,
    config: Optional[FormationConfig] = None,
) -> List[Player]:
    """Create both squads, home first.

    Parameters
    ----------
    count : int
        Number of players per side.
    pitch : Pitch
        Pitch the squads are placed on.
    rng : random.Random | None, optional
        Random source for the jitter.
    config : FormationConfig | None, optional
        Placement references; defaults to ``ENGINE_CONFIG.formation``.

    Returns
    -------
    List[Player]
        Home players followed by away players.
    """
    source = rng if rng is not None else random.Random()
    home = generate_squad(Team.HOME, count, pitch, source, config)
    away = generate_squad(Team.AWAY, count, pitch, source, config)
    return home + away
