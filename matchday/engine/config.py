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
"""Central configuration for engine tuning parameters.

Distances are expressed in pitch units, speeds in pitch units per millisecond
and cooldowns in milliseconds of simulated time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True, frozen=True)
class PitchConfig:
    """Dimensions of the pitch and the entities that move on it.

    Parameters
    ----------
    width : float, default=800.0
        Distance between the two goal lines.
    height : float, default=500.0
        Distance between the two touchlines.
    goal_width : float, default=120.0
        Width of each goal mouth, centred vertically on the goal line.
    player_radius : float, default=14.0
        Radius of a player disc.
    ball_radius : float, default=10.0
        Radius of the ball.
    """

    width: float = 800.0
    height: float = 500.0
    goal_width: float = 120.0
    player_radius: float = 14.0
    ball_radius: float = 10.0


@dataclass(slots=True, frozen=True)
class SimulationConfig:
    """Timing controls for the main simulation loop.

    Parameters
    ----------
    max_step_ms : float, default=50.0
        Largest elapsed time a single tick may integrate.
    action_cooldown_ms : float, default=700.0
        Minimum simulated time between two action decisions.
    goal_cooldown_ms : float, default=150.0
        Minimum simulated time between two goal detections.
    default_players_per_team : int, default=5
        Squad size used when the requested size is not a number.
    min_players_per_team : int, default=2
        Smallest allowed squad size.
    max_players_per_team : int, default=11
        Largest allowed squad size.
    frame_ms : float, default=16.0
        Fixed step used by headless runs (about 60 frames per second).
    """

    max_step_ms: float = 50.0
    action_cooldown_ms: float = 700.0
    goal_cooldown_ms: float = 150.0
    default_players_per_team: int = 5
    min_players_per_team: int = 2
    max_players_per_team: int = 11
    frame_ms: float = 16.0


@dataclass(slots=True, frozen=True)
class PossessionConfig:
    """Threshold that decides who controls the ball.

    Parameters
    ----------
    radius : float, default=52.0
        A player must be strictly closer than this to the ball to act on it.
    """

    radius: float = 52.0


@dataclass(slots=True, frozen=True)
class ActionConfig:
    """Scoring and execution parameters for dribble, pass and shoot.

    Parameters
    ----------
    crowd_radius : float, default=75.0
        Players within this distance of the ball count as crowding a dribble.
    crowd_penalty : float, default=0.6
        Weight of each crowding player in the dribble score.
    pass_score_min : float, default=35.0
        Receivers closer than this are ignored when scoring passes.
    pass_score_max : float, default=220.0
        Receivers further than this are ignored when scoring passes.
    pass_score_base : float, default=0.3
        Score floor for any viable pass.
    pass_score_weight : float, default=0.7
        Share of the pass score that rewards shorter passes.
    pass_exec_min : float, default=40.0
        Receivers closer than this are ignored when executing a pass.
    pass_exec_max : float, default=200.0
        Receivers further than this are ignored when executing a pass.
    lane_radius : float, default=28.0
        Default clearance required around a passing lane.
    pass_lane_radius : float, default=26.0
        Tightened clearance used by the pass scorer and executor.
    pass_speed : float, default=0.38
        Ball speed imparted by a pass.
    shot_speed : float, default=0.42
        Ball speed imparted by a shot.
    shot_overshoot : float, default=10.0
        Distance beyond the goal line that shots are aimed at.
    shot_spread : float, default=50.0
        Total vertical spread of shot placement around the goal centre.
    attacking_third : float, default=180.0
        Depth of the attacking zone measured from the opponent goal line.
    shot_range : float, default=180.0
        Distance to the goal centre at which the shoot score reaches zero.
    shoot_threshold : float, default=0.4
        Shoot score above which a shot is always chosen.
    pass_threshold : float, default=0.5
        Pass score above which a pass may beat a dribble.
    """

    crowd_radius: float = 75.0
    crowd_penalty: float = 0.6
    pass_score_min: float = 35.0
    pass_score_max: float = 220.0
    pass_score_base: float = 0.3
    pass_score_weight: float = 0.7
    pass_exec_min: float = 40.0
    pass_exec_max: float = 200.0
    lane_radius: float = 28.0
    pass_lane_radius: float = 26.0
    pass_speed: float = 0.38
    shot_speed: float = 0.42
    shot_overshoot: float = 10.0
    shot_spread: float = 50.0
    attacking_third: float = 180.0
    shot_range: float = 180.0
    shoot_threshold: float = 0.4
    pass_threshold: float = 0.5


@dataclass(slots=True, frozen=True)
class MovementConfig:
    """Steering parameters shared by the possessor and off-ball regimes.

    Parameters
    ----------
    acceleration : float, default=0.04
        Velocity gained per millisecond toward the steering target.
    damping : float, default=0.89
        Per-tick velocity multiplier.
    goal_inset : float, default=30.0
        Distance in front of the opponent goal line a dribbler runs toward.
    carry_offset : float, default=8.0
        Multiple of the dribbler's velocity the ball is carried ahead by.
    release_distance : float, default=50.0
        Player to ball distance beyond which a dribble is lost.
    support_range : float, default=220.0
        Off-ball players closer than this to the ball move to support it.
    support_offset : float, default=45.0
        Distance behind the ball taken up by supporting players.
    support_fallback : float, default=90.0
        Distance from the halfway line used when support would leave the own half.
    wander_x : float, default=50.0
        Horizontal extent of a wander step.
    wander_y : float, default=35.0
        Vertical extent of a wander step.
    wander_fallback : float, default=100.0
        Distance from the halfway line used when a wander would leave the own half.
    wander_margin : float, default=25.0
        Minimum distance of wander targets from the pitch edges.
    """

    acceleration: float = 0.04
    damping: float = 0.89
    goal_inset: float = 30.0
    carry_offset: float = 8.0
    release_distance: float = 50.0
    support_range: float = 220.0
    support_offset: float = 45.0
    support_fallback: float = 90.0
    wander_x: float = 50.0
    wander_y: float = 35.0
    wander_fallback: float = 100.0
    wander_margin: float = 25.0


@dataclass(slots=True, frozen=True)
class BallPhysicsConfig:
    """Coefficients that govern the free-flying ball.

    Parameters
    ----------
    drag : float, default=0.992
        Per-tick velocity multiplier.
    restitution : float, default=0.6
        Fraction of vertical speed kept after hitting a touchline.
    kickoff_margin : float, default=50.0
        Minimum distance of a kickoff spot from the pitch edges.
    """

    drag: float = 0.992
    restitution: float = 0.6
    kickoff_margin: float = 50.0


@dataclass(slots=True, frozen=True)
class FormationConfig:
    """Reference values for spreading a squad across its own half.

    Parameters
    ----------
    edge_inset : float, default=60.0
        Distance of the deepest player from the own goal line.
    halfway_gap : float, default=100.0
        Horizontal room left free between the squad and the halfway line.
    jitter_x : float, default=25.0
        Total horizontal jitter applied to each seeded position.
    jitter_y : float, default=15.0
        Total vertical jitter applied to each seeded position.
    """

    edge_inset: float = 60.0
    halfway_gap: float = 100.0
    jitter_x: float = 25.0
    jitter_y: float = 15.0


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Top-level container for all engine tuning structures.

    Parameters
    ----------
    pitch : PitchConfig, default=PitchConfig()
        Pitch dimension configuration.
    simulation : SimulationConfig, default=SimulationConfig()
        Simulation timing parameters.
    possession : PossessionConfig, default=PossessionConfig()
        Ball possession threshold.
    actions : ActionConfig, default=ActionConfig()
        Dribble, pass and shoot tuning.
    movement : MovementConfig, default=MovementConfig()
        Player steering settings.
    ball_physics : BallPhysicsConfig, default=BallPhysicsConfig()
        Ball flight tuning.
    formation : FormationConfig, default=FormationConfig()
        Formation placement references.
    """

    pitch: PitchConfig = field(default_factory=PitchConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    possession: PossessionConfig = field(default_factory=PossessionConfig)
    actions: ActionConfig = field(default_factory=ActionConfig)
    movement: MovementConfig = field(default_factory=MovementConfig)
    ball_physics: BallPhysicsConfig = field(default_factory=BallPhysicsConfig)
    formation: FormationConfig = field(default_factory=FormationConfig)


ENGINE_CONFIG = EngineConfig()
"""Singleton-style access to the engine configuration."""


def coerce_players_per_team(value: object, config: Optional[SimulationConfig] = None) -> int:
    """Turn user input into a valid squad size.

    Parameters
    ----------
    value : object
        Requested number of players, typically an ``int`` or a string from a UI.
    config : SimulationConfig | None, optional
        Bounds and default to apply; defaults to ``ENGINE_CONFIG.simulation``.

    Returns
    -------
    int
        ``value`` clamped to the allowed range, or the default when it is not
        an integer.
    """
    cfg = config if config is not None else ENGINE_CONFIG.simulation
    if isinstance(value, bool):
        count = None
    elif isinstance(value, int):
        count = value
    elif isinstance(value, float) and math.isfinite(value):
        count = int(value)
    elif isinstance(value, str):
        try:
            count = int(value.strip(), 10)
        except ValueError:
            count = None
    else:
        count = None

    if count is None:
        count = cfg.default_players_per_team
    return min(cfg.max_players_per_team, max(cfg.min_players_per_team, count))
