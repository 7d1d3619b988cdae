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
"""Dribble, pass and shoot: scoring heuristics and their execution.

Scoring functions only read the match state. Executors only write the ball's
velocity and attachment; players are never moved from here.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from matchday.engine.config import ENGINE_CONFIG, ActionConfig
from matchday.engine.physics import BallState, Pitch, Vector2D, point_to_segment_distance
from matchday.models.player import Player


class Action(Enum):
    """Decisions available to the player in possession."""

    DRIBBLE = "dribble"
    PASS = "pass"
    SHOOT = "shoot"


@dataclass(frozen=True)
class ScoreCard:
    """Desirability of each action for one possessor at one instant.

    Parameters
    ----------
    dribble : float
        Dribble score in ``[0, 1]``.
    passing : float
        Best pass score in ``[0, 1]``.
    shooting : float
        Shoot score in ``[0, 1]``.
    """

    dribble: float
    passing: float
    shooting: float

    def describe(self) -> str:
        """Return a compact representation for logs.

        Returns
        -------
        str
            The three scores formatted to two decimals.
        """
        return f"dribble={self.dribble:.2f} pass={self.passing:.2f} shoot={self.shooting:.2f}"


@dataclass(frozen=True)
class ActionOutcome:
    """Result of applying an action.

    Parameters
    ----------
    action : Action
        Action that was chosen.
    player_id : str
        Possessor that made the decision.
    target_id : str | None, optional
        Receiver of a pass.
    executed : bool, default=True
        ``False`` when a pass found no eligible receiver and nothing happened.
    """

    action: Action
    player_id: str
    target_id: Optional[str] = None
    executed: bool = True


def _cfg(config: Optional[ActionConfig]) -> ActionConfig:
    """Resolve the action tuning to use.

    Parameters
    ----------
    config : ActionConfig | None
        Explicit tuning, or ``None`` for the engine defaults.

    Returns
    -------
    ActionConfig
        ``config`` when given, otherwise ``ENGINE_CONFIG.actions``.
    """
    return config if config is not None else ENGINE_CONFIG.actions


def dribble_score(
    player: Player,
    players: Sequence[Player],
    ball: BallState,
    config: Optional[ActionConfig] = None,
) -> float:
    """Score carrying the ball: open space around the ball favours dribbling.

    Parameters
    ----------
    player : Player
        Possessor being evaluated.
    players : Sequence[Player]
        Every player on the pitch.
    ball : BallState
        Current ball state.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    float
        ``1 / (1 + penalty * count)`` where ``count`` is the number of other
        players within the crowd radius of the ball.
    """
    cfg = _cfg(config)
    crowd = sum(
        1
        for other in players
        if other.player_id != player.player_id and other.distance_to(ball.position) < cfg.crowd_radius
    )
    return 1 / (1 + crowd * cfg.crowd_penalty)


def is_pass_lane_clear(
    origin: Vector2D,
    receiver: Player,
    players: Sequence[Player],
    lane_radius: Optional[float] = None,
) -> bool:
    """Check that nobody stands in the straight lane from ``origin`` to ``receiver``.

    Parameters
    ----------
    origin : Vector2D
        Start of the lane, normally the ball position.
    receiver : Player
        Intended receiver; excluded from the check.
    players : Sequence[Player]
        Every player on the pitch.
    lane_radius : float | None, optional
        Clearance required around the lane; defaults to
        ``ENGINE_CONFIG.actions.lane_radius``.

    Returns
    -------
    bool
        ``False`` if any player other than the receiver, the passer
        included, is closer than ``lane_radius`` to the segment.
    """
    radius = lane_radius if lane_radius is not None else ENGINE_CONFIG.actions.lane_radius
    for other in players:
        if other.player_id == receiver.player_id:
            continue
        if point_to_segment_distance(other.position, origin, receiver.position) < radius:
            return False
    return True


def pass_score(
    player: Player,
    players: Sequence[Player],
    ball: BallState,
    config: Optional[ActionConfig] = None,
) -> float:
    """Score the best available pass.

    Parameters
    ----------
    player : Player
        Possessor being evaluated.
    players : Sequence[Player]
        Every player on the pitch.
    ball : BallState
        Current ball state.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    float
        Highest score over teammates in range with a clear lane; shorter passes
        score higher. ``0`` when no teammate qualifies.
    """
    cfg = _cfg(config)
    span = cfg.pass_score_max - cfg.pass_score_min
    best = 0.0
    for mate in players:
        if not player.is_teammate(mate):
            continue
        distance = mate.distance_to(ball.position)
        if distance < cfg.pass_score_min or distance > cfg.pass_score_max:
            continue
        if not is_pass_lane_clear(ball.position, mate, players, cfg.pass_lane_radius):
            continue
        score = cfg.pass_score_base + cfg.pass_score_weight * (1 - (distance - cfg.pass_score_min) / span)
        best = max(best, score)
    return best


def shoot_score(
    player: Player,
    ball: BallState,
    pitch: Pitch,
    config: Optional[ActionConfig] = None,
) -> float:
    """Score a shot from the current ball position.

    Parameters
    ----------
    player : Player
        Possessor being evaluated.
    ball : BallState
        Current ball state.
    pitch : Pitch
        Pitch used to locate the opponent goal.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    float
        ``0`` outside the attacking third, otherwise ``1 - d / shot_range``
        floored at zero, where ``d`` is the distance to the goal centre.
    """
    cfg = _cfg(config)
    if player.team.attack_direction > 0:
        in_attacking_third = ball.position.x > pitch.width - cfg.attacking_third
    else:
        in_attacking_third = ball.position.x < cfg.attacking_third
    if not in_attacking_third:
        return 0.0
    distance = ball.position.distance_to(pitch.goal_centre(player.team))
    return max(0.0, 1 - distance / cfg.shot_range)


def score_actions(
    player: Player,
    players: Sequence[Player],
    ball: BallState,
    pitch: Pitch,
    config: Optional[ActionConfig] = None,
) -> ScoreCard:
    """Evaluate all three actions for the possessor.

    Parameters
    ----------
    player : Player
        Possessor being evaluated.
    players : Sequence[Player]
        Every player on the pitch.
    ball : BallState
        Current ball state.
    pitch : Pitch
        Pitch used to locate the opponent goal.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    ScoreCard
        Dribble, pass and shoot scores.
    """
    return ScoreCard(
        dribble=dribble_score(player, players, ball, config),
        passing=pass_score(player, players, ball, config),
        shooting=shoot_score(player, ball, pitch, config),
    )


def choose_action(scores: ScoreCard, config: Optional[ActionConfig] = None) -> Action:
    """Pick an action with a strict priority cascade.

    A good shooting chance always wins; a pass only beats a dribble when it is
    clearly favourable; dribbling is the fallback.

    Parameters
    ----------
    scores : ScoreCard
        Scores for the current possessor.
    config : ActionConfig | None, optional
        Thresholds; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    Action
        Exactly one of ``SHOOT``, ``PASS`` or ``DRIBBLE``.
    """
    cfg = _cfg(config)
    if scores.shooting > cfg.shoot_threshold:
        return Action.SHOOT
    if scores.passing > cfg.pass_threshold and scores.passing >= scores.dribble:
        return Action.PASS
    return Action.DRIBBLE


def select_pass_target(
    player: Player,
    players: Sequence[Player],
    ball: BallState,
    config: Optional[ActionConfig] = None,
) -> Optional[Player]:
    """Choose the receiver for a pass about to be played.

    Parameters
    ----------
    player : Player
        Passer.
    players : Sequence[Player]
        Every player on the pitch.
    ball : BallState
        Current ball state.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    Player | None
        Nearest teammate in execution range with a clear lane, or ``None``.
    """
    cfg = _cfg(config)
    best: Optional[Player] = None
    best_score = 0.0
    for mate in players:
        if not player.is_teammate(mate):
            continue
        distance = mate.distance_to(ball.position)
        if distance < cfg.pass_exec_min or distance > cfg.pass_exec_max:
            continue
        if not is_pass_lane_clear(ball.position, mate, players, cfg.pass_lane_radius):
            continue
        score = 1 - distance / cfg.pass_exec_max
        if score > best_score:
            best_score = score
            best = mate
    return best


def execute_pass(
    player: Player,
    players: Sequence[Player],
    ball: BallState,
    config: Optional[ActionConfig] = None,
) -> Optional[Player]:
    """Play a pass to the best receiver, if there is one.

    Parameters
    ----------
    player : Player
        Passer.
    players : Sequence[Player]
        Every player on the pitch.
    ball : BallState
        Ball to kick.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    Player | None
        The receiver, or ``None`` when no pass was played and the ball was left
        untouched.
    """
    cfg = _cfg(config)
    target = select_pass_target(player, players, ball, cfg)
    if target is not None:
        ball.kick(target.position, cfg.pass_speed, player.player_id)
    return target


def shot_target(
    player: Player,
    pitch: Pitch,
    rng: random.Random,
    config: Optional[ActionConfig] = None,
) -> Vector2D:
    """Return the point a shot is aimed at.

    Parameters
    ----------
    player : Player
        Shooter.
    pitch : Pitch
        Pitch used to locate the opponent goal.
    rng : random.Random
        Random source for the vertical placement.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    Vector2D
        Point just beyond the opponent goal line, within half the shot spread
        of the goal centre.
    """
    cfg = _cfg(config)
    goal_x = pitch.attacking_goal_x(player.team) + player.team.attack_direction * cfg.shot_overshoot
    goal_y = pitch.height / 2 + (rng.random() - 0.5) * cfg.shot_spread
    return Vector2D(goal_x, goal_y)


def execute_shot(
    player: Player,
    ball: BallState,
    pitch: Pitch,
    rng: random.Random,
    config: Optional[ActionConfig] = None,
) -> Vector2D:
    """Shoot at the opponent goal.

    Parameters
    ----------
    player : Player
        Shooter.
    ball : BallState
        Ball to kick.
    pitch : Pitch
        Pitch used to locate the opponent goal.
    rng : random.Random
        Random source for the vertical placement.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    Vector2D
        The point the shot was aimed at.
    """
    cfg = _cfg(config)
    target = shot_target(player, pitch, rng, cfg)
    ball.kick(target, cfg.shot_speed, player.player_id)
    return target


def execute_action(
    action: Action,
    player: Player,
    players: Sequence[Player],
    ball: BallState,
    pitch: Pitch,
    rng: random.Random,
    config: Optional[ActionConfig] = None,
) -> ActionOutcome:
    """Apply ``action`` for the possessor.

    Parameters
    ----------
    action : Action
        Decision to carry out.
    player : Player
        Possessor.
    players : Sequence[Player]
        Every player on the pitch.
    ball : BallState
        Ball to act on.
    pitch : Pitch
        Pitch used to locate the opponent goal.
    rng : random.Random
        Random source for shot placement.
    config : ActionConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG.actions``.

    Returns
    -------
    ActionOutcome
        What was done; a pass with no receiver reports ``executed=False``.
    """
    if action is Action.SHOOT:
        execute_shot(player, ball, pitch, rng, config)
        return ActionOutcome(action, player.player_id)
    if action is Action.PASS:
        target = execute_pass(player, players, ball, config)
        if target is None:
            return ActionOutcome(action, player.player_id, executed=False)
        return ActionOutcome(action, player.player_id, target_id=target.player_id)
    # Movement of the dribbler is handled by the movement integrator.
    ball.attach(player.player_id)
    return ActionOutcome(action, player.player_id)
