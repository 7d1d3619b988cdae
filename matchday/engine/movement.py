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
"""Per-tick steering and integration of player movement.

Every player uses the same locomotion: accelerate towards a steering target,
damp, integrate, then clamp to the pitch. Only the target differs between the
player dribbling the ball and everybody else.
"""

from __future__ import annotations

import random
from typing import Optional

from matchday.engine.config import ENGINE_CONFIG, MovementConfig
from matchday.engine.physics import BallState, Pitch, Vector2D, clamp, direction_towards
from matchday.models.player import Player


def steer_towards(
    player: Player,
    target: Vector2D,
    pitch: Pitch,
    dt: float,
    config: Optional[MovementConfig] = None,
) -> None:
    """Accelerate ``player`` towards ``target`` and advance one tick.

    Parameters
    ----------
    player : Player
        Player to move in place.
    target : Vector2D
        Steering target.
    pitch : Pitch
        Pitch used for clamping.
    dt : float
        Elapsed time in milliseconds; scales the acceleration only.
    config : MovementConfig | None, optional
        Steering constants; defaults to ``ENGINE_CONFIG.movement``.
    """
    cfg = config if config is not None else ENGINE_CONFIG.movement
    direction = direction_towards(player.position, target)
    velocity = player.velocity + direction * (cfg.acceleration * dt)
    player.velocity = velocity * cfg.damping
    player.position = pitch.constrain_to_bounds(player.position + player.velocity, pitch.player_radius)


def attacking_target(player: Player, pitch: Pitch, config: Optional[MovementConfig] = None) -> Vector2D:
    """Return the point a dribbler runs towards.

    Parameters
    ----------
    player : Player
        Dribbling player.
    pitch : Pitch
        Pitch used to locate the opponent goal.
    config : MovementConfig | None, optional
        Steering constants; defaults to ``ENGINE_CONFIG.movement``.

    Returns
    -------
    Vector2D
        Point inset from the opponent goal line at mid-height.
    """
    cfg = config if config is not None else ENGINE_CONFIG.movement
    goal_x = pitch.attacking_goal_x(player.team) - player.team.attack_direction * cfg.goal_inset
    return Vector2D(goal_x, pitch.height / 2)


def support_target(
    player: Player,
    ball: BallState,
    pitch: Pitch,
    rng: random.Random,
    config: Optional[MovementConfig] = None,
) -> Vector2D:
    """Return the steering target of a player without the ball.

    Players near the ball close in to a spot just short of it on their side;
    players far away drift around. Either way the target stays in the
    player's own half.

    Parameters
    ----------
    player : Player
        Off-ball player.
    ball : BallState
        Current ball state.
    pitch : Pitch
        Pitch used for the halfway line and edges.
    rng : random.Random
        Random source for wandering.
    config : MovementConfig | None, optional
        Steering constants; defaults to ``ENGINE_CONFIG.movement``.

    Returns
    -------
    Vector2D
        Target position for this tick.
    """
    cfg = config if config is not None else ENGINE_CONFIG.movement
    halfway = pitch.width / 2
    towards_own_goal = -player.team.attack_direction

    if player.distance_to(ball.position) < cfg.support_range:
        direction = direction_towards(player.position, ball.position)
        target = ball.position - direction * cfg.support_offset
        if not pitch.in_own_half(player.team, target.x):
            target = Vector2D(halfway + towards_own_goal * cfg.support_fallback, target.y)
        return target

    x = player.position.x + (rng.random() - 0.5) * cfg.wander_x
    y = player.position.y + (rng.random() - 0.5) * cfg.wander_y
    if not pitch.in_own_half(player.team, x):
        x = halfway + towards_own_goal * cfg.wander_fallback
    margin = cfg.wander_margin
    return Vector2D(clamp(x, margin, pitch.width - margin), clamp(y, margin, pitch.height - margin))


def carry_ball(player: Player, ball: BallState, pitch: Pitch, config: Optional[MovementConfig] = None) -> None:
    """Keep an attached ball just ahead of its dribbler.

    The ball may be pushed past a goal line (that is how dribbled goals happen)
    but never over a touchline. The attachment is dropped once the ball ends up
    too far from the player, for example after the player is pinned to a wall.

    Parameters
    ----------
    player : Player
        Dribbling player, already moved this tick.
    ball : BallState
        Attached ball.
    pitch : Pitch
        Pitch used for clamping.
    config : MovementConfig | None, optional
        Steering constants; defaults to ``ENGINE_CONFIG.movement``.
    """
    cfg = config if config is not None else ENGINE_CONFIG.movement
    carried = player.position + player.velocity * cfg.carry_offset
    ball.position = Vector2D(carried.x, clamp(carried.y, pitch.ball_radius, pitch.height - pitch.ball_radius))
    ball.stop()
    if player.distance_to(ball.position) > cfg.release_distance:
        ball.detach()


def update_player(
    player: Player,
    ball: BallState,
    pitch: Pitch,
    dt: float,
    rng: random.Random,
    config: Optional[MovementConfig] = None,
) -> Vector2D:
    """Advance one player by one tick.

    Parameters
    ----------
    player : Player
        Player to move in place.
    ball : BallState
        Current ball state; repositioned when ``player`` is dribbling it.
    pitch : Pitch
        Pitch used for targets and clamping.
    dt : float
        Elapsed time in milliseconds.
    rng : random.Random
        Random source for wandering.
    config : MovementConfig | None, optional
        Steering constants; defaults to ``ENGINE_CONFIG.movement``.

    Returns
    -------
    Vector2D
        The steering target used this tick.
    """
    if ball.attached_to == player.player_id:
        target = attacking_target(player, pitch, config)
        steer_towards(player, target, pitch, dt, config)
        carry_ball(player, ball, pitch, config)
        return target

    target = support_target(player, ball, pitch, rng, config)
    steer_towards(player, target, pitch, dt, config)
    return target
