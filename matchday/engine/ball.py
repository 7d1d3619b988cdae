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
"""Free-flight ball physics, goal-line detection and the post-goal kickoff."""

from __future__ import annotations

from typing import Optional, Sequence

from matchday.engine.config import ENGINE_CONFIG, BallPhysicsConfig
from matchday.engine.physics import BallState, Pitch, Vector2D, clamp
from matchday.models.player import Player
from matchday.models.team import Team


def goal_detection_open(now_ms: float, last_goal_ms: Optional[float], cooldown_ms: float) -> bool:
    """Return whether enough time has passed since the last goal.

    Parameters
    ----------
    now_ms : float
        Current timestamp in milliseconds.
    last_goal_ms : float | None
        Timestamp of the previous goal, ``None`` when no goal has been scored.
    cooldown_ms : float
        Minimum gap between two goals.

    Returns
    -------
    bool
        ``True`` when a goal may be registered.
    """
    return last_goal_ms is None or now_ms - last_goal_ms > cooldown_ms


def check_goal(ball: BallState, pitch: Pitch) -> Optional[Team]:
    """Return the scoring side if the ball is fully over a goal line.

    Parameters
    ----------
    ball : BallState
        Ball to inspect.
    pitch : Pitch
        Pitch providing the goal lines.

    Returns
    -------
    Team | None
        Side credited with the goal, or ``None``.
    """
    return pitch.goal_scored_by(ball.position)


def kickoff_after_goal(
    ball: BallState,
    players: Sequence[Player],
    conceding: Team,
    pitch: Pitch,
    config: Optional[BallPhysicsConfig] = None,
) -> Optional[Player]:
    """Hand the ball to the conceding side so play restarts at once.

    The conceding player nearest the centre spot receives the ball at their
    own position, pulled in to stay clear of the edges, and starts dribbling
    immediately.

    Parameters
    ----------
    ball : BallState
        Ball to reset.
    players : Sequence[Player]
        Every player on the pitch.
    conceding : Team
        Side that was just scored against.
    pitch : Pitch
        Pitch providing the centre spot and edges.
    config : BallPhysicsConfig | None, optional
        Kickoff margin; defaults to ``ENGINE_CONFIG.ball_physics``.

    Returns
    -------
    Player | None
        The kickoff taker, or ``None`` when the conceding side has no players
        and the ball was left unattached on the centre spot.
    """
    cfg = config if config is not None else ENGINE_CONFIG.ball_physics
    ball.stop()
    ball.detach()

    centre = pitch.centre
    taker: Optional[Player] = None
    best_distance = float("inf")
    for player in players:
        if player.team is not conceding:
            continue
        distance = player.distance_to(centre)
        if distance < best_distance:
            best_distance = distance
            taker = player

    if taker is None:
        ball.position = centre
        return None

    margin = cfg.kickoff_margin
    ball.position = Vector2D(
        clamp(taker.position.x, margin, pitch.width - margin),
        clamp(taker.position.y, margin, pitch.height - margin),
    )
    ball.attach(taker.player_id)
    return taker


def integrate_free_ball(
    ball: BallState,
    pitch: Pitch,
    dt: float,
    config: Optional[BallPhysicsConfig] = None,
) -> None:
    """Advance a ball that nobody is dribbling.

    Drag is applied once per tick and the touchlines bounce the ball back with
    reduced vertical speed. The goal lines act as walls, except that a ball
    already fully over the line between the posts is left there until the goal
    is registered.

    Parameters
    ----------
    ball : BallState
        Ball to advance; ignored when attached.
    pitch : Pitch
        Pitch providing the boundaries.
    dt : float
        Elapsed time in milliseconds.
    config : BallPhysicsConfig | None, optional
        Drag and restitution; defaults to ``ENGINE_CONFIG.ball_physics``.
    """
    if ball.is_attached:
        return

    cfg = config if config is not None else ENGINE_CONFIG.ball_physics
    radius = pitch.ball_radius
    velocity = ball.velocity * cfg.drag
    position = ball.position + velocity * dt

    if position.y < radius:
        position = Vector2D(position.x, radius)
        velocity = Vector2D(velocity.x, -velocity.y * cfg.restitution)
    elif position.y > pitch.height - radius:
        position = Vector2D(position.x, pitch.height - radius)
        velocity = Vector2D(velocity.x, -velocity.y * cfg.restitution)

    over_line = pitch.goal_scored_by(position) is not None
    if not (over_line and pitch.in_goal_mouth(position.y)):
        position = Vector2D(clamp(position.x, radius, pitch.width - radius), position.y)

    ball.position = position
    ball.velocity = velocity
