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
"""Low-level physics primitives used by the match engine.

The physics layer provides a small vector maths helper, the point-to-segment
projection used by passing-lane checks, the ball state container and a pitch
representation that knows where the goals are. It encapsulates the raw numeric
operations so higher-level systems can focus on decisions and movement.
"""
import math
from dataclasses import dataclass
from typing import Optional

from matchday.models.team import Team
from matchday.utils.debug import MatchDebugger

from .config import ENGINE_CONFIG, PitchConfig


@dataclass
class Vector2D:
    """Two-dimensional vector with convenience operations.

    Used for positions in pitch units and for velocities; player velocities
    are per tick while ball velocities are per millisecond.

    Parameters
    ----------
    x : float
        Horizontal component in pitch units.
    y : float
        Vertical component in pitch units.
    """

    x: float
    y: float

    def __add__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector sum of ``self`` and ``other``."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector difference ``self - other``."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        """Scale the vector by ``scalar`` while preserving direction."""
        return Vector2D(self.x * scalar, self.y * scalar)

    def dot(self, other: "Vector2D") -> float:
        """Return the dot product of ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Second operand.

        Returns
        -------
        float
            Sum of the component-wise products.
        """
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector.

        Returns
        -------
        float
            Scalar magnitude in pitch units.
        """
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vector2D":
        """Return a unit vector pointing in the same direction as ``self``.

        Returns
        -------
        Vector2D
            Normalised vector; zero vector when ``self`` has no magnitude.
        """
        mag = self.magnitude()
        if mag == 0:
            return Vector2D(0, 0)
        return Vector2D(self.x / mag, self.y / mag)

    def distance_to(self, other: "Vector2D") -> float:
        """Return the straight-line distance between ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Vector whose separation from ``self`` should be measured.

        Returns
        -------
        float
            Euclidean distance in pitch units between the two points.
        """
        return (other - self).magnitude()

    def copy(self) -> "Vector2D":
        """Return an independent copy of the vector.

        Returns
        -------
        Vector2D
            New vector with the same components.
        """
        return Vector2D(self.x, self.y)


def direction_towards(origin: Vector2D, target: Vector2D) -> Vector2D:
    """Return the unit direction from ``origin`` to ``target``.

    Coincident points divide by one instead of zero, which yields a zero
    direction rather than a fault.

    Parameters
    ----------
    origin : Vector2D
        Start point.
    target : Vector2D
        End point.

    Returns
    -------
    Vector2D
        Unit vector, or the zero vector when the points coincide.
    """
    offset = target - origin
    length = offset.magnitude() or 1.0
    return Vector2D(offset.x / length, offset.y / length)


def point_to_segment_distance(point: Vector2D, start: Vector2D, end: Vector2D) -> float:
    """Return the distance from ``point`` to the segment ``start``-``end``.

    The point is projected onto the segment's supporting line and the
    parametric position is clamped to ``[0, 1]`` so points beyond either end are
    measured to the nearest endpoint.

    Parameters
    ----------
    point : Vector2D
        Point whose clearance is measured.
    start : Vector2D
        First endpoint of the segment.
    end : Vector2D
        Second endpoint of the segment.

    Returns
    -------
    float
        Shortest distance between ``point`` and the segment.
    """
    segment = end - start
    length_sq = segment.dot(segment) or 1.0
    t = max(0.0, min(1.0, (point - start).dot(segment) / length_sq))
    closest = start + segment * t
    return point.distance_to(closest)


class BallState:
    """Mutable ball state shared by every system in a tick.

    Parameters
    ----------
    position : Vector2D
        Initial coordinates of the ball.
    velocity : Vector2D | None, optional
        Initial velocity in pitch units per millisecond; defaults to rest.
    attached_to : str | None, optional
        Identifier of the player dribbling the ball, if any.
    debugger : MatchDebugger | None, optional
        Debugger used to log kicks.
    """

    def __init__(
        self,
        position: Vector2D,
        velocity: Optional[Vector2D] = None,
        attached_to: Optional[str] = None,
        debugger: Optional[MatchDebugger] = None,
    ) -> None:
        """Create a new ball state.

        Parameters
        ----------
        position : Vector2D
            Initial coordinates of the ball.
        velocity : Vector2D | None, optional
            Initial velocity in pitch units per millisecond; defaults to rest.
        attached_to : str | None, optional
            Identifier of the player dribbling the ball, if any.
        debugger : MatchDebugger | None, optional
            Debugger used to log kicks.
        """
        self.position = position
        self.velocity = velocity if velocity is not None else Vector2D(0.0, 0.0)
        self.attached_to = attached_to
        self.debugger = debugger
        self.last_kicked_by: Optional[str] = None
        self._log_match_time = 0.0

    def __repr__(self) -> str:
        """Return a compact description for debugging."""
        return f"BallState(position={self.position!r}, velocity={self.velocity!r}, attached_to={self.attached_to!r})"

    @property
    def is_attached(self) -> bool:
        """Return whether a player is currently dribbling the ball."""
        return self.attached_to is not None

    def set_log_match_time(self, match_time: float) -> None:
        """Update the timestamp used when emitting debug events.

        Parameters
        ----------
        match_time : float
            Match clock timestamp applied to subsequent log entries.
        """
        self._log_match_time = match_time

    def attach(self, player_id: str) -> None:
        """Attach the ball to a dribbling player.

        Parameters
        ----------
        player_id : str
            Identifier of the new dribbler.
        """
        self.attached_to = player_id

    def detach(self) -> None:
        """Release the ball into free flight."""
        self.attached_to = None

    def stop(self) -> None:
        """Remove all residual motion."""
        self.velocity = Vector2D(0.0, 0.0)

    def kick(self, target: Vector2D, speed: float, player_id: Optional[str] = None) -> None:
        """Detach the ball and send it towards ``target``.

        Parameters
        ----------
        target : Vector2D
            Point the ball should travel towards.
        speed : float
            Launch speed in pitch units per millisecond.
        player_id : str | None, optional
            Identifier of the kicker, recorded for logging.
        """
        self.detach()
        self.velocity = direction_towards(self.position, target) * speed
        self.last_kicked_by = player_id
        if self.debugger:
            self.debugger.log_match_event(
                self._log_match_time,
                "kick",
                f"Kick: player {player_id} speed={speed:.2f} "
                f"target=({target.x:.1f},{target.y:.1f}) -> vel=({self.velocity.x:.3f},{self.velocity.y:.3f})",
            )


class Pitch:
    """Rectangular playing surface with goal metadata.

    The origin sits in the top-left corner: x grows towards the away goal line
    and y grows towards the bottom touchline. Each goal mouth is centred
    vertically on its goal line.

    Parameters
    ----------
    width : float | None, optional
        Pitch width override; defaults to configuration.
    height : float | None, optional
        Pitch height override; defaults to configuration.
    goal_width : float | None, optional
        Goal mouth width override; defaults to configuration.
    player_radius : float | None, optional
        Player radius override; defaults to configuration.
    ball_radius : float | None, optional
        Ball radius override; defaults to configuration.
    """

    def __init__(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
        goal_width: Optional[float] = None,
        player_radius: Optional[float] = None,
        ball_radius: Optional[float] = None,
    ) -> None:
        """Initialise pitch dimensions.

        Parameters
        ----------
        width : float | None, optional
            Pitch width override; defaults to configuration.
        height : float | None, optional
            Pitch height override; defaults to configuration.
        goal_width : float | None, optional
            Goal mouth width override; defaults to configuration.
        player_radius : float | None, optional
            Player radius override; defaults to configuration.
        ball_radius : float | None, optional
            Ball radius override; defaults to configuration.

        Raises
        ------
        ValueError
            If a dimension is not positive.
        """
        cfg = ENGINE_CONFIG.pitch
        self.width = width if width is not None else cfg.width
        self.height = height if height is not None else cfg.height
        self.goal_width = goal_width if goal_width is not None else cfg.goal_width
        if self.width <= 0 or self.height <= 0 or self.goal_width <= 0:
            raise ValueError("Pitch dimensions must be positive")
        self.player_radius = player_radius if player_radius is not None else cfg.player_radius
        self.ball_radius = ball_radius if ball_radius is not None else cfg.ball_radius

    @classmethod
    def from_config(cls, config: PitchConfig) -> "Pitch":
        """Build a pitch from an explicit configuration section.

        Parameters
        ----------
        config : PitchConfig
            Dimensions to use.

        Returns
        -------
        Pitch
            Pitch with every dimension taken from ``config``.
        """
        return cls(config.width, config.height, config.goal_width, config.player_radius, config.ball_radius)

    @property
    def centre(self) -> Vector2D:
        """Return the centre spot."""
        return Vector2D(self.width / 2, self.height / 2)

    def attacking_goal_x(self, team: Team) -> float:
        """Return the x-coordinate of the goal line ``team`` attacks.

        Parameters
        ----------
        team : Team
            Attacking side.

        Returns
        -------
        float
            ``width`` for the home side, ``0`` for the away side.
        """
        return self.width if team is Team.HOME else 0.0

    def goal_centre(self, team: Team) -> Vector2D:
        """Return the centre of the goal mouth ``team`` attacks.

        Parameters
        ----------
        team : Team
            Attacking side.

        Returns
        -------
        Vector2D
            Point on the opponent goal line at mid-height.
        """
        return Vector2D(self.attacking_goal_x(team), self.height / 2)

    def in_own_half(self, team: Team, x: float) -> bool:
        """Return whether ``x`` lies strictly inside ``team``'s own half.

        Parameters
        ----------
        team : Team
            Side whose half is checked.
        x : float
            Horizontal coordinate to test.

        Returns
        -------
        bool
            ``True`` when ``x`` is on the defending side of the halfway line.
        """
        half = self.width / 2
        return x < half if team is Team.HOME else x > half

    def in_goal_mouth(self, y: float) -> bool:
        """Return whether ``y`` lies between the posts.

        Parameters
        ----------
        y : float
            Vertical coordinate to test.

        Returns
        -------
        bool
            ``True`` inside the goal mouth (posts included).
        """
        return abs(y - self.height / 2) <= self.goal_width / 2

    def goal_scored_by(self, position: Vector2D) -> Optional[Team]:
        """Return which side scores if the ball sits at ``position``.

        Parameters
        ----------
        position : Vector2D
            Ball position to evaluate.

        Returns
        -------
        Team | None
            ``Team.AWAY`` when the ball is fully past the home goal line,
            ``Team.HOME`` when it is fully past the away goal line, otherwise
            ``None``.
        """
        if position.x < -self.ball_radius:
            return Team.AWAY
        if position.x > self.width + self.ball_radius:
            return Team.HOME
        return None

    def is_in_bounds(self, position: Vector2D, radius: float = 0.0) -> bool:
        """Check whether a disc of ``radius`` centred at ``position`` fits on the pitch.

        Parameters
        ----------
        position : Vector2D
            Centre to check.
        radius : float, default=0.0
            Radius of the entity.

        Returns
        -------
        bool
            ``True`` when the centre lies in ``[radius, dimension - radius]`` on both axes.
        """
        return (
            radius <= position.x <= self.width - radius
            and radius <= position.y <= self.height - radius
        )

    def constrain_to_bounds(self, position: Vector2D, radius: float = 0.0) -> Vector2D:
        """Clamp a position so a disc of ``radius`` stays on the pitch.

        Parameters
        ----------
        position : Vector2D
            Location to clamp.
        radius : float, default=0.0
            Radius of the entity.

        Returns
        -------
        Vector2D
            Adjusted position inside ``[radius, dimension - radius]``.
        """
        return Vector2D(
            clamp(position.x, radius, self.width - radius),
            clamp(position.y, radius, self.height - radius),
        )


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` to the closed interval ``[low, high]``.

    Parameters
    ----------
    value : float
        Number to clamp.
    low : float
        Lower bound.
    high : float
        Upper bound.

    Returns
    -------
    float
        ``value`` limited to the interval.
    """
    return max(low, min(high, value))
