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
"""Tests for physics module."""

import pytest

from matchday.engine.physics import BallState, Pitch, Vector2D, clamp, direction_towards, point_to_segment_distance
from matchday.models.team import Team
from matchday.utils.debug import MatchDebugger


class TestVector2D:
    """Unit tests for the Vector2D helper."""

    def test_vector_arithmetic(self) -> None:
        """Add, subtract and scale vectors component-wise."""
        v1 = Vector2D(1.0, 2.0)
        v2 = Vector2D(3.0, 4.0)
        assert v1 + v2 == Vector2D(4.0, 6.0)
        assert v2 - v1 == Vector2D(2.0, 2.0)
        assert v1 * 2 == Vector2D(2.0, 4.0)

    def test_magnitude_and_dot(self) -> None:
        """Compute length and dot product."""
        v = Vector2D(3.0, 4.0)
        assert v.magnitude() == pytest.approx(5.0)
        assert v.dot(Vector2D(1.0, 1.0)) == pytest.approx(7.0)

    def test_normalize(self) -> None:
        """Normalise a vector and confirm unit length."""
        assert Vector2D(3.0, 4.0).normalize().magnitude() == pytest.approx(1.0)

    def test_normalize_zero_vector(self) -> None:
        """Ensure normalising a zero vector yields zero components."""
        assert Vector2D(0.0, 0.0).normalize() == Vector2D(0.0, 0.0)

    def test_distance_to(self) -> None:
        """Measure distance between two points."""
        assert Vector2D(0.0, 0.0).distance_to(Vector2D(3.0, 4.0)) == pytest.approx(5.0)
        assert Vector2D(1.0, 1.0).distance_to(Vector2D(1.0, 1.0)) == 0.0

    def test_copy_is_independent(self) -> None:
        """A copy compares equal but is a different object."""
        v = Vector2D(1.5, 2.5)
        c = v.copy()
        assert c == v and c is not v


class TestGeometryHelpers:
    """Direction and segment-distance helpers."""

    def test_direction_towards(self) -> None:
        """Return a unit vector pointing at the target."""
        d = direction_towards(Vector2D(0.0, 0.0), Vector2D(0.0, 10.0))
        assert d == Vector2D(0.0, 1.0)

    def test_direction_towards_same_point(self) -> None:
        """Coincident points yield the zero vector instead of dividing by zero."""
        assert direction_towards(Vector2D(5.0, 5.0), Vector2D(5.0, 5.0)) == Vector2D(0.0, 0.0)

    def test_point_alongside_segment(self) -> None:
        """Perpendicular distance for a point beside the segment."""
        d = point_to_segment_distance(Vector2D(5.0, 3.0), Vector2D(0.0, 0.0), Vector2D(10.0, 0.0))
        assert d == pytest.approx(3.0)

    def test_point_beyond_segment_end(self) -> None:
        """Points past an endpoint measure to that endpoint."""
        d = point_to_segment_distance(Vector2D(13.0, 4.0), Vector2D(0.0, 0.0), Vector2D(10.0, 0.0))
        assert d == pytest.approx(5.0)
        d = point_to_segment_distance(Vector2D(-3.0, -4.0), Vector2D(0.0, 0.0), Vector2D(10.0, 0.0))
        assert d == pytest.approx(5.0)

    def test_degenerate_segment(self) -> None:
        """A zero-length segment behaves like a point."""
        d = point_to_segment_distance(Vector2D(3.0, 4.0), Vector2D(0.0, 0.0), Vector2D(0.0, 0.0))
        assert d == pytest.approx(5.0)

    def test_clamp(self) -> None:
        """Clamp to a closed interval."""
        assert clamp(-1.0, 0.0, 1.0) == 0.0
        assert clamp(2.0, 0.0, 1.0) == 1.0
        assert clamp(0.5, 0.0, 1.0) == 0.5


class TestBallState:
    """Tests for the BallState class."""

    def test_ball_starts_at_rest(self) -> None:
        """A new ball is stationary and free."""
        ball = BallState(Vector2D(400.0, 250.0))
        assert ball.velocity == Vector2D(0.0, 0.0)
        assert ball.attached_to is None
        assert not ball.is_attached

    def test_kick_detaches_and_sets_velocity(self) -> None:
        """Kicking releases the ball towards the target at the given speed."""
        ball = BallState(Vector2D(0.0, 0.0), attached_to="h0")
        ball.kick(Vector2D(3.0, 4.0), 0.5, "h0")
        assert ball.attached_to is None
        assert ball.velocity.x == pytest.approx(0.3)
        assert ball.velocity.y == pytest.approx(0.4)
        assert ball.last_kicked_by == "h0"

    def test_kick_is_logged(self) -> None:
        """Kicks are reported to an attached debugger."""
        debugger = MatchDebugger(None)
        ball = BallState(Vector2D(0.0, 0.0), debugger=debugger)
        ball.set_log_match_time(12.5)
        ball.kick(Vector2D(10.0, 0.0), 0.38, "a2")
        assert debugger.events[-1].event_type == "kick"
        assert debugger.events[-1].timestamp == 12.5
        assert "a2" in debugger.events[-1].details

    def test_attach_and_stop(self) -> None:
        """Attach records the dribbler; stop clears residual motion."""
        ball = BallState(Vector2D(0.0, 0.0), velocity=Vector2D(1.0, 1.0))
        ball.attach("a1")
        ball.stop()
        assert ball.attached_to == "a1"
        assert ball.velocity == Vector2D(0.0, 0.0)
        ball.detach()
        assert ball.attached_to is None


class TestPitch:
    """Tests for the Pitch class."""

    def test_default_dimensions(self) -> None:
        """Defaults come from the engine configuration."""
        pitch = Pitch()
        assert pitch.width == 800
        assert pitch.height == 500
        assert pitch.goal_width == 120
        assert pitch.centre == Vector2D(400.0, 250.0)

    def test_rejects_non_positive_dimensions(self) -> None:
        """A pitch needs a positive size."""
        with pytest.raises(ValueError):
            Pitch(width=0)
        with pytest.raises(ValueError):
            Pitch(height=-5)

    def test_goal_lines_per_team(self) -> None:
        """Home attacks the right-hand goal, away the left-hand one."""
        pitch = Pitch()
        assert pitch.attacking_goal_x(Team.HOME) == 800
        assert pitch.attacking_goal_x(Team.AWAY) == 0
        assert pitch.goal_centre(Team.AWAY) == Vector2D(0.0, 250.0)

    def test_own_half_is_strict(self) -> None:
        """The halfway line belongs to neither half."""
        pitch = Pitch()
        assert pitch.in_own_half(Team.HOME, 399.9)
        assert not pitch.in_own_half(Team.HOME, 400.0)
        assert pitch.in_own_half(Team.AWAY, 400.1)
        assert not pitch.in_own_half(Team.AWAY, 400.0)

    def test_goal_mouth(self) -> None:
        """The goal mouth spans the goal width around mid-height."""
        pitch = Pitch()
        assert pitch.in_goal_mouth(250.0)
        assert pitch.in_goal_mouth(310.0)
        assert not pitch.in_goal_mouth(311.0)
        assert not pitch.in_goal_mouth(100.0)

    def test_goal_requires_ball_fully_over_line(self) -> None:
        """The ball must clear the line by more than its radius."""
        pitch = Pitch()
        assert pitch.goal_scored_by(Vector2D(-10.0, 250.0)) is None
        assert pitch.goal_scored_by(Vector2D(-10.5, 250.0)) is Team.AWAY
        assert pitch.goal_scored_by(Vector2D(810.0, 250.0)) is None
        assert pitch.goal_scored_by(Vector2D(810.5, 250.0)) is Team.HOME

    def test_constrain_to_bounds(self) -> None:
        """Clamping keeps a disc of the given radius on the pitch."""
        pitch = Pitch()
        clamped = pitch.constrain_to_bounds(Vector2D(-5.0, 600.0), 14)
        assert clamped == Vector2D(14.0, 486.0)
        assert pitch.is_in_bounds(clamped, 14)
        assert not pitch.is_in_bounds(Vector2D(5.0, 250.0), 14)
