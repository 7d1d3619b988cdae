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
"""Tests for player, team and event models."""

from matchday.engine.events import MatchEvent
from matchday.engine.physics import Vector2D
from matchday.models.player import Player
from matchday.models.team import TEAM_NAMES, Team


class TestTeam:
    """Tests for the Team enum."""

    def test_opponents(self) -> None:
        """Each side's opponent is the other side."""
        assert Team.HOME.opponent is Team.AWAY
        assert Team.AWAY.opponent is Team.HOME

    def test_attack_directions(self) -> None:
        """Home attacks increasing x, away decreasing x."""
        assert Team.HOME.attack_direction == 1
        assert Team.AWAY.attack_direction == -1

    def test_labels_and_prefixes(self) -> None:
        """Display names and identifier prefixes."""
        assert Team.HOME.label == TEAM_NAMES[Team.HOME] == "Manchester United"
        assert Team.AWAY.label == "Manchester City"
        assert Team.HOME.id_prefix == "h"
        assert Team.AWAY.id_prefix == "a"


class TestPlayer:
    """Tests for the Player dataclass."""

    def test_defaults_to_rest(self) -> None:
        """A new player has no velocity."""
        player = Player("h0", Team.HOME, Vector2D(60.0, 83.0))
        assert player.velocity == Vector2D(0.0, 0.0)

    def test_velocity_not_shared(self) -> None:
        """Each player gets its own velocity vector."""
        first = Player("h0", Team.HOME, Vector2D(0.0, 0.0))
        second = Player("h1", Team.HOME, Vector2D(0.0, 0.0))
        assert first.velocity is not second.velocity

    def test_distance_to(self) -> None:
        """Distance is measured from the player's centre."""
        player = Player("a1", Team.AWAY, Vector2D(3.0, 0.0))
        assert player.distance_to(Vector2D(0.0, 4.0)) == 5.0

    def test_is_teammate(self) -> None:
        """Teammates share a side but are different players."""
        h0 = Player("h0", Team.HOME, Vector2D(0.0, 0.0))
        h1 = Player("h1", Team.HOME, Vector2D(0.0, 0.0))
        a0 = Player("a0", Team.AWAY, Vector2D(0.0, 0.0))
        assert h0.is_teammate(h1)
        assert not h0.is_teammate(h0)
        assert not h0.is_teammate(a0)


class TestMatchEvent:
    """Tests for the MatchEvent record."""

    def test_fields(self) -> None:
        """Events keep their timestamp, type, side and description."""
        event = MatchEvent(12.5, "goal", Team.AWAY, "GOAL! Manchester City score. 0-1")
        assert event.timestamp == 12.5
        assert event.event_type == "goal"
        assert event.team is Team.AWAY
        assert "0-1" in event.description
