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
"""Tests for utility modules (generator, debug) and configuration helpers."""

import random
from pathlib import Path

import pytest

from matchday.engine.config import ENGINE_CONFIG, SimulationConfig, coerce_players_per_team
from matchday.engine.physics import Pitch
from matchday.models.team import Team
from matchday.utils.debug import MatchDebugger
from matchday.utils.generator import formation_slot, generate_players, generate_squad


class TestFormation:
    """Tests for formation placement."""

    def test_two_player_slots(self) -> None:
        """Two players span from the edge inset to 100 units short of halfway."""
        pitch = Pitch()
        first = formation_slot(Team.HOME, 0, 2, pitch)
        second = formation_slot(Team.HOME, 1, 2, pitch)
        assert first.x == pytest.approx(60.0)
        assert second.x == pytest.approx(360.0)
        assert first.y == pytest.approx(500 / 3)
        assert second.y == pytest.approx(1000 / 3)

    def test_away_slots_mirror_home(self) -> None:
        """Away slots are reflected about the halfway line."""
        pitch = Pitch()
        for index in range(5):
            home = formation_slot(Team.HOME, index, 5, pitch)
            away = formation_slot(Team.AWAY, index, 5, pitch)
            assert away.x == pytest.approx(pitch.width - home.x)
            assert away.y == pytest.approx(home.y)


class TestGenerator:
    """Tests for squad generation."""

    def test_generate_players(self) -> None:
        """Both squads are created home first with stable identifiers."""
        players = generate_players(5, Pitch(), random.Random(7))
        assert [p.player_id for p in players] == ["h0", "h1", "h2", "h3", "h4", "a0", "a1", "a2", "a3", "a4"]
        assert all(p.team is Team.HOME for p in players[:5])
        assert all(p.team is Team.AWAY for p in players[5:])

    def test_squads_start_in_their_own_half(self) -> None:
        """Jittered positions stay on the defending side of halfway."""
        pitch = Pitch()
        for count in (2, 5, 11):
            for player in generate_players(count, pitch, random.Random(count)):
                assert pitch.in_own_half(player.team, player.position.x)
                assert pitch.is_in_bounds(player.position, pitch.player_radius)

    def test_jitter_is_bounded(self) -> None:
        """Each player sits within half the jitter range of their slot."""
        pitch = Pitch()
        squad = generate_squad(Team.AWAY, 4, pitch, random.Random(3))
        for index, player in enumerate(squad):
            slot = formation_slot(Team.AWAY, index, 4, pitch)
            assert abs(player.position.x - slot.x) <= ENGINE_CONFIG.formation.jitter_x / 2
            assert abs(player.position.y - slot.y) <= ENGINE_CONFIG.formation.jitter_y / 2

    def test_seeded_generation_is_reproducible(self) -> None:
        """The same seed gives the same squads."""
        first = generate_players(3, Pitch(), random.Random(42))
        second = generate_players(3, Pitch(), random.Random(42))
        assert [p.position for p in first] == [p.position for p in second]


class TestCoercePlayersPerTeam:
    """Squad size coercion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (5, 5),
            (0, 2),
            (42, 11),
            ("7", 7),
            (" 4 ", 4),
            ("abc", 5),
            ("", 5),
            (None, 5),
            (3.9, 3),
            (float("nan"), 5),
            (True, 5),
            ([3], 5),
        ],
    )
    def test_coerce(self, value: object, expected: int) -> None:
        """Integers are clamped, anything unusable falls back to the default."""
        assert coerce_players_per_team(value) == expected

    def test_custom_bounds(self) -> None:
        """Bounds and default come from the configuration given."""
        config = SimulationConfig(default_players_per_team=3, min_players_per_team=1, max_players_per_team=4)
        assert coerce_players_per_team(9, config) == 4
        assert coerce_players_per_team("x", config) == 3


class TestMatchDebugger:
    """Tests for the MatchDebugger."""

    def test_writes_session_file(self, tmp_path: Path) -> None:
        """Entries are streamed to a session log on disk."""
        debugger = MatchDebugger(tmp_path / "logs")
        debugger.log_match_event(3.5, "goal", "GOAL! Manchester United score. 1-0")
        debugger.log_ball_state(3.5, (811.0, 250.0), (0.4, 0.0), "h2")
        debugger.log_error("physics", "ball escaped")
        debugger.close()

        assert debugger.log_path is not None
        content = debugger.log_path.read_text(encoding="utf-8")
        assert "Match Debug Session" in content
        assert "EVENT t=3.50s goal: GOAL!" in content
        assert "attached=h2" in content
        assert "ERROR physics: ball escaped" in content

    def test_memory_only(self) -> None:
        """Without an output directory nothing is written but history is kept."""
        debugger = MatchDebugger(None, history=3)
        for i in range(5):
            debugger.log_player_state(float(i), f"h{i}", "Manchester United", (1.0, 2.0), False)
        recent = debugger.get_recent_events(10)

        assert debugger.log_path is None
        assert len(recent) == 3
        assert recent[-1].startswith("00005 ")
        assert "h4 [Manchester United]" in recent[-1]

    def test_events_are_structured(self) -> None:
        """Match events are also kept as records."""
        debugger = MatchDebugger(None)
        debugger.log_match_event(1.0, "kickoff", "Match ready")
        assert debugger.events[0].event_type == "kickoff"
        assert debugger.events[0].timestamp == 1.0

    def test_event_records_are_bounded(self) -> None:
        """Only the most recent structured events are kept."""
        debugger = MatchDebugger(None, history=3)
        for i in range(5):
            debugger.log_match_event(float(i), "decision", f"step {i}")

        assert len(debugger.events) == 3
        assert [event.timestamp for event in debugger.events] == [2.0, 3.0, 4.0]

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        """Closing twice is harmless."""
        debugger = MatchDebugger(tmp_path)
        debugger.close()
        debugger.close()
        assert debugger.log_file is None
