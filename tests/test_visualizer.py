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
"""Tests for the visualiser's pure layout and control helpers."""

from matchday.engine.match_engine import MatchEngine
from matchday.engine.physics import Pitch, Vector2D
from matchday.visualizer.visualizer import BUTTON_LABELS, HUD_HEIGHT, handle_click, layout, world_to_screen


def _centre(rect: tuple) -> tuple:
    left, top, width, height = rect
    return left + width // 2, top + height // 2


class TestLayout:
    """Screen geometry."""

    def test_world_to_screen(self) -> None:
        """Pitch coordinates scale into the drawn rectangle."""
        pitch = Pitch()
        rect = (16, 48, 848, 516)
        assert world_to_screen(Vector2D(0.0, 0.0), pitch, rect) == (16, 48)
        assert world_to_screen(Vector2D(400.0, 250.0), pitch, rect) == (440, 306)
        assert world_to_screen(Vector2D(800.0, 500.0), pitch, rect) == (864, 564)

    def test_layout_has_pitch_and_buttons(self) -> None:
        """The pitch sits below the HUD and every button fits on screen."""
        rects = layout((880, 580))
        assert set(rects) == {"pitch", *BUTTON_LABELS}
        assert rects["pitch"][1] == HUD_HEIGHT
        for label in BUTTON_LABELS:
            left, top, width, height = rects[label]
            assert 0 <= left and left + width <= 880
            assert top + height <= HUD_HEIGHT


class TestControls:
    """Mouse clicks on the control buttons."""

    def test_buttons_drive_the_engine(self) -> None:
        """Start runs, Pause toggles and Reset restores a paused kickoff."""
        engine = MatchEngine(3, seed=1)
        rects = layout((880, 580))

        handle_click(engine, rects, _centre(rects["Start"]))
        assert engine.is_running
        engine.simulate(1.0)

        handle_click(engine, rects, _centre(rects["Pause"]))
        assert not engine.is_running
        handle_click(engine, rects, _centre(rects["Pause"]))
        assert engine.is_running

        handle_click(engine, rects, _centre(rects["Reset"]))
        assert not engine.is_running
        assert engine.match_time == 0.0

    def test_click_on_pitch_does_nothing(self) -> None:
        """Clicks outside the buttons are ignored."""
        engine = MatchEngine(3, seed=1)
        rects = layout((880, 580))
        handle_click(engine, rects, _centre(rects["pitch"]))
        assert not engine.is_running
