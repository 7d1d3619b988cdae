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
"""Plain-text telemetry for match runs.

A :class:`MatchDebugger` keeps a short numbered history of log lines for live
displays and, when given a directory, streams every line to a per-session file
that can be read back after a run.
"""
import itertools
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple

Point = Tuple[float, float]


@dataclass
class DebugEvent:
    """A match event as received by the debugger.

    Parameters
    ----------
    timestamp : float
        Match time in seconds.
    event_type : str
        Category such as ``"kick"``, ``"decision"`` or ``"goal"``.
    details : str
        Free-form description.
    """

    timestamp: float
    event_type: str
    details: str


class MatchDebugger:
    """Collects ball, player and event traces for a simulation.

    Parameters
    ----------
    output_dir : str | Path | None, default="debug_logs"
        Directory that receives ``match_debug_<session>.txt``; created if
        missing. ``None`` keeps everything in memory.
    history : int, default=200
        How many numbered lines :meth:`get_recent_events` can return, and how
        many structured events are kept in :attr:`events`.
    """

    def __init__(self, output_dir: Optional[str | Path] = "debug_logs", history: int = 200) -> None:
        """Set up the in-memory history and open the first session.

        Parameters
        ----------
        output_dir : str | Path | None
            Session file directory, or ``None`` for memory only.
        history : int
            Size of the numbered line and event history.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.session_id = time.strftime("%Y%m%d_%H%M%S")
        self.log_path: Optional[Path] = None
        self.log_file: Optional[TextIO] = None
        self.events: Deque[DebugEvent] = deque(maxlen=history)
        self._history: Deque[str] = deque(maxlen=history)
        self._numbers = itertools.count(1)
        self._lock = Lock()
        self.start_new_session()

    def start_new_session(self) -> None:
        """Close any open session file and open a fresh one."""
        self.close()
        if self.output_dir is None:
            return
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_path = self.output_dir / f"match_debug_{self.session_id}.txt"
        self.log_file = self.log_path.open("w", encoding="utf-8")
        self.log_file.write(f"=== Match Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_ball_state(
        self,
        match_time: float,
        position: Point,
        velocity: Point,
        attached_to: Optional[str] = None,
    ) -> None:
        """Trace the ball for one tick.

        Parameters
        ----------
        match_time : float
            Match time in seconds.
        position : Point
            Ball centre ``(x, y)``.
        velocity : Point
            Ball velocity in pitch units per millisecond.
        attached_to : str | None
            Dribbler identifier, if any.
        """
        line = (
            f"t={match_time:.2f}s pos=({position[0]:.1f}, {position[1]:.1f}) "
            f"vel=({velocity[0]:.3f}, {velocity[1]:.3f})"
        )
        if attached_to:
            line += f" attached={attached_to}"
        self._emit("BALL", line)

    def log_player_state(
        self,
        match_time: float,
        player_id: str,
        team_name: str,
        position: Point,
        has_ball: bool,
        velocity: Optional[Point] = None,
    ) -> None:
        """Trace one player for one tick.

        Parameters
        ----------
        match_time : float
            Match time in seconds.
        player_id : str
            Player identifier.
        team_name : str
            Display name of the player's side.
        position : Point
            Player centre ``(x, y)``.
        has_ball : bool
            Whether the player is dribbling.
        velocity : Point | None
            Player velocity per tick, when known.
        """
        line = f"t={match_time:.2f}s {player_id} [{team_name}] pos=({position[0]:.1f}, {position[1]:.1f})"
        if velocity is not None:
            line += f" vel=({velocity[0]:.2f}, {velocity[1]:.2f})"
        if has_ball:
            line += " ball"
        self._emit("PLAYER", line)

    def log_match_event(self, match_time: float, event_type: str, description: str) -> None:
        """Record a match event and trace it.

        Parameters
        ----------
        match_time : float
            Match time in seconds.
        event_type : str
            Event category.
        description : str
            Free-form description.
        """
        self.events.append(DebugEvent(match_time, event_type, description))
        self._emit("EVENT", f"t={match_time:.2f}s {event_type}: {description}")

    def log_error(self, error_type: str, description: str) -> None:
        """Trace a problem that did not stop the run.

        Parameters
        ----------
        error_type : str
            Short classification.
        description : str
            What went wrong.
        """
        self._emit("ERROR", f"{error_type}: {description}")

    def _emit(self, category: str, message: str) -> None:
        """Number a line, keep it in the history and stream it to the session file.

        Parameters
        ----------
        category : str
            Upper-case line category.
        message : str
            Formatted body.
        """
        with self._lock:
            line = f"{next(self._numbers):05d} [{time.strftime('%H:%M:%S')}] {category} {message}"
            self._history.append(line)
            if self.log_file:
                self.log_file.write(line + "\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the newest numbered lines, oldest first.

        Parameters
        ----------
        limit : int
            Maximum number of lines.

        Returns
        -------
        List[str]
            At most ``limit`` lines.
        """
        with self._lock:
            return list(self._history)[-limit:]

    def close(self) -> None:
        """Close the session file; safe to call repeatedly."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None
