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
"""Entry point for headless match runs and the optional visualiser."""
import argparse
from typing import Callable, List, Optional

from matchday.engine.config import ENGINE_CONFIG
from matchday.engine.match_engine import MatchEngine, MatchState, format_match_clock
from matchday.models.team import Team
from matchday.utils.debug import MatchDebugger


def _positive_float(value: str) -> float:
    """Parse a strictly positive number for the command line.

    Parameters
    ----------
    value : str
        Raw argument text.

    Returns
    -------
    float
        The parsed value.

    Raises
    ------
    argparse.ArgumentTypeError
        If ``value`` is not a number greater than zero.
    """
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if not number > 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the ``matchday`` command.
    """
    parser = argparse.ArgumentParser(description="Simulate a two-team football match")
    parser.add_argument(
        "--players",
        default=str(ENGINE_CONFIG.simulation.default_players_per_team),
        help="Players per team (2-11); invalid values fall back to the default",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible matches")
    parser.add_argument("--headless", action="store_true", help="Run without the pygame window")
    parser.add_argument("--seconds", type=_positive_float, default=90.0, help="Match time to simulate when headless")
    parser.add_argument(
        "--step-ms", type=_positive_float, default=ENGINE_CONFIG.simulation.frame_ms, help="Headless tick length"
    )
    parser.add_argument("--debug-dir", default=None, help="Directory for debug logs; disabled when omitted")
    parser.add_argument("--log-every-tick", action="store_true", help="Log ball and player states every tick")
    return parser


def run_headless(
    engine: MatchEngine,
    duration_s: float,
    step_ms: Optional[float] = None,
    out: Callable[[str], None] = print,
) -> MatchState:
    """Simulate ``duration_s`` seconds, reporting the score every minute.

    Parameters
    ----------
    engine : MatchEngine
        Engine to drive; it is started if paused.
    duration_s : float
        Match time to simulate in seconds.
    step_ms : float | None, optional
        Tick length; defaults to the engine's frame length.
    out : Callable[[str], None], optional
        Sink for report lines.

    Returns
    -------
    MatchState
        The state at the end of the run.
    """
    last_event_count = 0
    minute = 0
    while engine.match_time < duration_s:
        out(f"\nMatch Time: {minute:02d}:00")
        out(f"Score: {Team.HOME.label} {engine.score[0]} - {engine.score[1]} {Team.AWAY.label}")
        minute += 1
        engine.simulate(min(duration_s, minute * 60.0), step_ms)

        for event in engine.state.events[last_event_count:]:
            if event.event_type == "goal":
                out(f"{format_match_clock(event.timestamp)} {event.description}")
        last_event_count = len(engine.state.events)

    engine.pause()
    print_summary(engine, out)
    return engine.state


def print_summary(engine: MatchEngine, out: Callable[[str], None] = print) -> None:
    """Print the final score and per-team statistics.

    Parameters
    ----------
    engine : MatchEngine
        Engine whose match is summarised.
    out : Callable[[str], None], optional
        Sink for report lines.
    """
    home, away = engine.score
    out(f"\nFinal Score ({engine.clock_text}): {Team.HOME.label} {home} - {away} {Team.AWAY.label}")
    out("\nMatch Statistics:")
    for team in (Team.HOME, Team.AWAY):
        passes = sum(1 for e in engine.state.events if e.event_type == "pass" and e.team is team)
        out(f"{team.label}: Shots {engine.shots_for(team)} | Passes {passes}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run a match from the command line.

    Parameters
    ----------
    argv : List[str] | None, optional
        Arguments to parse instead of ``sys.argv``.

    Returns
    -------
    int
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    debugger = MatchDebugger(args.debug_dir) if args.debug_dir else None
    engine = MatchEngine(args.players, seed=args.seed, debugger=debugger, log_every_tick=args.log_every_tick)

    try:
        if args.headless:
            run_headless(engine, args.seconds, args.step_ms)
        else:
            from matchday.visualizer.visualizer import start_visualizer

            if not start_visualizer(engine):
                if debugger:
                    debugger.log_error("visualizer", "pygame could not be imported")
                print("pygame is not installed; use --headless or install the 'visualizer' extra.")
                return 1
            print_summary(engine)
    except KeyboardInterrupt:
        print("\nMatch simulation interrupted.")
        print_summary(engine)
    finally:
        if debugger:
            debugger.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
