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
"""Match state and the frame-driven simulation loop.

``MatchEngine.advance`` runs one complete tick: the possessor may act (at most
once per action cooldown), every player moves, then the ball flies and goals
are checked. Hosts such as the pygame visualiser or the headless runner decide
when to call it.
"""
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from matchday.engine.actions import Action, ActionOutcome, choose_action, execute_action, score_actions
from matchday.engine.ball import check_goal, goal_detection_open, integrate_free_ball, kickoff_after_goal
from matchday.engine.config import ENGINE_CONFIG, EngineConfig, coerce_players_per_team
from matchday.engine.events import MatchEvent
from matchday.engine.movement import update_player
from matchday.engine.physics import BallState, Pitch
from matchday.engine.possession import find_possessor
from matchday.models.player import Player
from matchday.models.team import Team
from matchday.utils.debug import MatchDebugger
from matchday.utils.generator import generate_players


def format_match_clock(seconds: float) -> str:
    """Format elapsed match time for a scoreboard.

    Parameters
    ----------
    seconds : float
        Elapsed time in seconds.

    Returns
    -------
    str
        ``M:SS`` with whole minutes and zero-padded whole seconds.
    """
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


@dataclass
class MatchState:
    """Everything that changes during a match.

    Parameters
    ----------
    pitch : Pitch
        Playing surface.
    players : List[Player]
        Both squads, home first; iteration order is the tie-break order.
    ball : BallState
        The match ball.
    home_score : int, default=0
        Goals scored by the home side.
    away_score : int, default=0
        Goals scored by the away side.
    match_time : float, default=0.0
        Elapsed simulated time in seconds.
    clock_ms : float, default=0.0
        Elapsed simulated time in milliseconds, used for cooldowns.
    is_running : bool, default=False
        Whether ``advance`` currently simulates.
    last_action_ms : float, default=0.0
        Timestamp of the last action decision.
    last_goal_ms : float | None, default=None
        Timestamp of the last goal, ``None`` before the first one.
    decision_count : int, default=0
        Number of action decisions taken since the last reset.
    last_decision : ActionOutcome | None, default=None
        Most recent action decision.
    events : List[MatchEvent], optional
        Noteworthy moments in chronological order.
    """

    pitch: Pitch
    players: List[Player]
    ball: BallState
    home_score: int = 0
    away_score: int = 0
    match_time: float = 0.0
    clock_ms: float = 0.0
    is_running: bool = False
    last_action_ms: float = 0.0
    last_goal_ms: Optional[float] = None
    decision_count: int = 0
    last_decision: Optional[ActionOutcome] = None
    events: List[MatchEvent] = field(default_factory=list)

    def player_by_id(self, player_id: Optional[str]) -> Optional[Player]:
        """Resolve a player identifier.

        Parameters
        ----------
        player_id : str | None
            Identifier to look up.

        Returns
        -------
        Player | None
            Matching player, or ``None`` when absent.
        """
        if player_id is None:
            return None
        return next((p for p in self.players if p.player_id == player_id), None)


class MatchEngine:
    """Controller that owns a match and advances it one tick at a time.

    Parameters
    ----------
    players_per_team : object, optional
        Requested squad size; coerced into the allowed range.
    seed : int | None, optional
        Seed for the engine's private random source.
    rng : random.Random | None, optional
        Explicit random source; takes precedence over ``seed``.
    config : EngineConfig | None, optional
        Tuning values; defaults to ``ENGINE_CONFIG``.
    debugger : MatchDebugger | None, optional
        Telemetry sink for decisions, kicks and goals.
    log_every_tick : bool, default=False
        Also log ball and player states on every tick.
    """

    def __init__(
        self,
        players_per_team: object = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        config: Optional[EngineConfig] = None,
        debugger: Optional[MatchDebugger] = None,
        log_every_tick: bool = False,
    ) -> None:
        """Create an engine with a freshly seeded match.

        Parameters
        ----------
        players_per_team : object, optional
            Requested squad size; coerced into the allowed range.
        seed : int | None, optional
            Seed for the engine's private random source.
        rng : random.Random | None, optional
            Explicit random source; takes precedence over ``seed``.
        config : EngineConfig | None, optional
            Tuning values; defaults to ``ENGINE_CONFIG``.
        debugger : MatchDebugger | None, optional
            Telemetry sink for decisions, kicks and goals.
        log_every_tick : bool, default=False
            Also log ball and player states on every tick.
        """
        self.config = config if config is not None else ENGINE_CONFIG
        self.rng = rng if rng is not None else random.Random(seed)
        self.debugger = debugger
        self.log_every_tick = log_every_tick
        self.pitch = Pitch.from_config(self.config.pitch)
        self.players_per_team = coerce_players_per_team(players_per_team, self.config.simulation)
        self._last_frame_ms: Optional[float] = None
        self.state = self._new_state()
        self._log_event("kickoff", f"Match ready with {self.players_per_team} players per team")

    # --- lifecycle -----------------------------------------------------------------
    def start(self) -> None:
        """Start or resume the simulation."""
        if self.state.is_running:
            return
        self.state.is_running = True
        self._log_event("control", "Match started")

    def pause(self) -> None:
        """Pause the simulation; ``advance`` becomes a no-op."""
        if not self.state.is_running:
            return
        self.state.is_running = False
        self._log_event("control", "Match paused")

    def toggle_pause(self) -> bool:
        """Flip between running and paused.

        Returns
        -------
        bool
            ``True`` when the match is running afterwards.
        """
        if self.state.is_running:
            self.pause()
        else:
            self.start()
        return self.state.is_running

    def reset(self, players_per_team: object = None) -> MatchState:
        """Return to a paused, scoreless kickoff with fresh formations.

        Parameters
        ----------
        players_per_team : object, optional
            New squad size; keeps the current size when omitted.

        Returns
        -------
        MatchState
            The new match state.
        """
        if players_per_team is not None:
            self.players_per_team = coerce_players_per_team(players_per_team, self.config.simulation)
        self._last_frame_ms = None
        self.state = self._new_state()
        self._log_event("kickoff", f"Match reset with {self.players_per_team} players per team")
        return self.state

    def _new_state(self) -> MatchState:
        """Build a paused match at kickoff.

        Returns
        -------
        MatchState
            State with seeded squads and the ball on the centre spot.
        """
        players = generate_players(self.players_per_team, self.pitch, self.rng, self.config.formation)
        ball = BallState(self.pitch.centre, debugger=self.debugger)
        return MatchState(pitch=self.pitch, players=players, ball=ball)

    # --- simulation ----------------------------------------------------------------
    def tick(self, frame_ms: float) -> MatchState:
        """Advance from a frame-callback timestamp.

        Parameters
        ----------
        frame_ms : float
            Host timestamp of the current frame in milliseconds.

        Returns
        -------
        MatchState
            The updated match state.
        """
        elapsed = 0.0 if self._last_frame_ms is None else frame_ms - self._last_frame_ms
        self._last_frame_ms = frame_ms
        return self.advance(elapsed)

    def advance(self, elapsed_ms: float, now_ms: Optional[float] = None) -> MatchState:
        """Run one simulation step if the match is running.

        Parameters
        ----------
        elapsed_ms : float
            Time since the previous step; clamped to ``[0, max_step_ms]``.
        now_ms : float | None, optional
            Timestamp used for cooldown gating. Defaults to the simulated clock.

        Returns
        -------
        MatchState
            The (possibly unchanged) match state.
        """
        state = self.state
        if not state.is_running:
            return state

        dt = max(0.0, min(self.config.simulation.max_step_ms, elapsed_ms))
        state.clock_ms += dt
        state.match_time += dt / 1000
        now = state.clock_ms if now_ms is None else now_ms
        state.ball.set_log_match_time(state.match_time)

        self._try_action(now)
        for player in state.players:
            update_player(player, state.ball, self.pitch, dt, self.rng, self.config.movement)
        self._update_ball(dt, now)

        if self.log_every_tick:
            self._log_tick()
        return state

    def simulate(self, duration_s: float, step_ms: Optional[float] = None) -> MatchState:
        """Run the match headless until ``duration_s`` of match time has elapsed.

        Parameters
        ----------
        duration_s : float
            Target match time in seconds.
        step_ms : float | None, optional
            Fixed tick length; defaults to ``config.simulation.frame_ms``.

        Returns
        -------
        MatchState
            The state after the last tick.
        """
        step = step_ms if step_ms is not None else self.config.simulation.frame_ms
        if step <= 0:
            raise ValueError("step_ms must be positive")
        self.start()
        while self.state.match_time < duration_s:
            self.advance(step)
        return self.state

    def _try_action(self, now: float) -> Optional[ActionOutcome]:
        """Let the possessor act if the action cooldown has elapsed.

        Parameters
        ----------
        now : float
            Timestamp used for cooldown gating.

        Returns
        -------
        ActionOutcome | None
            The decision taken, or ``None`` when nobody acted.
        """
        state = self.state
        if now - state.last_action_ms < self.config.simulation.action_cooldown_ms:
            return None

        possessor = find_possessor(state.players, state.ball, self.config.possession.radius)
        if possessor is None:
            return None
        if state.ball.attached_to is not None and state.ball.attached_to != possessor.player_id:
            return None

        state.last_action_ms = now
        scores = score_actions(possessor, state.players, state.ball, self.pitch, self.config.actions)
        action = choose_action(scores, self.config.actions)
        outcome = execute_action(
            action, possessor, state.players, state.ball, self.pitch, self.rng, self.config.actions
        )
        state.decision_count += 1
        state.last_decision = outcome

        if self.debugger:
            self.debugger.log_match_event(
                state.match_time,
                "decision",
                f"Player {possessor.player_id} ({possessor.team.label}) -> {action.value} [{scores.describe()}]",
            )
        if outcome.target_id is not None:
            self._record(
                "pass", possessor.team, f"Player {possessor.player_id} passes to {outcome.target_id}"
            )
        elif outcome.action is Action.SHOOT:
            self._record("shot", possessor.team, f"Player {possessor.player_id} shoots")
        return outcome

    def _update_ball(self, dt: float, now: float) -> None:
        """Check for goals, then move a free ball.

        Parameters
        ----------
        dt : float
            Elapsed time in milliseconds.
        now : float
            Timestamp used for goal cooldown gating.
        """
        state = self.state
        if goal_detection_open(now, state.last_goal_ms, self.config.simulation.goal_cooldown_ms):
            scorer = check_goal(state.ball, self.pitch)
            if scorer is not None:
                self._register_goal(scorer, now)
                return
        integrate_free_ball(state.ball, self.pitch, dt, self.config.ball_physics)

    def _register_goal(self, scorer: Team, now: float) -> None:
        """Credit a goal and restart with the conceding side.

        Parameters
        ----------
        scorer : Team
            Side that scored.
        now : float
            Timestamp of the goal.
        """
        state = self.state
        state.last_goal_ms = now
        if scorer is Team.HOME:
            state.home_score += 1
        else:
            state.away_score += 1
        self._record(
            "goal",
            scorer,
            f"GOAL! {scorer.label} score. {state.home_score}-{state.away_score}",
        )

        taker = kickoff_after_goal(state.ball, state.players, scorer.opponent, self.pitch, self.config.ball_physics)
        if taker is not None:
            self._log_event("kickoff", f"Kickoff after goal - player {taker.player_id} ({taker.team.label})")
        else:
            self._log_event("kickoff", "Kickoff after goal - ball returned to the centre spot")

    # --- accessors -----------------------------------------------------------------
    @property
    def score(self) -> Tuple[int, int]:
        """Return ``(home, away)`` goals."""
        return self.state.home_score, self.state.away_score

    @property
    def match_time(self) -> float:
        """Return elapsed match time in seconds."""
        return self.state.match_time

    @property
    def clock_text(self) -> str:
        """Return elapsed match time formatted as ``M:SS``."""
        return format_match_clock(self.state.match_time)

    @property
    def is_running(self) -> bool:
        """Return whether the match is currently simulating."""
        return self.state.is_running

    @property
    def players(self) -> List[Player]:
        """Return the live player list."""
        return self.state.players

    @property
    def ball(self) -> BallState:
        """Return the live ball."""
        return self.state.ball

    def possessor(self) -> Optional[Player]:
        """Return the player currently in possession range of the ball.

        Returns
        -------
        Player | None
            Closest player within the possession radius, or ``None``.
        """
        return find_possessor(self.state.players, self.state.ball, self.config.possession.radius)

    def shots_for(self, team: Team) -> int:
        """Count the shots taken by ``team`` since the last reset.

        Parameters
        ----------
        team : Team
            Side whose shots are counted.

        Returns
        -------
        int
            Number of ``"shot"`` events for ``team``.
        """
        return sum(1 for e in self.state.events if e.event_type == "shot" and e.team is team)

    def snapshot(self) -> Dict[str, object]:
        """Return a plain-data view of the match for drawing or serialising.

        Returns
        -------
        Dict[str, object]
            Score, clock, running flag, player positions and ball position.
        """
        state = self.state
        return {
            "score": {"home": state.home_score, "away": state.away_score},
            "time": state.match_time,
            "clock": format_match_clock(state.match_time),
            "running": state.is_running,
            "players": [
                {
                    "id": p.player_id,
                    "team": p.team.value,
                    "x": p.position.x,
                    "y": p.position.y,
                }
                for p in state.players
            ],
            "ball": {
                "x": state.ball.position.x,
                "y": state.ball.position.y,
                "attached_to": state.ball.attached_to,
            },
        }

    # --- logging -------------------------------------------------------------------
    def _record(self, event_type: str, team: Optional[Team], description: str) -> None:
        """Append a match event and mirror it to the debugger.

        Parameters
        ----------
        event_type : str
            Event category.
        team : Team | None
            Side involved.
        description : str
            Human-readable summary.
        """
        self.state.events.append(MatchEvent(self.state.match_time, event_type, team, description))
        self._log_event(event_type, description)

    def _log_event(self, event_type: str, description: str) -> None:
        """Send a match event to the debugger when one is attached.

        Parameters
        ----------
        event_type : str
            Event category.
        description : str
            Human-readable summary.
        """
        if self.debugger:
            self.debugger.log_match_event(self.state.match_time, event_type, description)

    def _log_tick(self) -> None:
        """Log the ball and every player for the current tick."""
        if not self.debugger:
            return
        state = self.state
        ball = state.ball
        self.debugger.log_ball_state(
            state.match_time,
            (ball.position.x, ball.position.y),
            (ball.velocity.x, ball.velocity.y),
            ball.attached_to,
        )
        for player in state.players:
            self.debugger.log_player_state(
                state.match_time,
                player.player_id,
                player.team.label,
                (player.position.x, player.position.y),
                ball.attached_to == player.player_id,
                velocity=(player.velocity.x, player.velocity.y),
            )
