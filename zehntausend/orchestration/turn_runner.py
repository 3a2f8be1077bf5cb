"""
Zehntausend - Turn Orchestrator

Drives one game: forwards human actions to the engine, asks the active
agent for a move when a computer seat is up, applies that move through the
same action surface humans use, and passes the turn after a Farkle once the
table has had time to see it.

Only one step runs at a time per game. Restarting replaces the engine,
cancels any in-flight agent call and bumps a generation counter so that a
late answer meant for the old game is dropped instead of applied.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Mapping

from zehntausend.agents.base import Agent, AgentError, Sleeper
from zehntausend.config.settings import Settings, get_settings
from zehntausend.engine.base import (
    AgentAction,
    DieState,
    GameConfig,
    GameStatus,
    Move,
    MoveValidation,
    ScoringVariant,
    Snapshot,
)
from zehntausend.engine.turn_engine import Roller, TurnEngine
from zehntausend.orchestration.events import EventPayload, TurnEvent, classify_transition

logger = logging.getLogger(__name__)

EventListener = Callable[[EventPayload], None]


class TurnOrchestrator:
    """
    Single-flight game driver.

    Args:
        config: Game configuration (defaults built from settings)
        agents: Agent per seat index; missing or None means a human seat
        settings: Pacing and game defaults
        roller: Dice roller handed to every engine this orchestrator creates
        sleep: Coroutine used for the pacing pauses
        on_event: Listener for turn events; its exceptions are logged only
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        agents: Mapping[int, Agent | None] | None = None,
        *,
        settings: Settings | None = None,
        roller: Roller | None = None,
        sleep: Sleeper = asyncio.sleep,
        on_event: EventListener | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.config = config or GameConfig(
            winning_score=self.settings.winning_score,
            scoring_variant=ScoringVariant(self.settings.scoring_variant),
        )
        self._agents: dict[int, Agent | None] = dict(agents or {})
        self._roller = roller
        self._sleep = sleep
        self._on_event = on_event
        self._generation = 0
        self._inflight: asyncio.Task | None = None

        self.engine = TurnEngine(self.config, roller=roller)
        self.last_error: str | None = None
        self.progress: str | None = None

    # -- State -----------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self.engine.get_snapshot()

    @property
    def generation(self) -> int:
        """Incremented on every restart."""
        return self._generation

    def agent_for(self, player_index: int) -> Agent | None:
        return self._agents.get(player_index)

    def set_agent(self, player_index: int, agent: Agent | None) -> None:
        self._agents[player_index] = agent

    @property
    def is_agent_turn(self) -> bool:
        snapshot = self.snapshot
        return not snapshot.is_over and self.agent_for(snapshot.current_player_index) is not None

    # -- Engine actions (human input) -----------------------------------

    def roll(self) -> None:
        self._act(self.engine.roll)

    def toggle_keep(self, die_id: int) -> None:
        self._act(self.engine.toggle_keep, die_id)

    def bank(self) -> None:
        self._act(self.engine.bank)

    def pass_turn(self) -> None:
        self._act(self.engine.pass_turn)

    def apply_move(self, move: Move) -> MoveValidation:
        """
        Keep the requested dice, then roll or bank.

        Dice already kept are left alone so that a set auto-selected by an
        earlier toggle is not released again. Illegal moves are not applied.
        """
        verdict = self.engine.validate_move(move.keep_dice_ids, move.action)
        if not verdict.valid:
            return verdict

        for die_id in move.keep_dice_ids:
            die = self.engine.get_snapshot().die(die_id)
            if die is not None and die.state is DieState.ROLLED:
                self.toggle_keep(die_id)

        if move.action is AgentAction.ROLL:
            self.roll()
        else:
            self.bank()
        return verdict

    # -- Async driving ---------------------------------------------------

    async def step(self) -> bool:
        """
        Advance the game by one automatic step.

        Returns:
            True if the engine changed; False when waiting for a human, when
            the game is over, or when the agent failed (see ``last_error``)
        """
        snapshot = self.snapshot
        if snapshot.is_over:
            return False

        if snapshot.status is GameStatus.FARKLE:
            return await self._pass_after_bust()

        agent = self.agent_for(snapshot.current_player_index)
        if agent is None:
            return False
        return await self._run_agent(agent, snapshot)

    async def run_until_human(self, max_steps: int = 1000) -> int:
        """Keep stepping until a human must act, the game ends, or an agent fails."""
        steps = 0
        while steps < max_steps and await self.step():
            steps += 1
        return steps

    def restart(self, config: GameConfig | None = None) -> None:
        """Start a fresh game; anything still thinking about the old one is dropped."""
        self._generation += 1
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None

        if config is not None:
            self.config = config
        self.engine = TurnEngine(self.config, roller=self._roller)
        self.last_error = None
        self.progress = None
        logger.info("Game restarted (generation %d)", self._generation)
        self._emit(EventPayload(
            event=TurnEvent.GAME_RESTARTED,
            player_index=self.engine.current_player_index,
            data={"generation": self._generation},
        ))

    # -- Internals -------------------------------------------------------

    async def _pass_after_bust(self) -> bool:
        if not await self._pause(self.settings.bust_pause):
            return False
        if self.engine.status is not GameStatus.FARKLE:
            return False
        self.pass_turn()
        return True

    async def _pause(self, delay: float) -> bool:
        """Wait as the in-flight task so restart() can cut it short. False if it did."""
        generation = self._generation
        task = asyncio.ensure_future(self._sleep(delay))
        self._inflight = task
        try:
            await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info("Pause cancelled by restart")
                return False
            raise
        finally:
            if self._inflight is task:
                self._inflight = None
        return generation == self._generation

    async def _run_agent(self, agent: Agent, snapshot: Snapshot) -> bool:
        generation = self._generation
        engine = self.engine
        seat = snapshot.current_player_index
        self.last_error = None

        task = asyncio.ensure_future(agent.decide(snapshot, self._report_progress))
        self._inflight = task
        try:
            move = await task
        except asyncio.CancelledError:
            if self._is_stale(generation, engine):
                logger.info("Agent call for seat %d cancelled by restart", seat)
                return False
            raise
        except AgentError as exc:
            if self._is_stale(generation, engine):
                return False
            self._fail(seat, str(exc))
            return False
        finally:
            if self._inflight is task:
                self._inflight = None

        if self._is_stale(generation, engine):
            logger.info("Discarding stale move for seat %d", seat)
            return False

        # Let observers see the choice before it lands
        if not await self._pause(self.settings.move_pause) or self._is_stale(generation, engine):
            return False

        verdict = self.apply_move(move)
        if not verdict.valid:
            self._fail(seat, f"Illegal move: {verdict.reason}")
            return False

        self.progress = None
        return True

    def _is_stale(self, generation: int, engine: TurnEngine) -> bool:
        return generation != self._generation or engine is not self.engine

    def _fail(self, seat: int, reason: str) -> None:
        self.last_error = reason
        self.progress = None
        logger.error("Agent for seat %d failed: %s", seat, reason)
        self._emit(EventPayload(
            event=TurnEvent.AGENT_FAILED,
            player_index=seat,
            data={"error": reason},
        ))

    def _report_progress(self, message: str) -> None:
        self.progress = message
        self._emit(EventPayload(
            event=TurnEvent.AGENT_PROGRESS,
            player_index=self.engine.current_player_index,
            data={"message": message},
        ))

    def _act(self, action: Callable[..., None], *args: object) -> None:
        before = self.engine.get_snapshot()
        action(*args)
        after = self.engine.get_snapshot()

        event = classify_transition(before, after)
        if event is None:
            return
        self._emit(EventPayload(
            event=event,
            player_index=before.current_player_index,
            data={"snapshot": after},
        ))

    def _emit(self, payload: EventPayload) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(payload)
        except Exception:
            logger.exception("Error in event listener for %s", payload.event.name)
