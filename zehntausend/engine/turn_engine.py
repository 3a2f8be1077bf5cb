"""
Zehntausend - Turn Engine

The authoritative, single-threaded state machine for one game. It owns the
dice, the players and the per-turn scores, and exposes exactly five actions
(roll, toggle_keep, bank, pass_turn, validate_move) plus get_snapshot.

Disallowed actions are silently ignored: they are guardable by any caller
and are not exceptional.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from zehntausend.engine.base import (
    NUM_DICE,
    AgentAction,
    ControllerKind,
    DieState,
    DieView,
    GameConfig,
    GameStatus,
    MoveValidation,
    PlayerView,
    Snapshot,
)
from zehntausend.engine.move_validator import validate_move
from zehntausend.engine.scoring import evaluate
from zehntausend.engine.validators import validate_dice_values, validate_die_id

logger = logging.getLogger(__name__)

Roller = Callable[[int], Sequence[int]]


def roll_faces(count: int) -> tuple[int, ...]:
    """Roll ``count`` independent, uniform D6 faces."""
    return tuple(random.randint(1, 6) for _ in range(count))


@dataclass
class _Die:
    id: int
    value: int = 1
    state: DieState = DieState.ROLLED


@dataclass
class _Player:
    index: int
    name: str
    controller: ControllerKind
    score: int = 0


class TurnEngine:
    """
    Mutable game state machine.

    Not safe for concurrent use: callers apply one action at a time and
    hand agents a Snapshot, never the engine itself.

    Args:
        config: Players, winning threshold and scoring variant
        roller: Produces ``count`` faces; injectable for deterministic tests
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        roller: Roller | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self._roller = roller or roll_faces
        self._players = [
            _Player(index=i, name=name, controller=self.config.controller_for(i))
            for i, name in enumerate(self.config.player_names)
        ]
        self._dice = [_Die(id=i) for i in range(NUM_DICE)]
        self._current = 0
        self._turn_score = 0
        self._held_score = 0
        self._held_instant_win = False
        self._turn_instant_win = False
        self._status = GameStatus.ROLLING
        self._message = ""

        # A turn always starts with dice on the table
        self.roll()
        if self._status is GameStatus.ROLLING:
            self._message = f"Welcome to Zehntausend! {self._active.name}'s turn."

    # -- Read-only state -------------------------------------------------

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def current_player_index(self) -> int:
        return self._current

    @property
    def turn_score(self) -> int:
        return self._turn_score

    @property
    def held_score(self) -> int:
        return self._held_score

    @property
    def message(self) -> str:
        return self._message

    @property
    def players(self) -> tuple[PlayerView, ...]:
        return tuple(
            PlayerView(index=p.index, name=p.name, controller=p.controller, score=p.score)
            for p in self._players
        )

    @property
    def winner(self) -> int | None:
        """Seat index of the winner, once the game is won."""
        if self._status is GameStatus.WIN:
            return self._current
        return None

    @property
    def _active(self) -> _Player:
        return self._players[self._current]

    def get_snapshot(self) -> Snapshot:
        """Return an immutable copy of the current state."""
        return Snapshot(
            players=self.players,
            current_player_index=self._current,
            dice=tuple(DieView(id=d.id, value=d.value, state=d.state) for d in self._dice),
            turn_score=self._turn_score,
            held_score=self._held_score,
            status=self._status,
            message=self._message,
            winning_score=self.config.winning_score,
            scoring_variant=self.config.scoring_variant,
        )

    def validate_move(
        self,
        keep_dice_ids: Iterable[int],
        action: AgentAction | str,
    ) -> MoveValidation:
        """Pure legality check against the current state."""
        return validate_move(self.get_snapshot(), keep_dice_ids, action)

    # -- Actions ---------------------------------------------------------

    def roll(self) -> None:
        """
        Commit kept dice and roll the rest.

        Kept dice become banked and their score moves into the turn score.
        If no die is left to roll, all six come back (hot hand). A roll whose
        fresh dice score nothing is a Farkle: the turn's points are lost.
        """
        if self._status is not GameStatus.ROLLING:
            logger.debug("Ignoring roll while %s", self._status.value)
            return

        self._commit_kept()

        to_roll = [d for d in self._dice if d.state is DieState.ROLLED]
        hot_hand = not to_roll
        if hot_hand:
            for die in self._dice:
                die.state = DieState.ROLLED
            to_roll = list(self._dice)

        faces = validate_dice_values(
            self._roller(len(to_roll)), min_count=len(to_roll), max_count=len(to_roll)
        )
        for die, face in zip(to_roll, faces):
            die.value = face

        result = evaluate(faces, self.config.scoring_variant)
        if result.points == 0:
            self._status = GameStatus.FARKLE
            self._turn_score = 0
            self._held_score = 0
            self._turn_instant_win = False
            self._message = "Farkle! No points."
            logger.info("%s farkled rolling %s", self._active.name, faces)
            return

        self._status = GameStatus.ROLLING
        self._message = "Hot Hand! Rolling all 6 dice!" if hot_hand else "Select dice to keep."
        logger.debug("%s rolled %s", self._active.name, faces)

    def toggle_keep(self, die_id: int) -> None:
        """
        Select or deselect a die.

        Deselecting drops every kept die of that face. Selecting a face with
        three or more kept-or-rolled copies auto-selects siblings until three
        are kept; past three, dice are added one at a time while every kept
        die still scores. Lone 1s and 5s toggle individually; anything else
        is not selectable.
        """
        if self._status is not GameStatus.ROLLING:
            logger.debug("Ignoring toggle while %s", self._status.value)
            return

        die = self._find_die(die_id)
        if die is None or die.state is DieState.BANKED:
            logger.debug("Die %r cannot be toggled", die_id)
            return

        value = die.value
        if die.state is DieState.KEPT:
            for other in self._dice:
                if other.value == value and other.state is DieState.KEPT:
                    other.state = DieState.ROLLED
        else:
            rolled_same = [d for d in self._dice if d.value == value and d.state is DieState.ROLLED]
            kept_same = [d for d in self._dice if d.value == value and d.state is DieState.KEPT]

            if len(rolled_same) + len(kept_same) >= 3:
                if len(kept_same) < 3:
                    needed = 3 - len(kept_same)
                    siblings = [d for d in rolled_same if d is not die]
                    for chosen in [die, *siblings][:needed]:
                        chosen.state = DieState.KEPT
                elif self._still_scores_with(die):
                    die.state = DieState.KEPT
                else:
                    # Fixed table: a fifth or sixth copy adds nothing
                    logger.debug("Die %r would not score with the kept dice", die_id)
                    return
            elif value in (1, 5):
                die.state = DieState.KEPT
            else:
                return

        self._recalc_held_score()

    def bank(self) -> None:
        """
        Add the turn's points to the active player's score.

        Wins the game when the threshold is reached (or an instant-win hand
        was kept this turn); otherwise passes the turn.
        """
        if self._status is not GameStatus.ROLLING:
            return
        if self._turn_score + self._held_score <= 0:
            logger.debug("Nothing to bank")
            return

        self._commit_kept()
        player = self._active
        player.score += self._turn_score

        if self._turn_instant_win or player.score >= self.config.winning_score:
            self._status = GameStatus.WIN
            self._message = f"{player.name} Wins!"
            logger.info("%s wins with %d points", player.name, player.score)
            return

        logger.info("%s banked %d (total %d)", player.name, self._turn_score, player.score)
        self.pass_turn()

    def pass_turn(self) -> None:
        """Reset the turn, hand the dice to the next seat and roll for them."""
        if self._status is GameStatus.WIN:
            return

        self._turn_score = 0
        self._held_score = 0
        self._held_instant_win = False
        self._turn_instant_win = False
        for die in self._dice:
            die.state = DieState.ROLLED
        self._current = (self._current + 1) % len(self._players)
        self._status = GameStatus.ROLLING
        logger.debug("Turn passes to %s", self._active.name)

        self.roll()
        if self._status is GameStatus.ROLLING:
            self._message = f"{self._active.name}'s Turn. Select dice to keep."

    # -- Helpers ---------------------------------------------------------

    def _find_die(self, die_id: int) -> _Die | None:
        try:
            return self._dice[validate_die_id(die_id, len(self._dice))]
        except ValueError:
            return None

    def _still_scores_with(self, die: _Die) -> bool:
        """True if ``die`` would score alongside every die already kept."""
        faces = [d.value for d in self._dice if d.state is DieState.KEPT]
        faces.append(die.value)
        result = evaluate(faces, self.config.scoring_variant)
        return len(result.scoring_dice_indices) == len(faces)

    def _commit_kept(self) -> None:
        """Fold the kept dice into the turn score and lock them."""
        kept = [d for d in self._dice if d.state is DieState.KEPT]
        for die in kept:
            die.state = DieState.BANKED
        self._turn_score += self._held_score
        self._turn_instant_win = self._turn_instant_win or self._held_instant_win
        self._held_score = 0
        self._held_instant_win = False

    def _recalc_held_score(self) -> None:
        kept_faces = [d.value for d in self._dice if d.state is DieState.KEPT]
        result = evaluate(kept_faces, self.config.scoring_variant)
        self._held_score = result.points
        self._held_instant_win = result.instant_win
