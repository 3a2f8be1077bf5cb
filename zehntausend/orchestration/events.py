"""
Zehntausend - Turn Event Definitions

Event types and payloads emitted while a game is played, plus a classifier
that names the change between two consecutive snapshots.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from zehntausend.engine.base import DieState, GameStatus, Snapshot


class TurnEvent(Enum):
    """Events that can occur during a game."""

    DICE_ROLLED = auto()
    DICE_KEPT = auto()
    TURN_BANKED = auto()
    PLAYER_BUST = auto()
    TURN_ADVANCED = auto()
    GAME_WON = auto()
    AGENT_PROGRESS = auto()
    AGENT_FAILED = auto()
    GAME_RESTARTED = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for event data."""

    event: TurnEvent
    player_index: int | None = None
    data: dict[str, Any] = field(default_factory=dict)


def classify_transition(before: Snapshot, after: Snapshot) -> TurnEvent | None:
    """Determine the game event between two snapshots (None if nothing changed)."""
    if before == after:
        return None

    if after.status is GameStatus.WIN and before.status is not GameStatus.WIN:
        return TurnEvent.GAME_WON

    if after.current_player_index != before.current_player_index:
        seat = before.current_player_index
        if after.players[seat].score > before.players[seat].score:
            return TurnEvent.TURN_BANKED
        return TurnEvent.TURN_ADVANCED

    if after.status is GameStatus.FARKLE and before.status is not GameStatus.FARKLE:
        return TurnEvent.PLAYER_BUST

    pairs = list(zip(before.dice, after.dice))
    rolled = any(
        old.value != new.value
        or (old.state is DieState.KEPT and new.state is DieState.BANKED)
        or (old.state is DieState.BANKED and new.state is not DieState.BANKED)
        for old, new in pairs
    )
    if rolled:
        return TurnEvent.DICE_ROLLED

    if {d.id for d in before.kept_dice} != {d.id for d in after.kept_dice}:
        return TurnEvent.DICE_KEPT

    return TurnEvent.STATE_UPDATED
