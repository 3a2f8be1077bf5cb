"""
Zehntausend - Move Validator

Side-effect-free legality check for agent moves. It works on a Snapshot so
an agent that only ever sees snapshots can run exactly the check the engine
would run.
"""

from typing import Iterable

from zehntausend.engine.base import (
    AgentAction,
    DieState,
    GameStatus,
    MoveValidation,
    Snapshot,
)
from zehntausend.engine.scoring import evaluate


def validate_move(
    snapshot: Snapshot,
    keep_dice_ids: Iterable[int],
    action: AgentAction | str,
) -> MoveValidation:
    """
    Check whether keeping ``keep_dice_ids`` and then taking ``action`` is legal.

    Args:
        snapshot: State the move would be applied to
        keep_dice_ids: Dice the mover wants kept (already kept dice are allowed)
        action: ROLL or BANK (enum member or its wire string)

    Returns:
        MoveValidation with a human-readable reason on rejection
    """
    if snapshot.status is GameStatus.WIN:
        return MoveValidation.reject("The game is already over.")
    if snapshot.status is GameStatus.FARKLE:
        return MoveValidation.reject("The turn has busted; no move is possible.")

    try:
        action = AgentAction(action)
    except ValueError:
        return MoveValidation.reject(f"Unknown action {action!r}. Expected ROLL or BANK.")

    requested: set[int] = set()
    for die_id in keep_dice_ids:
        if isinstance(die_id, bool) or not isinstance(die_id, int):
            return MoveValidation.reject(f"Die id {die_id!r} is not an integer.")
        die = snapshot.die(die_id)
        if die is None:
            return MoveValidation.reject(f"Die {die_id} does not exist.")
        if die.state is DieState.BANKED:
            return MoveValidation.reject(
                f"Die {die_id} is already banked and cannot be kept again."
            )
        requested.add(die_id)

    candidate = [
        d for d in snapshot.dice
        if d.state is DieState.KEPT or d.id in requested
    ]
    result = evaluate([d.value for d in candidate], snapshot.scoring_variant)

    for position, die in enumerate(candidate):
        if position not in result.scoring_dice_indices:
            return MoveValidation.reject(
                f"Die {die.id} (a {die.value}) does not score with the other kept dice."
            )

    still_rolled = [d for d in snapshot.rolled_dice if d.id not in requested]

    if action is AgentAction.ROLL and result.points == 0 and still_rolled:
        return MoveValidation.reject(
            "Must keep at least one scoring die before rolling again."
        )

    if action is AgentAction.BANK and snapshot.turn_score + result.points <= 0:
        return MoveValidation.reject("Nothing to bank: keep at least one scoring die.")

    return MoveValidation.ok()
