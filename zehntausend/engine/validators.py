"""
Zehntausend - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Sequence


def validate_dice_values(
    values: Sequence[int],
    min_count: int = 1,
    max_count: int | None = None
) -> tuple[int, ...]:
    """
    Validate and normalize D6 face values.

    Args:
        values: Sequence of dice values to validate
        min_count: Minimum number of dice required
        max_count: Maximum number of dice allowed (None = no limit)

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    if not values:
        if min_count > 0:
            raise ValueError(f"At least {min_count} dice required.")
        return tuple()

    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= 6):
            raise ValueError(f"Die value at index {i} is {value}, must be between 1 and 6.")

    return values_tuple


def validate_die_id(die_id: int, dice_count: int = 6) -> int:
    """
    Validate a die identity.

    Raises:
        ValueError: If the id is not an integer in range
    """
    if isinstance(die_id, bool) or not isinstance(die_id, int):
        raise ValueError(f"Die id must be an integer, got {type(die_id).__name__}.")

    if not (0 <= die_id < dice_count):
        raise ValueError(f"Die id {die_id} is out of range. Must be between 0 and {dice_count - 1}.")

    return die_id


def validate_player_count(count: int) -> int:
    """
    Validate number of players.

    Raises:
        ValueError: If count is not 2-10
    """
    if not isinstance(count, int):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if not (2 <= count <= 10):
        raise ValueError(f"Player count must be 2-10, got {count}.")

    return count


def validate_target_score(score: int) -> int:
    """
    Validate the winning threshold for a game.

    Raises:
        ValueError: If score is invalid
    """
    if not isinstance(score, int):
        raise ValueError(f"Target score must be an integer, got {type(score).__name__}.")

    if score <= 0:
        raise ValueError(f"Target score must be positive, got {score}.")

    return score
