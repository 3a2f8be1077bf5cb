"""
Zehntausend - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from typing import Callable, Sequence

import pytest

from zehntausend.config.settings import Settings
from zehntausend.engine.base import ControllerKind, GameConfig, ScoringVariant
from zehntausend.engine.turn_engine import TurnEngine


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def d6_scoring_rolls() -> dict[str, tuple[tuple[int, ...], int, str]]:
    """
    Common D6 roll patterns with expected scores under doubling rules.

    Returns:
        Dict mapping name to (dice_values, expected_points, description)
    """
    return {
        # Reference hands
        "single_one": ((1, 2, 3, 4, 6), 100, "Single 1"),
        "single_five": ((5, 2, 3, 4, 6), 50, "Single 5"),
        "one_and_five": ((1, 5, 2, 3, 4), 150, "One 1 and one 5"),
        "three_twos": ((2, 2, 2, 3, 4), 200, "Three 2s"),
        "three_ones": ((1, 1, 1, 3, 4), 1000, "Three 1s"),
        "four_twos": ((2, 2, 2, 2, 3), 400, "Four 2s (doubled)"),
        "three_twos_plus_one": ((2, 2, 2, 1, 4), 300, "Three 2s + single 1"),
        "bust": ((2, 3, 4, 6, 2), 0, "No scoring dice"),

        # Singles
        "two_ones": ((1, 1), 200, "Two 1s"),
        "two_fives": ((5, 5), 100, "Two 5s"),

        # Doubling
        "five_fives": ((5, 5, 5, 5, 5), 2000, "Five 5s"),
        "six_fours": ((4, 4, 4, 4, 4, 4), 3200, "Six 4s"),
        "six_ones": ((1, 1, 1, 1, 1, 1), 8000, "Six 1s"),

        # Mixed
        "two_triples": ((1, 1, 1, 5, 5, 5), 1500, "Three 1s + three 5s"),
        "three_ones_plus_five": ((1, 1, 1, 5), 1050, "Three 1s + single 5"),
    }


@pytest.fixture
def d6_bust_rolls() -> list[tuple[int, ...]]:
    """Rolls that should result in a Farkle."""
    return [
        (2,),
        (3,),
        (4,),
        (6,),
        (2, 3),
        (4, 6),
        (2, 2, 3, 3),
        (2, 3, 4, 6),
        (2, 2, 3, 3, 4, 6),
    ]


# =============================================================================
# DICE AND ENGINE FIXTURES
# =============================================================================

class ScriptedRoller:
    """Roller that hands out pre-arranged faces, one tuple per roll."""

    def __init__(self, *rolls: Sequence[int]) -> None:
        self._rolls = [tuple(r) for r in rolls]
        self.requested: list[int] = []

    def extend(self, *rolls: Sequence[int]) -> None:
        self._rolls.extend(tuple(r) for r in rolls)

    def __call__(self, count: int) -> tuple[int, ...]:
        self.requested.append(count)
        if not self._rolls:
            raise AssertionError(f"Roller exhausted (asked for {count} dice)")
        faces = self._rolls.pop(0)
        if len(faces) != count:
            raise AssertionError(f"Scripted roll {faces} does not match {count} dice")
        return faces


@pytest.fixture
def scripted_roller() -> type[ScriptedRoller]:
    """The ScriptedRoller class, for building deterministic rollers."""
    return ScriptedRoller


@pytest.fixture
def make_engine() -> Callable[..., TurnEngine]:
    """
    Factory for engines with scripted dice.

    The first roll is consumed by the constructor, every later roll (including
    the implicit one after a pass) must be scripted as well.
    """
    def _make(
        *rolls: Sequence[int],
        players: tuple[str, ...] = ("Alice", "Bob"),
        controllers: tuple[ControllerKind, ...] = (),
        winning_score: int = 10000,
        variant: ScoringVariant = ScoringVariant.DOUBLING,
    ) -> TurnEngine:
        config = GameConfig(
            player_names=players,
            controllers=controllers,
            winning_score=winning_score,
            scoring_variant=variant,
        )
        return TurnEngine(config, roller=ScriptedRoller(*rolls))

    return _make


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with every pause removed and no .env lookups."""
    return Settings(
        _env_file=None,
        greedy_think_delay=0,
        move_pause=0,
        bust_pause=0,
        custom_base_delay=0,
        gemini_base_delay=0,
    )


# =============================================================================
# ASYNC HELPERS
# =============================================================================

class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that returns at once and keeps the delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
