"""
Zehntausend - Scoring Evaluator

Pure scoring for any group of D6 faces. The evaluator never looks at game
state: the turn engine feeds it either the freshly rolled dice (bust check)
or the currently kept dice (provisional score).

Scoring Rules (doubling, the default):
    - Single 1: 100 points
    - Single 5: 50 points
    - Three 1s: 1,000 points
    - Three of X (2-6): X × 100 points
    - Four+ of a kind: Previous tier × 2 (all dice of the face are consumed)

Scoring Rules (fixed table):
    - Four of X (2-6): X × 1,000 points
    - Four 1s: 10,000 points and an instant win
    - Remaining triples, 1s and 5s as above, without doubling
"""

from collections import Counter
from typing import Sequence

from zehntausend.engine.base import (
    ScoringBreakdown,
    ScoringCategory,
    ScoringResult,
    ScoringVariant,
)
from zehntausend.engine.validators import validate_dice_values


_SET_CATEGORIES = {
    3: ScoringCategory.THREE_OF_A_KIND,
    4: ScoringCategory.FOUR_OF_A_KIND,
    5: ScoringCategory.FIVE_OF_A_KIND,
    6: ScoringCategory.SIX_OF_A_KIND,
}


class ScoringEvaluator:
    """
    Stateless scorer for both rule variants.

    All methods are class methods operating on immutable data.
    """

    # Scoring values
    SINGLE_ONE_POINTS = 100
    SINGLE_FIVE_POINTS = 50
    THREE_ONES_POINTS = 1000
    FOUR_OF_A_KIND_MULTIPLIER = 1000
    INSTANT_WIN_POINTS = 10000

    @classmethod
    def evaluate(
        cls,
        faces: Sequence[int],
        variant: ScoringVariant = ScoringVariant.DOUBLING,
    ) -> ScoringResult:
        """
        Compute the best score for a group of faces.

        Args:
            faces: Face values (1-6), in any order
            variant: Rule set to apply

        Returns:
            ScoringResult whose scoring indices refer to positions in ``faces``
        """
        values = validate_dice_values(faces, min_count=0)
        if not values:
            return ScoringResult(points=0)

        breakdown: list[ScoringBreakdown] = []
        used: set[int] = set()
        remaining = Counter(values)
        instant_win = False

        if variant is ScoringVariant.FIXED_TABLE:
            fours, instant_win = cls._check_four_of_a_kind(values, remaining, used)
            breakdown.extend(fours)
            breakdown.extend(cls._check_sets(values, remaining, used, doubling=False))
        else:
            breakdown.extend(cls._check_sets(values, remaining, used, doubling=True))

        breakdown.extend(cls._check_singles(values, remaining, used))

        return ScoringResult(
            points=sum(item.points for item in breakdown),
            breakdown=tuple(breakdown),
            scoring_dice_indices=frozenset(used),
            instant_win=instant_win,
        )

    @classmethod
    def is_bust(
        cls,
        faces: Sequence[int],
        variant: ScoringVariant = ScoringVariant.DOUBLING,
    ) -> bool:
        """True if the faces contain no scoring combination."""
        return cls.evaluate(faces, variant).points == 0

    @classmethod
    def set_base_points(cls, face_value: int) -> int:
        """Points for exactly three of ``face_value``."""
        if face_value == 1:
            return cls.THREE_ONES_POINTS
        return face_value * 100

    @classmethod
    def _check_four_of_a_kind(
        cls,
        values: tuple[int, ...],
        remaining: Counter[int],
        used: set[int],
    ) -> tuple[list[ScoringBreakdown], bool]:
        """Fixed-table quads. Consumes exactly four dice per face."""
        breakdown: list[ScoringBreakdown] = []
        instant_win = False

        for face_value in range(1, 7):
            if remaining[face_value] < 4:
                continue
            used.update(cls._find_indices_for_value(values, face_value, 4, exclude=used))
            remaining[face_value] -= 4

            if face_value == 1:
                instant_win = True
                breakdown.append(ScoringBreakdown(
                    category=ScoringCategory.INSTANT_WIN,
                    dice_values=(1, 1, 1, 1),
                    points=cls.INSTANT_WIN_POINTS,
                    description="Four 1s (instant win)",
                ))
            else:
                breakdown.append(ScoringBreakdown(
                    category=ScoringCategory.FOUR_OF_A_KIND,
                    dice_values=(face_value,) * 4,
                    points=face_value * cls.FOUR_OF_A_KIND_MULTIPLIER,
                    description=f"4x {face_value}s",
                ))

        return breakdown, instant_win

    @classmethod
    def _check_sets(
        cls,
        values: tuple[int, ...],
        remaining: Counter[int],
        used: set[int],
        doubling: bool,
    ) -> list[ScoringBreakdown]:
        """
        Check for three or more of a kind.

        With doubling, points double for each additional die beyond three and
        every die of the face is consumed. Without it only three are consumed.
        """
        breakdown: list[ScoringBreakdown] = []

        for face_value in range(1, 7):
            count = remaining[face_value]
            if count < 3:
                continue

            taken = count if doubling else 3
            points = cls.set_base_points(face_value) * 2 ** (taken - 3)

            used.update(cls._find_indices_for_value(values, face_value, taken, exclude=used))
            remaining[face_value] -= taken

            breakdown.append(ScoringBreakdown(
                category=_SET_CATEGORIES[taken],
                dice_values=(face_value,) * taken,
                points=points,
                description=f"{taken}x {face_value}s",
            ))

        return breakdown

    @classmethod
    def _check_singles(
        cls,
        values: tuple[int, ...],
        remaining: Counter[int],
        used: set[int],
    ) -> list[ScoringBreakdown]:
        """
        Check for remaining single 1s and 5s.

        Only 1s and 5s score as singles.
        """
        breakdown: list[ScoringBreakdown] = []

        for face_value, points, category in (
            (1, cls.SINGLE_ONE_POINTS, ScoringCategory.SINGLE_ONE),
            (5, cls.SINGLE_FIVE_POINTS, ScoringCategory.SINGLE_FIVE),
        ):
            count = remaining[face_value]
            if count <= 0:
                continue
            used.update(cls._find_indices_for_value(values, face_value, count, exclude=used))
            remaining[face_value] = 0

            breakdown.append(ScoringBreakdown(
                category=category,
                dice_values=(face_value,) * count,
                points=count * points,
                description=f"{count}x Single {face_value}{'s' if count > 1 else ''}",
            ))

        return breakdown

    @classmethod
    def _find_indices_for_value(
        cls,
        values: tuple[int, ...],
        target: int,
        count: int,
        exclude: set[int] | None = None
    ) -> set[int]:
        """Find `count` indices with the target value."""
        indices: set[int] = set()
        exclude = exclude or set()
        found = 0

        for i, v in enumerate(values):
            if v == target and i not in exclude and found < count:
                indices.add(i)
                found += 1

        return indices


def evaluate(
    faces: Sequence[int],
    variant: ScoringVariant = ScoringVariant.DOUBLING,
) -> ScoringResult:
    """Module-level shortcut for :meth:`ScoringEvaluator.evaluate`."""
    return ScoringEvaluator.evaluate(faces, variant)
