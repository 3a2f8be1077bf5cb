"""
Zehntausend - Scoring Evaluator Tests

Tests for both rule variants, run directly against the evaluator.
"""

import pytest

from zehntausend.engine.base import ScoringCategory, ScoringVariant
from zehntausend.engine.scoring import ScoringEvaluator, evaluate


class TestReferenceHands:
    """The fixture table of known hands."""

    def test_all_fixture_rolls(self, d6_scoring_rolls):
        for name, (dice, expected, description) in d6_scoring_rolls.items():
            result = evaluate(dice)
            assert result.points == expected, f"{name}: {description}"

    def test_all_bust_rolls(self, d6_bust_rolls):
        for dice in d6_bust_rolls:
            result = evaluate(dice)
            assert result.points == 0, dice
            assert result.is_bust

    def test_empty_input_scores_zero(self):
        result = evaluate(())
        assert result.points == 0
        assert result.scoring_dice_indices == frozenset()


class TestSingles:
    """Tests for loose 1s and 5s."""

    def test_single_one_scores_100(self):
        assert evaluate((1, 2, 3, 4, 6)).points == 100

    def test_single_five_scores_50(self):
        assert evaluate((5, 2, 3, 4, 6)).points == 50

    def test_one_and_five(self):
        result = evaluate((1, 5, 2, 3, 4))
        assert result.points == 150
        categories = {b.category for b in result.breakdown}
        assert categories == {ScoringCategory.SINGLE_ONE, ScoringCategory.SINGLE_FIVE}

    @pytest.mark.parametrize("value", [2, 3, 4, 6])
    def test_other_faces_do_not_score_alone(self, value: int):
        assert evaluate((value,)).points == 0
        assert evaluate((value, value)).points == 0


class TestSets:
    """Tests for three or more of a kind under doubling rules."""

    def test_three_ones_scores_1000(self):
        result = evaluate((1, 1, 1, 3, 4))
        assert result.points == 1000
        assert result.breakdown[0].category == ScoringCategory.THREE_OF_A_KIND

    @pytest.mark.parametrize("value,expected", [
        (2, 200),
        (3, 300),
        (4, 400),
        (5, 500),
        (6, 600),
    ])
    def test_three_of_kind_scores_value_times_100(self, value: int, expected: int):
        assert evaluate((value, value, value)).points == expected

    @pytest.mark.parametrize("dice,expected", [
        ((2, 2, 2, 2), 400),
        ((2, 2, 2, 2, 2), 800),
        ((2, 2, 2, 2, 2, 2), 1600),
        ((1, 1, 1, 1), 2000),
        ((1, 1, 1, 1, 1), 4000),
        ((6, 6, 6, 6, 6, 6), 4800),
    ])
    def test_each_extra_die_doubles(self, dice: tuple[int, ...], expected: int):
        assert evaluate(dice).points == expected

    def test_set_consumes_every_die_of_the_face(self):
        # Four 1s are one doubled set, never a triple plus a single
        result = evaluate((1, 1, 1, 1))
        assert result.points == 2000
        assert len(result.breakdown) == 1
        assert result.breakdown[0].category == ScoringCategory.FOUR_OF_A_KIND

    def test_set_plus_single(self):
        assert evaluate((2, 2, 2, 1, 4)).points == 300

    def test_doubling_never_flags_instant_win(self):
        assert not evaluate((1, 1, 1, 1, 1, 1)).instant_win


class TestScoringIndices:
    """Positions reported as contributing."""

    def test_indices_cover_only_scoring_dice(self):
        result = evaluate((2, 1, 3, 5, 4, 6))
        assert result.scoring_dice_indices == frozenset({1, 3})

    def test_set_indices(self):
        result = evaluate((4, 2, 4, 3, 4))
        assert result.scoring_dice_indices == frozenset({0, 2, 4})

    def test_all_dice_score(self):
        result = evaluate((1, 5, 1, 5, 1, 5))
        assert result.scoring_dice_indices == frozenset(range(6))

    def test_bust_has_no_indices(self):
        assert evaluate((2, 3, 4, 6)).scoring_dice_indices == frozenset()


class TestFixedTable:
    """The fixed-table variant."""

    variant = ScoringVariant.FIXED_TABLE

    @pytest.mark.parametrize("value,expected", [
        (2, 2000),
        (3, 3000),
        (4, 4000),
        (5, 5000),
        (6, 6000),
    ])
    def test_four_of_a_kind_is_face_times_1000(self, value: int, expected: int):
        result = evaluate((value,) * 4, self.variant)
        assert result.points == expected
        assert not result.instant_win

    def test_four_ones_is_instant_win(self):
        result = evaluate((1, 1, 1, 1, 2, 3), self.variant)
        assert result.points == 10000
        assert result.instant_win
        assert result.breakdown[0].category == ScoringCategory.INSTANT_WIN
        assert result.scoring_dice_indices == frozenset({0, 1, 2, 3})

    def test_triples_do_not_double(self):
        assert evaluate((2, 2, 2), self.variant).points == 200
        assert evaluate((1, 1, 1, 5), self.variant).points == 1050

    def test_fifth_die_of_quad_face_does_not_score(self):
        result = evaluate((3, 3, 3, 3, 3), self.variant)
        assert result.points == 3000
        assert len(result.scoring_dice_indices) == 4

    def test_fifth_one_scores_as_single(self):
        result = evaluate((1, 1, 1, 1, 1), self.variant)
        assert result.points == 10100
        assert result.instant_win

    def test_singles_match_doubling(self):
        assert evaluate((1, 5, 2, 3, 4), self.variant).points == 150


class TestPurity:
    """The evaluator is a pure function."""

    def test_idempotent(self):
        dice = (1, 5, 2, 2, 2, 6)
        assert evaluate(dice) == evaluate(dice)

    def test_order_independent_points(self):
        assert evaluate((5, 2, 2, 1, 2)).points == evaluate((1, 2, 2, 2, 5)).points

    def test_classmethod_and_shortcut_agree(self):
        dice = (4, 4, 4, 1)
        assert ScoringEvaluator.evaluate(dice) == evaluate(dice)

    def test_is_bust_helper(self):
        assert ScoringEvaluator.is_bust((2, 3, 4, 6))
        assert not ScoringEvaluator.is_bust((2, 3, 4, 5))

    def test_result_is_immutable(self):
        result = evaluate((1,))
        with pytest.raises(AttributeError):
            result.points = 500


class TestInvalidInput:
    """Faces outside 1-6 are rejected."""

    @pytest.mark.parametrize("dice", [(0,), (7,), (1, 2, -1), (True,), (1.0,)])
    def test_invalid_faces_raise(self, dice):
        with pytest.raises(ValueError):
            evaluate(dice)


class TestResultString:
    def test_bust_string(self):
        assert "FARKLE" in str(evaluate((2, 3)))

    def test_breakdown_string(self):
        text = str(evaluate((1, 1, 1, 5)))
        assert "Total: 1050 points" in text
        assert "3x 1s" in text
