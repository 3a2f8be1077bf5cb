"""Tests for zehntausend/orchestration/events.py: event types and classification."""

from dataclasses import replace

from zehntausend.orchestration.events import EventPayload, TurnEvent, classify_transition


OPENING = (1, 5, 2, 3, 4, 6)


# ── TurnEvent / EventPayload ───────────────────────────────────────────

class TestTurnEvent:
    def test_events_are_unique(self):
        values = [e.value for e in TurnEvent]
        assert len(values) == len(set(values))

    def test_minimal_payload(self):
        p = EventPayload(event=TurnEvent.DICE_ROLLED)
        assert p.player_index is None
        assert p.data == {}

    def test_payloads_do_not_share_data(self):
        a = EventPayload(event=TurnEvent.DICE_KEPT)
        b = EventPayload(event=TurnEvent.DICE_KEPT)
        a.data["x"] = 1
        assert b.data == {}


# ── classify_transition ────────────────────────────────────────────────

class TestClassifyTransition:
    def test_no_change(self, make_engine):
        engine = make_engine(OPENING)
        assert classify_transition(engine.get_snapshot(), engine.get_snapshot()) is None

    def test_keep(self, make_engine):
        engine = make_engine(OPENING)
        before = engine.get_snapshot()
        engine.toggle_keep(0)
        assert classify_transition(before, engine.get_snapshot()) == TurnEvent.DICE_KEPT

    def test_release(self, make_engine):
        engine = make_engine(OPENING)
        engine.toggle_keep(0)
        before = engine.get_snapshot()
        engine.toggle_keep(0)
        assert classify_transition(before, engine.get_snapshot()) == TurnEvent.DICE_KEPT

    def test_roll(self, make_engine):
        engine = make_engine(OPENING, (5, 2, 3, 4, 6))
        engine.toggle_keep(0)
        before = engine.get_snapshot()
        engine.roll()
        assert classify_transition(before, engine.get_snapshot()) == TurnEvent.DICE_ROLLED

    def test_roll_with_identical_faces_still_counts(self, make_engine):
        # Kept dice turning into banked dice marks the roll even if faces repeat
        engine = make_engine((1, 1, 5, 2, 3, 4), (1, 5, 2, 3, 4))
        engine.toggle_keep(0)
        before = engine.get_snapshot()
        engine.roll()
        after = engine.get_snapshot()
        assert [d.value for d in after.dice] == [d.value for d in before.dice]
        assert classify_transition(before, after) == TurnEvent.DICE_ROLLED

    def test_bust(self, make_engine):
        engine = make_engine(OPENING, (2, 3, 4, 6, 2))
        engine.toggle_keep(0)
        before = engine.get_snapshot()
        engine.roll()
        assert classify_transition(before, engine.get_snapshot()) == TurnEvent.PLAYER_BUST

    def test_bank(self, make_engine):
        engine = make_engine(OPENING, OPENING)
        engine.toggle_keep(0)
        before = engine.get_snapshot()
        engine.bank()
        assert classify_transition(before, engine.get_snapshot()) == TurnEvent.TURN_BANKED

    def test_pass_after_bust(self, make_engine):
        engine = make_engine((2, 3, 4, 6, 2, 3), OPENING)
        before = engine.get_snapshot()
        engine.pass_turn()
        assert classify_transition(before, engine.get_snapshot()) == TurnEvent.TURN_ADVANCED

    def test_win(self, make_engine):
        engine = make_engine(OPENING, winning_score=100)
        engine.toggle_keep(0)
        before = engine.get_snapshot()
        engine.bank()
        assert classify_transition(before, engine.get_snapshot()) == TurnEvent.GAME_WON

    def test_other_changes(self, make_engine):
        before = make_engine(OPENING).get_snapshot()
        after = replace(before, message="Something else.")
        assert classify_transition(before, after) == TurnEvent.STATE_UPDATED
