"""Turn control buttons for Roll and Bank."""

from __future__ import annotations

import streamlit as st

from zehntausend.engine.base import DieState, GameStatus, Snapshot


def render_turn_controls(snapshot: Snapshot, is_my_turn: bool) -> str | None:
    """Render contextual turn-action buttons.

    Returns:
        ``"roll"``, ``"bank"``, or ``None`` if no action taken.
    """
    if not is_my_turn:
        st.caption("Watching opponent's turn...")
        return None

    if snapshot.status is GameStatus.FARKLE:
        st.warning("Farkle! Passing the dice...")
        return None

    # Must set aside a scoring die before rolling again, unless every die is used
    all_used = all(d.state is not DieState.ROLLED for d in snapshot.dice)
    can_roll = snapshot.held_score > 0 or all_used
    can_bank = snapshot.pending_total > 0

    cols = st.columns(2)
    with cols[0]:
        if st.button("Roll Again", key="btn_roll", disabled=not can_roll,
                     use_container_width=True, type="primary"):
            return "roll"
    with cols[1]:
        label = f"Bank {snapshot.pending_total} pts" if can_bank else "Bank"
        if st.button(label, key="btn_bank", disabled=not can_bank, use_container_width=True):
            return "bank"

    return None
