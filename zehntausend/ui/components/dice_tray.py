"""Dice tray component: renders dice with keep/release buttons."""

from __future__ import annotations

import streamlit as st

from zehntausend.engine.base import DieState, Snapshot

_FACES = {1: "⚀", 2: "⚁", 3: "⚂", 4: "⚃", 5: "⚄", 6: "⚅"}


def render_dice_tray(snapshot: Snapshot, interactive: bool) -> int | None:
    """Render the six dice with one button per die.

    Args:
        snapshot: Current game snapshot.
        interactive: Whether the local human may click.

    Returns:
        Id of the clicked die, or None.
    """
    cols = st.columns(len(snapshot.dice))
    clicked: int | None = None

    for die, col in zip(snapshot.dice, cols):
        with col:
            st.markdown(f"<div style='font-size:3rem;text-align:center'>{_FACES[die.value]}</div>",
                        unsafe_allow_html=True)
            if die.state is DieState.BANKED:
                st.button("Banked", key=f"die_{die.id}", disabled=True, use_container_width=True)
            elif die.state is DieState.KEPT:
                if st.button("Kept", key=f"die_{die.id}", type="primary",
                             disabled=not interactive, use_container_width=True):
                    clicked = die.id
            elif st.button("Keep", key=f"die_{die.id}",
                           disabled=not interactive, use_container_width=True):
                clicked = die.id

    return clicked
