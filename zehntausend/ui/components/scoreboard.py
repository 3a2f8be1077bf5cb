"""Scoreboard component: player totals and turn indicator."""

from __future__ import annotations

import streamlit as st

from zehntausend.engine.base import Snapshot


def render_scoreboard(snapshot: Snapshot) -> None:
    """Render the scoreboard panel.

    Args:
        snapshot: Current game snapshot.
    """
    html = ['<div class="scoreboard">']
    html.append(
        f'<div class="scoreboard-title">Scoreboard &mdash; {snapshot.winning_score:,} to Win</div>'
    )

    for player in snapshot.players:
        is_active = player.index == snapshot.current_player_index
        row_classes = ["player-row"]
        if is_active:
            row_classes.append("active")

        # Turn indicator
        indicator = "&#9876; " if is_active else ""

        # Pending points for the active player
        delta_html = ""
        if is_active and snapshot.pending_total > 0:
            delta_html = f' <span class="score-delta">+{snapshot.pending_total}</span>'

        html.append(
            f'<div class="{" ".join(row_classes)}">'
            f'<span class="name">{indicator}{player.name} ({player.controller.value})</span> '
            f'<span class="score">{player.score:,}{delta_html}</span>'
            f"</div>"
        )

    html.append("</div>")
    st.markdown("".join(html), unsafe_allow_html=True)
