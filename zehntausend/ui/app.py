"""Zehntausend - Streamlit Application Entrypoint.

Run with ``streamlit run zehntausend/ui/app.py``.
"""

from __future__ import annotations

import asyncio

import streamlit as st

from zehntausend.agents import AGENT_NAMES, create_agent
from zehntausend.config import configure_logging, get_settings
from zehntausend.engine.base import ControllerKind, GameConfig, GameStatus, ScoringVariant
from zehntausend.engine.rules import FIXED_TABLE_NOTE, RULES_MARKDOWN
from zehntausend.orchestration import TurnOrchestrator
from zehntausend.ui.components import (
    render_dice_tray,
    render_scoreboard,
    render_turn_controls,
)

_SEATS = 2
_KIND_LABELS = dict(AGENT_NAMES)
_KIND_LABELS[ControllerKind.HUMAN] = "Human"


def _build_config(kinds: list[ControllerKind]) -> GameConfig:
    settings = get_settings()
    names = tuple(
        f"Player {i + 1}" if kind is ControllerKind.HUMAN else AGENT_NAMES[kind]
        for i, kind in enumerate(kinds)
    )
    return GameConfig(
        player_names=names,
        controllers=tuple(kinds),
        winning_score=settings.winning_score,
        scoring_variant=ScoringVariant(settings.scoring_variant),
    )


def _orchestrator() -> TurnOrchestrator:
    """The session's orchestrator, created on first use."""
    ss = st.session_state
    if "orchestrator" not in ss:
        ss["seat_kinds"] = [ControllerKind.HUMAN, ControllerKind.GREEDY]
        ss["seat_uris"] = [None] * _SEATS
        orchestrator = TurnOrchestrator(_build_config(ss["seat_kinds"]))
        _install_agents(orchestrator)
        ss["orchestrator"] = orchestrator
    return ss["orchestrator"]


def _install_agents(orchestrator: TurnOrchestrator) -> None:
    ss = st.session_state
    for seat, kind in enumerate(ss["seat_kinds"]):
        orchestrator.set_agent(seat, create_agent(kind, endpoint=ss["seat_uris"][seat]))


def _render_seat_selectors(orchestrator: TurnOrchestrator) -> None:
    """Controller choice per seat; changing it starts a new game."""
    ss = st.session_state
    snapshot = orchestrator.snapshot
    started = snapshot.pending_total > 0 or any(p.score > 0 for p in snapshot.players)

    cols = st.columns(_SEATS)
    changed = False
    for seat, col in enumerate(cols):
        with col:
            kind = st.radio(
                f"Seat {seat + 1}",
                list(ControllerKind),
                index=list(ControllerKind).index(ss["seat_kinds"][seat]),
                format_func=lambda k: _KIND_LABELS[k],
                horizontal=True,
                disabled=started,
                key=f"seat_kind_{seat}",
            )
            if kind is ControllerKind.CUSTOM:
                uri = st.text_input("Endpoint URI", value=ss["seat_uris"][seat] or "",
                                    key=f"seat_uri_{seat}") or None
                if uri != ss["seat_uris"][seat]:
                    ss["seat_uris"][seat] = uri
                    changed = True
            if kind is not ss["seat_kinds"][seat]:
                ss["seat_kinds"][seat] = kind
                changed = True

    if changed:
        orchestrator.restart(_build_config(ss["seat_kinds"]))
        _install_agents(orchestrator)
        st.rerun()


def _render_sidebar_rules() -> None:
    with st.sidebar:
        st.markdown("### Rules")
        st.markdown(RULES_MARKDOWN)
        if get_settings().scoring_variant == ScoringVariant.FIXED_TABLE.value:
            st.markdown(FIXED_TABLE_NOTE)


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(page_title="Zehntausend", page_icon="🎲", layout="wide")
    configure_logging()

    orchestrator = _orchestrator()
    _render_sidebar_rules()

    st.title("Zehntausend")
    _render_seat_selectors(orchestrator)

    snapshot = orchestrator.snapshot
    render_scoreboard(snapshot)

    if snapshot.is_over:
        st.success(snapshot.message)
        st.balloons()
    else:
        st.info(snapshot.message)
    if orchestrator.progress:
        st.caption(orchestrator.progress)
    if orchestrator.last_error:
        st.error(f"Agent Error: {orchestrator.last_error}")

    is_human_turn = not snapshot.is_over and not orchestrator.is_agent_turn
    clicked = render_dice_tray(snapshot, interactive=is_human_turn)
    if clicked is not None:
        orchestrator.toggle_keep(clicked)
        st.rerun()

    if not snapshot.is_over:
        action = render_turn_controls(snapshot, is_my_turn=is_human_turn)
        if action == "roll":
            orchestrator.roll()
            st.rerun()
        elif action == "bank":
            orchestrator.bank()
            st.rerun()

    if st.button("New Game", key="btn_restart"):
        orchestrator.restart()
        st.rerun()

    # Automatic steps: agent moves and the pause after a Farkle
    if orchestrator.last_error and orchestrator.is_agent_turn:
        if st.button("Retry agent", key="btn_retry_agent"):
            orchestrator.last_error = None
            st.rerun()
    elif not snapshot.is_over and (orchestrator.is_agent_turn or snapshot.status is GameStatus.FARKLE):
        if asyncio.run(orchestrator.step()):
            st.rerun()


if __name__ == "__main__":
    main()
