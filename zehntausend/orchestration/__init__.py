"""
Zehntausend Orchestration.

Turn events and the asynchronous driver that lets agents and humans share
one engine.
"""

from zehntausend.orchestration.events import EventPayload, TurnEvent, classify_transition
from zehntausend.orchestration.turn_runner import TurnOrchestrator

__all__ = [
    "EventPayload",
    "TurnEvent",
    "TurnOrchestrator",
    "classify_transition",
]
