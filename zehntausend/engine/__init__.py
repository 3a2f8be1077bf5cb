"""
Zehntausend Game Engine.

Pure Python game logic with zero UI/network dependencies.
Handles dice rolling, scoring, farkle detection, hot hands and turn rotation.
"""

from zehntausend.engine.base import (
    AgentAction,
    ControllerKind,
    DieState,
    DieView,
    GameConfig,
    GameStatus,
    Move,
    MoveValidation,
    PlayerView,
    ScoringBreakdown,
    ScoringResult,
    ScoringVariant,
    Snapshot,
)
from zehntausend.engine.move_validator import validate_move
from zehntausend.engine.scoring import ScoringEvaluator, evaluate
from zehntausend.engine.turn_engine import TurnEngine

__all__ = [
    # Data Classes
    "DieView",
    "GameConfig",
    "Move",
    "MoveValidation",
    "PlayerView",
    "ScoringBreakdown",
    "ScoringResult",
    "Snapshot",
    # Enums
    "AgentAction",
    "ControllerKind",
    "DieState",
    "GameStatus",
    "ScoringVariant",
    # Engine
    "ScoringEvaluator",
    "TurnEngine",
    "evaluate",
    "validate_move",
]
