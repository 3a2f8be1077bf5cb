"""UI components for Zehntausend."""

from zehntausend.ui.components.dice_tray import render_dice_tray
from zehntausend.ui.components.scoreboard import render_scoreboard
from zehntausend.ui.components.turn_controls import render_turn_controls

__all__ = [
    "render_dice_tray",
    "render_scoreboard",
    "render_turn_controls",
]
