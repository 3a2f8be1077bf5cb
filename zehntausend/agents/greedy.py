"""
Zehntausend - Greedy Agent

Keeps every scoring die on the table and banks straight away.
"""

from __future__ import annotations

import asyncio

from zehntausend.agents.base import ProgressCallback, Sleeper, notify
from zehntausend.engine.base import AgentAction, Move, Snapshot
from zehntausend.engine.scoring import evaluate


def greedy_keep(snapshot: Snapshot) -> tuple[int, ...]:
    """
    Ids of all rolled dice that score.

    Under doubling rules that is every die of a face showing three or more
    times plus every loose 1 and 5; the evaluator also covers the fixed
    table, where a fifth or sixth copy of a quad face does not score.
    """
    rolled = snapshot.rolled_dice
    result = evaluate([d.value for d in rolled], snapshot.scoring_variant)
    return tuple(sorted(rolled[i].id for i in result.scoring_dice_indices))


class GreedyAgent:
    """
    Heuristic bot. Deterministic given the dice; the delay only makes the
    move perceptible to people watching.
    """

    def __init__(self, think_delay: float = 1.0, *, sleep: Sleeper = asyncio.sleep) -> None:
        self.think_delay = think_delay
        self._sleep = sleep

    async def decide(
        self,
        snapshot: Snapshot,
        on_progress: ProgressCallback | None = None,
    ) -> Move:
        notify(on_progress, "Greedy Bot is thinking...")
        await self._sleep(self.think_delay)

        return Move(
            action=AgentAction.BANK,
            keep_dice_ids=greedy_keep(snapshot),
            explanation="I'll take the points and run!",
        )
