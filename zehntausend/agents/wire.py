"""
Zehntausend - Agent Wire Models

Pydantic models for the JSON exchanged with remote and hosted agents.
Field aliases are the camelCase names used on the wire.
"""

from typing import Literal

from pydantic import BaseModel, Field

from zehntausend.engine.base import AgentAction, Move, Snapshot


class DiePayload(BaseModel):
    """One die as seen by a remote agent."""

    id: int
    value: int = Field(ge=1, le=6)
    state: Literal["rolled", "kept", "banked"]


class PlayerPayload(BaseModel):
    """One player as seen by a remote agent."""

    name: str
    score: int = Field(ge=0)
    is_my_turn: bool = Field(alias="isMyTurn")

    model_config = {"populate_by_name": True}


class GameStatePayload(BaseModel):
    """Request body POSTed to a remote agent."""

    message: str
    status: str
    turn_score: int = Field(alias="turnScore")
    current_keep_score: int = Field(alias="currentKeepScore")
    last_error: str | None = Field(default=None, alias="lastError")
    dice: list[DiePayload]
    players: list[PlayerPayload]

    model_config = {"populate_by_name": True}

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Snapshot,
        last_error: str | None = None,
    ) -> "GameStatePayload":
        """Build the payload for the active player's point of view."""
        return cls(
            message=snapshot.message,
            status=snapshot.status.value,
            turn_score=snapshot.turn_score,
            current_keep_score=snapshot.held_score,
            last_error=last_error,
            dice=[
                DiePayload(id=d.id, value=d.value, state=d.state.value)
                for d in snapshot.dice
            ],
            players=[
                PlayerPayload(
                    name=p.name,
                    score=p.score,
                    is_my_turn=p.index == snapshot.current_player_index,
                )
                for p in snapshot.players
            ],
        )

    def to_wire(self) -> dict:
        """JSON-ready dict with wire names; ``lastError`` only when set."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AgentMoveResponse(BaseModel):
    """Response body expected from a remote or hosted agent."""

    action: Literal["ROLL", "BANK"]
    keep_dice_ids: list[int] = Field(alias="keepDiceIds")
    explanation: str | None = None

    model_config = {"populate_by_name": True}

    def to_move(self) -> Move:
        return Move(
            action=AgentAction(self.action),
            keep_dice_ids=tuple(self.keep_dice_ids),
            explanation=self.explanation,
        )


# JSON schema handed to the hosted model to constrain its output
MOVE_RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "explanation": {"type": "STRING"},
        "keepDiceIds": {"type": "ARRAY", "items": {"type": "INTEGER"}},
        "action": {"type": "STRING", "enum": ["ROLL", "BANK"]},
    },
    "required": ["keepDiceIds", "action"],
}
