"""
Zehntausend - Game Engine Base Types

This module defines the enums and immutable data structures shared by the
scoring evaluator, the turn engine and the agents. Everything that leaves the
engine (snapshots, moves, validation verdicts) is a frozen dataclass so it can
be handed to an agent without aliasing engine internals.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from zehntausend.engine.validators import validate_player_count, validate_target_score


NUM_DICE = 6
DEFAULT_WINNING_SCORE = 10000


class DieState(Enum):
    """Lifecycle of a single die within a turn.

    ROLLED is freshly rolled and selectable, KEPT is tentatively selected
    this roll-cycle, BANKED is committed for the rest of the turn.
    """
    ROLLED = "rolled"
    KEPT = "kept"
    BANKED = "banked"


class GameStatus(Enum):
    """Turn status. WIN is terminal for the whole game."""
    ROLLING = "rolling"
    FARKLE = "farkle"
    WIN = "win"


class ControllerKind(Enum):
    """Who decides for a seat."""
    HUMAN = "human"
    GREEDY = "greedy"
    GEMINI = "gemini"
    CUSTOM = "custom"


class AgentAction(Enum):
    """Action an agent takes after keeping dice."""
    ROLL = "ROLL"
    BANK = "BANK"


class ScoringVariant(Enum):
    """Available scoring rule sets."""
    DOUBLING = "doubling"        # Sets double per die beyond three
    FIXED_TABLE = "fixed_table"  # Four of a kind = face x 1000, four 1s wins


class ScoringCategory(Enum):
    """Categories of scoring combinations."""
    SINGLE_ONE = auto()
    SINGLE_FIVE = auto()
    THREE_OF_A_KIND = auto()
    FOUR_OF_A_KIND = auto()
    FIVE_OF_A_KIND = auto()
    SIX_OF_A_KIND = auto()
    INSTANT_WIN = auto()


@dataclass(frozen=True)
class ScoringBreakdown:
    """
    A single scoring component within a set of dice.

    Attributes:
        category: The type of scoring combination
        dice_values: The dice that contributed to this score
        points: Points awarded for this combination
        description: Human-readable description
    """
    category: ScoringCategory
    dice_values: tuple[int, ...]
    points: int
    description: str


@dataclass(frozen=True)
class ScoringResult:
    """
    Complete scoring result for a group of dice.

    Attributes:
        points: Total points scored
        breakdown: Individual scoring components
        scoring_dice_indices: Positions (in the evaluated sequence) that scored
        instant_win: Whether the dice form an immediate winning hand
    """
    points: int
    breakdown: tuple[ScoringBreakdown, ...] = ()
    scoring_dice_indices: frozenset[int] = field(default_factory=frozenset)
    instant_win: bool = False

    @property
    def is_bust(self) -> bool:
        """Returns True if nothing scored."""
        return self.points == 0

    def __str__(self) -> str:
        if self.is_bust:
            return "FARKLE! No scoring dice."
        lines = [f"Total: {self.points} points"]
        for item in self.breakdown:
            lines.append(f"  - {item.description}: {item.points}")
        return "\n".join(lines)


@dataclass(frozen=True)
class DieView:
    """Read-only view of one die."""
    id: int
    value: int
    state: DieState


@dataclass(frozen=True)
class PlayerView:
    """Read-only view of one player."""
    index: int
    name: str
    controller: ControllerKind
    score: int


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable copy of everything an observer or agent may look at.

    Attributes:
        players: All players in seat order
        current_player_index: Seat whose turn it is
        dice: The six dice, ordered by id
        turn_score: Points already set aside in earlier roll-cycles this turn
        held_score: Points contributed by the currently kept dice
        status: Turn status
        message: Human-readable status line
        winning_score: Configured winning threshold
        scoring_variant: Rule set in force
    """
    players: tuple[PlayerView, ...]
    current_player_index: int
    dice: tuple[DieView, ...]
    turn_score: int
    held_score: int
    status: GameStatus
    message: str
    winning_score: int = DEFAULT_WINNING_SCORE
    scoring_variant: ScoringVariant = ScoringVariant.DOUBLING

    @property
    def active_player(self) -> PlayerView:
        return self.players[self.current_player_index]

    @property
    def rolled_dice(self) -> tuple[DieView, ...]:
        return tuple(d for d in self.dice if d.state is DieState.ROLLED)

    @property
    def kept_dice(self) -> tuple[DieView, ...]:
        return tuple(d for d in self.dice if d.state is DieState.KEPT)

    @property
    def banked_dice(self) -> tuple[DieView, ...]:
        return tuple(d for d in self.dice if d.state is DieState.BANKED)

    @property
    def pending_total(self) -> int:
        """What Bank would add to the active player's score right now."""
        return self.turn_score + self.held_score

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.WIN

    def die(self, die_id: int) -> DieView | None:
        """Look up a die by id."""
        for d in self.dice:
            if d.id == die_id:
                return d
        return None


@dataclass(frozen=True)
class Move:
    """
    A decision produced by an agent.

    Attributes:
        action: Roll again or bank after keeping
        keep_dice_ids: Dice to move from ROLLED to KEPT before the action
        explanation: Optional free-text rationale
    """
    action: AgentAction
    keep_dice_ids: tuple[int, ...] = ()
    explanation: str | None = None


@dataclass(frozen=True)
class MoveValidation:
    """Verdict of the move validator."""
    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "MoveValidation":
        return cls(valid=True)

    @classmethod
    def reject(cls, reason: str) -> "MoveValidation":
        return cls(valid=False, reason=reason)


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game session.

    Attributes:
        player_names: Display names in seat order (2-10 players)
        controllers: Controller kind per seat (defaults to human for all)
        winning_score: Score needed to win
        scoring_variant: Rule set used by the evaluator
    """
    player_names: tuple[str, ...] = ("Player 1", "Player 2")
    controllers: tuple[ControllerKind, ...] = ()
    winning_score: int = DEFAULT_WINNING_SCORE
    scoring_variant: ScoringVariant = ScoringVariant.DOUBLING

    def __post_init__(self) -> None:
        """Validate configuration."""
        validate_player_count(len(self.player_names))
        if self.controllers and len(self.controllers) != len(self.player_names):
            raise ValueError(
                f"Expected {len(self.player_names)} controllers, got {len(self.controllers)}."
            )
        validate_target_score(self.winning_score)

    def controller_for(self, index: int) -> ControllerKind:
        if not self.controllers:
            return ControllerKind.HUMAN
        return self.controllers[index]
