from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple, Union


class MalformedPuzzleError(ValueError):
    """Raised when puzzle content breaks the 10x10 unique-items contract."""


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"


class MergeFailureReason(str, Enum):
    DIFFERENT_CATEGORIES = "different-categories"


@dataclass(frozen=True)
class Category:
    """A hidden group of related items, revealed once fully clustered.

    Difficulty runs from 1 (easiest) to 10 (hardest) and only drives the
    color of the solved trophy.
    """

    id: str
    name: str
    items: Tuple[str, ...]
    difficulty: int


@dataclass(frozen=True)
class Puzzle:
    id: str
    month: str  # "2026-01"
    categories: Tuple[Category, ...]

    def category_by_id(self, category_id: str) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None


@dataclass(frozen=True)
class GridSquare:
    """A square on the board. Starts with one item and grows by merging.

    All items of a square belong to ``category_id``; cross-category merges
    are rejected before a square is ever built.
    """

    id: str
    items: Tuple[str, ...]
    category_id: str
    is_solved: bool = False

    @property
    def size(self) -> int:
        return len(self.items)


@dataclass
class GameState:
    """Mutable snapshot of one play session.

    The grid shrinks from 100 singleton squares to 10 solved ones.
    """

    puzzle_id: str
    grid: List[GridSquare]
    mistakes: int = 0
    solved_category_ids: List[str] = field(default_factory=list)
    status: GameStatus = GameStatus.PLAYING
    start_time: float = 0.0
    end_time: Optional[float] = None

    @property
    def is_won(self) -> bool:
        return self.status is GameStatus.WON

    def total_items(self) -> int:
        return sum(square.size for square in self.grid)

    def copy(self) -> "GameState":
        # squares are frozen, so copying the containers is enough
        return replace(self, grid=list(self.grid), solved_category_ids=list(self.solved_category_ids))


# Selection is a tagged variant: nothing pending, or exactly one square
# waiting for its partner. The second pick is consumed by the merge attempt
# and never stored.


@dataclass(frozen=True)
class NoSelection:
    def ids(self) -> Tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class OneSelected:
    square_id: str

    def ids(self) -> Tuple[str, ...]:
        return (self.square_id,)


Selection = Union[NoSelection, OneSelected]

NO_SELECTION = NoSelection()


@dataclass(frozen=True)
class MergeSuccess:
    merged_square: GridSquare
    solved_category: Optional[Category] = None
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class MergeFailure:
    reason: MergeFailureReason = MergeFailureReason.DIFFERENT_CATEGORIES
    success: bool = field(default=False, init=False)


MergeResult = Union[MergeSuccess, MergeFailure]
