from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .grid import initialize_game_state
from .layout import MAX_ITEMS_PER_ROW, TARGET_ITEMS_PER_ROW, LayoutRow, get_unsolved_squares, pack_into_rows
from .models import (
    NO_SELECTION,
    Category,
    GameState,
    GameStatus,
    GridSquare,
    MergeFailure,
    MergeFailureReason,
    MergeResult,
    MergeSuccess,
    OneSelected,
    Puzzle,
    Selection,
)
from .rules import PuzzleRules


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    target_items_per_row: int = TARGET_ITEMS_PER_ROW
    max_items_per_row: int = MAX_ITEMS_PER_ROW


class ClustersGame:
    """Gameplay state machine for one puzzle.

    Owns the game state, the pending selection and the transient feedback
    markers (last merge result, shaking squares). The presentation drives it
    only through ``select_square``, ``reset``, ``clear_selection`` and
    ``clear_shake``; everything else is a read-only query.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        config: Optional[GameConfig] = None,
        rules: Optional[PuzzleRules] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.puzzle = puzzle
        self.config = config or GameConfig()
        self.rules = rules or PuzzleRules()
        self.clock = clock
        self.rng = rng or random.Random(self.config.random_seed)
        self._state = initialize_game_state(self.puzzle, self.rng, self.clock, self.rules)
        self._selection: Selection = NO_SELECTION
        self._last_merge_result: Optional[MergeResult] = None
        self._shaking_square_ids: Tuple[str, ...] = ()

    # Queries

    @property
    def state(self) -> GameState:
        """Detached snapshot of the game state; mutate it freely, the game is unaffected."""
        return self._state.copy()

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def selected_square_ids(self) -> Tuple[str, ...]:
        return self._selection.ids()

    @property
    def last_merge_result(self) -> Optional[MergeResult]:
        return self._last_merge_result

    @property
    def shaking_square_ids(self) -> Tuple[str, ...]:
        return self._shaking_square_ids

    @property
    def game_over(self) -> bool:
        return self._state.is_won

    def is_square_selected(self, square_id: str) -> bool:
        return square_id in self._selection.ids()

    def is_square_shaking(self, square_id: str) -> bool:
        return square_id in self._shaking_square_ids

    def get_square_by_id(self, square_id: str) -> Optional[GridSquare]:
        for square in self._state.grid:
            if square.id == square_id:
                return square
        return None

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        return self.puzzle.category_by_id(category_id)

    def elapsed_time(self) -> float:
        end = self._state.end_time if self._state.end_time is not None else self.clock()
        return end - self._state.start_time

    def layout_rows(self) -> List[LayoutRow]:
        return pack_into_rows(
            get_unsolved_squares(self._state.grid),
            self.config.target_items_per_row,
            self.config.max_items_per_row,
        )

    def get_game_stats(self) -> dict:
        return {
            "puzzle_id": self._state.puzzle_id,
            "status": self._state.status.value,
            "mistakes": self._state.mistakes,
            "solved_categories": len(self._state.solved_category_ids),
            "squares_remaining": len(self._state.grid),
            "elapsed_seconds": self.elapsed_time(),
        }

    # Actions

    def select_square(self, square_id: str) -> Optional[MergeResult]:
        """Handle a tap on a square.

        The second distinct pick triggers a merge attempt right away and
        clears the selection whatever the outcome. Returns the merge result
        for that pick, otherwise ``None``.
        """
        if self._state.is_won:
            return None
        square = self.get_square_by_id(square_id)
        if square is None or square.is_solved:
            return None

        self._last_merge_result = None
        self._shaking_square_ids = ()

        selection = self._selection
        if isinstance(selection, OneSelected):
            if selection.square_id == square_id:
                logger.debug(f"Deselected {square_id}")
                self._selection = NO_SELECTION
                return None
            result = self._attempt_merge(selection.square_id, square_id)
            self._last_merge_result = result
            if not result.success:
                self._shaking_square_ids = (selection.square_id, square_id)
            self._selection = NO_SELECTION
            return result

        logger.debug(f"Selected {square_id}")
        self._selection = OneSelected(square_id)
        return None

    def _attempt_merge(self, square_id_a: str, square_id_b: str) -> MergeResult:
        state = self._state
        square_a = self.get_square_by_id(square_id_a)
        square_b = self.get_square_by_id(square_id_b)

        # Unreachable through select_square, kept for direct callers
        if square_a is None or square_b is None:
            return MergeFailure(MergeFailureReason.DIFFERENT_CATEGORIES)

        if square_a.category_id != square_b.category_id:
            state.mistakes += 1
            logger.debug(f"Rejected merge {square_id_a} + {square_id_b}, mistakes={state.mistakes}")
            return MergeFailure(MergeFailureReason.DIFFERENT_CATEGORIES)

        items = square_a.items + square_b.items
        merged = GridSquare(
            id=square_a.id,
            items=items,
            category_id=square_a.category_id,
            is_solved=self.rules.is_solved_size(len(items)),
        )
        state.grid = [sq for sq in state.grid if sq.id not in (square_id_a, square_id_b)]
        state.grid.append(merged)
        logger.debug(f"Merged {square_id_b} into {square_id_a} ({len(items)} items)")

        solved_category: Optional[Category] = None
        if merged.is_solved and merged.category_id not in state.solved_category_ids:
            state.solved_category_ids.append(merged.category_id)
            solved_category = self.get_category_by_id(merged.category_id)
            logger.info(f"Solved category {merged.category_id} ({len(state.solved_category_ids)}/{self.rules.categories_per_puzzle})")
            if self.rules.is_won(len(state.solved_category_ids)):
                state.status = GameStatus.WON
                state.end_time = self.clock()
                logger.info(f"Puzzle {state.puzzle_id} solved with {state.mistakes} mistakes")

        return MergeSuccess(merged_square=merged, solved_category=solved_category)

    def clear_selection(self) -> None:
        self._selection = NO_SELECTION
        self._last_merge_result = None
        self._shaking_square_ids = ()

    def clear_shake(self) -> None:
        self._shaking_square_ids = ()

    def reset(self) -> None:
        self._state = initialize_game_state(self.puzzle, self.rng, self.clock, self.rules)
        self._selection = NO_SELECTION
        self._last_merge_result = None
        self._shaking_square_ids = ()
        logger.info(f"Reset puzzle {self.puzzle.id}")
