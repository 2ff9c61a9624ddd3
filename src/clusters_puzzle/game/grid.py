from __future__ import annotations

import logging
import random
import time
from typing import Callable, List, Optional, Sequence, TypeVar

from .models import GameState, GameStatus, GridSquare, MalformedPuzzleError, Puzzle
from .rules import PuzzleRules


logger = logging.getLogger(__name__)

T = TypeVar("T")


def validate_puzzle(puzzle: Puzzle, rules: Optional[PuzzleRules] = None) -> None:
    """Fail fast on content that cannot produce a valid game.

    Checks category and item counts, difficulty range, and that category
    ids and item strings are unique across the whole puzzle.
    """
    rules = rules or PuzzleRules()
    if len(puzzle.categories) != rules.categories_per_puzzle:
        raise MalformedPuzzleError(
            f"Puzzle {puzzle.id!r} has {len(puzzle.categories)} categories, "
            f"expected {rules.categories_per_puzzle}"
        )
    seen_categories = set()
    seen_items = set()
    for category in puzzle.categories:
        if category.id in seen_categories:
            raise MalformedPuzzleError(f"Duplicate category id {category.id!r} in puzzle {puzzle.id!r}")
        seen_categories.add(category.id)
        if len(category.items) != rules.items_per_category:
            raise MalformedPuzzleError(
                f"Category {category.id!r} has {len(category.items)} items, "
                f"expected {rules.items_per_category}"
            )
        if not rules.min_difficulty <= category.difficulty <= rules.max_difficulty:
            raise MalformedPuzzleError(
                f"Category {category.id!r} difficulty {category.difficulty} is outside "
                f"{rules.min_difficulty}..{rules.max_difficulty}"
            )
        for item in category.items:
            if item in seen_items:
                raise MalformedPuzzleError(f"Item {item!r} appears more than once in puzzle {puzzle.id!r}")
            seen_items.add(item)


def shuffle_squares(squares: Sequence[T], rng: random.Random) -> List[T]:
    """Fisher-Yates shuffle of a copy; the input is left untouched."""
    shuffled = list(squares)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def initialize_grid(puzzle: Puzzle, rng: random.Random) -> List[GridSquare]:
    """One singleton square per item, in random order."""
    squares: List[GridSquare] = []
    for category in puzzle.categories:
        for index, item in enumerate(category.items):
            squares.append(
                GridSquare(
                    id=f"{category.id}-{index}",
                    items=(item,),
                    category_id=category.id,
                    is_solved=False,
                )
            )
    return shuffle_squares(squares, rng)


def initialize_game_state(
    puzzle: Puzzle,
    rng: random.Random,
    clock: Callable[[], float] = time.time,
    rules: Optional[PuzzleRules] = None,
) -> GameState:
    validate_puzzle(puzzle, rules)
    grid = initialize_grid(puzzle, rng)
    logger.debug(f"Initialized grid for puzzle {puzzle.id} with {len(grid)} squares")
    return GameState(
        puzzle_id=puzzle.id,
        grid=grid,
        mistakes=0,
        solved_category_ids=[],
        status=GameStatus.PLAYING,
        start_time=clock(),
        end_time=None,
    )
