from __future__ import annotations

from typing import List

import pytest

from clusters_puzzle.data import SAMPLE_PUZZLE
from clusters_puzzle.game import ClustersGame, GameConfig, GridSquare, MergeResult


class FakeClock:
    """Settable wall clock for deterministic timestamps."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_square(square_id: str, size: int, category_id: str = "cat-x", is_solved: bool = False) -> GridSquare:
    items = tuple(f"{square_id}-item-{i}" for i in range(size))
    return GridSquare(id=square_id, items=items, category_id=category_id, is_solved=is_solved)


def merge(game: ClustersGame, first_id: str, second_id: str) -> MergeResult:
    game.select_square(first_id)
    result = game.select_square(second_id)
    assert result is not None
    return result


def solve_category(game: ClustersGame, category_id: str) -> List[MergeResult]:
    """Fold every item of a category into its index-0 square."""
    results = []
    for index in range(1, 10):
        results.append(merge(game, f"{category_id}-0", f"{category_id}-{index}"))
    return results


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def game(clock: FakeClock) -> ClustersGame:
    return ClustersGame(SAMPLE_PUZZLE, GameConfig(random_seed=1234), clock=clock)
