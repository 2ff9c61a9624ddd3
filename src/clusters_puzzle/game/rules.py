from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PuzzleRules:
    categories_per_puzzle: int = 10
    items_per_category: int = 10
    min_difficulty: int = 1
    max_difficulty: int = 10

    @property
    def total_items(self) -> int:
        return self.categories_per_puzzle * self.items_per_category

    def is_solved_size(self, item_count: int) -> bool:
        return item_count == self.items_per_category

    def is_won(self, solved_count: int) -> bool:
        return solved_count == self.categories_per_puzzle
