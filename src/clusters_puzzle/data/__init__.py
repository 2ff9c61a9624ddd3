"""Puzzle content: the bundled sample puzzle and a JSON-backed catalog."""

from .sample_puzzle import SAMPLE_PUZZLE, find_category_for_item, get_all_items
from .catalog import (
    PuzzleCatalog,
    PuzzleNotFoundError,
    default_catalog,
    load_puzzle,
    puzzle_from_dict,
    puzzle_to_dict,
)

__all__ = [
    "SAMPLE_PUZZLE",
    "find_category_for_item",
    "get_all_items",
    "PuzzleCatalog",
    "PuzzleNotFoundError",
    "default_catalog",
    "load_puzzle",
    "puzzle_from_dict",
    "puzzle_to_dict",
]
