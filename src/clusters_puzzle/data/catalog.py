"""
Puzzle Catalog Module

Loads puzzle content from JSON files and keeps a registry of puzzles by id.

File format:
    {
      "id": "puzzle-2026-02",
      "month": "2026-02",
      "categories": [
        {"id": "cat-birds", "name": "Birds", "difficulty": 3, "items": ["Robin", ...]},
        ...
      ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from clusters_puzzle.game.grid import validate_puzzle
from clusters_puzzle.game.models import Category, MalformedPuzzleError, Puzzle
from clusters_puzzle.game.rules import PuzzleRules

from .sample_puzzle import SAMPLE_PUZZLE

logger = logging.getLogger(__name__)


class PuzzleNotFoundError(KeyError):
    """Raised when a puzzle id is not in the catalog."""


def puzzle_from_dict(data: Dict[str, Any], rules: Optional[PuzzleRules] = None) -> Puzzle:
    """
    Build and validate a Puzzle from its JSON-shaped dictionary.

    Args:
        data: Dictionary with id, month and categories keys
        rules: Puzzle shape rules (defaults to 10x10)

    Returns:
        Validated Puzzle

    Raises:
        MalformedPuzzleError: If keys are missing or the content breaks the rules
    """
    try:
        categories = tuple(
            Category(
                id=str(cat["id"]),
                name=str(cat["name"]),
                items=tuple(str(item) for item in cat["items"]),
                difficulty=int(cat["difficulty"]),
            )
            for cat in data["categories"]
        )
        puzzle = Puzzle(id=str(data["id"]), month=str(data["month"]), categories=categories)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedPuzzleError(f"Invalid puzzle data: {e}") from e

    validate_puzzle(puzzle, rules)
    return puzzle


def puzzle_to_dict(puzzle: Puzzle) -> Dict[str, Any]:
    """
    Convert a Puzzle to its JSON-shaped dictionary.

    Args:
        puzzle: Puzzle to convert

    Returns:
        Dictionary accepted by puzzle_from_dict
    """
    return {
        "id": puzzle.id,
        "month": puzzle.month,
        "categories": [
            {
                "id": cat.id,
                "name": cat.name,
                "difficulty": cat.difficulty,
                "items": list(cat.items),
            }
            for cat in puzzle.categories
        ],
    }


def load_puzzle(path: Union[str, Path], rules: Optional[PuzzleRules] = None) -> Puzzle:
    """
    Load a puzzle from a JSON file.

    Args:
        path: Path to the JSON file
        rules: Puzzle shape rules (defaults to 10x10)

    Returns:
        Validated Puzzle

    Raises:
        MalformedPuzzleError: If the file cannot be read or holds bad content
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load puzzle from {path}: {e}")
        raise MalformedPuzzleError(f"Cannot read puzzle file {path}: {e}") from e

    puzzle = puzzle_from_dict(data, rules)
    logger.debug(f"Puzzle loaded: {puzzle.id} ({puzzle.month}) from {path}")
    return puzzle


class PuzzleCatalog:
    """Registry of puzzles keyed by id."""

    def __init__(self, puzzles: Iterable[Puzzle] = ()) -> None:
        self._puzzles: Dict[str, Puzzle] = {}
        for puzzle in puzzles:
            self.register(puzzle)

    def register(self, puzzle: Puzzle) -> Puzzle:
        if puzzle.id in self._puzzles:
            logger.warning(f"Replacing puzzle {puzzle.id} in catalog")
        self._puzzles[puzzle.id] = puzzle
        return puzzle

    def get(self, puzzle_id: str) -> Puzzle:
        if puzzle_id not in self._puzzles:
            available = ", ".join(self._puzzles.keys())
            raise PuzzleNotFoundError(f"Unknown puzzle: {puzzle_id}. Available: {available}")
        return self._puzzles[puzzle_id]

    def ids(self) -> List[str]:
        return list(self._puzzles.keys())

    def for_month(self, month: str) -> List[Puzzle]:
        return [p for p in self._puzzles.values() if p.month == month]

    def __len__(self) -> int:
        return len(self._puzzles)

    def __contains__(self, puzzle_id: object) -> bool:
        return puzzle_id in self._puzzles


def default_catalog() -> PuzzleCatalog:
    """Catalog holding the bundled sample puzzle."""
    return PuzzleCatalog([SAMPLE_PUZZLE])
