"""Game module for Clusters.

Exports the core puzzle engine and supporting pieces:
- ClustersGame: Selection, merge validation, mistakes and win detection
- GameConfig / PuzzleRules: Configuration and puzzle-shape rules
- initialize_game_state: Grid expansion and shuffling
- pack_into_rows / calculate_layout: Fluid row-fill layout
"""

from .models import (
    Category,
    GameState,
    GameStatus,
    GridSquare,
    MalformedPuzzleError,
    MergeFailure,
    MergeFailureReason,
    MergeResult,
    MergeSuccess,
    NoSelection,
    OneSelected,
    Puzzle,
    Selection,
)
from .rules import PuzzleRules
from .grid import initialize_game_state, initialize_grid, shuffle_squares, validate_puzzle
from .layout import (
    LayoutItem,
    LayoutRow,
    calculate_layout,
    get_solved_squares,
    get_total_rows,
    get_unsolved_squares,
    pack_into_rows,
)
from .core import ClustersGame, GameConfig

__all__ = [
    "Category",
    "GameState",
    "GameStatus",
    "GridSquare",
    "MalformedPuzzleError",
    "MergeFailure",
    "MergeFailureReason",
    "MergeResult",
    "MergeSuccess",
    "NoSelection",
    "OneSelected",
    "Puzzle",
    "Selection",
    "PuzzleRules",
    "initialize_game_state",
    "initialize_grid",
    "shuffle_squares",
    "validate_puzzle",
    "LayoutItem",
    "LayoutRow",
    "calculate_layout",
    "get_solved_squares",
    "get_total_rows",
    "get_unsolved_squares",
    "pack_into_rows",
    "ClustersGame",
    "GameConfig",
]
