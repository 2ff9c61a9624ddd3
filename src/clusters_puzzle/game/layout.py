"""Fluid row-fill layout for the cluster grid.

Squares are packed into rows that each aim for about five "item units".
Inside a row every square gets a width proportional to its item count, so
rows always fill the full width. A 4-item cluster next to a single item
renders as two rectangles at 80% and 20%.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .models import GridSquare


# 100 singletons at five per row gives 20 rows; rows consolidate as items merge
TARGET_ITEMS_PER_ROW = 5

# Keeps one large cluster from sharing a row with too much else
MAX_ITEMS_PER_ROW = 10


@dataclass(frozen=True)
class LayoutRow:
    squares: Tuple[GridSquare, ...]
    total_items: int

    def width_fraction(self, square: GridSquare) -> float:
        return square.size / self.total_items


@dataclass(frozen=True)
class LayoutItem:
    square: GridSquare
    row_index: int
    width_fraction: float  # 0..1 of the row width


def pack_into_rows(
    squares: Sequence[GridSquare],
    target_items_per_row: int = TARGET_ITEMS_PER_ROW,
    max_items_per_row: int = MAX_ITEMS_PER_ROW,
) -> List[LayoutRow]:
    """Greedy packing of unsolved squares into display rows.

    Larger clusters go first. A row is closed before the next square when it
    already holds something and either that square would push it past
    ``max_items_per_row`` or it has already reached ``target_items_per_row``.
    """
    if not squares:
        return []

    # sorted() keeps ties in input order, also with reverse=True
    ordered = sorted(squares, key=lambda sq: sq.size, reverse=True)

    rows: List[LayoutRow] = []
    current: List[GridSquare] = []
    current_total = 0

    for square in ordered:
        count = square.size
        would_exceed = current_total + count > max_items_per_row
        at_target = current_total >= target_items_per_row
        if (would_exceed or at_target) and current:
            rows.append(LayoutRow(squares=tuple(current), total_items=current_total))
            current = [square]
            current_total = count
        else:
            current.append(square)
            current_total += count

    if current:
        rows.append(LayoutRow(squares=tuple(current), total_items=current_total))

    return rows


def calculate_layout(
    squares: Sequence[GridSquare],
    target_items_per_row: int = TARGET_ITEMS_PER_ROW,
    max_items_per_row: int = MAX_ITEMS_PER_ROW,
) -> List[LayoutItem]:
    """Flatten packed rows into positioned items with their width fractions."""
    items: List[LayoutItem] = []
    rows = pack_into_rows(squares, target_items_per_row, max_items_per_row)
    for row_index, row in enumerate(rows):
        for square in row.squares:
            items.append(LayoutItem(square=square, row_index=row_index, width_fraction=row.width_fraction(square)))
    return items


def get_total_rows(
    squares: Sequence[GridSquare],
    target_items_per_row: int = TARGET_ITEMS_PER_ROW,
    max_items_per_row: int = MAX_ITEMS_PER_ROW,
) -> int:
    return len(pack_into_rows(squares, target_items_per_row, max_items_per_row))



def get_unsolved_squares(squares: Iterable[GridSquare]) -> List[GridSquare]:
    return [sq for sq in squares if not sq.is_solved]


def get_solved_squares(squares: Iterable[GridSquare]) -> List[GridSquare]:
    return [sq for sq in squares if sq.is_solved]
