"""
Board generation for multi-mine boards.

Mine units are placed under a per-cell cap so that the total is always
exact. The density setting decides how many distinct cells receive
mines; every placement decision draws from a SeededRandom stream.
"""
import math
from typing import Iterable, List, Set, Tuple

import numpy as np

from .config import GameConfig
from .rng import SeededRandom


Position = Tuple[int, int]

_NEIGHBOR_OFFSETS = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if delta_row or delta_col
)


# ============================================================================
# Density Curve
# ============================================================================

def occupied_cell_count(config: GameConfig) -> int:
    """
    Number of distinct cells that will hold mines.

    Linear in density between the fewest cells that can hold all mines
    (every cell filled to the cap) and the most (one mine per cell, or
    every cell on the board when there are more mines than cells).
    """
    total = config.total_mines
    if total == 0:
        return 0
    fewest = math.ceil(total / config.max_mines_per_cell)
    most = min(total, config.cell_count)
    return fewest + int(round(config.density * (most - fewest)))


# ============================================================================
# Generation
# ============================================================================

def generate_mine_counts(config: GameConfig, rng: SeededRandom) -> np.ndarray:
    """
    Place config.total_mines mine units on a fresh grid.

    Args:
        config: Validated board configuration.
        rng: Stream to draw placement decisions from.

    Returns:
        (rows, cols) int16 array of per-cell mine counts.
    """
    cap = config.max_mines_per_cell
    flat = [0] * config.cell_count

    chosen = _pick_cells(config.cell_count, occupied_cell_count(config), rng)
    for index in chosen:
        flat[index] = 1

    # Top up the chosen cells one unit at a time until the total is met
    open_slots = [index for index in chosen if flat[index] < cap]
    for _ in range(config.total_mines - len(chosen)):
        slot = rng.next_in_range(0, len(open_slots))
        index = open_slots[slot]
        flat[index] += 1
        if flat[index] == cap:
            open_slots[slot] = open_slots[-1]
            open_slots.pop()

    return np.array(flat, dtype=np.int16).reshape(config.rows, config.cols)


def _pick_cells(cell_count: int, k: int, rng: SeededRandom) -> List[int]:
    """Choose k distinct flat indices with a partial Fisher-Yates shuffle."""
    indices = list(range(cell_count))
    for i in range(k):
        j = rng.next_in_range(i, cell_count)
        indices[i], indices[j] = indices[j], indices[i]
    return indices[:k]


# ============================================================================
# First-move Safety
# ============================================================================

def relocate_mines(
    grid: np.ndarray,
    row: int,
    col: int,
    cap: int,
    rng: SeededRandom,
    frozen: Iterable[Position] = (),
) -> Set[Position]:
    """
    Move every mine unit out of (row, col) into other cells.

    Each unit goes to a cell drawn from rng among those with spare
    capacity. The grid is modified in place; the total is preserved.
    Cells listed in frozen never receive units. If no other cell has
    room, the remaining units stay put.

    Returns:
        Positions whose mine count changed, including (row, col).
    """
    if grid[row, col] == 0:
        return set()

    rows, cols = grid.shape
    target = row * cols + col
    skip = {r * cols + c for r, c in frozen}
    candidates = [
        index for index in range(rows * cols)
        if index != target and index not in skip and grid.flat[index] < cap
    ]
    changed = {(row, col)}
    while grid[row, col] > 0 and candidates:
        slot = rng.next_in_range(0, len(candidates))
        index = candidates[slot]
        grid.flat[index] += 1
        grid[row, col] -= 1
        changed.add(divmod(index, cols))
        if grid.flat[index] == cap:
            candidates[slot] = candidates[-1]
            candidates.pop()
    return changed


# ============================================================================
# Neighbor Utilities
# ============================================================================

def neighbor_positions(
    row: int, col: int, rows: int, cols: int
) -> List[Position]:
    """Up to 8 in-bounds neighbours of (row, col)."""
    neighbors = []
    for delta_row, delta_col in _NEIGHBOR_OFFSETS:
        new_row = row + delta_row
        new_col = col + delta_col
        if 0 <= new_row < rows and 0 <= new_col < cols:
            neighbors.append((new_row, new_col))
    return neighbors


def neighbor_sums(grid: np.ndarray) -> np.ndarray:
    """Sum of each cell's 8 neighbours' mine counts."""
    rows, cols = grid.shape
    padded = np.pad(grid.astype(np.int32), 1)
    sums = np.zeros((rows, cols), dtype=np.int32)
    for delta_row, delta_col in _NEIGHBOR_OFFSETS:
        sums += padded[
            1 + delta_row:1 + delta_row + rows,
            1 + delta_col:1 + delta_col + cols,
        ]
    return sums


def affected_positions(
    changed: Iterable[Position], rows: int, cols: int
) -> Set[Position]:
    """Cells whose neighbour sum depends on any of the changed cells."""
    affected: Set[Position] = set()
    for row, col in changed:
        affected.update(neighbor_positions(row, col, rows, cols))
    return affected
