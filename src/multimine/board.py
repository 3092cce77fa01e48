"""
Board module for the multi-mine game.

Holds the grid of cells and the counts derived from it. The board knows
nothing about game status; the Game drives it.
"""
from dataclasses import astuple, dataclass
from typing import Iterator, List, Tuple

import numpy as np

from .cell import Cell
from .errors import CoordinateError
from .generator import affected_positions, neighbor_positions, neighbor_sums


Position = Tuple[int, int]


@dataclass(frozen=True)
class MineGroup:
    """
    Statistics for the cells sharing one true mine count.

    Attributes:
        group: The shared mine count.
        total: Cells holding exactly that many mines.
        flagged: Of those, cells whose marker matches the count.
        remaining: total - flagged.
    """

    group: int
    total: int
    flagged: int
    remaining: int


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Grid of cells with a fixed size for the lifetime of a game.

    Args:
        mine_counts: (rows, cols) array of true mine counts.
        max_mines_per_cell: Cap for mine and marker counts.
    """

    def __init__(self, mine_counts: np.ndarray, max_mines_per_cell: int) -> None:
        self.rows, self.cols = mine_counts.shape
        self.max_mines_per_cell = max_mines_per_cell
        self.total_mines = int(mine_counts.sum())
        self._grid: List[List[Cell]] = [
            [Cell(mine_count=int(mine_counts[row, col]))
             for col in range(self.cols)]
            for row in range(self.rows)
        ]
        self._calculate_hint_sums()

    # ========================================================================
    # Hint Sums (Low-level)
    # ========================================================================

    def _calculate_hint_sums(self) -> None:
        """Calculate neighbour hint sums for all cells."""
        sums = neighbor_sums(self.mine_grid())
        for row, col, cell in self.iter_cells():
            cell.neighbor_hint_sum = int(sums[row, col])

    def _recalculate_hint_sums(self, changed: List[Position]) -> None:
        """Recompute hint sums around cells whose mine count changed."""
        for row, col in affected_positions(changed, self.rows, self.cols):
            self._grid[row][col].neighbor_hint_sum = sum(
                self._grid[r][c].mine_count for r, c in self.neighbors(row, col)
            )

    def replace_mine_counts(self, mine_counts: np.ndarray) -> None:
        """
        Overwrite true mine counts after a first-move relocation.

        The total must be unchanged. Only cells whose count differs and
        their neighbours are touched.
        """
        changed = []
        for row, col, cell in self.iter_cells():
            value = int(mine_counts[row, col])
            if value != cell.mine_count:
                cell.mine_count = value
                changed.append((row, col))
        self._recalculate_hint_sums(changed)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_position(self, row: int, col: int) -> None:
        """
        Raise if a position is off the board.

        Raises:
            CoordinateError: If (row, col) is outside the grid.
        """
        if not self.is_valid_position(row, col):
            raise CoordinateError(row, col, self.rows, self.cols)

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighbouring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            Up to 8 (row, col) tuples, clipped at edges and corners.
        """
        self.check_position(row, col)
        return neighbor_positions(row, col, self.rows, self.cols)

    # ========================================================================
    # Cell Access
    # ========================================================================

    def cell_at(self, row: int, col: int) -> Cell:
        """Get the cell at a position."""
        self.check_position(row, col)
        return self._grid[row][col]

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (row, col, cell) in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col, self._grid[row][col]

    # ========================================================================
    # Derived Counts
    # ========================================================================

    def remaining_mines(self) -> int:
        """Total mines minus all markers; negative when over-flagged."""
        return self.total_mines - sum(
            cell.marker_count for _, _, cell in self.iter_cells()
        )

    def mine_distribution(self) -> List[MineGroup]:
        """
        Per-group flagged/remaining statistics.

        Returns:
            One MineGroup per mine count present, ascending by group.
        """
        totals = [0] * (self.max_mines_per_cell + 1)
        flagged = [0] * (self.max_mines_per_cell + 1)
        for _, _, cell in self.iter_cells():
            totals[cell.mine_count] += 1
            if cell.is_correctly_marked:
                flagged[cell.mine_count] += 1
        return [
            MineGroup(group, totals[group], flagged[group],
                      totals[group] - flagged[group])
            for group in range(1, self.max_mines_per_cell + 1)
            if totals[group] > 0
        ]

    def all_safe_cells_opened(self) -> bool:
        """Check if every zero-mine cell is open."""
        return all(
            cell.opened for _, _, cell in self.iter_cells()
            if cell.mine_count == 0
        )

    # ========================================================================
    # Numpy Views
    # ========================================================================

    def mine_grid(self) -> np.ndarray:
        """True mine counts as a (rows, cols) int16 array."""
        return np.array(
            [[cell.mine_count for cell in row] for row in self._grid],
            dtype=np.int16,
        ).reshape(self.rows, self.cols)

    def marker_grid(self) -> np.ndarray:
        """Marker counts as a (rows, cols) int16 array."""
        return np.array(
            [[cell.marker_count for cell in row] for row in self._grid],
            dtype=np.int16,
        ).reshape(self.rows, self.cols)

    def opened_mask(self) -> np.ndarray:
        """Boolean array of opened cells."""
        return np.array(
            [[cell.opened for cell in row] for row in self._grid],
            dtype=bool,
        ).reshape(self.rows, self.cols)

    def snapshot(self) -> Tuple[Tuple, ...]:
        """Hashable copy of every cell's full state, for equality checks."""
        return tuple(astuple(cell) for _, _, cell in self.iter_cells())
