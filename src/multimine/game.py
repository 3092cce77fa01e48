"""
Game state machine for multi-mine Minesweeper.

Wraps a Board with a status and implements the player commands: open,
chord, marker cycling and setting, hints and giving up. Commands never
raise for in-range coordinates; anything invalid for the current state
is a no-op.
"""
from collections import deque
from enum import Enum, auto
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .board import Board, MineGroup
from .cell import CellView
from .config import DEFAULT_CONFIG, GameConfig
from .errors import ConfigError
from .generator import generate_mine_counts, relocate_mines
from .rng import SeededRandom


Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    One game of multi-mine Minesweeper.

    The board is generated eagerly from the configuration. The first
    open is made safe by moving mines away from the clicked cell using
    the same random stream, so a seed plus a first click always
    reproduces the same board.

    Args:
        config: Board configuration (default: DEFAULT_CONFIG).
        mine_counts: Fixed layout to use instead of generating one.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        mine_counts: Optional[np.ndarray] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._rng = SeededRandom(self.config.seed)
        if mine_counts is None:
            mine_counts = generate_mine_counts(self.config, self._rng)
        else:
            mine_counts = _check_layout(self.config, mine_counts)
        self.board = Board(mine_counts, self.config.max_mines_per_cell)
        self._status = GameStatus.PLAYING
        self._first_move_taken = False
        self._exploded: Optional[Position] = None

    @classmethod
    def from_mine_counts(
        cls,
        mine_counts: Sequence[Sequence[int]],
        max_mines_per_cell: int = 6,
        first_move_safety: bool = False,
        seed: int = 0,
    ) -> "Game":
        """
        Build a game on a fixed layout.

        Args:
            mine_counts: Per-cell mine counts, one sequence per row.
            max_mines_per_cell: Cap for mine and marker counts.
            first_move_safety: Whether the first open may still move mines.
            seed: Seed for the stream used by first-move relocation.

        Raises:
            ConfigError: If the layout is empty, ragged or over the cap.
        """
        try:
            grid = np.asarray(mine_counts, dtype=np.int16)
        except ValueError as exc:
            raise ConfigError("Mine layout rows must have equal length") from exc
        if grid.ndim != 2:
            raise ConfigError("Mine layout must be a non-empty 2-D grid")
        config = GameConfig(
            rows=grid.shape[0],
            cols=grid.shape[1],
            total_mines=int(grid.sum()),
            max_mines_per_cell=max_mines_per_cell,
            seed=seed,
        )
        game = cls(config, grid)
        game._first_move_taken = not first_move_safety
        return game

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self.board.rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self.board.cols

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def first_move_taken(self) -> bool:
        """Check if the first open has happened."""
        return self._first_move_taken

    @property
    def exploded_position(self) -> Optional[Position]:
        """Cell whose opening lost the game, if any."""
        return self._exploded

    def remaining_mines(self) -> int:
        """Mines not yet accounted for by markers."""
        return self.board.remaining_mines()

    def mine_distribution(self) -> List[MineGroup]:
        """Per-mine-count group statistics."""
        return self.board.mine_distribution()

    def cell_view(self, row: int, col: int) -> CellView:
        """
        Build the read-only view of one cell.

        The true mine count is exposed once the cell is opened or hinted,
        or once the game is over. The hint is exposed for opened cells
        only.

        Raises:
            CoordinateError: If (row, col) is outside the board.
        """
        cell = self.board.cell_at(row, col)
        visible = cell.opened or cell.hinted or not self.is_playing
        return CellView(
            row=row,
            col=col,
            opened=cell.opened,
            exploded=cell.exploded,
            mine_count=cell.mine_count if visible else None,
            hint=self._signed_hint(row, col) if cell.opened else None,
            adjacent_mines=self._adjacent_mines(row, col),
            marker_count=cell.marker_count,
            wrong_marker=cell.wrong_marker,
            hinted=cell.hinted,
        )

    def cell_views(self) -> Iterator[CellView]:
        """Views of every cell in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.cell_view(row, col)

    def observation(self) -> np.ndarray:
        """
        Player-visible board as a (2, rows, cols) int16 array.

        Channel 0 holds -1 for closed cells and the signed hint for
        opened cells. Channel 1 holds marker counts.
        """
        obs = np.full((2, self.rows, self.cols), -1, dtype=np.int16)
        obs[1] = self.board.marker_grid()
        for row, col, cell in self.board.iter_cells():
            if cell.opened:
                obs[0, row, col] = self._signed_hint(row, col)
        return obs

    def closed_positions(self) -> List[Position]:
        """Positions of all closed cells."""
        return [
            (row, col) for row, col, cell in self.board.iter_cells()
            if cell.is_closed
        ]

    # ========================================================================
    # Reveal Commands
    # ========================================================================

    def open(self, row: int, col: int) -> None:
        """
        Open a cell.

        The first open moves any mines out of the target cell. Opening a
        mine-bearing cell loses the game; opening a cell with no mines and
        no neighbouring mines flood-fills outwards.
        """
        cell = self.board.cell_at(row, col)
        if not self.is_playing or cell.opened:
            return

        if not self._first_move_taken:
            self._handle_first_move(row, col)

        self._open_cell(row, col)

    def chord_open(self, row: int, col: int) -> None:
        """
        Open all unmarked closed neighbours of an opened cell.

        Only acts when the markers on the closed neighbours add up to
        the cell's hint.
        """
        cell = self.board.cell_at(row, col)
        if not self.is_playing or cell.is_closed:
            return

        closed = [
            (r, c) for r, c in self.board.neighbors(row, col)
            if self.board.cell_at(r, c).is_closed
        ]
        marker_sum = sum(self.board.cell_at(r, c).marker_count for r, c in closed)
        if marker_sum != abs(cell.neighbor_hint_sum):
            return

        for r, c in closed:
            if self.board.cell_at(r, c).marker_count == 0:
                self.open(r, c)

    def apply_hint(self, row: int, col: int) -> None:
        """Expose the true mine count of a closed cell without opening it."""
        cell = self.board.cell_at(row, col)
        if not self.is_playing or cell.opened:
            return
        cell.hinted = True

    def give_up(self) -> None:
        """End the game as lost without an explosion."""
        if not self.is_playing:
            return
        self._lose()

    # ========================================================================
    # Marking Commands
    # ========================================================================

    def cycle_marker(self, row: int, col: int, reverse: bool = False) -> None:
        """Step a closed cell's marker up (or down), wrapping 0..max..0."""
        cell = self.board.cell_at(row, col)
        if not self.is_playing:
            return
        if cell.cycle_marker(self.config.max_mines_per_cell, reverse):
            self._check_win_condition()

    def set_marker(self, row: int, col: int, value: int) -> None:
        """Set a closed cell's marker, clamped to 0..max."""
        cell = self.board.cell_at(row, col)
        if not self.is_playing:
            return
        if cell.set_marker(value, self.config.max_mines_per_cell):
            self._check_win_condition()

    # ========================================================================
    # Internal Transitions
    # ========================================================================

    def _handle_first_move(self, row: int, col: int) -> None:
        """Clear mines from the first opened cell, sparing hinted cells."""
        self._first_move_taken = True
        grid = self.board.mine_grid()
        hinted = [
            (r, c) for r, c, cell in self.board.iter_cells() if cell.hinted
        ]
        if relocate_mines(
            grid, row, col, self.config.max_mines_per_cell, self._rng, hinted
        ):
            self.board.replace_mine_counts(grid)

    def _open_cell(self, row: int, col: int) -> None:
        """Open one cell and handle consequences."""
        cell = self.board.cell_at(row, col)
        cell.open()

        if cell.has_mines:
            cell.exploded = True
            self._exploded = (row, col)
            self._lose()
            return

        if cell.neighbor_hint_sum == 0:
            self._flood_fill(row, col)

        self._check_win_condition()

    def _flood_fill(self, row: int, col: int) -> None:
        """Breadth-first open from an empty cell; marked cells stay closed."""
        queue = deque([(row, col)])
        while queue:
            current = queue.popleft()
            for r, c in self.board.neighbors(*current):
                neighbor = self.board.cell_at(r, c)
                if neighbor.marker_count or not neighbor.open():
                    continue
                if neighbor.mine_count == 0 and neighbor.neighbor_hint_sum == 0:
                    queue.append((r, c))

    def _check_win_condition(self) -> None:
        """Win once every zero-mine cell is open."""
        if self.is_playing and self.board.all_safe_cells_opened():
            self._status = GameStatus.WON

    def _lose(self) -> None:
        """Enter the lost state and flag cells for the end-of-game reveal."""
        self._status = GameStatus.LOST
        for _, _, cell in self.board.iter_cells():
            if cell.is_closed and cell.has_mines:
                cell.revealed = True
            cell.wrong_marker = cell.marker_count != cell.mine_count

    # ========================================================================
    # View Helpers
    # ========================================================================

    def _near_explosion(self, row: int, col: int) -> bool:
        """Check if a cell is one of the exploded cell's neighbours."""
        if self._exploded is None:
            return False
        exploded_row, exploded_col = self._exploded
        if (row, col) == self._exploded:
            return False
        return abs(row - exploded_row) <= 1 and abs(col - exploded_col) <= 1

    def _signed_hint(self, row: int, col: int) -> int:
        """Hint magnitude, negated next to the exploded cell after a loss."""
        hint = self.board.cell_at(row, col).neighbor_hint_sum
        if self.is_lost and hint > 0 and self._near_explosion(row, col):
            return -hint
        return hint

    def _adjacent_mines(self, row: int, col: int) -> bool:
        """Zero-hint opened cell next to a closed mine cell after a loss."""
        cell = self.board.cell_at(row, col)
        if not self.is_lost or not cell.opened or cell.neighbor_hint_sum != 0:
            return False
        return any(
            self.board.cell_at(r, c).is_closed
            and self.board.cell_at(r, c).has_mines
            for r, c in self.board.neighbors(row, col)
        )


def _check_layout(config: GameConfig, mine_counts: np.ndarray) -> np.ndarray:
    """Validate a fixed layout against its configuration."""
    grid = np.asarray(mine_counts, dtype=np.int16)
    if grid.shape != (config.rows, config.cols):
        raise ConfigError(
            f"Layout shape {grid.shape} does not match "
            f"{config.rows}x{config.cols}"
        )
    if grid.min() < 0 or grid.max() > config.max_mines_per_cell:
        raise ConfigError(
            f"Cell mine counts must be between 0 and {config.max_mines_per_cell}"
        )
    if int(grid.sum()) != config.total_mines:
        raise ConfigError(
            f"Layout holds {int(grid.sum())} mines, expected {config.total_mines}"
        )
    return grid
