"""
Cell module for the multi-mine board.

A cell holds a true mine count and, independently, the player's marker
count. Its opened flag only ever goes from False to True.
"""
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the grid.

    Attributes:
        mine_count: True number of mines in this cell.
        marker_count: Player's declared belief about the mine count.
        opened: Whether the cell has been opened.
        exploded: Whether opening this cell lost the game.
        hinted: Whether a hint exposed the mine count of this closed cell.
        revealed: Whether the end-of-game reveal exposed this cell.
        wrong_marker: Set on loss when marker_count differs from mine_count.
        neighbor_hint_sum: Sum of mine_count over the adjacent cells.
    """

    mine_count: int = 0
    marker_count: int = 0
    opened: bool = False
    exploded: bool = False
    hinted: bool = False
    revealed: bool = False
    wrong_marker: bool = False
    neighbor_hint_sum: int = 0

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if the cell was closed and is now open. Any marker is
            cleared.
        """
        if self.opened:
            return False
        self.opened = True
        self.marker_count = 0
        return True

    def set_marker(self, value: int, cap: int) -> bool:
        """
        Set the marker count, clamped to [0, cap].

        Returns:
            True if the marker changed, False if the cell is open or the
            value is unchanged.
        """
        if self.opened:
            return False
        value = max(0, min(cap, value))
        if value == self.marker_count:
            return False
        self.marker_count = value
        return True

    def cycle_marker(self, cap: int, reverse: bool = False) -> bool:
        """Step the marker by one, wrapping through 0..cap."""
        step = -1 if reverse else 1
        return self.set_marker((self.marker_count + step) % (cap + 1), cap)

    @property
    def has_mines(self) -> bool:
        """Check if the cell holds at least one mine."""
        return self.mine_count > 0

    @property
    def is_closed(self) -> bool:
        """Check if the cell is still closed."""
        return not self.opened

    @property
    def is_correctly_marked(self) -> bool:
        """Check if the marker matches a non-empty cell's count."""
        return self.mine_count > 0 and self.marker_count == self.mine_count


# ============================================================================
# Read-only View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Read-only snapshot of one cell for a renderer.

    mine_count is None while the cell is hidden from the player, and
    hint is None while the cell is closed.
    """

    row: int
    col: int
    opened: bool
    exploded: bool
    mine_count: Optional[int]
    hint: Optional[int]
    adjacent_mines: bool
    marker_count: int
    wrong_marker: bool
    hinted: bool = False
