"""
Exceptions raised by the multimine engine.

Only two things are errors: a bad configuration and a coordinate
outside the grid. Every other invalid command is a silent no-op.
"""


class MultimineError(Exception):
    """Base class for engine errors."""


class ConfigError(MultimineError, ValueError):
    """Configuration violates a board invariant."""


class CoordinateError(MultimineError, IndexError):
    """A (row, col) pair lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{cols} board"
        )
        self.row = row
        self.col = col
