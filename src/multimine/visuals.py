"""
Visual classification of cells.

Pure functions that turn a CellView plus the game status into the
category a renderer should draw. Nothing here touches game state.
"""
from enum import Enum, auto
from typing import Iterable, List, NamedTuple

from .cell import CellView
from .game import GameStatus


class Visual(Enum):
    """What to draw for a cell."""

    CLOSED = auto()
    MARKED = auto()
    HINTED = auto()
    OPEN_EMPTY = auto()
    NUMBER = auto()
    BLAST_NUMBER = auto()
    ADJACENT_ZERO = auto()
    MINE = auto()
    EXPLODED = auto()
    WRONG_MARKER = auto()
    WRONG_MARKER_EMPTY = auto()


class CellVisual(NamedTuple):
    """A visual category and the number drawn with it (0 if none)."""

    category: Visual
    value: int = 0


_GLYPH_PREFIX = {
    Visual.MARKED: "F",
    Visual.HINTED: "?",
    Visual.MINE: "*",
    Visual.EXPLODED: "!",
    Visual.WRONG_MARKER: "~",
    Visual.WRONG_MARKER_EMPTY: "x",
}


def visual_category(view: CellView, status: GameStatus) -> CellVisual:
    """
    Classify a cell for drawing.

    Args:
        view: The cell's read-only view.
        status: Current game status.

    Returns:
        The visual category and its number (mine, marker or hint count).
    """
    mines = view.mine_count or 0

    if view.opened:
        if view.exploded:
            return CellVisual(Visual.EXPLODED, mines)
        if mines:
            return CellVisual(Visual.MINE, mines)
        hint = view.hint or 0
        if hint > 0:
            return CellVisual(Visual.NUMBER, hint)
        if hint < 0:
            return CellVisual(Visual.BLAST_NUMBER, -hint)
        if view.adjacent_mines:
            return CellVisual(Visual.ADJACENT_ZERO)
        return CellVisual(Visual.OPEN_EMPTY)

    if status == GameStatus.LOST and mines and view.marker_count == 0:
        return CellVisual(Visual.MINE, mines)
    if view.wrong_marker and view.marker_count:
        if mines == 0:
            return CellVisual(Visual.WRONG_MARKER_EMPTY, view.marker_count)
        return CellVisual(Visual.WRONG_MARKER, view.marker_count)
    if view.hinted and status == GameStatus.PLAYING:
        return CellVisual(Visual.HINTED, mines)
    if view.marker_count:
        return CellVisual(Visual.MARKED, view.marker_count)
    return CellVisual(Visual.CLOSED)


def glyph(visual: CellVisual) -> str:
    """Short text form of a cell visual."""
    category, value = visual
    if category == Visual.CLOSED:
        return "."
    if category == Visual.OPEN_EMPTY:
        return " "
    if category == Visual.NUMBER:
        return str(value)
    if category == Visual.BLAST_NUMBER:
        return f"-{value}"
    if category == Visual.ADJACENT_ZERO:
        return "-0"
    return f"{_GLYPH_PREFIX[category]}{value}"


def render_text(
    views: Iterable[CellView], status: GameStatus, cols: int
) -> str:
    """
    Render cell views as a text grid.

    Args:
        views: Views in row-major order.
        status: Current game status.
        cols: Cells per row.

    Returns:
        Rows of right-aligned glyphs separated by newlines.
    """
    glyphs = [glyph(visual_category(view, status)) for view in views]
    width = max((len(g) for g in glyphs), default=1)
    lines: List[str] = []
    for start in range(0, len(glyphs), cols):
        lines.append(" ".join(g.rjust(width) for g in glyphs[start:start + cols]))
    return "\n".join(lines)
