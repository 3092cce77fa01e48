"""
Unit tests for Board class.

Tests neighbours, coordinate checks, derived counts and numpy views.
"""
import numpy as np
import pytest

from multimine import Board, CoordinateError, MineGroup


@pytest.fixture
def board() -> Board:
    """
    3x3 board:

        1 0 2
        0 0 0
        0 3 0
    """
    return Board(np.array([[1, 0, 2], [0, 0, 0], [0, 3, 0]]), 6)


# ============================================================================
# Initialization Tests
# ============================================================================

class TestBoardInitialization:
    """Test board creation."""

    def test_dimensions(self, board: Board) -> None:
        """Board should take its size from the layout."""
        assert (board.rows, board.cols) == (3, 3)

    def test_total_mines(self, board: Board) -> None:
        """Total should be the layout sum."""
        assert board.total_mines == 6

    def test_all_cells_closed(self, board: Board) -> None:
        """All cells should start closed."""
        assert not board.opened_mask().any()

    def test_hint_sums(self, board: Board) -> None:
        """Hint sums should add neighbours' mine counts."""
        sums = [
            [board.cell_at(r, c).neighbor_hint_sum for c in range(3)]
            for r in range(3)
        ]
        assert sums == [[0, 3, 0], [4, 6, 5], [3, 0, 3]]


# ============================================================================
# Coordinate Tests
# ============================================================================

class TestCoordinates:
    """Test bounds checking."""

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3)])
    def test_cell_at_out_of_bounds(self, board: Board, row: int, col: int) -> None:
        """Out-of-grid access should raise CoordinateError."""
        with pytest.raises(CoordinateError):
            board.cell_at(row, col)

    def test_coordinate_error_is_index_error(self, board: Board) -> None:
        """CoordinateError should be catchable as IndexError."""
        with pytest.raises(IndexError):
            board.neighbors(5, 5)

    def test_neighbors_clipped_at_corner(self, board: Board) -> None:
        """Corner cells have three neighbours."""
        assert sorted(board.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_neighbors_of_center(self, board: Board) -> None:
        """The centre cell has eight neighbours."""
        assert len(board.neighbors(1, 1)) == 8


# ============================================================================
# Derived Count Tests
# ============================================================================

class TestDerivedCounts:
    """Test remaining mines and distribution."""

    def test_remaining_mines_starts_at_total(self, board: Board) -> None:
        """No markers means all mines remain."""
        assert board.remaining_mines() == 6

    def test_remaining_mines_subtracts_markers(self, board: Board) -> None:
        """Markers count against the total wherever they are."""
        board.cell_at(0, 0).set_marker(1, 6)
        board.cell_at(1, 1).set_marker(2, 6)
        assert board.remaining_mines() == 3

    def test_remaining_mines_can_go_negative(self, board: Board) -> None:
        """Over-marking should give a negative count."""
        for row, col in [(0, 1), (1, 0), (1, 1)]:
            board.cell_at(row, col).set_marker(6, 6)
        assert board.remaining_mines() == -12

    def test_distribution_groups(self, board: Board) -> None:
        """Only groups present on the board should appear, ascending."""
        assert board.mine_distribution() == [
            MineGroup(1, 1, 0, 1),
            MineGroup(2, 1, 0, 1),
            MineGroup(3, 1, 0, 1),
        ]

    def test_distribution_counts_exact_markers(self, board: Board) -> None:
        """Only markers equal to the true count are flagged."""
        board.cell_at(0, 2).set_marker(2, 6)
        board.cell_at(2, 1).set_marker(1, 6)
        groups = {group.group: group for group in board.mine_distribution()}
        assert groups[2].flagged == 1
        assert groups[2].remaining == 0
        assert groups[3].flagged == 0

    def test_empty_board_has_no_groups(self) -> None:
        """A mine-free board has an empty distribution."""
        assert Board(np.zeros((2, 2), dtype=np.int16), 6).mine_distribution() == []


# ============================================================================
# Relocation Tests
# ============================================================================

class TestReplaceMineCounts:
    """Test hint updates after counts move."""

    def test_hint_sums_follow_new_counts(self, board: Board) -> None:
        """Moving a mine should update neighbouring hint sums."""
        board.replace_mine_counts(np.array([[0, 0, 2], [0, 0, 0], [1, 3, 0]]))
        assert board.cell_at(0, 1).neighbor_hint_sum == 2
        assert board.cell_at(1, 0).neighbor_hint_sum == 4
        assert board.cell_at(2, 0).neighbor_hint_sum == 3

    def test_total_unchanged(self, board: Board) -> None:
        """The board total stays fixed."""
        board.replace_mine_counts(np.array([[0, 0, 2], [0, 0, 0], [1, 3, 0]]))
        assert int(board.mine_grid().sum()) == board.total_mines


# ============================================================================
# Numpy View Tests
# ============================================================================

class TestNumpyViews:
    """Test array views."""

    def test_mine_grid(self, board: Board) -> None:
        """mine_grid should return the true counts."""
        assert board.mine_grid().tolist() == [[1, 0, 2], [0, 0, 0], [0, 3, 0]]
        assert board.mine_grid().dtype == np.int16

    def test_marker_grid(self, board: Board) -> None:
        """marker_grid should reflect markers."""
        board.cell_at(2, 2).set_marker(4, 6)
        assert board.marker_grid()[2, 2] == 4

    def test_snapshot_changes_with_state(self, board: Board) -> None:
        """Snapshots should differ after a mutation."""
        before = board.snapshot()
        board.cell_at(1, 1).open()
        assert board.snapshot() != before
