"""
Unit tests for board generation and first-move relocation.
"""
import numpy as np
import pytest

from multimine import GameConfig, SeededRandom
from multimine.generator import (
    generate_mine_counts,
    neighbor_positions,
    neighbor_sums,
    occupied_cell_count,
    relocate_mines,
)


CONFIGS = [
    GameConfig(9, 9, 12, 6, 0.7, seed=1),
    GameConfig(16, 30, 250, 6, 0.6, seed=2),
    GameConfig(5, 5, 0, 3, 0.5, seed=3),
    GameConfig(4, 4, 64, 4, 0.3, seed=4),
    GameConfig(1, 1, 1, 1, 1.0, seed=5),
    GameConfig(3, 7, 21, 1, 0.0, seed=6),
    GameConfig(6, 6, 100, 6, 1.0, seed=-8),
]


# ============================================================================
# Generation Invariant Tests
# ============================================================================

class TestGenerateMineCounts:
    """Test totals, caps and determinism of generated boards."""

    @pytest.mark.parametrize("config", CONFIGS)
    def test_total_is_exact(self, config: GameConfig) -> None:
        """Generated counts should sum to total_mines."""
        grid = generate_mine_counts(config, SeededRandom(config.seed))
        assert int(grid.sum()) == config.total_mines

    @pytest.mark.parametrize("config", CONFIGS)
    def test_counts_within_cap(self, config: GameConfig) -> None:
        """No cell should exceed the cap."""
        grid = generate_mine_counts(config, SeededRandom(config.seed))
        assert grid.min() >= 0
        assert grid.max() <= config.max_mines_per_cell

    @pytest.mark.parametrize("config", CONFIGS)
    def test_shape_matches_config(self, config: GameConfig) -> None:
        """Grid should have rows x cols shape."""
        grid = generate_mine_counts(config, SeededRandom(config.seed))
        assert grid.shape == (config.rows, config.cols)

    @pytest.mark.parametrize("config", CONFIGS)
    def test_same_seed_same_board(self, config: GameConfig) -> None:
        """Generation should be reproducible from the seed."""
        first = generate_mine_counts(config, SeededRandom(config.seed))
        second = generate_mine_counts(config, SeededRandom(config.seed))
        assert np.array_equal(first, second)

    def test_different_seeds_usually_differ(self) -> None:
        """Different seeds should give different boards."""
        config = GameConfig(16, 16, 60, 6, 0.6)
        boards = {
            generate_mine_counts(config, SeededRandom(seed)).tobytes()
            for seed in range(10)
        }
        assert len(boards) > 1

    @pytest.mark.parametrize("seed", range(10))
    def test_occupied_cells_follow_density_curve(self, seed: int) -> None:
        """Exactly occupied_cell_count cells should hold mines."""
        config = GameConfig(10, 10, 150, 6, 0.4, seed=seed)
        grid = generate_mine_counts(config, SeededRandom(seed))
        assert int(np.count_nonzero(grid)) == occupied_cell_count(config)


# ============================================================================
# Density Curve Tests
# ============================================================================

class TestDensityCurve:
    """Test the density to occupied-cell mapping."""

    def test_monotonic_in_density(self) -> None:
        """Higher density should never occupy fewer cells."""
        counts = [
            occupied_cell_count(GameConfig(16, 16, 200, 6, step / 20))
            for step in range(21)
        ]
        assert counts == sorted(counts)
        assert counts[0] < counts[-1]

    def test_zero_density_packs_cells(self) -> None:
        """Density 0 should fill cells to the cap."""
        config = GameConfig(10, 10, 60, 6, 0.0)
        assert occupied_cell_count(config) == 10

    def test_full_density_spreads_one_per_cell(self) -> None:
        """Density 1 should put one mine per cell when possible."""
        config = GameConfig(10, 10, 60, 6, 1.0)
        assert occupied_cell_count(config) == 60

    def test_full_density_limited_by_board(self) -> None:
        """More mines than cells should occupy every cell at density 1."""
        config = GameConfig(5, 5, 80, 6, 1.0)
        assert occupied_cell_count(config) == 25

    def test_no_mines_no_cells(self) -> None:
        """A mine-free board occupies nothing."""
        assert occupied_cell_count(GameConfig(5, 5, 0)) == 0

    def test_average_count_falls_with_density(self) -> None:
        """Mean count per occupied cell should drop as density rises."""
        means = []
        for density in (0.0, 0.5, 1.0):
            config = GameConfig(12, 12, 120, 6, density, seed=9)
            grid = generate_mine_counts(config, SeededRandom(9))
            means.append(grid.sum() / np.count_nonzero(grid))
        assert means[0] > means[1] > means[2]


# ============================================================================
# Relocation Tests
# ============================================================================

class TestRelocateMines:
    """Test first-move mine relocation."""

    def test_target_cleared_and_total_kept(self) -> None:
        """Relocation should empty the target and keep the total."""
        grid = np.array([[5, 1], [0, 0]], dtype=np.int16)
        relocate_mines(grid, 0, 0, 6, SeededRandom(1))
        assert grid[0, 0] == 0
        assert int(grid.sum()) == 6
        assert grid.max() <= 6

    def test_empty_target_is_untouched(self) -> None:
        """An empty target needs no relocation."""
        grid = np.array([[0, 2], [1, 0]], dtype=np.int16)
        changed = relocate_mines(grid, 0, 0, 6, SeededRandom(1))
        assert changed == set()
        assert grid.tolist() == [[0, 2], [1, 0]]

    def test_changed_positions_reported(self) -> None:
        """The target and every receiving cell should be reported."""
        grid = np.array([[3, 0, 0]], dtype=np.int16)
        before = grid.copy()
        changed = relocate_mines(grid, 0, 0, 6, SeededRandom(2))
        diff = {tuple(pos) for pos in np.argwhere(grid != before)}
        assert changed == diff | {(0, 0)}

    def test_respects_cap_when_board_nearly_full(self) -> None:
        """Receiving cells should never exceed the cap."""
        grid = np.array([[2, 1], [1, 2]], dtype=np.int16)
        relocate_mines(grid, 0, 0, 2, SeededRandom(3))
        assert grid.tolist() == [[0, 2], [2, 2]]

    def test_full_board_keeps_remaining_units(self) -> None:
        """Units with nowhere to go stay in the target."""
        grid = np.array([[2, 2], [2, 1]], dtype=np.int16)
        relocate_mines(grid, 0, 0, 2, SeededRandom(4))
        assert grid.tolist() == [[1, 2], [2, 2]]

    def test_relocation_is_deterministic(self) -> None:
        """The same stream should relocate the same way."""
        first = np.array([[4, 0, 0], [0, 0, 0]], dtype=np.int16)
        second = first.copy()
        relocate_mines(first, 0, 0, 6, SeededRandom(8))
        relocate_mines(second, 0, 0, 6, SeededRandom(8))
        assert np.array_equal(first, second)

    def test_frozen_cells_receive_nothing(self) -> None:
        """Frozen cells should be skipped as destinations."""
        grid = np.array([[3, 0, 0]], dtype=np.int16)
        changed = relocate_mines(grid, 0, 0, 6, SeededRandom(5), [(0, 1)])
        assert grid.tolist() == [[0, 0, 3]]
        assert changed == {(0, 0), (0, 2)}

    def test_units_stay_when_only_frozen_cells_have_room(self) -> None:
        """With every free cell frozen, the target keeps its units."""
        grid = np.array([[2, 0]], dtype=np.int16)
        relocate_mines(grid, 0, 0, 6, SeededRandom(5), [(0, 1)])
        assert grid.tolist() == [[2, 0]]


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test neighbour enumeration and sums."""

    @pytest.mark.parametrize(
        "row,col,expected",
        [(0, 0, 3), (0, 1, 5), (1, 1, 8), (2, 2, 3)],
    )
    def test_neighbor_counts(self, row: int, col: int, expected: int) -> None:
        """Corners have 3, edges 5 and interior cells 8 neighbours."""
        assert len(neighbor_positions(row, col, 3, 3)) == expected

    def test_single_cell_has_no_neighbors(self) -> None:
        """A 1x1 board cell has no neighbours."""
        assert neighbor_positions(0, 0, 1, 1) == []

    def test_neighbor_sums(self) -> None:
        """Sums should add neighbours' counts, not the cell's own."""
        grid = np.array([[2, 0, 0], [0, 3, 0], [0, 0, 1]], dtype=np.int16)
        assert neighbor_sums(grid).tolist() == [
            [3, 5, 3],
            [5, 3, 4],
            [3, 4, 3],
        ]
