"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from multimine import Cell, Game, GameConfig


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def beginner_game() -> Game:
    """Create a seeded beginner game."""
    return Game(GameConfig(9, 9, 12, 6, 0.7, seed=1234))


@pytest.fixture
def empty_game() -> Game:
    """Create a 5x5 game with no mines for cascade testing."""
    return Game(GameConfig(5, 5, 0, 6, 0.5, seed=1))


@pytest.fixture
def corner_game() -> Game:
    """
    4x4 layout with mines in one corner.

        3 0 0 0
        0 0 0 0
        0 0 0 0
        0 0 0 2
    """
    return Game.from_mine_counts(
        [
            [3, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 2],
        ],
        max_mines_per_cell=6,
    )


@pytest.fixture
def split_game() -> Game:
    """
    3x5 layout with a wall of mines splitting the board.

        0 0 2 0 0
        0 0 1 0 0
        0 0 4 0 0
    """
    return Game.from_mine_counts(
        [
            [0, 0, 2, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 4, 0, 0],
        ],
        max_mines_per_cell=6,
    )


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed cell holding two mines."""
    return Cell(mine_count=2)


@pytest.fixture
def opened_cell() -> Cell:
    """Create an opened empty cell."""
    cell = Cell(neighbor_hint_sum=5)
    cell.open()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GameConfig:
    """Create a valid configuration."""
    return GameConfig(9, 9, 12, 6, 0.7, seed=42)


@pytest.fixture
def dense_config() -> GameConfig:
    """Configuration with more mines than cells."""
    return GameConfig(6, 6, 100, 6, 0.5, seed=7)
