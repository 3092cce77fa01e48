"""
Game configuration and difficulty presets.
"""
from dataclasses import dataclass, replace

from .errors import ConfigError


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a multi-mine board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        total_mines: Mine units to distribute over the board.
        max_mines_per_cell: Upper bound on mines in a single cell.
        density: 0..1, higher spreads mines over more cells at lower counts.
        seed: Seed for the generation stream.
    """

    rows: int = 16
    cols: int = 30
    total_mines: int = 99
    max_mines_per_cell: int = 6
    density: float = 0.6
    seed: int = 0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ConfigError("Board dimensions must be positive")
        if self.total_mines < 0:
            raise ConfigError("Number of mines cannot be negative")
        if self.max_mines_per_cell < 1:
            raise ConfigError("Max mines per cell must be at least 1")
        if not 0.0 <= self.density <= 1.0:
            raise ConfigError("Density must be between 0 and 1")
        capacity = self.cell_count * self.max_mines_per_cell
        if self.total_mines > capacity:
            raise ConfigError(f"Too many mines (max {capacity})")

    @property
    def cell_count(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    def with_seed(self, seed: int) -> "GameConfig":
        """Copy of this configuration with a different seed."""
        return replace(self, seed=seed)


def seed_from_text(text: str) -> int:
    """
    Turn a typed seed phrase into an integer seed.

    Strings that are plain integers are used as-is; anything else is
    hashed with a 31-multiplier string hash wrapped to signed 32 bits.
    """
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    h = 0
    for ch in text:
        h = (31 * h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


# Preset difficulty levels
DEFAULT_CONFIG = GameConfig()
BEGINNER = GameConfig(9, 9, 12, 6, 0.7)
INTERMEDIATE = GameConfig(16, 16, 60, 6, 0.6)
EXPERT = GameConfig(16, 30, 250, 6, 0.6)
NIGHTMARE = GameConfig(20, 35, 450, 6, 0.45)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
    "nightmare": NIGHTMARE,
}
