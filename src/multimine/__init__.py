"""
Multi-mine Minesweeper engine.

Cells may hold several mines. Provides seeded board generation, the
open/chord/mark/hint state machine and win/loss detection.
"""
from .errors import ConfigError, CoordinateError, MultimineError
from .rng import SeededRandom
from .config import (
    GameConfig,
    DEFAULT_CONFIG,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    NIGHTMARE,
    PRESETS,
    seed_from_text,
)
from .cell import Cell, CellView
from .board import Board, MineGroup
from .game import Game, GameStatus
from .visuals import Visual, CellVisual, visual_category, glyph, render_text
from .environment import MultiMinesweeperEnv, make_vec_env

__all__ = [
    "ConfigError",
    "CoordinateError",
    "MultimineError",
    "SeededRandom",
    "GameConfig",
    "DEFAULT_CONFIG",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "NIGHTMARE",
    "PRESETS",
    "seed_from_text",
    "Cell",
    "CellView",
    "Board",
    "MineGroup",
    "Game",
    "GameStatus",
    "Visual",
    "CellVisual",
    "visual_category",
    "glyph",
    "render_text",
    "MultiMinesweeperEnv",
    "make_vec_env",
]
