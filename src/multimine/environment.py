"""
Gymnasium environment wrapper for multi-mine Minesweeper.

Provides a standard RL interface over the Game engine.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import GameConfig, BEGINNER
from .game import Game
from .visuals import render_text


# ============================================================================
# Multi-mine Environment
# ============================================================================

class MultiMinesweeperEnv(gym.Env):
    """
    Gymnasium environment for multi-mine Minesweeper.

    Observation:
        (2, rows, cols) int16 array:
        - channel 0: -1 for closed cells, signed hint for opened cells
        - channel 1: marker count

    Actions:
        Discrete action space of size rows * cols.
        Action i targets cell (i // cols, i % cols): a closed cell is
        opened, an opened cell is chorded.

    Rewards:
        - +1 for each cell opened by the action
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Game configuration (default: BEGINNER).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BEGINNER
        self.game = Game(self.config)
        self.render_mode = render_mode

        max_hint = 8 * self.config.max_mines_per_cell
        self.observation_space = spaces.Box(
            low=-max_hint,
            high=max_hint,
            shape=(2, self.config.rows, self.config.cols),
            dtype=np.int16,
        )
        self.action_space = spaces.Discrete(self.config.cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Board seed; a fresh one is drawn from np_random if omitted.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31))
        self.game = Game(self.config.with_seed(seed))
        self._steps = 0

        return self.game.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action.

        Args:
            action: Cell index (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        terminated = not self.game.is_playing

        return self.game.observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(int(action), self.config.cols)

    def _calculate_reward(self, row: int, col: int) -> float:
        """Apply the action and score its outcome."""
        opened_before = int(self.game.board.opened_mask().sum())
        if self.game.board.cell_at(row, col).opened:
            self.game.chord_open(row, col)
        else:
            self.game.open(row, col)
        newly_opened = int(self.game.board.opened_mask().sum()) - opened_before

        if self.game.is_won:
            return 10.0
        if self.game.is_lost:
            return -10.0
        if newly_opened == 0:
            return -0.1
        return float(newly_opened)

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "seed": self.game.config.seed,
            "opened": int(self.game.board.opened_mask().sum()),
            "remaining_mines": self.game.remaining_mines(),
            "game_state": self.game.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as text."""
        return render_text(
            self.game.cell_views(), self.game.status, self.config.cols
        )

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of cells that can still be opened.

        Returns:
            int8 array where 1 = closed cell.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for row, col in self.game.closed_positions():
            mask[row * self.config.cols + col] = 1
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[GameConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel play.

    Args:
        n_envs: Number of parallel environments.
        config: Game configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MultiMinesweeperEnv:
        return MultiMinesweeperEnv(config=config)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
