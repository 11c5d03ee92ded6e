"""
Gymnasium environment wrapper for Minesweeper.

Exposes a GameSession through the standard RL interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .session import GameSession, OBS_EXPLODED, OBS_HIDDEN, OBS_MINE


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = unopened cell
        - 0-8 = opened cell with adjacent mine count
        - 9 = mine (shown after a loss)
        - 10 = exploded mine

    Actions:
        Discrete action space of size rows * cols.
        Action i corresponds to cell at (i // cols, i % cols).
        Acting on an opened number cell chords it.

    Rewards:
        - +1 for opening at least one safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.session = GameSession(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=OBS_HIDDEN,
            high=OBS_EXPLODED,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session.rng = self.np_random
        self.session.reset()
        self._steps = 0

        return self.session.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(int(action))
        self._steps += 1

        reward = self._calculate_reward(row, col)

        observation = self.session.get_observation()
        terminated = not self.session.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(action, self.config.cols)

    def _calculate_reward(self, row: int, col: int) -> float:
        """
        Reveal a cell and score the outcome.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        opened_before = self.session.opened_count
        self.session.reveal(row, col)

        if self.session.is_won:
            return 10.0
        if self.session.is_lost:
            return -10.0
        if self.session.opened_count > opened_before:
            return 1.0
        return -0.1

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.session.opened_count,
            "remaining_safe": self.session.remaining_safe_cells,
            "game_state": self.session.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_observation(self.session.get_observation())
        if self.render_mode == "human":
            print(render_observation(self.session.get_observation()))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of unopened cells.

        Returns:
            int8 array where 1 = unopened, usable as ``action_space``
            sample mask.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for row, col in self.session.get_valid_actions():
            mask[row * self.config.cols + col] = 1
        return mask


def render_observation(obs: np.ndarray) -> str:
    """Render an observation array as ASCII text."""
    symbols = {OBS_HIDDEN: ".", 0: " ", OBS_MINE: "*", OBS_EXPLODED: "X"}
    lines = []
    for row in obs:
        lines.append(
            " ".join(symbols.get(int(val), str(int(val))) for val in row)
        )
    return "\n".join(lines)
