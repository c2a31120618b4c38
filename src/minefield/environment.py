"""
Gymnasium environment wrapper for the minefield engine.

Provides a standard RL interface over a game session.
"""
from dataclasses import replace
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import CellHandle
from .generator import MAX_SEED, GenerationOptions
from .session import GameSession


# ============================================================================
# Rewards
# ============================================================================

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_MINE = -10.0
REWARD_INVALID = -0.1

_SYMBOLS = {-1: ".", -2: "F", -3: "?", 9: "*", 0: " "}


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for the minefield game.

    Observation:
        2D int8 array of shape (height, width):
        - -1 = hidden cell
        - -2 = marked as mine
        - -3 = marked as empty
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at column i % width, row i // width.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        options: Optional[GenerationOptions] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            options: Board options; the seed is replaced on every reset.
            render_mode: How to render the environment.
        """
        super().__init__()

        self.options = options or GenerationOptions()
        self.session = GameSession(self.options)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.options.height, self.options.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.options.cell_count)

        self._steps = 0
        self._total_safe_cells = self.options.cell_count - self.options.mine_count

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Seeds ``np_random``, which draws the board seed.
            options: Optional ``{"board_seed": int}`` to pin the layout.

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if options and "board_seed" in options:
            board_seed = int(options["board_seed"])
        else:
            board_seed = int(
                self.np_random.integers(0, MAX_SEED, dtype=np.uint64, endpoint=True)
            )
        self.session.new_game(replace(self.options, seed=board_seed))
        self._steps = 0

        return self.session.board.to_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell selected by ``action``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._apply_reveal(self.action_to_handle(action))

        observation = self.session.board.to_observation()
        terminated = not self.session.is_playing
        info = self._get_info()

        return observation, reward, terminated, False, info

    def action_to_handle(self, action: int) -> CellHandle:
        """Convert flat action index to a cell handle."""
        row, column = divmod(int(action), self.options.width)
        return CellHandle(column, row)

    def handle_to_action(self, handle: CellHandle) -> int:
        """Convert a cell handle to its flat action index."""
        return handle.row * self.options.width + handle.column

    def _apply_reveal(self, handle: CellHandle) -> float:
        """Reveal a cell and score the outcome."""
        if handle not in self.session.board:
            return REWARD_INVALID

        result = self.session.reveal(handle)
        if result.is_already_revealed:
            return REWARD_INVALID
        if self.session.is_won:
            return REWARD_WIN
        if self.session.is_lost:
            return REWARD_MINE
        return REWARD_SAFE

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.session.board
        return {
            "steps": self._steps,
            "revealed": self._total_safe_cells - (board.hidden_count - board.mine_count),
            "total_safe": self._total_safe_cells,
            "game_state": self.session.state.name,
            "seed": self.session.options.seed,
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = cell not yet revealed.
        """
        return (self.session.board.to_observation() < 0).flatten()

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.session.board.to_observation())
        if self.render_mode == "human":
            print(render_ansi(self.session.board.to_observation()))
        return None


def render_ansi(observation: np.ndarray) -> str:
    """Render an observation as text, one line per row."""
    lines = []
    for row in observation:
        lines.append(" ".join(_SYMBOLS.get(int(value), str(int(value))) for value in row))
    return "\n".join(lines)
