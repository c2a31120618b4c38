"""
Game session module.

Drives one game at a time: generates the board, applies reveals and
marks, runs the cascade after safe reveals and tracks win/loss.
"""
import logging
from enum import Enum, auto
from typing import Optional

from .board import Board, RevealResult
from .cascade import reveal_area
from .cell import CellHandle, REVEALED
from .generator import BoardGenerator, GenerationOptions

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    A single game in progress.

    Owns the current board and replaces it wholesale on ``new_game``.
    """

    def __init__(
        self,
        options: Optional[GenerationOptions] = None,
        generator: Optional[BoardGenerator] = None,
    ) -> None:
        """
        Initialize the session and start the first game.

        Args:
            options: Generation options (default: 10x10 with 10 mines).
            generator: Board generator (default: numpy mine selector).
        """
        self.generator = generator or BoardGenerator()
        self._options = options or GenerationOptions()
        self.new_game()

    def new_game(self, options: Optional[GenerationOptions] = None) -> Board:
        """
        Discard the current board and generate a new one.

        Args:
            options: New options, or None to reuse the current ones.
        """
        if options is not None:
            self._options = options
        self._board = self.generator.generate(self._options)
        self._state = GameState.PLAYING
        logger.info(
            "New game %dx%d, %d mines, seed %d",
            self._options.width, self._options.height,
            self._options.mine_count, self._options.seed,
        )
        return self._board

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, handle: CellHandle) -> RevealResult:
        """
        Reveal a cell and resolve the consequences.

        A mine loses the game. A safe cell opens its surrounding region
        and may win the game. Once the game is over nothing changes and
        AlreadyRevealed is returned.
        """
        if not self.is_playing:
            return RevealResult.already_revealed()

        result = self._board.reveal(handle)
        if result.is_mine:
            self._state = GameState.LOST
            logger.info("Mine hit at %s", handle)
        elif result.is_empty:
            reveal_area(self._board, handle)
            if self._board.is_won():
                self._state = GameState.WON
                logger.info("Board cleared")
        return result

    def toggle_mark(self, handle: CellHandle) -> bool:
        """
        Cycle the mark on a hidden cell.

        Returns:
            True if the mark changed, False if the cell is revealed or
            the game is over.
        """
        if not self.is_playing:
            return False
        return self._board.toggle_mark(handle)

    def reveal_all(self) -> int:
        """
        Expose every cell, typically once the game has ended.

        Leaves the game state and ``hidden_count`` untouched.

        Returns:
            Number of cells that changed.
        """
        exposed = 0
        for handle in self._board.all_handles():
            cell = self._board.cell(handle)
            if not cell.is_revealed:
                if not cell.is_mine:
                    self._board.adjacent_mine_count(handle)
                cell.set_visibility(REVEALED)
                exposed += 1
        return exposed

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        return self._board

    @property
    def options(self) -> GenerationOptions:
        return self._options

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state == GameState.LOST
