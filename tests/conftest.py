"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, Cell, CellHandle, GenerationOptions, GameSession


def make_board(
    width: int, height: int, mines: Iterable[Tuple[int, int]] = ()
) -> Board:
    """Build a board with mines at the given (column, row) positions."""
    mine_set = set(mines)
    cells = [
        Cell(is_mine=(column, row) in mine_set)
        for row in range(height)
        for column in range(width)
    ]
    return Board(width, height, cells)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def board_factory():
    """Build boards from explicit (column, row) mine positions."""
    return make_board


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with its only mine at (0, 0)."""
    return make_board(3, 3, [(0, 0)])


@pytest.fixture
def empty_board() -> Board:
    """5x5 board with no mines for cascade testing."""
    return make_board(5, 5)


@pytest.fixture
def walled_board() -> Board:
    """
    7x5 board split by a column of mines at column 3.

    . . . * . . .
    . . . * . . .
    . . . * . . .
    . . . * . . .
    . . . * . . .
    """
    return make_board(7, 5, [(3, row) for row in range(5)])


@pytest.fixture
def hidden_handle() -> CellHandle:
    """Handle of the center cell of a 3x3 board."""
    return CellHandle(1, 1)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_options() -> GenerationOptions:
    """Create valid generation options with a fixed seed."""
    return GenerationOptions(9, 9, 10, seed=1234)


@pytest.fixture
def beginner_options() -> GenerationOptions:
    """Beginner difficulty options with a fixed seed."""
    return GenerationOptions.for_difficulty("beginner", seed=42)


@pytest.fixture
def session(valid_options: GenerationOptions) -> GameSession:
    """Create a session on a seeded 9x9 board."""
    return GameSession(valid_options)
