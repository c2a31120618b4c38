"""
Board module for the minefield engine.

Owns the grid of cells, answers neighbour and adjacency queries, and
implements the reveal/mark state machine and terminal conditions.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Sequence

import numpy as np

from .cell import Cell, CellHandle, REVEALED, next_mark


# ============================================================================
# Reveal Results
# ============================================================================

class RevealOutcome(Enum):
    """What revealing a cell yields."""

    MINE = auto()
    EMPTY = auto()
    ALREADY_REVEALED = auto()


@dataclass(frozen=True)
class RevealResult:
    """
    Result of a reveal: Mine, Empty(adjacent_mines) or AlreadyRevealed.

    Attributes:
        outcome: Which variant holds.
        adjacent_mines: Neighbouring mine count, only set for EMPTY.
    """

    outcome: RevealOutcome
    adjacent_mines: Optional[int] = None

    @classmethod
    def mine(cls) -> "RevealResult":
        return cls(RevealOutcome.MINE)

    @classmethod
    def empty(cls, adjacent_mines: int) -> "RevealResult":
        return cls(RevealOutcome.EMPTY, adjacent_mines)

    @classmethod
    def already_revealed(cls) -> "RevealResult":
        return cls(RevealOutcome.ALREADY_REVEALED)

    @property
    def is_mine(self) -> bool:
        return self.outcome is RevealOutcome.MINE

    @property
    def is_empty(self) -> bool:
        return self.outcome is RevealOutcome.EMPTY

    @property
    def is_already_revealed(self) -> bool:
        return self.outcome is RevealOutcome.ALREADY_REVEALED

    def __str__(self) -> str:
        if self.is_empty:
            return f"Empty({self.adjacent_mines})"
        if self.is_mine:
            return "Mine"
        return "AlreadyRevealed"


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Rectangular grid of cells addressed by CellHandle.

    The board exclusively owns its cells. Mine placement is fixed for the
    board's lifetime; a new game replaces the board wholesale.

    ``hidden_count`` starts as the number of non-revealed cells, mines
    included, and drops by one on every safe reveal. ``is_won`` does not
    use it and checks the safe cells directly.
    """

    def __init__(self, width: int, height: int, cells: Sequence[Cell]) -> None:
        """
        Initialize the board from a pre-built cell collection.

        Args:
            width: Number of columns.
            height: Number of rows.
            cells: width * height cells in row-major order.
        """
        if width < 1 or height < 1:
            raise ValueError("Board dimensions must be positive")
        if len(cells) != width * height:
            raise ValueError(
                f"Expected {width * height} cells, got {len(cells)}"
            )
        self._width = width
        self._height = height
        self._cells: List[Cell] = list(cells)
        self._hidden_count = sum(
            1 for cell in self._cells if not cell.is_revealed
        )

    # ========================================================================
    # Addressing (Low-level)
    # ========================================================================

    def _index(self, handle: CellHandle) -> int:
        """Map a handle to its position in the row-major cell list."""
        if handle not in self:
            raise IndexError(
                f"Cell {handle} is outside the "
                f"{self._width}x{self._height} board"
            )
        return handle.row * self._width + handle.column

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, CellHandle):
            return False
        return (
            0 <= handle.column < self._width
            and 0 <= handle.row < self._height
        )

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[CellHandle]:
        return iter(self.all_handles())

    def cell(self, handle: CellHandle) -> Cell:
        """Get the cell at a position."""
        return self._cells[self._index(handle)]

    def all_handles(self) -> List[CellHandle]:
        """Enumerate every board position once, row by row."""
        return [
            CellHandle(column, row)
            for row in range(self._height)
            for column in range(self._width)
        ]

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, handle: CellHandle) -> List[CellHandle]:
        """
        Get the grid-adjacent positions of a cell.

        Args:
            handle: Center cell.

        Returns:
            Up to 8 handles in row-major order, clipped at the edges.
        """
        self._index(handle)
        result = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                neighbor = CellHandle(
                    handle.column + delta_col, handle.row + delta_row
                )
                if neighbor in self:
                    result.append(neighbor)
        return result

    def _count_adjacent_mines(self, handle: CellHandle) -> int:
        """Count mines among a cell's neighbours."""
        return sum(
            1 for neighbor in self.neighbors(handle)
            if self.cell(neighbor).is_mine
        )

    def adjacent_mine_count(self, handle: CellHandle) -> int:
        """
        Get the number of mines around a cell, computing it once.

        The first call stores the count on the cell; later calls return
        the stored value.
        """
        cell = self.cell(handle)
        if cell.adjacent_mines is None:
            cell.adjacent_mines = self._count_adjacent_mines(handle)
        return cell.adjacent_mines

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def peek(self, handle: CellHandle) -> RevealResult:
        """
        Classify what revealing a cell would yield, without mutating it.

        The adjacency count is computed if needed but not stored.
        """
        cell = self.cell(handle)
        if cell.is_revealed:
            return RevealResult.already_revealed()
        if cell.is_mine:
            return RevealResult.mine()
        if cell.adjacent_mines is None:
            return RevealResult.empty(self._count_adjacent_mines(handle))
        return RevealResult.empty(cell.adjacent_mines)

    def reveal(self, handle: CellHandle) -> RevealResult:
        """
        Reveal a cell.

        A mine is exposed and reported as MINE. A safe cell stores its
        adjacency count and lowers ``hidden_count`` by one. Marks are
        dropped by the transition; revealed cells are left untouched.

        Args:
            handle: Cell to reveal.

        Returns:
            The same classification ``peek`` would have returned.
        """
        result = self.peek(handle)
        cell = self.cell(handle)
        if result.is_mine:
            cell.set_visibility(REVEALED)
        elif result.is_empty:
            cell.set_visibility(REVEALED)
            cell.adjacent_mines = result.adjacent_mines
            self._hidden_count -= 1
        return result

    def toggle_mark(self, handle: CellHandle) -> bool:
        """
        Cycle Hidden -> Marked(Mine) -> Marked(Empty) -> Hidden.

        Returns:
            True if the mark changed, False if the cell is revealed.
        """
        cell = self.cell(handle)
        following = next_mark(cell.visibility)
        if following is None:
            return False
        cell.set_visibility(following)
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def hidden_count(self) -> int:
        """Running count of unrevealed cells (see class docstring)."""
        return self._hidden_count

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return sum(1 for cell in self._cells if cell.is_mine)

    def is_won(self) -> bool:
        """Check if every non-mine cell is revealed."""
        return all(cell.is_revealed for cell in self._cells if not cell.is_mine)

    def take_changed(self) -> List[CellHandle]:
        """
        Collect cells flagged as changed and clear their flags.

        Returns:
            Handles of the cells that need repainting, row by row.
        """
        return [
            handle for handle, cell in zip(self.all_handles(), self._cells)
            if cell.consume_changed()
        ]

    def to_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of shape (height, width), see
            ``Cell.to_observation`` for the encoding.
        """
        obs = np.zeros((self._height, self._width), dtype=np.int8)
        for handle, cell in zip(self.all_handles(), self._cells):
            obs[handle.row, handle.column] = cell.to_observation()
        return obs

    def __repr__(self) -> str:
        return (
            f"Board(width={self._width}, height={self._height}, "
            f"mines={self.mine_count}, hidden={self._hidden_count})"
        )
