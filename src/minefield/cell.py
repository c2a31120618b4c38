"""
Cell module for the minefield engine.

Defines grid addressing (CellHandle), the player's marks, the per-cell
visibility state machine and the Cell record the Board owns.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# ============================================================================
# Addressing
# ============================================================================

@dataclass(frozen=True, order=True)
class CellHandle:
    """
    Immutable (column, row) coordinate naming a position on a board.

    Handles name a location; they do not own a cell.
    """

    column: int
    row: int

    def __str__(self) -> str:
        return f"{self.column},{self.row}"


# ============================================================================
# Visibility
# ============================================================================

class Mark(Enum):
    """Player's guess about what a hidden cell contains."""

    EMPTY = auto()
    MINE = auto()


class Visibility(Enum):
    """Top-level visibility variants."""

    HIDDEN = auto()
    MARKED = auto()
    REVEALED = auto()


@dataclass(frozen=True)
class CellVisibility:
    """
    Tagged visibility value: Hidden, Marked(mark) or Revealed.

    Attributes:
        kind: Which variant holds.
        mark: The guess carried by the Marked variant, None otherwise.
    """

    kind: Visibility
    mark: Optional[Mark] = None

    def __post_init__(self) -> None:
        if (self.kind is Visibility.MARKED) != (self.mark is not None):
            raise ValueError("Only the MARKED variant carries a mark")

    @classmethod
    def hidden(cls) -> "CellVisibility":
        return cls(Visibility.HIDDEN)

    @classmethod
    def marked(cls, mark: Mark) -> "CellVisibility":
        return cls(Visibility.MARKED, mark)

    @classmethod
    def revealed(cls) -> "CellVisibility":
        return cls(Visibility.REVEALED)

    def __str__(self) -> str:
        if self.mark is not None:
            return f"Marked({self.mark.name.title()})"
        return self.kind.name.title()


HIDDEN = CellVisibility.hidden()
MARKED_MINE = CellVisibility.marked(Mark.MINE)
MARKED_EMPTY = CellVisibility.marked(Mark.EMPTY)
REVEALED = CellVisibility.revealed()

# Hidden -> Marked(Mine) -> Marked(Empty) -> Hidden
_MARK_CYCLE = {
    HIDDEN: MARKED_MINE,
    MARKED_MINE: MARKED_EMPTY,
    MARKED_EMPTY: HIDDEN,
}


def next_mark(visibility: CellVisibility) -> Optional[CellVisibility]:
    """
    Get the visibility that follows in the mark cycle.

    Returns:
        The next visibility, or None if the cell is revealed.
    """
    return _MARK_CYCLE.get(visibility)


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the grid.

    Attributes:
        is_mine: Whether this cell contains a mine. Fixed at generation.
        visibility: Current visibility state.
        adjacent_mines: Memoized count of neighbouring mines, None until
            first computed.
        changed: Set on every visibility mutation, cleared by the reader.
    """

    is_mine: bool = False
    visibility: CellVisibility = HIDDEN
    adjacent_mines: Optional[int] = None
    changed: bool = False

    def set_visibility(self, visibility: CellVisibility) -> None:
        """Change visibility and flag the cell for repaint."""
        self.visibility = visibility
        self.changed = True

    def consume_changed(self) -> bool:
        """Return the changed flag and clear it."""
        changed = self.changed
        self.changed = False
        return changed

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.visibility == HIDDEN

    @property
    def is_marked(self) -> bool:
        """Check if cell carries a mark."""
        return self.visibility.kind is Visibility.MARKED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.visibility == REVEALED

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Hidden cell
            -2: Marked as mine
            -3: Marked as empty
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.visibility == HIDDEN:
            return -1
        if self.visibility == MARKED_MINE:
            return -2
        if self.visibility == MARKED_EMPTY:
            return -3
        if self.is_mine:
            return 9
        return self.adjacent_mines or 0
