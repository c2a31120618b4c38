"""
Cascade module for the minefield engine.

Opens the region connected to a safe cell through cells with no
adjacent mines (the flood reveal).
"""
import logging
from typing import List

from .board import Board
from .cell import CellHandle

logger = logging.getLogger(__name__)


def _borders_mine(board: Board, handle: CellHandle) -> bool:
    """Check if any neighbour of a cell is a mine."""
    return any(board.cell(neighbor).is_mine for neighbor in board.neighbors(handle))


def reveal_area(board: Board, origin: CellHandle) -> List[CellHandle]:
    """
    Reveal every cell reachable from origin through zero-count cells.

    The origin must already have been revealed as empty. Nothing opens
    if the origin touches a mine. Otherwise each hidden neighbour is
    revealed; neighbours with no adjacent mines are expanded in turn,
    numbered ones form the boundary, mines are skipped.

    Uses an explicit stack, so region size is not limited by recursion
    depth. The set of revealed cells does not depend on visiting order.

    Args:
        board: Board to mutate.
        origin: Safe cell the cascade starts from.

    Returns:
        Handles revealed by the cascade, in the order they were opened.
    """
    if _borders_mine(board, origin):
        return []

    revealed: List[CellHandle] = []
    pending = [origin]
    while pending:
        current = pending.pop()
        for neighbor in board.neighbors(current):
            result = board.peek(neighbor)
            if not result.is_empty:
                continue
            board.reveal(neighbor)
            revealed.append(neighbor)
            if result.adjacent_mines == 0:
                pending.append(neighbor)

    logger.debug("Cascade from %s opened %d cells", origin, len(revealed))
    return revealed
