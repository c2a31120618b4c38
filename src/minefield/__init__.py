"""
Minefield engine.

Board state, seeded mine generation, the reveal/mark state machine and
the cascading flood reveal, plus a game session and a Gymnasium
environment built on them.
"""
from .cell import (
    Cell,
    CellHandle,
    CellVisibility,
    Mark,
    Visibility,
    HIDDEN,
    MARKED_MINE,
    MARKED_EMPTY,
    REVEALED,
)
from .board import Board, RevealOutcome, RevealResult
from .generator import (
    BoardGenerator,
    GenerationOptions,
    DIFFICULTIES,
    generate,
    seed_from_text,
    select_mine_indices,
)
from .cascade import reveal_area
from .session import GameSession, GameState
from .environment import MinesweeperEnv, render_ansi

__all__ = [
    "Cell",
    "CellHandle",
    "CellVisibility",
    "Mark",
    "Visibility",
    "HIDDEN",
    "MARKED_MINE",
    "MARKED_EMPTY",
    "REVEALED",
    "Board",
    "RevealOutcome",
    "RevealResult",
    "BoardGenerator",
    "GenerationOptions",
    "DIFFICULTIES",
    "generate",
    "seed_from_text",
    "select_mine_indices",
    "reveal_area",
    "GameSession",
    "GameState",
    "MinesweeperEnv",
    "render_ansi",
]
