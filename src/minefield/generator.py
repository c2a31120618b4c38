"""
Generator module for the minefield engine.

Builds boards from validated generation options with a seeded,
collision-free mine placement.
"""
import hashlib
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from .board import Board
from .cell import Cell

logger = logging.getLogger(__name__)

MAX_SEED = 2 ** 64 - 1


def random_seed() -> int:
    """Draw a fresh unsigned 64-bit seed from OS entropy."""
    return int(np.random.default_rng().integers(0, MAX_SEED, dtype=np.uint64, endpoint=True))


def seed_from_text(text: str) -> int:
    """
    Derive a 64-bit seed from arbitrary text.

    Equal text always yields the same seed, across processes and
    platforms, so a board can be shared by its seed phrase.
    """
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


# ============================================================================
# Generation Options
# ============================================================================

# name -> (width, height, mine_count)
DIFFICULTIES: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 10),
    "intermediate": (16, 16, 40),
    "expert": (30, 16, 99),
}


@dataclass(frozen=True)
class GenerationOptions:
    """
    Configuration for generating a board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
        seed: Unsigned 64-bit seed for the mine layout.
    """

    width: int = 10
    height: int = 10
    mine_count: int = 10
    seed: int = field(default_factory=random_seed)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height
        if self.mine_count > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")
        if not 0 <= self.seed <= MAX_SEED:
            raise ValueError("Seed must be an unsigned 64-bit integer")

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @classmethod
    def from_seed_text(
        cls,
        text: str,
        width: int = 10,
        height: int = 10,
        mine_count: int = 10,
    ) -> "GenerationOptions":
        """Build options whose seed is derived from a seed phrase."""
        return cls(width, height, mine_count, seed_from_text(text))

    @classmethod
    def for_difficulty(
        cls, name: str, seed: Optional[int] = None
    ) -> "GenerationOptions":
        """
        Build options for a named difficulty.

        Args:
            name: One of ``DIFFICULTIES``.
            seed: Layout seed; a random one if omitted.
        """
        try:
            width, height, mine_count = DIFFICULTIES[name]
        except KeyError:
            raise ValueError(
                f"Unknown difficulty {name!r} "
                f"(choose from {', '.join(DIFFICULTIES)})"
            ) from None
        if seed is None:
            seed = random_seed()
        return cls(width, height, mine_count, seed)


# ============================================================================
# Mine Selection
# ============================================================================

MineSelector = Callable[[GenerationOptions], Sequence[int]]


def select_mine_indices(options: GenerationOptions) -> Sequence[int]:
    """
    Choose mine positions uniformly at random without replacement.

    Args:
        options: Board size, mine count and seed.

    Returns:
        ``mine_count`` distinct row-major cell indices.
    """
    rng = np.random.default_rng(options.seed)
    chosen = rng.choice(options.cell_count, size=options.mine_count, replace=False)
    return [int(index) for index in chosen]


# ============================================================================
# Board Generator
# ============================================================================

class BoardGenerator:
    """
    Builds boards from generation options.

    The mine selector is pluggable; any substitute must be deterministic
    in the options' seed so boards stay reproducible.
    """

    def __init__(self, select_mines: MineSelector = select_mine_indices) -> None:
        self.select_mines = select_mines

    def generate(self, options: Optional[GenerationOptions] = None) -> Board:
        """
        Generate a board with every cell hidden.

        Args:
            options: Generation options (default: 10x10 with 10 mines).

        Returns:
            A new board with the selected cells mined.
        """
        options = options or GenerationOptions()
        mines = set(self.select_mines(options))
        if len(mines) != options.mine_count:
            raise ValueError(
                f"Mine selector returned {len(mines)} distinct positions, "
                f"expected {options.mine_count}"
            )
        if any(not 0 <= index < options.cell_count for index in mines):
            raise ValueError("Mine selector returned a position off the board")
        cells = [Cell(is_mine=index in mines) for index in range(options.cell_count)]
        logger.debug(
            "Generated %dx%d board with %d mines (seed=%d)",
            options.width, options.height, options.mine_count, options.seed,
        )
        return Board(options.width, options.height, cells)


def generate(options: Optional[GenerationOptions] = None) -> Board:
    """Generate a board with the default mine selector."""
    return BoardGenerator().generate(options)
