"""
Unit tests for the cascade (flood reveal).

Tests the stop rule at mine boundaries, region coverage, termination
on large boards and order independence of the revealed set.
"""
from collections import deque
from typing import Set

import pytest
from minefield import (
    Board,
    CellHandle,
    GenerationOptions,
    generate,
    reveal_area,
    HIDDEN,
)


def expected_region(board: Board, origin: CellHandle) -> Set[CellHandle]:
    """
    Breadth-first closure of the cascade rule, computed without mutating.

    Includes the origin, every zero-count cell connected to it through
    zero-count cells, and the numbered boundary around them.
    """
    def count(handle: CellHandle) -> int:
        return sum(1 for n in board.neighbors(handle) if board.cell(n).is_mine)

    region = {origin}
    if count(origin) != 0:
        return region
    queue = deque([origin])
    while queue:
        current = queue.popleft()
        for neighbor in board.neighbors(current):
            if neighbor in region or board.cell(neighbor).is_mine:
                continue
            region.add(neighbor)
            if count(neighbor) == 0:
                queue.append(neighbor)
    return region


def revealed_set(board: Board) -> Set[CellHandle]:
    """Handles of every revealed cell."""
    return {handle for handle in board if board.cell(handle).is_revealed}


# ============================================================================
# Scenario Tests
# ============================================================================

class TestCornerMineScenario:
    """3x3 board with a single mine at (0, 0)."""

    def test_cascade_clears_board(self, corner_mine_board: Board) -> None:
        """Revealing (2, 2) then cascading opens all 8 safe cells."""
        result = corner_mine_board.reveal(CellHandle(2, 2))
        assert result.is_empty and result.adjacent_mines == 0

        opened = reveal_area(corner_mine_board, CellHandle(2, 2))

        assert len(opened) == 7
        assert len(revealed_set(corner_mine_board)) == 8
        assert corner_mine_board.cell(CellHandle(0, 0)).visibility == HIDDEN
        assert corner_mine_board.is_won() is True
        assert corner_mine_board.hidden_count == 1

    def test_generated_board_with_corner_mine(self) -> None:
        """Same scenario through the generator with a matching seed."""
        seed = next(
            seed for seed in range(1000)
            if generate(GenerationOptions(3, 3, 1, seed)).cell(CellHandle(0, 0)).is_mine
        )
        board = generate(GenerationOptions(3, 3, 1, seed))

        assert board.reveal(CellHandle(2, 2)).adjacent_mines == 0
        reveal_area(board, CellHandle(2, 2))

        assert board.cell(CellHandle(0, 0)).is_hidden
        assert board.is_won() is True


# ============================================================================
# Stop Rule Tests
# ============================================================================

class TestStopRule:
    """Test where the cascade stops."""

    def test_origin_next_to_mine_opens_nothing(self, corner_mine_board: Board) -> None:
        """No cascade from a cell bordering a mine."""
        corner_mine_board.reveal(CellHandle(1, 1))
        assert reveal_area(corner_mine_board, CellHandle(1, 1)) == []
        assert revealed_set(corner_mine_board) == {CellHandle(1, 1)}

    def test_wall_of_mines_bounds_region(self, walled_board: Board) -> None:
        """Cascade opens the left side up to the numbered column only."""
        origin = CellHandle(0, 2)
        walled_board.reveal(origin)
        reveal_area(walled_board, origin)

        revealed = revealed_set(walled_board)
        assert revealed == {CellHandle(c, r) for c in range(3) for r in range(5)}
        assert all(walled_board.cell(CellHandle(3, r)).is_hidden for r in range(5))
        assert walled_board.is_won() is False

    def test_mines_are_never_revealed(self, board_factory) -> None:
        """Cascade skips mines."""
        board = board_factory(6, 6, [(5, 5), (0, 5), (5, 0)])
        board.reveal(CellHandle(2, 2))
        reveal_area(board, CellHandle(2, 2))
        assert not any(
            board.cell(h).is_revealed for h in board if board.cell(h).is_mine
        )

    def test_numbered_boundary_is_revealed(self, board_factory) -> None:
        """Numbered cells at the edge of the region open but do not spread."""
        board = board_factory(5, 1, [(4, 0)])
        board.reveal(CellHandle(0, 0))
        opened = reveal_area(board, CellHandle(0, 0))
        assert set(opened) == {CellHandle(1, 0), CellHandle(2, 0), CellHandle(3, 0)}
        assert board.cell(CellHandle(3, 0)).adjacent_mines == 1

    def test_skips_already_revealed(self, empty_board: Board) -> None:
        """Cells revealed before the cascade are not reopened."""
        empty_board.reveal(CellHandle(4, 4))
        empty_board.reveal(CellHandle(0, 0))
        opened = reveal_area(empty_board, CellHandle(0, 0))
        assert CellHandle(4, 4) not in opened
        assert CellHandle(0, 0) not in opened
        assert len(opened) == 23

    def test_marked_cells_are_opened(self, empty_board: Board) -> None:
        """Marks do not stop the cascade."""
        empty_board.toggle_mark(CellHandle(3, 3))
        empty_board.reveal(CellHandle(0, 0))
        reveal_area(empty_board, CellHandle(0, 0))
        assert empty_board.cell(CellHandle(3, 3)).is_revealed


# ============================================================================
# Coverage and Termination Tests
# ============================================================================

class TestCoverage:
    """Test region coverage and bookkeeping."""

    def test_empty_board_fully_revealed(self, empty_board: Board) -> None:
        """Board without mines opens completely."""
        empty_board.reveal(CellHandle(2, 2))
        reveal_area(empty_board, CellHandle(2, 2))
        assert len(revealed_set(empty_board)) == 25
        assert empty_board.hidden_count == 0
        assert empty_board.is_won() is True

    def test_each_cell_opened_once(self, empty_board: Board) -> None:
        """The returned handles are distinct."""
        empty_board.reveal(CellHandle(0, 0))
        opened = reveal_area(empty_board, CellHandle(0, 0))
        assert len(opened) == len(set(opened)) == 24

    def test_large_region_has_no_depth_limit(self, board_factory) -> None:
        """A region far larger than the recursion limit still completes."""
        board = board_factory(120, 120)
        board.reveal(CellHandle(0, 0))
        opened = reveal_area(board, CellHandle(0, 0))
        assert len(opened) == 120 * 120 - 1
        assert board.hidden_count == 0

    @pytest.mark.parametrize("seed", range(20))
    def test_matches_independent_closure(self, seed: int) -> None:
        """Revealed set equals the breadth-first closure for any origin."""
        board = generate(GenerationOptions(12, 10, 15, seed=seed))
        origin = next(
            h for h in board
            if not board.cell(h).is_mine and board.adjacent_mine_count(h) == 0
        )
        expected = expected_region(board, origin)

        board.reveal(origin)
        reveal_area(board, origin)

        assert revealed_set(board) == expected

    @pytest.mark.parametrize("seed", range(5))
    def test_result_is_order_independent(self, seed: int) -> None:
        """Different origins in one region reveal the same set."""
        options = GenerationOptions(10, 10, 8, seed=seed)
        probe = generate(options)
        zeros = [
            h for h in probe
            if not probe.cell(h).is_mine and probe.adjacent_mine_count(h) == 0
        ]
        first_origin = zeros[0]
        region = expected_region(probe, first_origin)
        last_origin = [h for h in zeros if h in region][-1]

        results = []
        for origin in (first_origin, last_origin):
            board = generate(options)
            board.reveal(origin)
            reveal_area(board, origin)
            results.append(revealed_set(board))

        assert results[0] == results[1] == region
