"""Core rules for Gomoku: a fixed 15x15 board, alternating turns, five in a row."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

Player = str  # "B" or "W"

BOARD_SIZE = 15
WIN_LENGTH = 5

EMPTY = "."
BLACK: Player = "B"
WHITE: Player = "W"

# Game status
IN_PROGRESS = "in_progress"
WON = "won"
REJECTED = "rejected"

# Rejection reasons
OUT_OF_BOUNDS = "out_of_bounds"
CELL_OCCUPIED = "cell_occupied"
GAME_OVER = "game_over"

# Each axis as a pair of opposite (d_row, d_col) steps.
AXES: Tuple[Tuple[Tuple[int, int], Tuple[int, int]], ...] = (
    ((0, 1), (0, -1)),  # horizontal
    ((1, 0), (-1, 0)),  # vertical
    ((1, 1), (-1, -1)),  # diagonal, top-left to bottom-right
    ((1, -1), (-1, 1)),  # diagonal, bottom-left to top-right
)


def other(player: Player) -> Player:
    return WHITE if player == BLACK else BLACK


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single ``apply_move`` call.

    ``player`` is the player who moved, or who attempted the move when the
    result is rejected. ``reason`` is only set for rejected moves.
    """

    status: str
    player: Player
    row: int
    col: int
    reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.status != REJECTED

    @property
    def won(self) -> bool:
        return self.status == WON


# ---------- Game ----------


@dataclass
class GomokuGame:
    # Row-major: cell (row, col) lives at row * BOARD_SIZE + col
    cells: List[str] = field(
        default_factory=lambda: [EMPTY] * (BOARD_SIZE * BOARD_SIZE)
    )
    current_player: Player = BLACK
    status: str = IN_PROGRESS
    winner: Optional[Player] = None
    move_count: int = 0

    # ---- API used by UI ----

    @property
    def is_over(self) -> bool:
        return self.status == WON

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def get_cell(self, row: int, col: int) -> str:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the board")
        return self.cells[row * BOARD_SIZE + col]

    def rows(self) -> List[List[str]]:
        return [
            self.cells[r * BOARD_SIZE : (r + 1) * BOARD_SIZE]
            for r in range(BOARD_SIZE)
        ]

    def apply_move(self, row: int, col: int) -> MoveResult:
        """Place the current player's stone, then check for a win.

        Nothing is mutated unless the move is legal. A winning move leaves
        ``current_player`` on the winner; any other accepted move hands the
        turn to the opponent.
        """
        player = self.current_player
        if self.is_over:
            return self._reject(player, row, col, GAME_OVER)
        if not self.in_bounds(row, col):
            return self._reject(player, row, col, OUT_OF_BOUNDS)
        if self.cells[row * BOARD_SIZE + col] != EMPTY:
            return self._reject(player, row, col, CELL_OCCUPIED)

        self.cells[row * BOARD_SIZE + col] = player
        self.move_count += 1

        if self.check_win(row, col):
            self.status = WON
            self.winner = player
            logger.info(
                "%s wins at (%d, %d) after %d moves", player, row, col, self.move_count
            )
            return MoveResult(status=WON, player=player, row=row, col=col)

        self.current_player = other(player)
        return MoveResult(status=IN_PROGRESS, player=player, row=row, col=col)

    def check_win(self, row: int, col: int) -> bool:
        """True if the stone at (row, col) sits on a line of WIN_LENGTH or more.

        Only the four lines through the given cell are scanned, so this is
        meant to be called on the stone that was just placed.
        """
        if not self.in_bounds(row, col) or self.get_cell(row, col) == EMPTY:
            return False
        for (f_row, f_col), (b_row, b_col) in AXES:
            count = (
                1
                + self.count_in_direction(row, col, f_row, f_col)
                + self.count_in_direction(row, col, b_row, b_col)
            )
            if count >= WIN_LENGTH:
                return True
        return False

    def count_in_direction(self, row: int, col: int, d_row: int, d_col: int) -> int:
        """Count stones matching (row, col) walking away from it, origin excluded."""
        player = self.get_cell(row, col)
        count = 0
        r, c = row + d_row, col + d_col
        while self.in_bounds(r, c) and self.cells[r * BOARD_SIZE + c] == player:
            count += 1
            r += d_row
            c += d_col
        return count

    def restart(self) -> None:
        # Reset in place; the grid keeps its identity and size.
        self.cells[:] = [EMPTY] * (BOARD_SIZE * BOARD_SIZE)
        self.current_player = BLACK
        self.status = IN_PROGRESS
        self.winner = None
        self.move_count = 0

    # ---- helpers ----

    def _reject(self, player: Player, row: int, col: int, reason: str) -> MoveResult:
        logger.debug("Rejected move by %s at (%d, %d): %s", player, row, col, reason)
        return MoveResult(
            status=REJECTED, player=player, row=row, col=col, reason=reason
        )
