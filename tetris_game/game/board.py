"""
Board logic for the fixed 10x20 Tetris grid.

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - 1-7 = color id of the piece that locked there

Boards are treated as values: placing a piece or clearing lines returns a
new Board and never writes into the one it was called on.
"""

from __future__ import annotations

import numpy as np

from tetris_game.game.pieces import BOARD_HEIGHT, BOARD_WIDTH, Piece

EMPTY_CELL: int = 0


class Board:
    """Tetris board with collision detection, placement and line clearing.

    Attributes:
        width: Number of columns (always 10).
        height: Number of rows (always 20).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT

    def __init__(self, grid: np.ndarray | None = None) -> None:
        """Initialize a board, empty unless a grid is given.

        Args:
            grid: Optional (20, 10) array of cell values. It is copied.

        Raises:
            ValueError: If the grid does not have the fixed board shape.
        """
        if grid is None:
            grid = np.zeros((self.height, self.width), dtype=np.int8)
        else:
            grid = np.array(grid, dtype=np.int8)
            if grid.shape != (self.height, self.width):
                raise ValueError(
                    f"Board grid must be {self.height}x{self.width}, got {grid.shape}"
                )
        grid.setflags(write=False)
        self.grid = grid

    @classmethod
    def empty(cls) -> Board:
        return cls()

    def is_valid_position(self, piece: Piece, x: int, y: int) -> bool:
        """Check whether the piece's shape fits with its anchor at (x, y).

        A position is valid if every filled cell of the shape:
          - Is within the side walls (0 <= col < width).
          - Is above the floor (row < height).
          - Does not overlap a filled cell, for rows on the board (row >= 0).

        Cells above the top edge (row < 0) are allowed and never collide.

        Args:
            piece: The piece whose shape is tested.
            x: Column offset of the shape's top-left corner.
            y: Row offset of the shape's top-left corner.

        Returns:
            True if the position is valid, False otherwise.
        """
        for r, c in piece.cells():
            board_row = y + r
            board_col = x + c
            if board_col < 0 or board_col >= self.width:
                return False
            if board_row >= self.height:
                return False
            if board_row >= 0 and self.grid[board_row, board_col] != EMPTY_CELL:
                return False
        return True

    def place_piece(self, piece: Piece) -> Board:
        """Return a new board with the piece written in at its position.

        Cells above the top edge are dropped. Does NOT check validity first;
        caller must ensure the position is valid.

        Args:
            piece: The landed piece.

        Returns:
            A new Board. This board is left unchanged.
        """
        grid = self.grid.copy()
        for r, c in piece.cells():
            board_row = piece.y + r
            if board_row >= 0:
                grid[board_row, piece.x + c] = piece.color
        return Board(grid)

    def clear_lines(self) -> tuple[Board, int]:
        """Remove all fully filled rows and shift everything above them down.

        Returns:
            A tuple of (new board, number of lines cleared).
        """
        full = np.all(self.grid != EMPTY_CELL, axis=1)
        lines_cleared = int(full.sum())
        if not lines_cleared:
            return self, 0

        remaining = self.grid[~full]
        empty_rows = np.zeros((lines_cleared, self.width), dtype=np.int8)
        return Board(np.vstack([empty_rows, remaining])), lines_cleared

    def with_piece(self, piece: Piece) -> np.ndarray:
        """Return a grid copy with the piece overlaid, for display.

        Unlike place_piece, cells outside the board on any side are skipped.
        """
        grid = self.grid.copy()
        for r, c in piece.cells():
            board_row = piece.y + r
            board_col = piece.x + c
            if 0 <= board_row < self.height and 0 <= board_col < self.width:
                grid[board_row, board_col] = piece.color
        return grid

    def get_grid(self) -> np.ndarray:
        """Return a writable copy of the board grid."""
        return self.grid.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # type: ignore[assignment]
