"""
Tetromino definitions, the falling-piece value, and spawning.

Each tetromino is stored in a single reference orientation as a square
numpy matrix where 1 marks a filled cell. Other orientations are derived
on demand by rotating the matrix clockwise; there is no kick table.

Coordinate convention:
  - On the board, row 0 is the top and row increases downward.
  - Column 0 is the left edge and column increases rightward.
  - A piece's (x, y) anchor is the board cell under the top-left corner
    of its shape matrix.
"""

from __future__ import annotations

import dataclasses
import random
from typing import Callable, Iterator, Sequence

import numpy as np

BOARD_WIDTH: int = 10
BOARD_HEIGHT: int = 20

# =============================================================================
# Tetromino Definitions
# =============================================================================
# "id" doubles as the color identifier written into board cells (0 = empty).


def _shape(rows: list[list[int]]) -> np.ndarray:
    array = np.array(rows, dtype=np.int8)
    array.setflags(write=False)
    return array


TETROMINOES: dict[str, dict] = {
    "I": {
        "id": 1,
        "name": "I",
        "color": "cyan",
        "shape": _shape([
            [0, 0, 0, 0],
            [1, 1, 1, 1],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ]),
    },
    "O": {
        "id": 2,
        "name": "O",
        "color": "yellow",
        "shape": _shape([
            [1, 1],
            [1, 1],
        ]),
    },
    "T": {
        "id": 3,
        "name": "T",
        "color": "purple",
        "shape": _shape([
            [0, 1, 0],
            [1, 1, 1],
            [0, 0, 0],
        ]),
    },
    "S": {
        "id": 4,
        "name": "S",
        "color": "green",
        "shape": _shape([
            [0, 1, 1],
            [1, 1, 0],
            [0, 0, 0],
        ]),
    },
    "Z": {
        "id": 5,
        "name": "Z",
        "color": "red",
        "shape": _shape([
            [1, 1, 0],
            [0, 1, 1],
            [0, 0, 0],
        ]),
    },
    "J": {
        "id": 6,
        "name": "J",
        "color": "blue",
        "shape": _shape([
            [1, 0, 0],
            [1, 1, 1],
            [0, 0, 0],
        ]),
    },
    "L": {
        "id": 7,
        "name": "L",
        "color": "orange",
        "shape": _shape([
            [0, 0, 1],
            [1, 1, 1],
            [0, 0, 0],
        ]),
    },
}

PIECE_KINDS: tuple[str, ...] = tuple(TETROMINOES)

# Color id -> color name, for anything that needs to draw a board cell.
COLOR_NAMES: dict[int, str] = {
    definition["id"]: definition["color"] for definition in TETROMINOES.values()
}

Chooser = Callable[[Sequence[str]], str]


def rotate_shape(shape: np.ndarray) -> np.ndarray:
    """Rotate a shape matrix 90 degrees clockwise.

    For an R x C input the result is C x R with
    ``rotated[j][R - 1 - i] == shape[i][j]``.

    Args:
        shape: 2D 0/1 matrix.

    Returns:
        A new read-only matrix; the input is left untouched.
    """
    rotated = np.ascontiguousarray(np.rot90(shape, k=-1))
    rotated.setflags(write=False)
    return rotated


@dataclasses.dataclass(frozen=True, eq=False)
class Piece:
    """The active falling piece.

    Attributes:
        kind: Tetromino name ("I", "O", ...).
        shape: Current shape matrix (possibly rotated from the reference).
        color: Color id written into the board when the piece locks.
        x: Column of the shape matrix's top-left corner.
        y: Row of the shape matrix's top-left corner.
    """

    kind: str
    shape: np.ndarray
    color: int
    x: int = 0
    y: int = 0

    @classmethod
    def from_kind(cls, kind: str) -> Piece:
        """Build a piece of the given kind at its spawn position."""
        definition = TETROMINOES[kind]
        shape = definition["shape"]
        x = BOARD_WIDTH // 2 - shape.shape[1] // 2
        return cls(kind=kind, shape=shape, color=definition["id"], x=x, y=0)

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield the (row, col) offsets of every filled cell in the shape."""
        for i, j in zip(*np.nonzero(self.shape)):
            yield int(i), int(j)

    def moved_to(self, x: int, y: int) -> Piece:
        return dataclasses.replace(self, x=x, y=y)

    def rotated(self) -> Piece:
        """Return this piece with its shape turned clockwise, same anchor."""
        return dataclasses.replace(self, shape=rotate_shape(self.shape))

    def same_as(self, other: Piece) -> bool:
        """Value comparison (dataclass eq is disabled because of the array)."""
        return (
            self.kind == other.kind
            and self.color == other.color
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )


def spawn_piece(choose: Chooser | None = None) -> Piece:
    """Spawn a uniformly random tetromino at the top of the board.

    Args:
        choose: Picks one item from a sequence. Defaults to
            ``random.choice``; tests pass a scripted chooser.

    Returns:
        A new Piece centered horizontally on row 0.
    """
    choose = choose or random.choice
    return Piece.from_kind(choose(PIECE_KINDS))
