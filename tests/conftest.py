from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pytest

from tetris_game.game.board import Board
from tetris_game.game.pieces import BOARD_HEIGHT, BOARD_WIDTH


class _FakeClock:
    def __init__(self) -> None:
        self.value = 0.0

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


class _ScriptedChooser:
    """Returns the given kinds in order, repeating the last one forever."""

    def __init__(self, kinds: Iterable[str]) -> None:
        self._kinds = list(kinds)
        self.calls: list[Sequence[str]] = []

    def __call__(self, options: Sequence[str]) -> str:
        self.calls.append(options)
        if len(self._kinds) > 1:
            return self._kinds.pop(0)
        return self._kinds[0]


@pytest.fixture
def fake_clock() -> _FakeClock:
    return _FakeClock()


@pytest.fixture
def chooser():
    def make(*kinds: str) -> _ScriptedChooser:
        return _ScriptedChooser(kinds)

    return make


def board_from_rows(rows: dict[int, Iterable[int]], value: int = 1) -> Board:
    """Build a board with the given columns filled in each listed row."""
    grid = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)
    for row, cols in rows.items():
        for col in cols:
            grid[row, col] = value
    return Board(grid)


@pytest.fixture
def make_board():
    return board_from_rows
