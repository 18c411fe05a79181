"""
Game orchestrator: session state, player commands, gravity, scoring, levels.

This module ties the Board and Piece definitions together into one game
session. All state changes go through ``GameSession.tick`` (gravity) and
``GameSession.handle`` (player commands); rejected moves simply leave the
state as it was.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Any

import numpy as np

from tetris_game.game.board import Board
from tetris_game.game.pieces import Chooser, Piece, spawn_piece


class Command(enum.IntEnum):
    """Discrete input commands accepted by the session."""
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    HARD_DROP = 3
    ROTATE = 4
    TOGGLE_PAUSE = 5
    RESTART = 6


class GameStatus(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


POINTS_PER_LINE: int = 100
POINTS_PER_LEVEL: int = 1000

BASE_GRAVITY_MS: int = 1000
GRAVITY_STEP_MS: int = 100
MIN_GRAVITY_MS: int = 50


def score_for_lines(lines_cleared: int, level: int) -> int:
    """Points earned for clearing lines at the given level.

    Linear in the number of lines: 100 points per line, times the level.

    Args:
        lines_cleared: Number of lines cleared by one lock (0-4).
        level: Level at the moment of the clear.

    Returns:
        Points earned.
    """
    return lines_cleared * POINTS_PER_LINE * level


def level_for_score(score: int) -> int:
    """Level reached with a given total score (one level per 1000 points)."""
    return score // POINTS_PER_LEVEL + 1


def gravity_interval(level: int) -> int:
    """Milliseconds between gravity ticks at the given level."""
    return max(MIN_GRAVITY_MS, BASE_GRAVITY_MS - (level - 1) * GRAVITY_STEP_MS)


@dataclasses.dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of a session for rendering.

    Attributes:
        grid: Board cells with the active piece overlaid (read-only array).
        score: Current score.
        level: Current level (>= 1).
        game_over: Whether the session has ended.
        paused: Whether the session is paused.
    """

    grid: np.ndarray
    score: int
    level: int
    game_over: bool
    paused: bool

    @property
    def status(self) -> GameStatus:
        return _status(self.game_over, self.paused)


def _status(game_over: bool, paused: bool) -> GameStatus:
    # Game over wins over paused.
    if game_over:
        return GameStatus.GAME_OVER
    if paused:
        return GameStatus.PAUSED
    return GameStatus.RUNNING


class GameSession:
    """A single game: board, falling piece, score, level and status flags.

    Attributes:
        board: The locked cells.
        piece: The currently falling piece.
        score: Current score.
        level: Current level (starts at 1).
        game_over: Set when a freshly spawned piece does not fit.
        paused: Toggled by the player; suppresses gravity and movement.
    """

    def __init__(self, choose: Chooser | None = None) -> None:
        """Start a new session.

        Args:
            choose: Picks the next tetromino kind from a sequence of names.
                Defaults to ``random.choice``.
        """
        self._choose = choose
        self.board = Board.empty()
        self.piece: Piece = spawn_piece(self._choose)
        self.score: int = 0
        self.level: int = 1
        self.game_over: bool = False
        self.paused: bool = False

    @property
    def status(self) -> GameStatus:
        return _status(self.game_over, self.paused)

    @property
    def active(self) -> bool:
        return not (self.game_over or self.paused)

    def restart(self) -> None:
        """Reset everything to a fresh game, whatever the current status."""
        self.board = Board.empty()
        self.piece = spawn_piece(self._choose)
        self.score = 0
        self.level = 1
        self.game_over = False
        self.paused = False

    def tick(self) -> None:
        """Apply one gravity step.

        Moves the piece down a row if it fits; otherwise the piece locks,
        full lines are cleared and scored, and the next piece spawns.
        """
        if not self.active:
            return
        if self._move(0, 1):
            return

        board = self.board.place_piece(self.piece)
        board, lines = board.clear_lines()
        self.board = board
        if lines:
            self.score += score_for_lines(lines, self.level)
            self.level = max(self.level, level_for_score(self.score))

        self.piece = spawn_piece(self._choose)
        if not self.board.is_valid_position(self.piece, self.piece.x, self.piece.y):
            self.game_over = True

    def handle(self, command: Any) -> None:
        """Apply a player command. Unknown commands are ignored.

        Args:
            command: A Command member or its integer value.
        """
        try:
            command = Command(command)
        except (ValueError, TypeError):
            return

        if command == Command.RESTART:
            self.restart()
            return
        if command == Command.TOGGLE_PAUSE:
            self.paused = not self.paused
            return
        if not self.active:
            return

        if command == Command.MOVE_LEFT:
            self._move(-1, 0)
        elif command == Command.MOVE_RIGHT:
            self._move(1, 0)
        elif command == Command.SOFT_DROP:
            self._move(0, 1)
        elif command == Command.ROTATE:
            self._rotate()
        elif command == Command.HARD_DROP:
            self._hard_drop()

    def snapshot(self) -> GameSnapshot:
        """Return the board with the falling piece drawn in, plus status."""
        grid = self.board.with_piece(self.piece)
        grid.setflags(write=False)
        return GameSnapshot(
            grid=grid,
            score=self.score,
            level=self.level,
            game_over=self.game_over,
            paused=self.paused,
        )

    def _move(self, dx: int, dy: int) -> bool:
        """Try to move the current piece by (dx, dy).

        Returns:
            True if the move succeeded, False if blocked.
        """
        new_x = self.piece.x + dx
        new_y = self.piece.y + dy
        if self.board.is_valid_position(self.piece, new_x, new_y):
            self.piece = self.piece.moved_to(new_x, new_y)
            return True
        return False

    def _rotate(self) -> bool:
        """Rotate clockwise in place; rejected if the result does not fit."""
        rotated = self.piece.rotated()
        if self.board.is_valid_position(rotated, rotated.x, rotated.y):
            self.piece = rotated
            return True
        return False

    def _hard_drop(self) -> int:
        """Drop the piece to its landing row without locking it.

        Returns:
            Number of rows dropped.
        """
        new_y = self.piece.y
        while self.board.is_valid_position(self.piece, self.piece.x, new_y + 1):
            new_y += 1
        rows = new_y - self.piece.y
        if rows:
            self.piece = self.piece.moved_to(self.piece.x, new_y)
        return rows
