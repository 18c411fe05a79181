import numpy as np
import pytest

from tetris_game.game.board import Board
from tetris_game.game.pieces import Piece
from tetris_game.game.tetris import (
    Command,
    GameSession,
    GameStatus,
    gravity_interval,
    level_for_score,
    score_for_lines,
)


def _vertical_i_in_left_column(session):
    """Turn the spawned I upright and push it against the left wall."""
    session.handle(Command.ROTATE)
    for _ in range(5):
        session.handle(Command.MOVE_LEFT)
    assert session.piece.x == -2


def _board_with_left_well(rows):
    """Board whose given rows are full except column 0."""
    grid = np.zeros((20, 10), dtype=np.int8)
    for row in rows:
        grid[row, 1:] = 1
    return Board(grid)


def test_scoring_rules():
    assert score_for_lines(0, 3) == 0
    assert score_for_lines(3, 1) == 300
    assert score_for_lines(4, 2) == 800
    assert level_for_score(0) == 1
    assert level_for_score(999) == 1
    assert level_for_score(1200) == 2
    assert level_for_score(5000) == 6


@pytest.mark.parametrize(
    "level, expected",
    [(1, 1000), (2, 900), (5, 600), (10, 100), (11, 50), (30, 50)],
)
def test_gravity_interval(level, expected):
    assert gravity_interval(level) == expected


def test_new_session_state(chooser):
    session = GameSession(choose=chooser("T"))
    assert session.score == 0
    assert session.level == 1
    assert session.status == GameStatus.RUNNING
    assert session.board == Board.empty()
    assert (session.piece.kind, session.piece.x, session.piece.y) == ("T", 4, 0)


def test_moves_stop_at_walls(chooser):
    session = GameSession(choose=chooser("O"))
    for _ in range(6):
        session.handle(Command.MOVE_LEFT)
    assert session.piece.x == 0
    for _ in range(12):
        session.handle(Command.MOVE_RIGHT)
    assert session.piece.x == 8


def test_rotation_accepted_when_it_fits(chooser):
    session = GameSession(choose=chooser("T"))
    session.handle(Command.ROTATE)
    assert np.array_equal(session.piece.shape, [[0, 1, 0], [0, 1, 1], [0, 1, 0]])
    assert (session.piece.x, session.piece.y) == (4, 0)


def test_rotation_rejected_without_wall_kick(chooser):
    session = GameSession(choose=chooser("I"))
    _vertical_i_in_left_column(session)
    before = session.piece

    session.handle(Command.ROTATE)

    assert session.piece.same_as(before)


def test_soft_drop_o_to_floor_then_lock_on_tick(chooser):
    session = GameSession(choose=chooser("O", "T"))
    for _ in range(18):
        session.handle(Command.SOFT_DROP)
    assert session.piece.y == 18

    session.handle(Command.SOFT_DROP)
    assert session.piece.y == 18
    assert session.board == Board.empty()

    session.tick()

    expected = np.zeros((20, 10), dtype=np.int8)
    expected[18:20, 4:6] = Piece.from_kind("O").color
    assert np.array_equal(session.board.grid, expected)
    assert session.piece.kind == "T"
    assert session.score == 0
    assert session.status == GameStatus.RUNNING


def test_gravity_tick_moves_piece_down(chooser):
    session = GameSession(choose=chooser("S"))
    session.tick()
    session.tick()
    assert session.piece.y == 2


def test_hard_drop_moves_without_locking(chooser):
    session = GameSession(choose=chooser("O", "J"))
    session.handle(Command.HARD_DROP)
    assert session.piece.y == 18
    assert session.piece.kind == "O"
    assert session.board == Board.empty()

    session.tick()
    assert session.piece.kind == "J"
    assert int(np.count_nonzero(session.board.grid)) == 4


def test_lock_clears_line_and_scores(chooser):
    session = GameSession(choose=chooser("O"))
    grid = np.zeros((20, 10), dtype=np.int8)
    grid[19, :] = 1
    grid[19, 4:6] = 0
    session.board = Board(grid)

    session.handle(Command.HARD_DROP)
    session.tick()

    assert session.score == 100
    assert session.level == 1
    assert not session.board.grid[:19].any()
    assert list(session.board.grid[19]) == [0, 0, 0, 0, 2, 2, 0, 0, 0, 0]


def test_three_lines_cross_level_threshold(chooser):
    session = GameSession(choose=chooser("I"))
    session.board = _board_with_left_well([17, 18, 19])
    session.score = 900
    _vertical_i_in_left_column(session)

    session.handle(Command.HARD_DROP)
    session.tick()

    assert session.score == 1200
    assert session.level == 2
    # Top cell of the I is all that remains, now on the bottom row.
    assert int(np.count_nonzero(session.board.grid)) == 1
    assert session.board.grid[19, 0] != 0


def test_level_can_jump_more_than_one(chooser):
    session = GameSession(choose=chooser("I"))
    session.board = _board_with_left_well([16, 17, 18, 19])
    session.score = 4900
    session.level = 5
    _vertical_i_in_left_column(session)

    session.handle(Command.HARD_DROP)
    session.tick()

    assert session.score == 4900 + 4 * 100 * 5
    assert session.level == 7
    assert session.board == Board.empty()


def test_pause_suppresses_moves_and_gravity(chooser):
    session = GameSession(choose=chooser("T"))
    session.handle(Command.TOGGLE_PAUSE)
    assert session.status == GameStatus.PAUSED
    before = session.piece

    session.handle(Command.MOVE_LEFT)
    session.handle(Command.ROTATE)
    session.handle(Command.HARD_DROP)
    for _ in range(5):
        session.tick()

    assert session.piece.same_as(before)
    assert session.board == Board.empty()

    session.handle(Command.TOGGLE_PAUSE)
    assert session.status == GameStatus.RUNNING
    session.handle(Command.MOVE_LEFT)
    assert session.piece.x == before.x - 1


def test_spawn_collision_ends_game_until_restart(chooser):
    session = GameSession(choose=chooser("O"))
    grid = np.zeros((20, 10), dtype=np.int8)
    grid[0:2, 3:7] = 1
    session.board = Board(grid)
    session.piece = Piece.from_kind("O").moved_to(0, 18)

    session.tick()

    assert session.game_over
    assert session.status == GameStatus.GAME_OVER
    board, piece = session.board, session.piece

    for command in (Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.SOFT_DROP,
                    Command.HARD_DROP, Command.ROTATE):
        session.handle(command)
    session.tick()
    assert session.board == board
    assert session.piece.same_as(piece)

    session.handle(Command.RESTART)
    assert not session.game_over
    assert session.status == GameStatus.RUNNING
    assert session.board == Board.empty()
    assert session.score == 0
    assert session.level == 1


def test_restart_from_pause(chooser):
    session = GameSession(choose=chooser("Z"))
    session.score = 700
    session.handle(Command.TOGGLE_PAUSE)
    session.handle(Command.RESTART)
    assert session.status == GameStatus.RUNNING
    assert session.score == 0


@pytest.mark.parametrize("bogus", ["jump", 99, -1, None, 2.5, [1]])
def test_unknown_commands_are_ignored(chooser, bogus):
    session = GameSession(choose=chooser("L"))
    before = session.piece
    session.handle(bogus)
    assert session.piece.same_as(before)
    assert session.status == GameStatus.RUNNING


def test_integer_command_values_are_accepted(chooser):
    session = GameSession(choose=chooser("L"))
    session.handle(int(Command.MOVE_LEFT))
    assert session.piece.x == 3


def test_snapshot_overlays_piece_on_board(chooser):
    session = GameSession(choose=chooser("O"))
    grid = np.zeros((20, 10), dtype=np.int8)
    grid[19, 0] = 7
    session.board = Board(grid)

    snapshot = session.snapshot()

    assert snapshot.grid[19, 0] == 7
    assert list(snapshot.grid[0, 4:6]) == [2, 2]
    assert list(snapshot.grid[1, 4:6]) == [2, 2]
    assert int(np.count_nonzero(snapshot.grid)) == 5
    assert not session.board.grid[0].any()
    assert not snapshot.grid.flags.writeable
    assert (snapshot.score, snapshot.level) == (0, 1)
    assert snapshot.status == GameStatus.RUNNING


def test_snapshot_skips_cells_above_the_board(chooser):
    session = GameSession(choose=chooser("T"))
    session.piece = session.piece.moved_to(4, -1)
    snapshot = session.snapshot()
    assert int(np.count_nonzero(snapshot.grid)) == 3


def test_snapshot_reports_game_over_over_pause(chooser):
    session = GameSession(choose=chooser("T"))
    session.paused = True
    session.game_over = True
    assert session.snapshot().status == GameStatus.GAME_OVER
