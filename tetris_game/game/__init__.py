"""Game logic: board, pieces, and the game session."""

from tetris_game.game.pieces import PIECE_KINDS, TETROMINOES, Piece, spawn_piece
from tetris_game.game.board import Board
from tetris_game.game.tetris import Command, GameSession, GameSnapshot, GameStatus

__all__ = [
    "PIECE_KINDS",
    "TETROMINOES",
    "Piece",
    "spawn_piece",
    "Board",
    "Command",
    "GameSession",
    "GameSnapshot",
    "GameStatus",
]
