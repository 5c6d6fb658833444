"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from kingside.core import Board, Position, Rules

    board = Board.initial()
    board.legal_destinations(Position.parse("e2"))  # {e3, e4}
    board.move_piece(Position.parse("e2"), Position.parse("e4"))
    Rules.is_in_check(board)
"""

from kingside.core.board import Board, MoveRecord
from kingside.core.enums import Color, PieceType
from kingside.core.errors import (
    ChessError,
    EmptySourceError,
    IllegalDestinationError,
    InvalidPositionError,
    MoveError,
    SessionCorruptedError,
    SnapshotError,
    WrongTurnError,
)
from kingside.core.move_generator import MoveGenerator
from kingside.core.piece import Piece
from kingside.core.position import Position, all_positions, coerce_position
from kingside.core.rules import Rules
from kingside.core.tile import Tile

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Errors
    "ChessError",
    "EmptySourceError",
    "IllegalDestinationError",
    "InvalidPositionError",
    "MoveError",
    "SessionCorruptedError",
    "SnapshotError",
    "WrongTurnError",
    # Domain objects
    "Board",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Position",
    "Rules",
    "Tile",
    # Helpers
    "all_positions",
    "coerce_position",
]
