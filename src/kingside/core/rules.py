"""High-level chess rules: check and checkmate."""

from __future__ import annotations

from kingside.core.board import Board
from kingside.core.enums import Color, PieceType
from kingside.core.move_generator import MoveGenerator


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board) -> bool:
        """Whether any king, of either color, can be captured by some piece.

        Every occupied tile is scanned regardless of whose turn it is, so this
        answers "is some king attacked" rather than "is the side to move in
        check".  Use :meth:`is_king_attacked` for the color-scoped question.
        """
        for pos in MoveGenerator(board).capture_targets():
            piece = board[pos]
            if piece is not None and piece.piece_type == PieceType.KING:
                return True
        return False

    @staticmethod
    def is_king_attacked(board: Board, color: Color) -> bool:
        """Is *color*'s king reachable by an opposite-color piece?"""
        king_pos = board.king_position(color)
        if king_pos is None:
            return False
        return MoveGenerator(board).is_square_attacked(king_pos, color.opposite)

    @staticmethod
    def is_checkmate(board: Board, color: Color | None = None) -> bool:
        """*color* (default: side to move) is attacked and has no escaping move.

        Every pseudo-legal move of every piece of *color* is tried on a copy
        of the board; a single move that leaves the king unattacked means the
        position is not mate.
        """
        side = board.turn if color is None else color
        if not Rules.is_king_attacked(board, side):
            return False

        gen = MoveGenerator(board)
        for start, piece in list(board.pieces()):
            if piece.color != side:
                continue
            for end in gen.generate_moves(start):
                trial = board.copy()
                trial.turn = side
                trial.move_piece(start, end, reset_on_game_over=False)
                if not Rules.is_king_attacked(trial, side):
                    return False
        return True
