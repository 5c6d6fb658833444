"""Pseudo-legal move generation and attack scanning."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from kingside.core.enums import Color, PieceType
from kingside.core.piece import Piece
from kingside.core.position import Position, all_positions

if TYPE_CHECKING:
    from kingside.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Forward rank direction per color.
_PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for pos in all_positions():
        moves: list[Position] = []
        for df, dr in offsets:
            to_pos = pos.offset(df, dr)
            if to_pos is not None:
                moves.append(to_pos)
        targets[pos] = tuple(moves)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for pos in all_positions():
        square_rays: list[tuple[Position, ...]] = []
        for df, dr in directions:
            ray: list[Position] = []
            to_pos = pos.offset(df, dr)
            while to_pos is not None:
                ray.append(to_pos)
                to_pos = to_pos.offset(df, dr)
            square_rays.append(tuple(ray))
        rays_per_square[pos] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


class MoveGenerator:
    """Generates pseudo-legal destinations against a :class:`Board`.

    Destinations never include squares held by the mover's own color, but
    moves that leave the mover's king attacked are not filtered out.  The
    generator only reads the board.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def generate_moves(self, pos: Position) -> set[Position]:
        """Destinations of the piece standing on *pos* (empty if none)."""
        piece = self._board[pos]
        moves: set[Position] = set()
        if piece is None:
            return moves
        _DISPATCH[piece.piece_type](self, pos, piece, moves)
        return moves

    def capture_targets(self) -> set[Position]:
        """Occupied squares that some piece of either color can move onto."""
        board = self._board
        targets: set[Position] = set()
        for pos, _piece in board.pieces():
            for to_pos in self.generate_moves(pos):
                if board[to_pos] is not None:
                    targets.add(to_pos)
        return targets

    def attacked_by(self, color: Color) -> set[Position]:
        """Every square a piece of *color* could move onto."""
        squares: set[Position] = set()
        for pos, piece in self._board.pieces():
            if piece.color == color:
                squares |= self.generate_moves(pos)
        return squares

    def is_square_attacked(self, pos: Position, by_color: Color) -> bool:
        """Can any piece of *by_color* move onto *pos*?"""
        for from_pos, piece in self._board.pieces():
            if piece.color == by_color and pos in self.generate_moves(from_pos):
                return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, pos: Position, piece: Piece, moves: set[Position]) -> None:
        board = self._board
        direction = _PAWN_DIRECTION[piece.color]

        # Forward steps stop at the first occupied square; pawns never capture ahead.
        for step in range(1, (piece.range or 1) + 1):
            to_pos = pos.offset(0, direction * step)
            if to_pos is None or board[to_pos] is not None:
                break
            moves.add(to_pos)

        for d_file in (-1, 1):
            cap_pos = pos.offset(d_file, direction)
            if cap_pos is None:
                continue
            target = board[cap_pos]
            if target is not None and target.color != piece.color:
                moves.add(cap_pos)

    def _gen_knight(self, pos: Position, piece: Piece, moves: set[Position]) -> None:
        self._gen_leaper(_KNIGHT_TARGETS[pos], piece.color, moves)

    def _gen_bishop(self, pos: Position, piece: Piece, moves: set[Position]) -> None:
        self._gen_sliding(_BISHOP_RAYS[pos], piece, moves)

    def _gen_rook(self, pos: Position, piece: Piece, moves: set[Position]) -> None:
        self._gen_sliding(_ROOK_RAYS[pos], piece, moves)

    def _gen_queen(self, pos: Position, piece: Piece, moves: set[Position]) -> None:
        self._gen_sliding(_QUEEN_RAYS[pos], piece, moves)

    def _gen_king(self, pos: Position, piece: Piece, moves: set[Position]) -> None:
        self._gen_leaper(_KING_TARGETS[pos], piece.color, moves)

    def _gen_leaper(
        self,
        targets: tuple[Position, ...],
        color: Color,
        moves: set[Position],
    ) -> None:
        board = self._board
        for to_pos in targets:
            target = board[to_pos]
            if target is None or target.color != color:
                moves.add(to_pos)

    def _gen_sliding(
        self,
        rays: tuple[tuple[Position, ...], ...],
        piece: Piece,
        moves: set[Position],
    ) -> None:
        board = self._board
        reach = piece.range or 8
        for ray in rays:
            for to_pos in ray[:reach]:
                target = board[to_pos]
                if target is None:
                    moves.add(to_pos)
                    continue
                if target.color != piece.color:
                    moves.add(to_pos)
                break


_Generator = Callable[[MoveGenerator, Position, Piece, set[Position]], None]

_DISPATCH: dict[PieceType, _Generator] = {
    PieceType.PAWN: MoveGenerator._gen_pawn,
    PieceType.KNIGHT: MoveGenerator._gen_knight,
    PieceType.BISHOP: MoveGenerator._gen_bishop,
    PieceType.ROOK: MoveGenerator._gen_rook,
    PieceType.QUEEN: MoveGenerator._gen_queen,
    PieceType.KING: MoveGenerator._gen_king,
}
