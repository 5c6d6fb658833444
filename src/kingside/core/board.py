"""Board - an 8x8 grid of tiles plus the side to move."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from kingside.core.enums import Color, PieceType
from kingside.core.errors import (
    EmptySourceError,
    IllegalDestinationError,
    InvalidPositionError,
    WrongTurnError,
)
from kingside.core.move_generator import MoveGenerator
from kingside.core.piece import Piece
from kingside.core.position import FILES, Position
from kingside.core.tile import Tile

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Outcome of a successfully applied move."""

    start: Position
    end: Position
    piece: Piece
    captured: Piece | None
    turn: Color  # side to move after the move
    king_captured: bool = False


def _tile_color(row: int, col: int) -> Color:
    # a1 is a dark square.
    return Color.BLACK if (row + col) % 2 == 0 else Color.WHITE


class Board:
    """Mutable chess board: tiles hold the pieces, ``turn`` says who moves.

    Pieces never reference the board; move generation receives the board
    explicitly through :class:`MoveGenerator`.
    """

    __slots__ = ("_grid", "turn")

    def __init__(self, turn: Color = Color.WHITE) -> None:
        self._grid: list[list[Tile]] = [
            [Tile(_tile_color(row, col)) for col in range(8)] for row in range(8)
        ]
        self.turn = turn

    # -- Element access -----------------------------------------------------

    def tile_at(self, pos: Position) -> Tile:
        if not isinstance(pos, Position):
            raise InvalidPositionError(f"Not a board position: {pos!r}")
        row, col = pos.index
        return self._grid[row][col]

    def __getitem__(self, pos: Position) -> Piece | None:
        return self.tile_at(pos).piece

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self.tile_at(pos).piece = piece

    def is_empty(self, pos: Position) -> bool:
        return self.tile_at(pos).is_empty()

    # -- Query helpers ------------------------------------------------------

    def occupant_color(self, pos: Position) -> Color | None:
        piece = self.tile_at(pos).piece
        return piece.color if piece is not None else None

    def same_color_occupant(self, pos: Position, color: Color) -> bool:
        return self.occupant_color(pos) == color

    def pieces(self) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares as ``(position, piece)``, rank-major from a1."""
        for row, tiles in enumerate(self._grid):
            for col, tile in enumerate(tiles):
                if tile.piece is not None:
                    yield Position.from_index(row, col), tile.piece

    def tiles(self) -> Iterator[tuple[Position, Tile]]:
        for row, tiles in enumerate(self._grid):
            for col, tile in enumerate(tiles):
                yield Position.from_index(row, col), tile

    def king_position(self, color: Color) -> Position | None:
        for pos, piece in self.pieces():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return pos
        return None

    def legal_destinations(self, pos: Position) -> set[Position]:
        """Pseudo-legal destinations of the piece on *pos*."""
        return MoveGenerator(self).generate_moves(pos)

    # -- Move application ---------------------------------------------------

    def move_piece(
        self,
        start: Position,
        end: Position,
        *,
        reset_on_game_over: bool = True,
    ) -> MoveRecord:
        """Validate and apply a move for the side to move.

        Raises :class:`EmptySourceError`, :class:`WrongTurnError` or
        :class:`IllegalDestinationError` without touching the board.  When a
        king is captured the board is reset to the starting arrangement
        (unless *reset_on_game_over* is false).
        """
        source = self.tile_at(start)
        target = self.tile_at(end)
        piece = source.piece
        if piece is None:
            raise EmptySourceError(start)
        if piece.color != self.turn:
            raise WrongTurnError(start, self.turn)
        if end not in self.legal_destinations(start):
            raise IllegalDestinationError(start, end)

        source.take()
        captured = target.place(piece)
        piece.mark_moved()
        king_captured = captured is not None and captured.piece_type == PieceType.KING
        self._next_turn()

        record = MoveRecord(
            start=start,
            end=end,
            piece=piece,
            captured=captured,
            turn=self.turn,
            king_captured=king_captured,
        )
        if king_captured and reset_on_game_over:
            self.reset()
        return record

    def _next_turn(self) -> None:
        self.turn = self.turn.opposite

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board(self.turn)
        for row in range(8):
            for col in range(8):
                piece = self._grid[row][col].piece
                if piece is not None:
                    b._grid[row][col].piece = piece.copy()
        return b

    def clear(self) -> None:
        for tiles in self._grid:
            for tile in tiles:
                tile.piece = None

    def reset(self) -> None:
        """Restore the starting arrangement in place, white to move."""
        self.clear()
        self._setup_initial()
        self.turn = Color.WHITE

    def _setup_initial(self) -> None:
        for col, pt in enumerate(BACK_RANK):
            self._grid[0][col].piece = Piece(Color.WHITE, pt)
            self._grid[1][col].piece = Piece(Color.WHITE, PieceType.PAWN)
            self._grid[6][col].piece = Piece(Color.BLACK, PieceType.PAWN)
            self._grid[7][col].piece = Piece(Color.BLACK, pt)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        b._setup_initial()
        return b

    # -- Rendering data -----------------------------------------------------

    def rows(self) -> dict[int, dict[str, str]]:
        """Per-rank ``{file: symbol}`` mapping, rank 8 first."""
        return {
            row + 1: {FILES[col]: self._grid[row][col].symbol for col in range(8)}
            for row in range(7, -1, -1)
        }

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.turn == other.turn and self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(7, -1, -1):
            cells = []
            for tile in self._grid[row]:
                cells.append(str(tile.piece) if tile.piece else ".")
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        rows.append(f"{self.turn.name} to move")
        return "\n".join(rows)
