"""Persistence boundary: board snapshots and incremental updates.

The storage layer loads a :class:`BoardSnapshot` at startup and applies a
:class:`BoardUpdate` after every accepted move.  Names mirror the stored
columns (``PAWN``, ``WHITE``, ...), so the models can be built straight from
row objects via ``from_attributes``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from kingside.core.board import Board, MoveRecord
from kingside.core.enums import Color, PieceType
from kingside.core.errors import SnapshotError
from kingside.core.piece import Piece
from kingside.core.position import Position

ColorName = Literal["WHITE", "BLACK"]
PieceKindName = Literal["PAWN", "KNIGHT", "BISHOP", "ROOK", "QUEEN", "KING"]


class PieceRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    kind: PieceKindName
    color: ColorName
    range: int | None = None


class SquareRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    file: str = Field(pattern=r"^[a-h]$")
    rank: int = Field(ge=1, le=8)
    tile_color: ColorName
    piece: PieceRecord | None = None

    @property
    def position(self) -> Position:
        return Position(self.file, self.rank)


class BoardSnapshot(BaseModel):
    """Full board state: every square plus the side to move."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    squares: list[SquareRecord]
    turn: ColorName = "WHITE"


class BoardUpdate(BaseModel):
    """Incremental change after one move: clear a square, set another, flip turn.

    When ``game_over`` is set the engine has already reset its board, and the
    storage layer should replace its state with a fresh snapshot instead.
    """

    model_config = ConfigDict(frozen=True)

    cleared: SquareRecord
    placed: SquareRecord
    captured: PieceRecord | None = None
    turn: ColorName
    game_over: bool = False


# ── Conversion helpers ──────────────────────────────────────────────────────


def piece_to_record(piece: Piece) -> PieceRecord:
    return PieceRecord(
        kind=piece.piece_type.name,
        color=piece.color.name,
        range=piece.range,
    )


def record_to_piece(record: PieceRecord) -> Piece:
    piece_type = PieceType[record.kind]
    # A pawn stored with range 1 has already left its starting square.
    has_moved = piece_type == PieceType.PAWN and record.range == 1
    piece = Piece(Color[record.color], piece_type, has_moved)
    if piece.range != record.range:
        raise SnapshotError(f"Range {record.range!r} is not valid for a {record.kind}")
    return piece


def _square_record(pos: Position, tile_color: Color, piece: Piece | None) -> SquareRecord:
    return SquareRecord(
        file=pos.file,
        rank=pos.rank,
        tile_color=tile_color.name,
        piece=piece_to_record(piece) if piece is not None else None,
    )


def board_to_snapshot(board: Board) -> BoardSnapshot:
    squares = [_square_record(pos, tile.color, tile.piece) for pos, tile in board.tiles()]
    return BoardSnapshot(squares=squares, turn=board.turn.name)


def board_from_snapshot(snapshot: BoardSnapshot) -> Board:
    """Rebuild a :class:`Board`; the stored tile shading is kept as-is."""
    seen: set[Position] = set()
    board = Board(Color[snapshot.turn])
    for square in snapshot.squares:
        pos = square.position
        if pos in seen:
            raise SnapshotError(f"Square {pos} appears more than once in snapshot")
        seen.add(pos)
        tile = board.tile_at(pos)
        tile.color = Color[square.tile_color]
        tile.piece = record_to_piece(square.piece) if square.piece is not None else None
    if len(seen) != 64:
        raise SnapshotError(f"Snapshot describes {len(seen)} squares, expected 64")
    return board


def update_from_move(board: Board, record: MoveRecord) -> BoardUpdate:
    """Describe *record* for the storage layer; *board* supplies tile shading."""
    return BoardUpdate(
        cleared=_square_record(record.start, board.tile_at(record.start).color, None),
        placed=_square_record(record.end, board.tile_at(record.end).color, record.piece),
        captured=piece_to_record(record.captured) if record.captured is not None else None,
        turn=record.turn.name,
        game_over=record.king_captured,
    )
