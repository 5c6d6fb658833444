"""Tile - one square of the board."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.enums import Color
from kingside.core.piece import Piece

WHITE_TILE = "□"
BLACK_TILE = "■"


@dataclass(slots=True)
class Tile:
    """Fixed checkerboard shading plus an optional occupying piece."""

    color: Color
    piece: Piece | None = None

    def is_empty(self) -> bool:
        return self.piece is None

    def place(self, piece: Piece) -> Piece | None:
        """Put *piece* here and return whatever was standing on the tile."""
        previous = self.piece
        self.piece = piece
        return previous

    def take(self) -> Piece | None:
        """Empty the tile, returning its former occupant."""
        piece = self.piece
        self.piece = None
        return piece

    @property
    def symbol(self) -> str:
        if self.piece is not None:
            return self.piece.symbol
        return WHITE_TILE if self.color == Color.WHITE else BLACK_TILE
