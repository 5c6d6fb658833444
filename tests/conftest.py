"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from kingside.core.board import Board
from kingside.core.enums import Color
from kingside.core.piece import Piece
from kingside.core.position import Position
from kingside.game.session import GameSession

BoardFactory = Callable[..., Board]


@pytest.fixture
def board() -> Board:
    return Board.initial()


@pytest.fixture
def make_board() -> BoardFactory:
    """Build a board from ``{"e4": "P", "d5": "q"}`` style placements."""

    def _make(placement: dict[str, str], turn: Color = Color.WHITE) -> Board:
        b = Board(turn)
        for name, char in placement.items():
            b[Position.parse(name)] = Piece.from_char(char)
        return b

    return _make


@pytest.fixture
def session() -> GameSession:
    return GameSession()
