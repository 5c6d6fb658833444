"""Game management layer — the shared session and its persistence boundary.

Quick start::

    from kingside.game import GameSession

    session = GameSession()
    session.legal_destinations("e2")
    session.move_piece("e2", "e4")
    session.current_turn()  # Color.BLACK
"""

from kingside.game.session import GameSession, SessionConfig, SessionEvents
from kingside.game.snapshot import (
    BoardSnapshot,
    BoardUpdate,
    PieceRecord,
    SquareRecord,
    board_from_snapshot,
    board_to_snapshot,
)

__all__ = [
    "BoardSnapshot",
    "BoardUpdate",
    "GameSession",
    "PieceRecord",
    "SessionConfig",
    "SessionEvents",
    "SquareRecord",
    "board_from_snapshot",
    "board_to_snapshot",
]
