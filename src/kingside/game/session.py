"""GameSession — the single shared board behind the request handlers.

Every public method runs inside one critical section of a non-reentrant
lock, so validation and mutation of a move are atomic with respect to other
requests and no reader ever observes a half-applied move.  Private helpers
assume the lock is already held.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from kingside.core.board import Board, MoveRecord
from kingside.core.enums import Color
from kingside.core.errors import MoveError, SessionCorruptedError
from kingside.core.position import Position, coerce_position
from kingside.core.rules import Rules
from kingside.game.snapshot import (
    BoardSnapshot,
    BoardUpdate,
    board_from_snapshot,
    board_to_snapshot,
    update_from_move,
)

_LOGGER = logging.getLogger(__name__)

UpdateCallback = Callable[[BoardUpdate], None]
GameOverCallback = Callable[[Color], None]  # winner
ResetCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Behaviour switches for a :class:`GameSession`."""

    reset_on_king_capture: bool = True
    report_check: bool = True


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event.

    Handlers run while the session lock is held and must not call back into
    the session. A handler that raises is logged and the remaining handlers
    still run.
    """

    on_update: list[UpdateCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


class GameSession:
    """Owns one :class:`Board` and serialises every access to it."""

    __slots__ = ("_board", "_lock", "_corrupted", "config", "events")

    def __init__(
        self,
        board: Board | None = None,
        config: SessionConfig | None = None,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._lock = threading.Lock()
        self._corrupted = False
        self.config = config if config is not None else SessionConfig()
        self.events = SessionEvents()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: BoardSnapshot,
        config: SessionConfig | None = None,
    ) -> GameSession:
        return cls(board_from_snapshot(snapshot), config)

    # ── Read paths ───────────────────────────────────────────────────────

    def board_snapshot(self) -> dict[int, dict[str, str]]:
        """Per-rank ``{file: symbol}`` mapping for rendering."""
        with self._lock:
            self._ensure_intact()
            return self._board.rows()

    def snapshot(self) -> BoardSnapshot:
        """Full state for the storage layer."""
        with self._lock:
            self._ensure_intact()
            return board_to_snapshot(self._board)

    def legal_destinations(self, start: Position | str) -> list[Position]:
        pos = coerce_position(start)
        with self._lock:
            self._ensure_intact()
            return sorted(self._board.legal_destinations(pos))

    def is_in_check(self) -> bool:
        with self._lock:
            self._ensure_intact()
            return Rules.is_in_check(self._board)

    def is_checkmate(self) -> bool:
        """Is the side to move checkmated?"""
        with self._lock:
            self._ensure_intact()
            return Rules.is_checkmate(self._board)

    def current_turn(self) -> Color:
        with self._lock:
            self._ensure_intact()
            return self._board.turn

    # ── Write paths ──────────────────────────────────────────────────────

    def move_piece(self, start: Position | str, end: Position | str) -> MoveRecord:
        """Validate and apply one move as a single atomic step.

        Rule violations propagate as :class:`MoveError` subclasses with the
        board untouched.
        """
        start_pos = coerce_position(start)
        end_pos = coerce_position(end)
        with self._lock:
            self._ensure_intact()
            mover = self._board.turn
            try:
                record = self._board.move_piece(
                    start_pos,
                    end_pos,
                    reset_on_game_over=self.config.reset_on_king_capture,
                )
            except MoveError as exc:
                _LOGGER.debug("Rejected move %s-%s: %s", start_pos, end_pos, exc)
                raise
            except Exception:
                self._corrupted = True
                _LOGGER.exception("Board left inconsistent by move %s-%s", start_pos, end_pos)
                raise

            _LOGGER.info("%s moved %s-%s", mover.name, start_pos, end_pos)
            self._publish(record, mover)
            return record

    def reset(self) -> None:
        """Restore the starting arrangement; also clears a corrupted state."""
        with self._lock:
            self._reset_locked()

    # ── Internal helpers (lock held) ─────────────────────────────────────

    def _ensure_intact(self) -> None:
        if self._corrupted:
            raise SessionCorruptedError(
                "Shared board is in an inconsistent state; reset the session"
            )

    def _reset_locked(self) -> None:
        self._board.reset()
        self._corrupted = False
        _LOGGER.info("Board reset to the starting position")
        self._notify(self.events.on_reset)

    def _publish(self, record: MoveRecord, mover: Color) -> None:
        # The move is committed; handler failures are logged, never raised.
        update = update_from_move(self._board, record)
        self._notify(self.events.on_update, update)

        if record.king_captured:
            _LOGGER.info("King captured, %s wins", mover.name)
            self._notify(self.events.on_game_over, mover)
            if self.config.reset_on_king_capture:
                self._notify(self.events.on_reset)
            return

        if self.config.report_check and Rules.is_in_check(self._board):
            _LOGGER.info("Check after %s-%s", record.start, record.end)

    @staticmethod
    def _notify(callbacks: list[Callable[..., None]], *args: object) -> None:
        for cb in callbacks:
            try:
                cb(*args)
            except Exception:
                _LOGGER.exception("Session event handler %r failed", cb)
