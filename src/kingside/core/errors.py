"""Exception hierarchy for rule violations and engine faults."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kingside.core.enums import Color
    from kingside.core.position import Position


class ChessError(Exception):
    """Base class for every recoverable game-logic error."""


class InvalidPositionError(ChessError, ValueError):
    """Rank/file out of bounds or malformed square text."""


class MoveError(ChessError):
    """A move request was rejected; the board was not touched."""


class EmptySourceError(MoveError):
    def __init__(self, start: Position) -> None:
        super().__init__(f"There is no piece at {start}")
        self.start = start


class WrongTurnError(MoveError):
    def __init__(self, start: Position, turn: Color) -> None:
        super().__init__(f"{turn.name} to play, piece at {start} belongs to {turn.opposite.name}")
        self.start = start
        self.turn = turn


class IllegalDestinationError(MoveError):
    def __init__(self, start: Position, end: Position) -> None:
        super().__init__(f"Illegal move, piece at {start} cannot move to {end}")
        self.start = start
        self.end = end


class SnapshotError(ChessError):
    """A persisted board snapshot does not describe a full board."""


class SessionCorruptedError(RuntimeError):
    """The shared board was left half-mutated by an unexpected failure.

    This is a process-level fault rather than a rule violation, so it is not a
    :class:`ChessError` and transport layers should surface it as a hard
    failure of the request.
    """
