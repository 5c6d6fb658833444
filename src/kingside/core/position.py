"""Position value object and coordinate helpers.

Grid layout (rank-major, 0-indexed rows):
    a1=(0, 0), b1=(0, 1), ..., h1=(0, 7)
    a2=(1, 0), ...
    a8=(7, 0), ..., h8=(7, 7)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from kingside.core.errors import InvalidPositionError

FILES = "abcdefgh"
_FILE_INDEX: dict[str, int] = {file: idx for idx, file in enumerate(FILES)}
RANKS = range(1, 9)


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable algebraic coordinate, e.g. ``Position("e", 4)``."""

    file: str
    rank: int

    def __post_init__(self) -> None:
        if not isinstance(self.file, str) or len(self.file) != 1 or self.file not in FILES:
            raise InvalidPositionError(f"File was not allowed: {self.file!r}")
        if isinstance(self.rank, bool) or not isinstance(self.rank, int) or self.rank not in RANKS:
            raise InvalidPositionError(f"Rank was not allowed: {self.rank!r}")

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def parse(cls, text: str) -> Position:
        """Parse a square name, e.g. ``'e4'`` or ``'E4'``."""
        if not isinstance(text, str) or len(text) != 2:
            raise InvalidPositionError(f"Invalid square name: {text!r}")
        file, rank = text[0].lower(), text[1]
        if file not in FILES or rank not in "12345678":
            raise InvalidPositionError(f"Invalid square name: {text!r}")
        return cls(file, int(rank))

    @classmethod
    def from_index(cls, row: int, col: int) -> Position:
        """Inverse of :attr:`index`."""
        if not (0 <= row < 8 and 0 <= col < 8):
            raise InvalidPositionError(f"Grid index out of range: ({row}, {col})")
        return cls(FILES[col], row + 1)

    # ── Coordinates ──────────────────────────────────────────────────────

    @property
    def file_index(self) -> int:
        """File index 0–7 (a–h)."""
        return _FILE_INDEX[self.file]

    @property
    def rank_index(self) -> int:
        """Rank index 0–7 (1–8)."""
        return self.rank - 1

    @property
    def index(self) -> tuple[int, int]:
        """``(row, col)`` into the board grid."""
        return (self.rank - 1, _FILE_INDEX[self.file])

    def offset(self, d_file: int, d_rank: int) -> Position | None:
        """Neighbouring position, or ``None`` when it falls off the board."""
        col = self.file_index + d_file
        row = self.rank_index + d_rank
        if 0 <= row < 8 and 0 <= col < 8:
            return Position(FILES[col], row + 1)
        return None

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


def coerce_position(value: Position | str) -> Position:
    """Accept either a :class:`Position` or a square name."""
    if isinstance(value, Position):
        return value
    return Position.parse(value)


def all_positions() -> Iterator[Position]:
    """All 64 positions, rank-major from a1 to h8."""
    for row in range(8):
        for col in range(8):
            yield Position.from_index(row, col)
