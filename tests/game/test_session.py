"""Tests for GameSession — the locked, shared board."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from kingside.core.board import Board
from kingside.core.enums import Color
from kingside.core.errors import (
    EmptySourceError,
    IllegalDestinationError,
    InvalidPositionError,
    MoveError,
    SessionCorruptedError,
    WrongTurnError,
)
from kingside.core.piece import Piece
from kingside.core.position import Position
from kingside.core.tile import BLACK_TILE, WHITE_TILE
from kingside.game.session import GameSession, SessionConfig
from kingside.game.snapshot import BoardUpdate

P = Position.parse


def _king_hunt_board() -> Board:
    board = Board()
    for name, char in {"a1": "R", "e1": "K", "a8": "k"}.items():
        board[P(name)] = Piece.from_char(char)
    return board


class TestQueries:
    def test_white_starts(self, session: GameSession) -> None:
        assert session.current_turn() == Color.WHITE

    def test_legal_destinations_sorted_list(self, session: GameSession) -> None:
        assert session.legal_destinations("b1") == [P("a3"), P("c3")]
        assert session.legal_destinations(P("e2")) == [P("e3"), P("e4")]

    def test_legal_destinations_empty_square(self, session: GameSession) -> None:
        assert session.legal_destinations("e5") == []

    def test_legal_destinations_malformed(self, session: GameSession) -> None:
        with pytest.raises(InvalidPositionError):
            session.legal_destinations("z0")

    def test_board_snapshot(self, session: GameSession) -> None:
        rows = session.board_snapshot()
        assert rows[2]["e"] == "♙"
        assert rows[7]["e"] == "♟"
        assert rows[5]["a"] in (WHITE_TILE, BLACK_TILE)

    def test_check_queries(self, session: GameSession) -> None:
        assert not session.is_in_check()
        assert not session.is_checkmate()


class TestMovePiece:
    def test_failing_handler_keeps_move_applied(self, session: GameSession) -> None:
        seen: list[BoardUpdate] = []

        def broken_store(update: BoardUpdate) -> None:
            raise OSError("storage unavailable")

        session.events.on_update.extend([broken_store, seen.append])
        record = session.move_piece("e2", "e4")
        assert record.end == P("e4")
        assert len(seen) == 1
        assert session.current_turn() == Color.BLACK

    def test_move_flips_turn_once(self, session: GameSession) -> None:
        session.move_piece("e2", "e4")
        assert session.current_turn() == Color.BLACK

    def test_empty_source_leaves_state(self, session: GameSession) -> None:
        with pytest.raises(EmptySourceError):
            session.move_piece("e4", "e5")
        assert session.current_turn() == Color.WHITE
        assert session.snapshot() == GameSession().snapshot()

    def test_wrong_turn_leaves_state(self, session: GameSession) -> None:
        with pytest.raises(WrongTurnError):
            session.move_piece("e7", "e5")
        assert session.current_turn() == Color.WHITE

    def test_illegal_destination(self, session: GameSession) -> None:
        with pytest.raises(IllegalDestinationError):
            session.move_piece("b1", "b3")

    def test_fools_mate_sequence(self, session: GameSession) -> None:
        session.move_piece("f2", "f3")
        session.move_piece("e7", "e5")
        session.move_piece("g2", "g4")
        session.move_piece("d8", "h4")
        assert session.is_in_check()
        assert session.is_checkmate()

    def test_update_event(self, session: GameSession) -> None:
        updates: list[BoardUpdate] = []
        session.events.on_update.append(updates.append)
        session.move_piece("g1", "f3")
        assert len(updates) == 1
        update = updates[0]
        assert (update.cleared.file, update.cleared.rank) == ("g", 1)
        assert update.cleared.piece is None
        assert (update.placed.file, update.placed.rank) == ("f", 3)
        assert update.placed.piece is not None
        assert update.placed.piece.kind == "KNIGHT"
        assert update.turn == "BLACK"
        assert not update.game_over

    def test_no_update_on_rejected_move(self, session: GameSession) -> None:
        updates: list[BoardUpdate] = []
        session.events.on_update.append(updates.append)
        with pytest.raises(MoveError):
            session.move_piece("e2", "e5")
        assert updates == []


class TestKingCapture:
    def test_resets_and_notifies(self) -> None:
        session = GameSession(_king_hunt_board())
        winners: list[Color] = []
        resets: list[bool] = []
        updates: list[BoardUpdate] = []
        session.events.on_game_over.append(winners.append)
        session.events.on_reset.append(lambda: resets.append(True))
        session.events.on_update.append(updates.append)

        record = session.move_piece("a1", "a8")

        assert record.king_captured
        assert winners == [Color.WHITE]
        assert resets == [True]
        assert updates[0].game_over
        assert updates[0].captured is not None and updates[0].captured.kind == "KING"
        assert session.current_turn() == Color.WHITE
        assert session.snapshot() == GameSession().snapshot()

    def test_failing_update_handler_does_not_block_game_over(self) -> None:
        session = GameSession(_king_hunt_board())
        winners: list[Color] = []
        resets: list[bool] = []

        def broken_store(update: BoardUpdate) -> None:
            raise OSError("storage unavailable")

        session.events.on_update.append(broken_store)
        session.events.on_game_over.append(winners.append)
        session.events.on_reset.append(lambda: resets.append(True))

        record = session.move_piece("a1", "a8")

        assert record.king_captured
        assert winners == [Color.WHITE]
        assert resets == [True]
        assert session.current_turn() == Color.WHITE

    def test_reset_disabled_by_config(self) -> None:
        session = GameSession(
            _king_hunt_board(), SessionConfig(reset_on_king_capture=False)
        )
        resets: list[bool] = []
        session.events.on_reset.append(lambda: resets.append(True))
        session.move_piece("a1", "a8")
        assert resets == []
        assert session.current_turn() == Color.BLACK
        assert session.legal_destinations("a8") != []


class TestReset:
    def test_reset_restores_start(self, session: GameSession) -> None:
        session.move_piece("e2", "e4")
        session.reset()
        assert session.current_turn() == Color.WHITE
        assert session.legal_destinations("e2") == [P("e3"), P("e4")]

    def test_reset_event(self, session: GameSession) -> None:
        fired: list[bool] = []
        session.events.on_reset.append(lambda: fired.append(True))
        session.reset()
        assert fired == [True]


class TestCorruption:
    def test_unexpected_failure_poisons_session(
        self, session: GameSession, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(self: Board, *args: object, **kwargs: object) -> None:
            raise RuntimeError("tile vanished")

        monkeypatch.setattr(Board, "move_piece", boom)
        with pytest.raises(RuntimeError, match="tile vanished"):
            session.move_piece("e2", "e4")
        monkeypatch.undo()

        with pytest.raises(SessionCorruptedError):
            session.current_turn()
        with pytest.raises(SessionCorruptedError):
            session.move_piece("e2", "e4")

    def test_reset_recovers(
        self, session: GameSession, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(self: Board, *args: object, **kwargs: object) -> None:
            raise RuntimeError("tile vanished")

        monkeypatch.setattr(Board, "move_piece", boom)
        with pytest.raises(RuntimeError):
            session.move_piece("e2", "e4")
        monkeypatch.undo()

        session.reset()
        session.move_piece("e2", "e4")
        assert session.current_turn() == Color.BLACK

    def test_rule_errors_do_not_poison(self, session: GameSession) -> None:
        with pytest.raises(EmptySourceError):
            session.move_piece("e5", "e6")
        assert session.current_turn() == Color.WHITE


class TestConcurrency:
    def test_same_move_applied_once(self, session: GameSession) -> None:
        barrier = threading.Barrier(16)

        def attempt() -> bool:
            barrier.wait()
            try:
                session.move_piece("e2", "e4")
            except MoveError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: attempt(), range(16)))

        assert results.count(True) == 1
        assert session.current_turn() == Color.BLACK

    @pytest.mark.slow
    def test_readers_never_see_half_moves(self, session: GameSession) -> None:
        cycle = [("g1", "f3"), ("g8", "f6"), ("f3", "g1"), ("f6", "g8")]
        glyphs = {WHITE_TILE, BLACK_TILE}
        stop = threading.Event()
        counts: list[int] = []

        def mover() -> None:
            try:
                for _ in range(50):
                    for start, end in cycle:
                        session.move_piece(start, end)
            finally:
                stop.set()

        def reader() -> None:
            while True:
                rows = session.board_snapshot()
                counts.append(
                    sum(1 for row in rows.values() for s in row.values() if s not in glyphs)
                )
                if stop.is_set():
                    break

        threads = [
            threading.Thread(target=mover, daemon=True),
            threading.Thread(target=reader, daemon=True),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert counts
        assert set(counts) == {32}
