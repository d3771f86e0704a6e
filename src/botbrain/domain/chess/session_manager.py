from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Protocol
from uuid import UUID, uuid4

import chess

from botbrain.domain.bots.roster import BotPersona
from botbrain.domain.bots.thinking import think_time_ms
from botbrain.domain.engine.decision import DecisionEngine
from botbrain.domain.engine.errors import NoLegalMovesError
from botbrain.interface.telemetry.logging import bind_trace, get_logger

logger = get_logger("botbrain.sessions")


class SessionStatus(str, Enum):
    in_progress = "in_progress"
    white_won = "white_won"
    black_won = "black_won"
    drawn = "drawn"


class PlayerColor(str, Enum):
    white = "white"
    black = "black"


class MoveActor(str, Enum):
    human = "human"
    bot = "bot"


@dataclass
class MoveRecord:
    san: str
    uci: str
    actor: MoveActor
    timestamp: datetime
    score: float | None = None
    branch: str | None = None
    think_time_ms: int | None = None


@dataclass
class GameSession:
    id: UUID
    status: SessionStatus
    player_color: PlayerColor
    bot_id: str
    bot_rating: int
    initial_fen: str
    current_fen: str
    moves: List[MoveRecord] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None
    undo_count: int = 0
    metadata: dict[str, str] = field(default_factory=dict)


class GameSessionRepository(Protocol):
    """Storage contract for session entities."""

    def create(self, session: GameSession) -> GameSession:
        ...

    def get(self, session_id: UUID) -> GameSession | None:
        ...

    def save(self, session: GameSession) -> GameSession:
        ...


class SessionError(RuntimeError):
    """Base class for session-related domain errors."""

    code: str = "session_error"


class SessionNotFoundError(SessionError):
    code = "session_not_found"


class IllegalMoveError(SessionError):
    code = "illegal_move"


class SessionCompletedError(SessionError):
    code = "session_completed"


class UndoNotAvailableError(SessionError):
    code = "nothing_to_undo"


class SessionManager:
    """Coordinate human-vs-bot games, applying human moves and bot replies."""

    def __init__(
        self,
        repository: GameSessionRepository,
        engine: DecisionEngine,
        *,
        rng: random.Random | None = None,
        think_time_range: tuple[int, int] = (400, 1800),
    ) -> None:
        self._repository = repository
        self._engine = engine
        self._rng = rng or random.Random()
        self._think_time_range = think_time_range

    def create_session(
        self,
        *,
        player_color: PlayerColor,
        bot: BotPersona,
        initial_fen: str | None = None,
    ) -> GameSession:
        board = chess.Board(initial_fen) if initial_fen else chess.Board()
        now = datetime.now(timezone.utc)
        session = GameSession(
            id=uuid4(),
            status=SessionStatus.in_progress,
            player_color=player_color,
            bot_id=bot.id,
            bot_rating=bot.rating,
            initial_fen=board.fen(),
            current_fen=board.fen(),
            moves=[],
            started_at=now,
            updated_at=now,
            metadata={"bot_name": bot.name, "bot_category": bot.category.value},
        )

        if board.turn != self._human_turn(session) and not board.is_game_over(claim_draw=True):
            self._perform_bot_move(session, board)

        self._sync_from_board(session, board)
        logger.info(
            "session_created",
            session_id=str(session.id),
            player_color=player_color.value,
            bot_id=bot.id,
            bot_rating=bot.rating,
        )
        return self._repository.create(session)

    def get_session(self, session_id: UUID) -> GameSession:
        session = self._repository.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found.")
        return session

    def submit_move(self, session_id: UUID, uci: str) -> GameSession:
        session = self.get_session(session_id)
        if session.status is not SessionStatus.in_progress:
            raise SessionCompletedError(f"Session {session_id} already completed.")

        board = self._build_board(session)
        expected_color = self._human_turn(session)
        if board.turn != expected_color:
            raise IllegalMoveError("It is not the human player's turn.")

        try:
            move = chess.Move.from_uci(uci)
        except ValueError as exc:
            raise IllegalMoveError(f"Invalid UCI string: {uci}") from exc

        if move not in board.legal_moves:
            raise IllegalMoveError(f"Move {uci} is not legal in the current position.")

        now = datetime.now(timezone.utc)
        san = board.san(move)
        board.push(move)
        session.moves.append(
            MoveRecord(
                san=san,
                uci=uci,
                actor=MoveActor.human,
                timestamp=now,
            )
        )
        session.updated_at = now
        self._sync_from_board(session, board)

        if session.status is SessionStatus.in_progress and board.turn != expected_color:
            self._perform_bot_move(session, board)

        return self._repository.save(session)

    def undo_last(self, session_id: UUID) -> GameSession:
        session = self.get_session(session_id)
        if not session.moves:
            raise UndoNotAvailableError("No moves to undo.")

        expected_turn = self._human_turn(session)

        # Remove moves until it is once again the human player's turn.
        while session.moves:
            session.moves.pop()
            board = self._build_board(session)
            if board.turn == expected_turn or not session.moves:
                break

        session.undo_count += 1
        session.ended_at = None
        session.status = SessionStatus.in_progress
        session.updated_at = datetime.now(timezone.utc)

        board = self._build_board(session)
        self._sync_from_board(session, board)
        return self._repository.save(session)

    def resign(self, session_id: UUID) -> GameSession:
        session = self.get_session(session_id)
        if session.status is not SessionStatus.in_progress:
            return session

        now = datetime.now(timezone.utc)
        session.status = (
            SessionStatus.black_won if session.player_color is PlayerColor.white else SessionStatus.white_won
        )
        session.ended_at = now
        session.updated_at = now
        return self._repository.save(session)

    def _perform_bot_move(self, session: GameSession, board: chess.Board) -> None:
        try:
            selection = self._engine.choose(board, session.bot_rating, rng=self._rng)
        except NoLegalMovesError:
            self._sync_from_board(session, board)
            return

        low, high = self._think_time_range
        delay = think_time_ms(
            session.bot_rating,
            board.legal_moves.count(),
            self._rng,
            min_ms=low,
            max_ms=high,
        )

        now = datetime.now(timezone.utc)
        move = selection.move
        board.push(move.move)
        session.moves.append(
            MoveRecord(
                san=move.san or move.uci(),
                uci=move.uci(),
                actor=MoveActor.bot,
                timestamp=now,
                score=selection.score,
                branch=selection.branch.value,
                think_time_ms=delay,
            )
        )
        session.updated_at = now
        self._sync_from_board(session, board)

        log = bind_trace(logger, str(session.id), bot_id=session.bot_id)
        log.info(
            "bot_moved",
            move=move.uci(),
            branch=selection.branch.value,
            score=selection.score,
            think_time_ms=delay,
            status=session.status.value,
        )

    def _sync_from_board(self, session: GameSession, board: chess.Board) -> None:
        session.current_fen = board.fen()
        outcome = board.outcome(claim_draw=True)
        if outcome is None:
            session.status = SessionStatus.in_progress
            session.ended_at = None
            return

        if outcome.winner is None:
            session.status = SessionStatus.drawn
        elif outcome.winner == chess.WHITE:
            session.status = SessionStatus.white_won
        else:
            session.status = SessionStatus.black_won

        session.ended_at = session.ended_at or datetime.now(timezone.utc)

    def _build_board(self, session: GameSession) -> chess.Board:
        board = chess.Board(session.initial_fen)
        for move in session.moves:
            board.push(chess.Move.from_uci(move.uci))
        return board

    def _human_turn(self, session: GameSession) -> chess.Color:
        return chess.WHITE if session.player_color is PlayerColor.white else chess.BLACK


__all__ = [
    "GameSession",
    "GameSessionRepository",
    "IllegalMoveError",
    "MoveActor",
    "MoveRecord",
    "PlayerColor",
    "SessionCompletedError",
    "SessionError",
    "SessionManager",
    "SessionNotFoundError",
    "SessionStatus",
    "UndoNotAvailableError",
]
