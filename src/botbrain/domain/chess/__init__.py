from .session_manager import (
    GameSession,
    GameSessionRepository,
    MoveActor,
    MoveRecord,
    PlayerColor,
    SessionManager,
    SessionStatus,
    IllegalMoveError,
    SessionError,
    SessionNotFoundError,
    SessionCompletedError,
    UndoNotAvailableError,
)

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
