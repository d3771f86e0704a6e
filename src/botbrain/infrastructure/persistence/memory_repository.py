from __future__ import annotations

import copy
from threading import Lock
from typing import Dict
from uuid import UUID

from botbrain.domain.chess import GameSession, GameSessionRepository


class InMemoryGameSessionRepository(GameSessionRepository):
    """Process-local session store; entities are copied in and out."""

    def __init__(self) -> None:
        self._sessions: Dict[UUID, GameSession] = {}
        self._lock = Lock()

    def create(self, session_entity: GameSession) -> GameSession:
        with self._lock:
            if session_entity.id in self._sessions:
                raise ValueError(f"Session {session_entity.id} already exists.")
            self._sessions[session_entity.id] = copy.deepcopy(session_entity)
        return copy.deepcopy(session_entity)

    def get(self, session_id: UUID) -> GameSession | None:
        with self._lock:
            record = self._sessions.get(session_id)
            return copy.deepcopy(record) if record else None

    def save(self, session_entity: GameSession) -> GameSession:
        with self._lock:
            if session_entity.id not in self._sessions:
                raise ValueError(f"Session {session_entity.id} not found.")
            self._sessions[session_entity.id] = copy.deepcopy(session_entity)
        return copy.deepcopy(session_entity)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["InMemoryGameSessionRepository"]
