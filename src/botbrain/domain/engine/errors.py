from __future__ import annotations


class EngineError(RuntimeError):
    """Base class for decision-engine errors."""

    code: str = "engine_error"


class NoLegalMovesError(EngineError):
    code = "no_legal_moves"


class InvalidPositionError(EngineError):
    code = "invalid_position"


__all__ = ["EngineError", "InvalidPositionError", "NoLegalMovesError"]
