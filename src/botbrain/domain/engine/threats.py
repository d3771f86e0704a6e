from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import chess

from botbrain.domain.engine.rules import PythonChessRules, RulesEngine

PIECE_VALUES: Dict[chess.PieceType, int] = {
    chess.PAWN: 1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK: 5,
    chess.QUEEN: 9,
    chess.KING: 0,
}


def piece_value(piece_type: chess.PieceType | None) -> int:
    if piece_type is None:
        return 0
    return PIECE_VALUES.get(piece_type, 0)


@dataclass(frozen=True)
class HangingPiece:
    square: chess.Square
    piece_type: chess.PieceType
    material_value: int


class ThreatDetector:
    """List pieces that are attacked by the enemy and defended by nobody."""

    def __init__(self, rules: RulesEngine | None = None) -> None:
        self._rules = rules or PythonChessRules()

    def detect_hanging(self, position: chess.Board, color: chess.Color) -> List[HangingPiece]:
        hanging: List[HangingPiece] = []
        for square, piece in position.piece_map().items():
            if piece.color != color or piece.piece_type == chess.KING:
                continue
            if not self._rules.attackers(position, square, not color):
                continue
            if self._rules.attackers(position, square, color):
                continue
            hanging.append(
                HangingPiece(
                    square=square,
                    piece_type=piece.piece_type,
                    material_value=piece_value(piece.piece_type),
                )
            )
        hanging.sort(key=lambda item: item.square)
        return hanging

    def hanging_value(self, position: chess.Board, color: chess.Color) -> int:
        return sum(item.material_value for item in self.detect_hanging(position, color))


def detect_hanging(
    position: chess.Board,
    color: chess.Color,
    rules: RulesEngine | None = None,
) -> List[HangingPiece]:
    """Module-level shortcut around ``ThreatDetector.detect_hanging``."""
    return ThreatDetector(rules).detect_hanging(position, color)


__all__ = ["HangingPiece", "PIECE_VALUES", "ThreatDetector", "detect_hanging", "piece_value"]
