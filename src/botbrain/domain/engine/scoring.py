from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import chess

from botbrain.domain.engine.difficulty import DifficultyProfile
from botbrain.domain.engine.evaluation import PositionEvaluator
from botbrain.domain.engine.rules import CandidateMove, PythonChessRules, RulesEngine


@dataclass(frozen=True)
class ScoredMove:
    move: CandidateMove
    score: float


class MoveScorer:
    """Pair every legal move with the evaluator's score of the resulting position."""

    def __init__(
        self,
        rules: RulesEngine | None = None,
        evaluator: PositionEvaluator | None = None,
    ) -> None:
        self._rules = rules or PythonChessRules()
        self._evaluator = evaluator or PositionEvaluator(self._rules)

    def score_all(
        self,
        position: chess.Board,
        profile: DifficultyProfile,
        moves: Sequence[CandidateMove] | None = None,
    ) -> List[ScoredMove]:
        candidates = list(moves) if moves is not None else self._rules.legal_moves(position)
        scored: List[ScoredMove] = []
        for candidate in candidates:
            after = self._rules.apply_move(position, candidate)
            scored.append(
                ScoredMove(
                    move=candidate,
                    score=self._evaluator.evaluate(position, candidate, after, profile),
                )
            )
        return scored


def rank(scored: Sequence[ScoredMove]) -> List[ScoredMove]:
    """Best-first ordering; ``sorted`` is stable so ties keep legal-move order."""
    return sorted(scored, key=lambda item: item.score, reverse=True)


__all__ = ["MoveScorer", "ScoredMove", "rank"]
