from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

import chess

from botbrain.domain.engine.difficulty import FORCED_MATE_THRESHOLD, DifficultyProfile, profile
from botbrain.domain.engine.errors import InvalidPositionError, NoLegalMovesError
from botbrain.domain.engine.evaluation import PositionEvaluator
from botbrain.domain.engine.mate_search import MateSearch
from botbrain.domain.engine.rules import CandidateMove, PythonChessRules, RulesEngine
from botbrain.domain.engine.scoring import MoveScorer, ScoredMove
from botbrain.domain.engine.selection import FilterOutcome, MoveSelector, Selection
from botbrain.domain.engine.threats import ThreatDetector
from botbrain.interface.telemetry.logging import get_logger

logger = get_logger("botbrain.engine")

_KING_STATUS = (
    chess.STATUS_NO_WHITE_KING
    | chess.STATUS_NO_BLACK_KING
    | chess.STATUS_TOO_MANY_KINGS
    | chess.STATUS_OPPOSITE_CHECK
)


@dataclass(frozen=True)
class Analysis:
    """Everything the engine computed for one position, before any random draw."""

    profile: DifficultyProfile
    scored: List[ScoredMove]
    filtered: FilterOutcome


class DecisionEngine:
    """Choose the move a bot of a given rating plays in a position."""

    def __init__(
        self,
        rules: RulesEngine | None = None,
        *,
        rng: random.Random | None = None,
        exhaustive_mate_search: bool = False,
    ) -> None:
        self._rules = rules or PythonChessRules()
        self._rng = rng
        threats = ThreatDetector(self._rules)
        self._scorer = MoveScorer(self._rules, PositionEvaluator(self._rules, threats))
        self._selector = MoveSelector(
            self._rules,
            threats=threats,
            mate_search=MateSearch(self._rules, exhaustive=exhaustive_mate_search),
        )

    def decide(
        self,
        position: chess.Board,
        rating: int,
        *,
        rng: random.Random | None = None,
    ) -> CandidateMove:
        return self.choose(position, rating, rng=rng).move

    def choose(
        self,
        position: chess.Board,
        rating: int,
        *,
        rng: random.Random | None = None,
    ) -> Selection:
        resolved = profile(rating)
        board = self._snapshot(position)
        moves = self._legal_moves(board)
        scored = self._scorer.score_all(board, resolved, moves)

        source = rng or self._rng or random.Random()
        selection = self._selector.choose(scored, board, resolved, source)

        if selection.fell_back:
            logger.warning(
                "filter_fallback",
                rating=resolved.rating,
                tier=resolved.tier,
                legal_moves=len(moves),
            )
        logger.debug(
            "decision_made",
            rating=resolved.rating,
            tier=resolved.tier,
            legal_moves=len(moves),
            candidates=selection.candidate_count,
            move=selection.move.uci(),
            san=selection.move.san,
            score=selection.score,
            branch=selection.branch.value,
        )
        return selection

    def analyse(self, position: chess.Board, rating: int) -> Analysis:
        resolved = profile(rating)
        board = self._snapshot(position)
        scored = self._scorer.score_all(board, resolved, self._legal_moves(board))
        if resolved.takes_forced_mates and any(item.score >= FORCED_MATE_THRESHOLD for item in scored):
            filtered = FilterOutcome(candidates=list(scored))
        else:
            filtered = self._selector.filter_candidates(scored, board, resolved)
        return Analysis(profile=resolved, scored=scored, filtered=filtered)

    def _snapshot(self, position: chess.Board) -> chess.Board:
        status = position.status()
        if status & _KING_STATUS:
            raise InvalidPositionError(
                f"Position {position.fen()} is not playable (status flags {int(status)})."
            )
        return self._rules.from_fen(self._rules.to_fen(position))

    def _legal_moves(self, board: chess.Board) -> List[CandidateMove]:
        moves = self._rules.legal_moves(board)
        if not moves:
            raise NoLegalMovesError(f"No legal moves in position {board.fen()}.")
        return moves


def decide(position: chess.Board, rating: int, rng: random.Random | None = None) -> CandidateMove:
    """Pick the move a bot rated ``rating`` plays in ``position``."""
    return DecisionEngine().decide(position, rating, rng=rng)


__all__ = ["Analysis", "DecisionEngine", "decide"]
