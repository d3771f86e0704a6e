from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

import chess

from botbrain.domain.engine.difficulty import FORCED_MATE_THRESHOLD, DifficultyProfile
from botbrain.domain.engine.mate_search import MateSearch
from botbrain.domain.engine.rules import CandidateMove, PythonChessRules, RulesEngine
from botbrain.domain.engine.scoring import ScoredMove, rank
from botbrain.domain.engine.threats import ThreatDetector


class SelectionBranch(str, Enum):
    forced_mate = "forced_mate"
    blunder = "blunder"
    best = "best"
    pool = "pool"


@dataclass(frozen=True)
class FilterOutcome:
    candidates: List[ScoredMove]
    fell_back: bool = False
    rejected: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Selection:
    move: CandidateMove
    branch: SelectionBranch
    score: float
    candidate_count: int
    fell_back: bool = False


class MoveSelector:
    """Turn scored moves into the move a bot of a given strength plays."""

    def __init__(
        self,
        rules: RulesEngine | None = None,
        *,
        threats: ThreatDetector | None = None,
        mate_search: MateSearch | None = None,
    ) -> None:
        self._rules = rules or PythonChessRules()
        self._threats = threats or ThreatDetector(self._rules)
        self._mate_search = mate_search or MateSearch(self._rules)

    def select(
        self,
        scored: Sequence[ScoredMove],
        position: chess.Board,
        profile: DifficultyProfile,
        rng: random.Random,
    ) -> CandidateMove:
        return self.choose(scored, position, profile, rng).move

    def choose(
        self,
        scored: Sequence[ScoredMove],
        position: chess.Board,
        profile: DifficultyProfile,
        rng: random.Random,
    ) -> Selection:
        if not scored:
            raise ValueError("Cannot select from an empty move list.")

        if profile.takes_forced_mates:
            for item in scored:
                if item.score >= FORCED_MATE_THRESHOLD:
                    return Selection(
                        move=item.move,
                        branch=SelectionBranch.forced_mate,
                        score=item.score,
                        candidate_count=len(scored),
                    )

        outcome = self.filter_candidates(scored, position, profile)
        ranked = rank(outcome.candidates)

        if rng.random() < profile.blunder_rate:
            start, end = profile.blunder_slice(len(ranked))
            choice = rng.choice(ranked[start:end])
            branch = SelectionBranch.blunder
        else:
            pool = ranked[: profile.pool_size(len(ranked))]
            if rng.random() < profile.best_move_probability:
                choice = pool[0]
                branch = SelectionBranch.best
            else:
                choice = rng.choice(pool)
                branch = SelectionBranch.pool

        return Selection(
            move=choice.move,
            branch=branch,
            score=choice.score,
            candidate_count=len(ranked),
            fell_back=outcome.fell_back,
        )

    def filter_candidates(
        self,
        scored: Sequence[ScoredMove],
        position: chess.Board,
        profile: DifficultyProfile,
    ) -> FilterOutcome:
        """Drop moves a bot of this strength would not play; never returns an empty list."""
        everything = list(scored)
        if not profile.filters_moves or not everything:
            return FilterOutcome(candidates=everything)

        rejected = {"hanging": 0, "deficit": 0, "mate": 0}
        best_score = max(item.score for item in everything)
        survivors: List[ScoredMove] = []

        # Cheap checks first so the mate search only runs on survivors.
        for item in everything:
            after = self._rules.apply_move(position, item.move)
            if self._threats.hanging_value(after, item.move.color) >= profile.hanging_tolerance:
                rejected["hanging"] += 1
                continue
            if profile.is_advanced and best_score - item.score > profile.max_positional_deficit:
                rejected["deficit"] += 1
                continue
            if self._mate_search.allows_forced_mate(after, profile.mate_avoidance_depth):
                rejected["mate"] += 1
                continue
            survivors.append(item)

        if not survivors:
            return FilterOutcome(candidates=everything, fell_back=True, rejected=rejected)
        return FilterOutcome(candidates=survivors, rejected=rejected)


__all__ = ["FilterOutcome", "MoveSelector", "Selection", "SelectionBranch"]
