"""Rating-calibrated move decision engine."""

from .decision import Analysis, DecisionEngine, decide
from .difficulty import DifficultyProfile, SelectionPool, TIER_BREAKPOINTS, profile
from .errors import EngineError, InvalidPositionError, NoLegalMovesError
from .evaluation import CHECKMATE_SCORE, STALEMATE_SCORE, PositionEvaluator
from .mate_search import MateSearch
from .rules import CandidateMove, PythonChessRules, RulesEngine
from .scoring import MoveScorer, ScoredMove, rank
from .selection import FilterOutcome, MoveSelector, Selection, SelectionBranch
from .threats import HangingPiece, ThreatDetector, detect_hanging

__all__ = [
    "Analysis",
    "CHECKMATE_SCORE",
    "CandidateMove",
    "DecisionEngine",
    "DifficultyProfile",
    "EngineError",
    "FilterOutcome",
    "HangingPiece",
    "InvalidPositionError",
    "MateSearch",
    "MoveScorer",
    "MoveSelector",
    "NoLegalMovesError",
    "PositionEvaluator",
    "PythonChessRules",
    "RulesEngine",
    "STALEMATE_SCORE",
    "ScoredMove",
    "Selection",
    "SelectionBranch",
    "SelectionPool",
    "TIER_BREAKPOINTS",
    "ThreatDetector",
    "decide",
    "detect_hanging",
    "profile",
    "rank",
]
