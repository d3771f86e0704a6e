"""Rating → tuning parameters.

The table below is the only place that decides how strong a rating plays.
Every other component reads the resolved :class:`DifficultyProfile`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

IMPROVER_RATING = 1000
CASUAL_RATING = 1200
CLUB_RATING = 1400
ADVANCED_RATING = 1800
EXPERT_RATING = 2300
MASTER_RATING = 2800
GRANDMASTER_RATING = 3300

FORCED_MATE_THRESHOLD = 9000.0


@dataclass(frozen=True)
class SelectionPool:
    """Either a fraction of the ranked list or a fixed number of moves."""

    fraction: float | None = None
    count: int | None = None

    def size(self, available: int) -> int:
        if available <= 0:
            return 0
        if self.count is not None:
            return max(1, min(self.count, available))
        fraction = 1.0 if self.fraction is None else self.fraction
        return max(1, min(available, math.ceil(available * fraction)))


@dataclass(frozen=True)
class DifficultyProfile:
    rating: int
    tier: str
    blunder_rate: float
    hanging_tolerance: float
    mate_avoidance_depth: int
    max_positional_deficit: float
    selection_pool: SelectionPool
    best_move_probability: float
    lookahead_plies: int
    blunder_window: Tuple[float, float]

    @property
    def is_advanced(self) -> bool:
        return self.rating >= ADVANCED_RATING

    @property
    def is_master(self) -> bool:
        return self.rating >= MASTER_RATING

    @property
    def filters_moves(self) -> bool:
        return self.rating >= IMPROVER_RATING

    @property
    def takes_forced_mates(self) -> bool:
        return self.rating >= ADVANCED_RATING

    def pool_size(self, available: int) -> int:
        return self.selection_pool.size(available)

    def blunder_slice(self, available: int) -> Tuple[int, int]:
        """Index range ``[start, end)`` of the best-first list to blunder from."""
        if available <= 0:
            return 0, 0
        start_fraction, end_fraction = self.blunder_window
        start = min(int(available * start_fraction), available - 1)
        end = max(start + 1, min(available, math.ceil(available * end_fraction)))
        return start, end


_UNLIMITED = math.inf
# Tiers from ADVANCED_RATING up never blunder; their window only covers the best move.
_NO_BLUNDERS = (0.0, 0.0)

# (lower bound, tier, blunder rate, hanging tolerance, mate depth, max deficit,
#  pool, best-move probability, lookahead plies, blunder window)
_TIERS = (
    (0, "novice", 0.5, _UNLIMITED, 1, _UNLIMITED, SelectionPool(fraction=1.0), 0.2, 0, (0.6, 0.9)),
    (600, "beginner", 0.4, _UNLIMITED, 1, _UNLIMITED, SelectionPool(fraction=0.75), 0.3, 0, (0.55, 0.9)),
    (900, "improver", 0.3, 9.0, 1, _UNLIMITED, SelectionPool(fraction=0.5), 0.4, 1, (0.5, 0.9)),
    (1200, "casual", 0.2, 5.0, 1, _UNLIMITED, SelectionPool(count=6), 0.55, 1, (0.45, 0.9)),
    (1500, "club", 0.1, 3.0, 1, _UNLIMITED, SelectionPool(count=4), 0.7, 1, (0.4, 0.9)),
    (ADVANCED_RATING, "advanced", 0.0, 2.0, 2, 300.0, SelectionPool(count=3), 0.85, 2, _NO_BLUNDERS),
    (EXPERT_RATING, "expert", 0.0, 1.5, 2, 200.0, SelectionPool(count=2), 0.95, 2, _NO_BLUNDERS),
    (MASTER_RATING, "master", 0.0, 1.5, 3, 120.0, SelectionPool(count=1), 0.99, 3, _NO_BLUNDERS),
    (GRANDMASTER_RATING, "grandmaster", 0.0, 0.5, 3, 80.0, SelectionPool(count=1), 0.9999, 3, _NO_BLUNDERS),
)

TIER_BREAKPOINTS = tuple(row[0] for row in _TIERS)


def profile(rating: int) -> DifficultyProfile:
    """Resolve the difficulty profile for ``rating``."""
    if rating < 0:
        raise ValueError(f"Rating must be non-negative, got {rating}.")

    row = _TIERS[0]
    for candidate in _TIERS:
        if rating >= candidate[0]:
            row = candidate
        else:
            break

    _, tier, blunder, tolerance, mate_depth, deficit, pool, best, plies, window = row
    return DifficultyProfile(
        rating=int(rating),
        tier=tier,
        blunder_rate=blunder,
        hanging_tolerance=tolerance,
        mate_avoidance_depth=mate_depth,
        max_positional_deficit=deficit,
        selection_pool=pool,
        best_move_probability=best,
        lookahead_plies=plies,
        blunder_window=window,
    )


__all__ = [
    "ADVANCED_RATING",
    "CASUAL_RATING",
    "CLUB_RATING",
    "DifficultyProfile",
    "EXPERT_RATING",
    "FORCED_MATE_THRESHOLD",
    "GRANDMASTER_RATING",
    "IMPROVER_RATING",
    "MASTER_RATING",
    "SelectionPool",
    "TIER_BREAKPOINTS",
    "profile",
]
