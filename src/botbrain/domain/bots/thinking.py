from __future__ import annotations

import random

RATING_CEILING = 3500
BUSY_POSITION_MOVES = 40
JITTER = 0.15


def think_time_ms(
    rating: int,
    legal_move_count: int,
    rng: random.Random,
    *,
    min_ms: int = 400,
    max_ms: int = 1800,
) -> int:
    """Presentation delay before showing a bot move.

    Stronger bots and busier positions take longer. The engine itself never
    waits; callers sleep on this value if they want to.
    """
    if max_ms < min_ms:
        raise ValueError("max_ms must be greater than or equal to min_ms.")

    strength = min(max(rating, 0), RATING_CEILING) / RATING_CEILING
    busyness = min(max(legal_move_count, 0), BUSY_POSITION_MOVES) / BUSY_POSITION_MOVES
    base = min_ms + (max_ms - min_ms) * (0.6 * strength + 0.4 * busyness)
    jittered = base * rng.uniform(1.0 - JITTER, 1.0 + JITTER)
    return int(round(min(max(jittered, min_ms), max_ms)))


__all__ = ["think_time_ms"]
