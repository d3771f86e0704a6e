#!/usr/bin/env python
from __future__ import annotations

import argparse
import random
import time

import chess

from botbrain.domain.engine import DecisionEngine, TIER_BREAKPOINTS

SAMPLE_FENS = (
    chess.STARTING_FEN,
    "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3",
    "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 4 8",
    "8/5pk1/6p1/8/3R4/6P1/5PK1/2r5 w - - 0 40",
)


def benchmark(*, ratings: list[int], iterations: int, seed: int) -> list[tuple[int, float]]:
    engine = DecisionEngine(rng=random.Random(seed))
    boards = [chess.Board(fen) for fen in SAMPLE_FENS]
    results: list[tuple[int, float]] = []
    for rating in ratings:
        t0 = time.perf_counter()
        for _ in range(iterations):
            for board in boards:
                engine.decide(board, rating)
        t1 = time.perf_counter()
        calls = max(iterations * len(boards), 1)
        results.append((rating, (t1 - t0) * 1000.0 / calls))
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Time decide() per rating tier on sample positions.")
    parser.add_argument("--ratings", type=int, nargs="*", default=list(TIER_BREAKPOINTS))
    parser.add_argument("--iterations", type=int, default=3)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    for rating, ms_per_call in benchmark(ratings=args.ratings, iterations=args.iterations, seed=args.seed):
        print(f"rating={rating:>5} ms/decision={ms_per_call:.1f}")


if __name__ == "__main__":
    main()
