from __future__ import annotations

from typing import Iterable, List

import chess

from botbrain.domain.engine.rules import PythonChessRules, RulesEngine

MATE_IN_TWO_SAMPLE = 10
MATE_IN_THREE_SAMPLE = 8


class MateSearch:
    """Fixed-depth forced-mate predicates for the side to move.

    Mate in one is exhaustive. Deeper searches try only the first
    ``MATE_IN_TWO_SAMPLE`` / ``MATE_IN_THREE_SAMPLE`` attacking moves at every
    level but answer each with every defence, so they can miss a mate but
    never report one that a defence escapes. Setting
    ``exhaustive`` removes the caps.
    """

    def __init__(self, rules: RulesEngine | None = None, *, exhaustive: bool = False) -> None:
        self._rules = rules or PythonChessRules()
        self._exhaustive = exhaustive

    @property
    def exhaustive(self) -> bool:
        return self._exhaustive

    def mates_in_one(self, position: chess.Board) -> bool:
        for move in self._rules.legal_replies(position):
            # gives_check is far cheaper than pushing every move.
            if not self._rules.gives_check(position, move):
                continue
            if self._rules.is_checkmate(self._rules.apply_move(position, move)):
                return True
        return False

    def mates_in_two(self, position: chess.Board) -> bool:
        return self._forces_mate(position, moves_left=2, sample=MATE_IN_TWO_SAMPLE)

    def mates_in_three(self, position: chess.Board) -> bool:
        return self._forces_mate(position, moves_left=3, sample=MATE_IN_THREE_SAMPLE)

    def allows_forced_mate(self, position: chess.Board, depth: int) -> bool:
        """Return True when the side to move in ``position`` can force mate within ``depth``."""
        if depth <= 1:
            return self.mates_in_one(position)
        if depth == 2:
            return self.mates_in_two(position)
        return self.mates_in_three(position)

    def _forces_mate(self, position: chess.Board, *, moves_left: int, sample: int) -> bool:
        if self.mates_in_one(position):
            return True
        if moves_left <= 1:
            return False

        for move in self._sampled(self._rules.legal_replies(position), sample):
            after = self._rules.apply_move(position, move)
            if self._rules.is_checkmate(after) or self._rules.is_stalemate(after):
                continue
            defences = self._rules.legal_replies(after)
            if all(
                self._forces_mate(
                    self._rules.apply_move(after, defence),
                    moves_left=moves_left - 1,
                    sample=sample,
                )
                for defence in defences
            ):
                return True
        return False

    def _sampled(self, moves: Iterable[chess.Move], sample: int) -> List[chess.Move]:
        moves = list(moves)
        if self._exhaustive:
            return moves
        return moves[:sample]


__all__ = ["MATE_IN_THREE_SAMPLE", "MATE_IN_TWO_SAMPLE", "MateSearch"]
