from __future__ import annotations

from typing import List

import chess

from botbrain.domain.engine.difficulty import (
    CASUAL_RATING,
    CLUB_RATING,
    IMPROVER_RATING,
    DifficultyProfile,
)
from botbrain.domain.engine.rules import CandidateMove, PythonChessRules, RulesEngine
from botbrain.domain.engine.threats import ThreatDetector, piece_value

CHECKMATE_SCORE = 10000.0
STALEMATE_SCORE = -5000.0

# Replies examined below the first simulated ply (captures and promotions only).
REPLY_SAMPLE = 8

OPENING_MOVES = 20
DEVELOPMENT_MOVES = 10
KING_SAFETY_MOVES = 25
ENDGAME_MOVE_NUMBER = 40
ENDGAME_PIECE_COUNT = 12

CENTER_SQUARES = chess.SquareSet([chess.D4, chess.E4, chess.D5, chess.E5])
EXTENDED_CENTER_SQUARES = chess.SquareSet(
    chess.square(file_index, rank_index)
    for file_index in range(2, 6)
    for rank_index in range(2, 6)
) - CENTER_SQUARES


def _center_distance(square: chess.Square) -> int:
    file_index = chess.square_file(square)
    rank_index = chess.square_rank(square)
    return max(3 - file_index, file_index - 4, 0) + max(3 - rank_index, rank_index - 4, 0)


def _back_rank(color: chess.Color) -> int:
    return 0 if color == chess.WHITE else 7


class PositionEvaluator:
    """Score the position reached by a candidate move from the mover's side.

    The score is additive: tactical terms (check, capture, fork), a shallow
    reply simulation when the profile asks for lookahead, and heuristics
    gated on rating. Checkmate and stalemate short-circuit everything.
    """

    def __init__(
        self,
        rules: RulesEngine | None = None,
        threats: ThreatDetector | None = None,
    ) -> None:
        self._rules = rules or PythonChessRules()
        self._threats = threats or ThreatDetector(self._rules)

    def evaluate(
        self,
        before: chess.Board,
        move: CandidateMove,
        after: chess.Board,
        profile: DifficultyProfile,
        *,
        plies: int | None = None,
    ) -> float:
        depth = profile.lookahead_plies if plies is None else plies
        return self._evaluate(before, move, after, profile, depth, nested=False)

    def _evaluate(
        self,
        before: chess.Board,
        move: CandidateMove,
        after: chess.Board,
        profile: DifficultyProfile,
        plies: int,
        *,
        nested: bool,
    ) -> float:
        if self._rules.is_checkmate(after):
            return CHECKMATE_SCORE
        if self._rules.is_stalemate(after):
            return STALEMATE_SCORE

        mover = move.color
        advanced = profile.is_advanced
        score = 0.0

        if advanced:
            score += self._positional_bonus(after, mover, master=profile.is_master)

        if self._rules.is_check(after):
            score += 50.0

        score += self._capture_bonus(move, advanced)

        if advanced:
            score += self._fork_bonus(after, move)

        if plies > 0:
            score += self._lookahead(after, mover, profile, plies, nested=nested)

        score += self._opening_bonus(before, move, advanced)

        move_number = before.fullmove_number
        if (
            profile.rating >= CASUAL_RATING
            and move_number < KING_SAFETY_MOVES
            and self._king_zone_attacked(after, mover)
        ):
            score -= 35.0 if advanced else 20.0

        if profile.rating >= IMPROVER_RATING:
            score += self._defensive_credit(before, after, mover)

        if profile.rating >= CLUB_RATING and move.piece == chess.PAWN:
            file_index = chess.square_file(move.to_square)
            same_file = [
                square
                for square in after.pieces(chess.PAWN, mover)
                if chess.square_file(square) == file_index
            ]
            if len(same_file) > 1:
                score -= 10.0

        return score

    def _positional_bonus(self, board: chess.Board, color: chess.Color, *, master: bool) -> float:
        bonus = 0.0
        piece_map = board.piece_map()
        endgame = board.fullmove_number > ENDGAME_MOVE_NUMBER or len(piece_map) < ENDGAME_PIECE_COUNT
        own_pawns = board.pieces(chess.PAWN, color)
        enemy_pawns = board.pieces(chess.PAWN, not color)
        pawn_files = {chess.square_file(square) for square in own_pawns | enemy_pawns}

        for square, piece in piece_map.items():
            if piece.color != color:
                continue
            file_index = chess.square_file(square)
            rank_index = chess.square_rank(square)

            if piece.piece_type == chess.PAWN:
                if any(
                    chess.square_rank(other) == rank_index
                    and abs(chess.square_file(other) - file_index) == 1
                    for other in own_pawns
                ):
                    bonus += 12.0 if master else 8.0
                if self._is_passed(square, color, enemy_pawns):
                    distance = 7 - rank_index if color == chess.WHITE else rank_index
                    bonus += 30.0 + distance * 7.5 if master else 20.0 + distance * 5.0
            elif piece.piece_type == chess.ROOK:
                if file_index not in pawn_files:
                    bonus += 22.0 if master else 15.0
            elif piece.piece_type == chess.BISHOP:
                if abs(file_index - 3.5) + abs(rank_index - 3.5) <= 3:
                    bonus += 18.0 if master else 12.0
            elif piece.piece_type == chess.KNIGHT:
                in_enemy_half = rank_index >= 4 if color == chess.WHITE else rank_index <= 3
                if in_enemy_half:
                    bonus += 27.0 if master else 18.0
            elif piece.piece_type == chess.KING:
                if endgame:
                    bonus += (7 - _center_distance(square)) * (6.0 if master else 4.0)
                elif rank_index == _back_rank(color):
                    bonus += 15.0 if master else 10.0

        if master:
            bonus += self._coordination_bonus(board, color)
        return bonus

    @staticmethod
    def _is_passed(square: chess.Square, color: chess.Color, enemy_pawns: chess.SquareSet) -> bool:
        file_index = chess.square_file(square)
        rank_index = chess.square_rank(square)
        for enemy in enemy_pawns:
            if chess.square_file(enemy) != file_index:
                continue
            enemy_rank = chess.square_rank(enemy)
            if (color == chess.WHITE and enemy_rank > rank_index) or (
                color == chess.BLACK and enemy_rank < rank_index
            ):
                return False
        return True

    @staticmethod
    def _coordination_bonus(board: chess.Board, color: chess.Color) -> float:
        bonus = 0.0
        rooks: List[chess.Square] = list(board.pieces(chess.ROOK, color))
        pairs = [(a, b) for index, a in enumerate(rooks) for b in rooks[index + 1:]]
        if any(chess.square_file(a) == chess.square_file(b) for a, b in pairs):
            bonus += 30.0
        if any(chess.square_rank(a) == chess.square_rank(b) for a, b in pairs):
            bonus += 25.0

        bishops = board.pieces(chess.BISHOP, color)
        if bishops & chess.SquareSet(chess.BB_LIGHT_SQUARES) and bishops & chess.SquareSet(chess.BB_DARK_SQUARES):
            bonus += 25.0

        if board.pieces(chess.QUEEN, color) and board.pieces(chess.KNIGHT, color):
            bonus += 15.0
        return bonus

    @staticmethod
    def _capture_bonus(move: CandidateMove, advanced: bool) -> float:
        if move.captured is None:
            return 0.0
        captured_value = piece_value(move.captured)
        bonus = captured_value * (25.0 if advanced else 30.0)
        if piece_value(move.piece) < captured_value:
            bonus += 50.0
        return bonus

    @staticmethod
    def _fork_bonus(board: chess.Board, move: CandidateMove) -> float:
        if move.piece not in (chess.KNIGHT, chess.QUEEN):
            return 0.0
        targets = 0
        for square in board.attacks(move.to_square):
            piece = board.piece_at(square)
            if piece is not None and piece.color != move.color and piece.piece_type != chess.KING:
                targets += 1
        return 50.0 if targets >= 2 else 0.0

    def _lookahead(
        self,
        after: chess.Board,
        mover: chess.Color,
        profile: DifficultyProfile,
        plies: int,
        *,
        nested: bool,
    ) -> float:
        score = 0.0
        score -= self._threats.hanging_value(after, mover) * (50.0 if profile.is_advanced else 40.0)
        score += self._threats.hanging_value(after, not mover) * 15.0
        best_reply = self._best_reply_score(after, profile, plies - 1, nested=nested)
        score -= best_reply * (0.4 if profile.is_advanced else 0.5)
        return score

    def _best_reply_score(
        self,
        position: chess.Board,
        profile: DifficultyProfile,
        plies: int,
        *,
        nested: bool,
    ) -> float:
        replies = self._rules.legal_replies(position)
        if nested:
            replies = [
                reply
                for reply in replies
                if position.is_capture(reply) or reply.promotion is not None
            ][:REPLY_SAMPLE]

        best: float | None = None
        for reply in replies:
            described = self._rules.describe(position, reply, notation=False)
            result = self._rules.apply_move(position, described)
            value = self._evaluate(position, described, result, profile, plies, nested=True)
            if best is None or value > best:
                best = value
        return best if best is not None else 0.0

    def _opening_bonus(self, before: chess.Board, move: CandidateMove, advanced: bool) -> float:
        bonus = 0.0
        move_number = before.fullmove_number
        if move_number < OPENING_MOVES:
            if move.to_square in CENTER_SQUARES:
                bonus += 40.0 if advanced else 15.0
            elif advanced and move.to_square in EXTENDED_CENTER_SQUARES:
                bonus += 15.0
        if move_number < DEVELOPMENT_MOVES and move.piece in (chess.KNIGHT, chess.BISHOP):
            back_rank = _back_rank(move.color)
            if chess.square_rank(move.from_square) == back_rank and chess.square_rank(move.to_square) != back_rank:
                bonus += 30.0 if advanced else 12.0
        if move.is_castle:
            bonus += 100.0 if advanced else 25.0
        return bonus

    @staticmethod
    def _king_zone_attacked(board: chess.Board, color: chess.Color) -> bool:
        king_square = board.king(color)
        if king_square is None:
            return False
        zone = chess.SquareSet(chess.BB_KING_ATTACKS[king_square] | chess.BB_SQUARES[king_square])
        return any(board.is_attacked_by(not color, square) for square in zone)

    def _defensive_credit(self, before: chess.Board, after: chess.Board, mover: chess.Color) -> float:
        hanging_before = self._threats.detect_hanging(before, mover)
        hanging_after = self._threats.detect_hanging(after, mover)
        if len(hanging_after) >= len(hanging_before):
            return 0.0
        saved = sum(item.material_value for item in hanging_before) - sum(
            item.material_value for item in hanging_after
        )
        return max(0, saved) * 25.0


__all__ = [
    "CENTER_SQUARES",
    "CHECKMATE_SCORE",
    "EXTENDED_CENTER_SQUARES",
    "PositionEvaluator",
    "REPLY_SAMPLE",
    "STALEMATE_SCORE",
]
