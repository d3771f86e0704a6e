from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

import chess


@dataclass(frozen=True)
class CandidateMove:
    """A legal move plus the facts the engine reads from it."""

    move: chess.Move
    piece: chess.PieceType
    color: chess.Color
    captured: chess.PieceType | None = None
    is_check: bool = False
    castle_kingside: bool = False
    castle_queenside: bool = False
    promotion: chess.PieceType | None = None
    san: str | None = None

    @property
    def from_square(self) -> chess.Square:
        return self.move.from_square

    @property
    def to_square(self) -> chess.Square:
        return self.move.to_square

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castle(self) -> bool:
        return self.castle_kingside or self.castle_queenside

    def uci(self) -> str:
        return self.move.uci()

    def __str__(self) -> str:
        return self.san or self.move.uci()


class RulesEngine(Protocol):
    """Query/apply contract the decision engine consumes."""

    def legal_moves(
        self,
        position: chess.Board,
        from_square: chess.Square | None = None,
    ) -> List[CandidateMove]:
        ...

    def legal_replies(self, position: chess.Board) -> List[chess.Move]:
        ...

    def describe(
        self,
        position: chess.Board,
        move: chess.Move,
        *,
        notation: bool = True,
    ) -> CandidateMove:
        ...

    def apply_move(self, position: chess.Board, move: CandidateMove | chess.Move) -> chess.Board:
        ...

    def attackers(
        self,
        position: chess.Board,
        square: chess.Square,
        by_color: chess.Color,
    ) -> List[chess.Square]:
        ...

    def gives_check(self, position: chess.Board, move: chess.Move) -> bool:
        ...

    def is_check(self, position: chess.Board) -> bool:
        ...

    def is_checkmate(self, position: chess.Board) -> bool:
        ...

    def is_stalemate(self, position: chess.Board) -> bool:
        ...

    def to_fen(self, position: chess.Board) -> str:
        ...

    def from_fen(self, fen: str) -> chess.Board:
        ...


class PythonChessRules(RulesEngine):
    """RulesEngine backed by python-chess boards.

    Boards handed in are never mutated; ``apply_move`` pushes onto a
    stackless copy.
    """

    def legal_moves(
        self,
        position: chess.Board,
        from_square: chess.Square | None = None,
    ) -> List[CandidateMove]:
        if from_square is None:
            moves = position.generate_legal_moves()
        else:
            moves = position.generate_legal_moves(from_mask=chess.BB_SQUARES[from_square])
        return [self.describe(position, move) for move in moves]

    def legal_replies(self, position: chess.Board) -> List[chess.Move]:
        return list(position.generate_legal_moves())

    def describe(
        self,
        position: chess.Board,
        move: chess.Move,
        *,
        notation: bool = True,
    ) -> CandidateMove:
        piece = position.piece_at(move.from_square)
        if piece is None:
            raise ValueError(f"No piece on {chess.square_name(move.from_square)} for {move.uci()}.")

        if position.is_en_passant(move):
            captured: chess.PieceType | None = chess.PAWN
        elif position.is_capture(move):
            captured = position.piece_type_at(move.to_square)
        else:
            captured = None

        return CandidateMove(
            move=move,
            piece=piece.piece_type,
            color=piece.color,
            captured=captured,
            is_check=position.gives_check(move),
            castle_kingside=position.is_kingside_castling(move),
            castle_queenside=position.is_queenside_castling(move),
            promotion=move.promotion,
            san=position.san(move) if notation else None,
        )

    def apply_move(self, position: chess.Board, move: CandidateMove | chess.Move) -> chess.Board:
        raw = move.move if isinstance(move, CandidateMove) else move
        board = position.copy(stack=False)
        board.push(raw)
        return board

    def attackers(
        self,
        position: chess.Board,
        square: chess.Square,
        by_color: chess.Color,
    ) -> List[chess.Square]:
        return list(position.attackers(by_color, square))

    def gives_check(self, position: chess.Board, move: chess.Move) -> bool:
        return position.gives_check(move)

    def is_check(self, position: chess.Board) -> bool:
        return position.is_check()

    def is_checkmate(self, position: chess.Board) -> bool:
        return position.is_checkmate()

    def is_stalemate(self, position: chess.Board) -> bool:
        return position.is_stalemate()

    def to_fen(self, position: chess.Board) -> str:
        return position.fen()

    def from_fen(self, fen: str) -> chess.Board:
        return chess.Board(fen)


__all__ = ["CandidateMove", "PythonChessRules", "RulesEngine"]
