from __future__ import annotations

import chess
import pytest

from botbrain.domain.engine.threats import ThreatDetector, detect_hanging, piece_value

FENS = [
    chess.STARTING_FEN,
    "4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1",
    "4k3/8/n7/8/8/2K5/8/R6b w - - 0 1",
    "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3",
    "8/7k/8/8/8/1p6/8/Q6K w - - 0 1",
]


def test_attacked_and_undefended_piece_is_hanging() -> None:
    board = chess.Board("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
    hanging = detect_hanging(board, chess.BLACK)
    assert [(item.square, item.piece_type, item.material_value) for item in hanging] == [
        (chess.D5, chess.QUEEN, 9)
    ]


def test_defended_piece_is_not_hanging() -> None:
    board = chess.Board("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
    assert detect_hanging(board, chess.WHITE) == []


def test_nothing_hangs_in_the_starting_position() -> None:
    board = chess.Board()
    assert detect_hanging(board, chess.WHITE) == []
    assert detect_hanging(board, chess.BLACK) == []


def test_results_are_ordered_by_square_and_summed() -> None:
    board = chess.Board("4k3/8/n7/8/8/2K5/8/R6b w - - 0 1")
    detector = ThreatDetector()
    hanging = detector.detect_hanging(board, chess.BLACK)
    assert [item.square for item in hanging] == [chess.H1, chess.A6]
    assert detector.hanging_value(board, chess.BLACK) == 6


def test_kings_are_never_reported() -> None:
    board = chess.Board("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
    assert board.is_check()
    assert detect_hanging(board, chess.WHITE) == []


@pytest.mark.parametrize("fen", FENS)
def test_hanging_matches_attack_maps(fen: str) -> None:
    board = chess.Board(fen)
    for color in chess.COLORS:
        expected = sorted(
            square
            for square, piece in board.piece_map().items()
            if piece.color == color
            and piece.piece_type != chess.KING
            and board.attackers(not color, square)
            and not board.attackers(color, square)
        )
        reported = detect_hanging(board, color)
        assert [item.square for item in reported] == expected
        for item in reported:
            assert item.material_value == piece_value(item.piece_type)


def test_piece_values() -> None:
    assert [piece_value(piece_type) for piece_type in chess.PIECE_TYPES] == [1, 3, 3, 5, 9, 0]
    assert piece_value(None) == 0
