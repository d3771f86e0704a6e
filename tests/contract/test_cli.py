from __future__ import annotations

import pytest
from click.testing import CliRunner

from botbrain.interface.cli.play import main

SINGLE_MATING_MOVE_FEN = "1r4bk/7p/8/8/8/p1q5/PB1n4/K7 w - - 0 1"


@pytest.fixture()
def runner(monkeypatch) -> CliRunner:
    monkeypatch.setenv("BOTBRAIN_LOG_LEVEL", "WARNING")
    return CliRunner()


def test_move_prints_the_chosen_move(runner) -> None:
    result = runner.invoke(main, ["move", SINGLE_MATING_MOVE_FEN, "--rating", "2000", "--seed", "3"])
    assert result.exit_code == 0, result.output
    assert "Bxc3# b2c3 (forced_mate, 10000.0)" in result.output


def test_move_explain_lists_scored_moves(runner) -> None:
    result = runner.invoke(main, ["move", "--rating", "1200", "--seed", "3", "--explain"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "tier=casual rating=1200"
    # twenty scored moves plus the chosen move
    assert len(lines) == 22


def test_move_rejects_bad_fen(runner) -> None:
    result = runner.invoke(main, ["move", "not a fen"])
    assert result.exit_code == 2


def test_move_on_finished_game_reports_error_code(runner) -> None:
    result = runner.invoke(main, ["move", "R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1"])
    assert result.exit_code == 1
    assert "no_legal_moves" in result.output


def test_match_reports_a_score_line(runner) -> None:
    result = runner.invoke(
        main,
        ["match", "--white-rating", "400", "--black-rating", "400", "--max-moves", "3", "--seed", "5", "--pgn"],
    )
    assert result.exit_code == 0, result.output
    assert "game 1: 1/2-1/2 after 4 moves" in result.output
    assert '[White "bot 400"]' in result.output
    assert "white 400: +0 =1 -0" in result.output


@pytest.fixture()
def instant_bots(monkeypatch) -> None:
    monkeypatch.setenv("BOTBRAIN_THINK_TIME_MIN_MS", "0")
    monkeypatch.setenv("BOTBRAIN_THINK_TIME_MAX_MS", "0")
    monkeypatch.delenv("BOTBRAIN_DEFAULT_BOT", raising=False)
    monkeypatch.delenv("BOTBRAIN_DEFAULT_RATING", raising=False)


def test_play_session_until_resignation(runner, instant_bots) -> None:
    result = runner.invoke(main, ["play", "--bot", "b1", "--seed", "1"], input="e2e4\nresign\n")
    assert result.exit_code == 0, result.output
    assert "Pawn Pusher (400) plays black" in result.output
    assert "Pawn Pusher: " in result.output
    assert "(0 ms)" in result.output
    assert "result: black_won" in result.output


def test_play_reports_illegal_moves_and_continues(runner, instant_bots) -> None:
    result = runner.invoke(main, ["play", "--bot", "b1"], input="e2e5\nundo\nresign\n")
    assert result.exit_code == 0, result.output
    assert "illegal_move" in result.output
    assert "nothing_to_undo" in result.output
    assert "result: black_won" in result.output


def test_play_as_black_lets_the_bot_open(runner, instant_bots) -> None:
    result = runner.invoke(main, ["play", "--bot", "b1", "--color", "black"], input="resign\n")
    assert result.exit_code == 0, result.output
    assert "Pawn Pusher (400) plays white" in result.output
    assert "Pawn Pusher: " in result.output
    assert "result: white_won" in result.output


def test_play_think_time_range_comes_from_config(runner, monkeypatch) -> None:
    monkeypatch.setenv("BOTBRAIN_THINK_TIME_MIN_MS", "5")
    monkeypatch.setenv("BOTBRAIN_THINK_TIME_MAX_MS", "5")
    result = runner.invoke(main, ["play", "--bot", "b1", "--color", "black"], input="resign\n")
    assert result.exit_code == 0, result.output
    assert "(5 ms)" in result.output


def test_play_default_bot_from_config(runner, instant_bots, monkeypatch) -> None:
    monkeypatch.setenv("BOTBRAIN_DEFAULT_BOT", "b2")
    result = runner.invoke(main, ["play"], input="resign\n")
    assert result.exit_code == 0, result.output
    assert "Castle Keeper (450) plays black" in result.output


def test_play_falls_back_to_bot_nearest_default_rating(runner, instant_bots, monkeypatch) -> None:
    monkeypatch.setenv("BOTBRAIN_DEFAULT_RATING", "1190")
    result = runner.invoke(main, ["play"], input="resign\n")
    assert result.exit_code == 0, result.output
    assert "Endgame Eddie (1200) plays black" in result.output


def test_play_rejects_unknown_bot(runner, instant_bots) -> None:
    result = runner.invoke(main, ["play", "--bot", "zz"], input="resign\n")
    assert result.exit_code == 2
