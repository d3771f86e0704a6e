from __future__ import annotations

import random
import time

import chess
import chess.pgn
import click

from botbrain.domain.bots import ROSTER, BotPersona, UnknownBotError, get_bot
from botbrain.domain.chess import (
    GameSession,
    MoveActor,
    PlayerColor,
    SessionError,
    SessionManager,
    SessionStatus,
)
from botbrain.domain.engine import DecisionEngine, EngineError, rank
from botbrain.infrastructure.config import EngineConfig, load_config
from botbrain.infrastructure.persistence.memory_repository import InMemoryGameSessionRepository
from botbrain.interface.telemetry.logging import setup_logging


def _engine(seed: int | None) -> tuple[EngineConfig, DecisionEngine, random.Random]:
    config = load_config()
    setup_logging(config.log_level, json=config.additional.get("LOG_FORMAT", "json") == "json")
    resolved_seed = seed if seed is not None else config.seed
    rng = random.Random(resolved_seed)
    engine = DecisionEngine(rng=rng, exhaustive_mate_search=config.exhaustive_mate_search)
    return config, engine, rng


def _parse_board(fen: str) -> chess.Board:
    try:
        return chess.Board(fen)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="FEN") from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main() -> None:
    """Rating-calibrated chess bot tools."""


@main.command("move")
@click.argument("fen", required=False, default=chess.STARTING_FEN)
@click.option("--rating", type=click.IntRange(min=0), default=None, help="Bot rating (defaults to BOTBRAIN_DEFAULT_RATING).")
@click.option("--seed", type=int, default=None, help="Seed for the bot's random draws.")
@click.option("--explain", is_flag=True, help="Print every scored move and the filter outcome.")
def move_command(fen: str, rating: int | None, seed: int | None, explain: bool) -> None:
    """Print the move a bot of RATING plays in FEN."""
    board = _parse_board(fen)
    config, engine, rng = _engine(seed)
    bot_rating = rating if rating is not None else config.default_rating

    try:
        if explain:
            analysis = engine.analyse(board, bot_rating)
            kept = {item.move.uci() for item in analysis.filtered.candidates}
            click.echo(f"tier={analysis.profile.tier} rating={analysis.profile.rating}")
            for item in rank(analysis.scored):
                marker = "*" if item.move.uci() in kept else " "
                click.echo(f"{marker} {item.move.san:<8} {item.score:>10.1f}")
            if analysis.filtered.fell_back:
                click.echo("filters removed every move; using the unfiltered list", err=True)
        selection = engine.choose(board, bot_rating, rng=rng)
    except EngineError as exc:
        raise click.ClickException(f"{exc.code}: {exc}") from exc

    click.echo(f"{selection.move.san} {selection.move.uci()} ({selection.branch.value}, {selection.score:.1f})")


@main.command("match")
@click.option("--white-rating", type=click.IntRange(min=0), required=True)
@click.option("--black-rating", type=click.IntRange(min=0), required=True)
@click.option("--games", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--max-moves", type=click.IntRange(min=1), default=150, show_default=True, help="Full moves before a game is adjudicated drawn.")
@click.option("--seed", type=int, default=None)
@click.option("--pgn", "show_pgn", is_flag=True, help="Print the PGN of every game.")
def match_command(
    white_rating: int,
    black_rating: int,
    games: int,
    max_moves: int,
    seed: int | None,
    show_pgn: bool,
) -> None:
    """Play bot-vs-bot games between two ratings and report the score."""
    _, engine, rng = _engine(seed)
    totals = {"1-0": 0, "0-1": 0, "1/2-1/2": 0}

    for index in range(1, games + 1):
        board = chess.Board()
        while not board.is_game_over(claim_draw=True) and board.fullmove_number <= max_moves:
            rating = white_rating if board.turn == chess.WHITE else black_rating
            board.push(engine.decide(board, rating, rng=rng).move)

        result = board.result(claim_draw=True)
        if result == "*":
            result = "1/2-1/2"
        totals[result] += 1
        click.echo(f"game {index}: {result} after {board.fullmove_number} moves")

        if show_pgn:
            game = chess.pgn.Game.from_board(board)
            game.headers["White"] = f"bot {white_rating}"
            game.headers["Black"] = f"bot {black_rating}"
            game.headers["Result"] = result
            click.echo(str(game))
            click.echo("")

    click.secho(
        f"white {white_rating}: +{totals['1-0']} ={totals['1/2-1/2']} -{totals['0-1']}",
        fg="green",
    )


def _pick_bot(config: EngineConfig, bot_id: str | None) -> BotPersona:
    chosen = bot_id or config.additional.get("DEFAULT_BOT")
    if chosen:
        try:
            return get_bot(chosen)
        except UnknownBotError as exc:
            raise click.BadParameter(f"unknown bot {chosen!r}", param_hint="--bot") from exc
    return min(ROSTER, key=lambda bot: abs(bot.rating - config.default_rating))


def _echo_bot_moves(session: GameSession, bot: BotPersona, start: int) -> int:
    for record in session.moves[start:]:
        if record.actor is MoveActor.bot:
            time.sleep((record.think_time_ms or 0) / 1000)
            click.echo(f"{bot.name}: {record.san} ({record.think_time_ms} ms)")
    return len(session.moves)


@main.command("play")
@click.option("--bot", "bot_id", default=None, help="Roster id (defaults to BOTBRAIN_DEFAULT_BOT, then the bot nearest BOTBRAIN_DEFAULT_RATING).")
@click.option("--color", type=click.Choice([color.value for color in PlayerColor]), default="white", show_default=True)
@click.option("--fen", default=None, help="Starting position.")
@click.option("--seed", type=int, default=None)
def play_command(bot_id: str | None, color: str, fen: str | None, seed: int | None) -> None:
    """Play a roster bot from the terminal. Enter UCI moves, 'undo' or 'resign'."""
    if fen is not None:
        _parse_board(fen)
    config, engine, rng = _engine(seed)
    bot = _pick_bot(config, bot_id)
    manager = SessionManager(
        InMemoryGameSessionRepository(),
        engine,
        rng=rng,
        think_time_range=(config.think_time_min_ms, config.think_time_max_ms),
    )
    player_color = PlayerColor(color)
    session = manager.create_session(player_color=player_color, bot=bot, initial_fen=fen)
    bot_color = "black" if player_color is PlayerColor.white else "white"
    click.echo(f"{bot.name} ({bot.rating}) plays {bot_color}")
    shown = _echo_bot_moves(session, bot, 0)

    while session.status is SessionStatus.in_progress:
        entry = click.prompt("move", prompt_suffix="> ").strip()
        try:
            if entry == "resign":
                session = manager.resign(session.id)
            elif entry == "undo":
                session = manager.undo_last(session.id)
                shown = len(session.moves)
                click.echo(session.current_fen)
            else:
                session = manager.submit_move(session.id, entry)
        except SessionError as exc:
            click.echo(f"{exc.code}: {exc}", err=True)
            continue
        shown = _echo_bot_moves(session, bot, shown)

    click.secho(f"result: {session.status.value}", fg="green")


if __name__ == "__main__":  # pragma: no cover
    main()


__all__ = ["main"]
