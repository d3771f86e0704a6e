from __future__ import annotations

import random

import pytest

from botbrain.domain.bots import (
    ROSTER,
    BotCategory,
    UnknownBotError,
    bots_in_category,
    category_for_rating,
    get_bot,
    think_time_ms,
)


@pytest.mark.parametrize(
    "rating, category",
    [
        (400, BotCategory.beginner),
        (899, BotCategory.beginner),
        (900, BotCategory.intermediate),
        (1699, BotCategory.intermediate),
        (1700, BotCategory.advanced),
        (2300, BotCategory.expert),
        (2800, BotCategory.master),
        (3300, BotCategory.grandmaster),
    ],
)
def test_category_for_rating(rating: int, category: BotCategory) -> None:
    assert category_for_rating(rating) is category


def test_roster_ids_are_unique_and_ordered_by_rating() -> None:
    ids = [bot.id for bot in ROSTER]
    assert len(ids) == len(set(ids))
    ratings = [bot.rating for bot in ROSTER]
    assert ratings == sorted(ratings)


def test_get_bot() -> None:
    bot = get_bot("a5")
    assert bot.rating == 2000
    assert bot.category is BotCategory.advanced
    with pytest.raises(UnknownBotError):
        get_bot("zz")


def test_every_bot_has_a_category() -> None:
    grouped = sum(len(bots_in_category(category)) for category in BotCategory)
    assert grouped == len(ROSTER)
    assert [bot.id for bot in bots_in_category(BotCategory.grandmaster)] == ["g1", "g2"]


def test_think_time_grows_with_rating(scripted_rng) -> None:
    weak = think_time_ms(400, 20, scripted_rng(draws=[0.5]))
    strong = think_time_ms(3000, 20, scripted_rng(draws=[0.5]))
    assert 700 <= weak <= 850
    assert strong > weak


def test_think_time_stays_in_range() -> None:
    rng = random.Random(3)
    for rating in (0, 1200, 3500, 9000):
        for moves in (0, 1, 35, 200):
            assert 400 <= think_time_ms(rating, moves, rng) <= 1800
    assert think_time_ms(1500, 20, rng, min_ms=0, max_ms=0) == 0


def test_think_time_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        think_time_ms(1500, 20, random.Random(), min_ms=500, max_ms=100)
