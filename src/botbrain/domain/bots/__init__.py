from .roster import (
    ROSTER,
    BotCategory,
    BotPersona,
    UnknownBotError,
    bots_in_category,
    category_for_rating,
    get_bot,
)
from .thinking import think_time_ms

__all__ = [
    "BotCategory",
    "BotPersona",
    "ROSTER",
    "UnknownBotError",
    "bots_in_category",
    "category_for_rating",
    "get_bot",
    "think_time_ms",
]
