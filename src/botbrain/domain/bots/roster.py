from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class BotCategory(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"
    expert = "expert"
    master = "master"
    grandmaster = "grandmaster"


_CATEGORY_CEILINGS: Tuple[Tuple[int, BotCategory], ...] = (
    (900, BotCategory.beginner),
    (1700, BotCategory.intermediate),
    (2300, BotCategory.advanced),
    (2800, BotCategory.expert),
    (3300, BotCategory.master),
)


def category_for_rating(rating: int) -> BotCategory:
    """Display category shown next to a bot; independent of the engine tiers."""
    for ceiling, category in _CATEGORY_CEILINGS:
        if rating < ceiling:
            return category
    return BotCategory.grandmaster


@dataclass(frozen=True)
class BotPersona:
    id: str
    name: str
    rating: int
    description: str = ""

    @property
    def category(self) -> BotCategory:
        return category_for_rating(self.rating)


ROSTER: Tuple[BotPersona, ...] = (
    BotPersona("b1", "Pawn Pusher", 400, "Just learning the basics"),
    BotPersona("b2", "Castle Keeper", 450, "Loves castling early"),
    BotPersona("b3", "Knight Novice", 500, "Enjoys knight moves"),
    BotPersona("b4", "Bishop Buddy", 550, "Diagonal specialist"),
    BotPersona("b5", "Rook Rookie", 600, "Learning rook endgames"),
    BotPersona("b6", "Queen's Guard", 650, "Protective player"),
    BotPersona("b7", "King's Shadow", 700, "Defensive minded"),
    BotPersona("b8", "Check Chaser", 750, "Loves giving checks"),
    BotPersona("b9", "Center Control", 800, "Controls the center"),
    BotPersona("b10", "Opening Explorer", 850, "Learning openings"),
    BotPersona("i1", "Tactical Tim", 1000, "Spots basic tactics"),
    BotPersona("i2", "Strategic Sam", 1100, "Plans ahead"),
    BotPersona("i3", "Endgame Eddie", 1200, "Strong finisher"),
    BotPersona("i4", "Positional Pete", 1300, "Loves good positions"),
    BotPersona("i5", "Attack Andy", 1400, "Aggressive player"),
    BotPersona("i6", "Defense Dan", 1450, "Solid defender"),
    BotPersona("i7", "Gambit Gary", 1500, "Loves gambits"),
    BotPersona("i8", "Counter Carl", 1550, "Counter-attack expert"),
    BotPersona("i9", "Pattern Paul", 1600, "Recognizes patterns"),
    BotPersona("i10", "Tempo Terry", 1650, "Never wastes time"),
    BotPersona("a1", "Magnus Mini", 1800, "Inspired by the World Champion"),
    BotPersona("a2", "Calculation King", 1850, "Calculates deeply"),
    BotPersona("a3", "Pressure Pro", 1900, "Constant pressure"),
    BotPersona("a4", "Sacrifice Sage", 1950, "Bold sacrifices"),
    BotPersona("a5", "Complex Clara", 2000, "Loves complexity"),
    BotPersona("a6", "Precise Percy", 2050, "Extremely accurate"),
    BotPersona("a7", "Dynamic Dave", 2100, "Dynamic play"),
    BotPersona("a8", "Strategy Steve", 2150, "Deep strategist"),
    BotPersona("a9", "Aggressive Anna", 2200, "Relentless attacker"),
    BotPersona("a10", "Balance Bob", 2250, "Perfectly balanced"),
    BotPersona("e1", "Expert Eva", 2300, "Tournament veteran"),
    BotPersona("e2", "Crushing Chris", 2350, "Crushes opponents"),
    BotPersona("e3", "Brilliant Ben", 2400, "Brilliant combinations"),
    BotPersona("e4", "Intuitive Iris", 2450, "Strong intuition"),
    BotPersona("e5", "Perfect Play", 2500, "Near perfection"),
    BotPersona("e6", "Theory Master", 2550, "Opening theory expert"),
    BotPersona("e7", "Endgame Guru", 2600, "Endgame master"),
    BotPersona("e8", "Time Wizard", 2650, "Time management pro"),
    BotPersona("e9", "Resourceful Ron", 2700, "Always finds resources"),
    BotPersona("m1", "Grandmaster Gary", 3000, "Computer-like accuracy and precision"),
    BotPersona("m2", "Supreme Sarah", 3200, "Superhuman play with analytical brilliance"),
    BotPersona("g1", "Legendary Leo", 3400, "Nearly unbeatable with absolute dominance"),
    BotPersona("g2", "Mythic Maya", 3500, "Godlike precision and chess mastery"),
)

_BY_ID: Dict[str, BotPersona] = {bot.id: bot for bot in ROSTER}


class UnknownBotError(KeyError):
    code = "unknown_bot"


def get_bot(bot_id: str) -> BotPersona:
    try:
        return _BY_ID[bot_id]
    except KeyError as exc:
        raise UnknownBotError(f"Unknown bot id {bot_id!r}.") from exc


def bots_in_category(category: BotCategory) -> List[BotPersona]:
    return [bot for bot in ROSTER if bot.category is category]


__all__ = [
    "BotCategory",
    "BotPersona",
    "ROSTER",
    "UnknownBotError",
    "bots_in_category",
    "category_for_rating",
    "get_bot",
]
