from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

Rarity = Literal["basic", "common", "rare", "epic", "legendary"]

# (minimum total power, rarity), highest first
RARITY_THRESHOLDS: tuple[tuple[int, Rarity], ...] = (
    (4000, "legendary"),
    (3000, "epic"),
    (2000, "rare"),
    (1000, "common"),
)

LEVEL_BAND = 500
MAX_LEVEL = 10

BATTLE_CATEGORIES = ("monster", "creature", "beast")


def rarity_for(total_power: int) -> Rarity:
    for minimum, rarity in RARITY_THRESHOLDS:
        if total_power >= minimum:
            return rarity
    return "basic"


def level_for(total_power: int) -> int:
    """Level 1 below 500 total power, +1 per 500-point band, capped at 10."""
    if total_power < 0:
        return 1
    return min(MAX_LEVEL, total_power // LEVEL_BAND + 1)


class Stance(str, Enum):
    """Battle position a card is committed in."""

    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"
    TACTICAL = "tactical"

    @property
    def display_name(self) -> str:
        return _STANCE_DISPLAY[self][0]

    @property
    def symbol(self) -> str:
        return _STANCE_DISPLAY[self][1]

    @property
    def allows_direct_strike(self) -> bool:
        return self is not Stance.DEFENSIVE

    def effective_power(self, attack: int, defense: int) -> int:
        if self is Stance.OFFENSIVE:
            return attack
        if self is Stance.DEFENSIVE:
            return defense
        return (attack + defense) // 2

    @staticmethod
    def from_index(index: int) -> "Stance":
        # unknown indexes fall back to the safe position
        order = (Stance.OFFENSIVE, Stance.DEFENSIVE, Stance.TACTICAL)
        if 0 <= index < len(order):
            return order[index]
        return Stance.DEFENSIVE

    @staticmethod
    def random(rng: random.Random) -> "Stance":
        return rng.choice(list(Stance))

    def __str__(self) -> str:
        return f"{self.symbol} {self.display_name}"


_STANCE_DISPLAY: dict[Stance, tuple[str, str]] = {
    Stance.OFFENSIVE: ("Offensive Stance", "⚔"),
    Stance.DEFENSIVE: ("Defensive Stance", "🛡"),
    Stance.TACTICAL: ("Tactical Stance", "⚖"),
}


@dataclass
class CardFlags:
    """Host-side markers for a card; the rules never read them."""

    activated: bool = False
    in_battle: bool = False


@dataclass(frozen=True, eq=False)
class Card:
    """Combat statistics for one card.

    Stats and ``card_id`` are read-only. Equality and hashing use ``card_id``
    only. ``rarity`` and ``level`` are derived once from attack + defense.
    The mutable ``flags`` belong to the host.
    """

    card_id: int
    name: str | None
    category: str | None
    attack: int
    defense: int
    description: str | None = None
    image_url: str | None = None
    rarity: Rarity = field(init=False)
    level: int = field(init=False)
    flags: CardFlags = field(default_factory=CardFlags, repr=False)

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        set_ = object.__setattr__
        set_(self, "name", self.name if self.name is not None else "Unknown Card")
        set_(self, "category", self.category if self.category is not None else "Unknown")
        set_(self, "attack", max(0, self.attack))
        set_(self, "defense", max(0, self.defense))
        set_(
            self,
            "description",
            self.description if self.description is not None else "No description available",
        )
        set_(self, "image_url", self.image_url if self.image_url is not None else "")
        set_(self, "rarity", rarity_for(self.total_power))
        set_(self, "level", level_for(self.total_power))

    @property
    def total_power(self) -> int:
        return self.attack + self.defense

    def is_battle_eligible(self) -> bool:
        category = (self.category or "").lower()
        return any(word in category for word in BATTLE_CATEGORIES)

    def can_defeat(self, other: Card | None) -> bool:
        if other is None or not self.is_battle_eligible() or not other.is_battle_eligible():
            return False
        return self.attack > other.defense

    def display_text(self) -> str:
        return f"{self.name} ({self.attack}/{self.defense})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.card_id == other.card_id

    def __hash__(self) -> int:
        return hash(self.card_id)

    def __str__(self) -> str:
        return (
            f"{self.name} [{self.category}] - ATK:{self.attack}/DEF:{self.defense} "
            f"(Level {self.level}, {self.rarity})"
        )
