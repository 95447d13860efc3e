from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Literal

from .types import Card, Stance

Side = Literal["human", "automated"]
Outcome = Literal["human", "automated", "tie"]

SIDES: tuple[Side, Side] = ("human", "automated")


def opponent_of(side: Side) -> Side:
    return "automated" if side == "human" else "human"


@dataclass(frozen=True)
class Choice:
    """A card committed in a stance by one actor."""

    card: Card | None
    stance: Stance | None
    actor: str = "Anonymous"
    created_at: float = field(default_factory=time.time, compare=False)

    def effective_power(self) -> int:
        if self.card is None or self.stance is None:
            return 0
        return self.stance.effective_power(self.card.attack, self.card.defense)

    def is_valid(self) -> bool:
        return self.card is not None and self.card.is_battle_eligible() and self.stance is not None

    def defeats(self, other: Choice | None) -> bool:
        """Strictly greater power wins; equal power goes to the higher level.

        Equal power and equal level defeats neither way, which resolves as a tie.
        """
        if other is None:
            return True
        mine = self.effective_power()
        theirs = other.effective_power()
        if mine == theirs:
            return _level(self) > _level(other)
        return mine > theirs

    def describe(self) -> str:
        if self.card is None or self.stance is None:
            return "Invalid choice"
        return (
            f"{self.actor} chose {self.card.name} in {self.stance.display_name} "
            f"(effective power: {self.effective_power()})"
        )

    def compact_text(self) -> str:
        symbol = self.stance.symbol if self.stance is not None else "?"
        name = self.card.name if self.card is not None else "???"
        return f"{symbol} {name} ({self.effective_power()})"


def _level(choice: Choice) -> int:
    return choice.card.level if choice.card is not None else 0


def round_outcome(human: Choice, automated: Choice) -> Outcome:
    if human.defeats(automated):
        return "human"
    if automated.defeats(human):
        return "automated"
    return "tie"
