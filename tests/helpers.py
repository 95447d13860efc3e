from __future__ import annotations

from collections.abc import Iterable

from duelarena.engine.actions import Side
from duelarena.engine.duel import DuelState, SideState
from duelarena.engine.types import Card


class ScriptedRng:
    """Replays fixed rolls so probabilistic branches can be pinned down."""

    def __init__(self, rolls: Iterable[float] = (), picks: Iterable[int] = ()) -> None:
        self._rolls = list(rolls)
        self._picks = list(picks)

    def random(self) -> float:
        return self._rolls.pop(0)

    def randrange(self, n: int) -> int:
        pick = self._picks.pop(0)
        assert 0 <= pick < n
        return pick

    def shuffle(self, items: list[object]) -> None:
        return None


def card(card_id: int, attack: int, defense: int, category: str = "Effect Monster") -> Card:
    return Card(card_id=card_id, name=f"Card {card_id}", category=category, attack=attack, defense=defense)


def deck(start: int, size: int = 3) -> list[Card]:
    return [card(start + i, 1000 + 100 * i, 800 + 50 * i) for i in range(size)]


def active_state(
    human_pool: Iterable[Card],
    automated_pool: Iterable[Card],
    leader: Side = "human",
    **changes: object,
) -> DuelState:
    state = DuelState(
        phase="active",
        human=SideState(pool=tuple(human_pool), lives=3),
        automated=SideState(pool=tuple(automated_pool), lives=3),
        leader=leader,
    )
    for key, value in changes.items():
        side, _, attr = key.partition("_")
        state = state.with_side(side, **{attr: value})  # type: ignore[arg-type]
    return state
