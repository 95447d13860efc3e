from __future__ import annotations

import itertools

from duelarena.engine.actions import Choice, round_outcome
from duelarena.engine.types import Stance

from helpers import card


def test_effective_power_follows_stance() -> None:
    x = card(1, 2500, 2000)
    assert Choice(card=x, stance=Stance.OFFENSIVE).effective_power() == 2500
    assert Choice(card=x, stance=Stance.DEFENSIVE).effective_power() == 2000
    assert Choice(card=x, stance=Stance.TACTICAL).effective_power() == 2250


def test_incomplete_choice_has_zero_power_and_is_invalid() -> None:
    x = card(1, 2500, 2000)
    assert Choice(card=None, stance=Stance.OFFENSIVE).effective_power() == 0
    assert Choice(card=x, stance=None).effective_power() == 0
    assert not Choice(card=None, stance=Stance.OFFENSIVE).is_valid()
    assert not Choice(card=x, stance=None).is_valid()
    assert Choice(card=x, stance=Stance.OFFENSIVE).is_valid()


def test_non_creature_choice_is_invalid() -> None:
    trap = card(9, 0, 0, category="Trap Card")
    assert not Choice(card=trap, stance=Stance.DEFENSIVE).is_valid()


def test_greater_power_defeats() -> None:
    x = Choice(card=card(1, 2500, 2000), stance=Stance.OFFENSIVE)
    y = Choice(card=card(2, 1800, 2400), stance=Stance.DEFENSIVE)
    assert x.defeats(y)
    assert not y.defeats(x)
    assert round_outcome(x, y) == "human"
    assert round_outcome(y, x) == "automated"


def test_equal_power_goes_to_higher_level() -> None:
    high = Choice(card=card(1, 2000, 2000), stance=Stance.OFFENSIVE)  # level 9
    low = Choice(card=card(2, 2000, 0), stance=Stance.OFFENSIVE)  # level 5
    assert high.effective_power() == low.effective_power()
    assert high.defeats(low)
    assert not low.defeats(high)


def test_equal_power_and_level_is_a_tie() -> None:
    a = Choice(card=card(1, 2000, 500), stance=Stance.OFFENSIVE)
    b = Choice(card=card(2, 2000, 600), stance=Stance.OFFENSIVE)
    assert a.card is not None and b.card is not None
    assert a.card.level == b.card.level
    assert not a.defeats(b)
    assert not b.defeats(a)
    assert round_outcome(a, b) == "tie"


def test_defeats_is_never_mutual() -> None:
    cards = [card(i, atk, dfn) for i, (atk, dfn) in enumerate(
        [(0, 0), (500, 500), (1000, 0), (0, 1000), (2000, 500), (2000, 600), (2500, 2000), (1800, 2400)]
    )]
    choices = [Choice(card=c, stance=s) for c in cards for s in Stance]
    for a, b in itertools.product(choices, repeat=2):
        assert not (a.defeats(b) and b.defeats(a))


def test_anything_defeats_a_missing_opponent() -> None:
    assert Choice(card=card(1, 0, 0), stance=Stance.DEFENSIVE).defeats(None)


def test_describe() -> None:
    x = Choice(card=card(1, 2500, 2000), stance=Stance.TACTICAL, actor="Ana")
    assert x.describe() == "Ana chose Card 1 in Tactical Stance (effective power: 2250)"
    assert Choice(card=None, stance=None).describe() == "Invalid choice"
    assert Choice(card=None, stance=None).actor == "Anonymous"
