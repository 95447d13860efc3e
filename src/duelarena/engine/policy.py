from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from .types import Card, Stance

# Each band is (stance, cumulative upper bound); a roll below the bound picks it.
StanceBands = tuple[tuple[Stance, float], ...]

BEST_CARD_PROBABILITY = 0.7

OPENING_BANDS: StanceBands = (
    (Stance.OFFENSIVE, 0.6),
    (Stance.DEFENSIVE, 0.9),
    (Stance.TACTICAL, 1.0),
)

COUNTER_BANDS: Mapping[Stance, StanceBands] = MappingProxyType({
    Stance.OFFENSIVE: (
        (Stance.DEFENSIVE, 0.5),
        (Stance.TACTICAL, 0.8),
        (Stance.OFFENSIVE, 1.0),
    ),
    Stance.DEFENSIVE: (
        (Stance.OFFENSIVE, 0.7),
        (Stance.TACTICAL, 1.0),
    ),
    Stance.TACTICAL: (
        (Stance.OFFENSIVE, 0.4),
        (Stance.DEFENSIVE, 0.8),
        (Stance.TACTICAL, 1.0),
    ),
})


@dataclass(frozen=True)
class OpponentSpec:
    """Tuning for the automated side.

    best_card_probability:
      chance of playing the strongest remaining card instead of a random one
    opening_bands:
      stance distribution when the automated side commits first
    counter_bands:
      stance distribution keyed on the opposing stance when it responds
    """

    best_card_probability: float = BEST_CARD_PROBABILITY
    opening_bands: StanceBands = OPENING_BANDS
    counter_bands: Mapping[Stance, StanceBands] = field(default_factory=lambda: COUNTER_BANDS)


def _pick_band(rng: random.Random, bands: StanceBands) -> Stance:
    roll = rng.random()
    for stance, upper in bands:
        if roll < upper:
            return stance
    return bands[-1][0]


def select_card(pool: Sequence[Card], rng: random.Random, spec: OpponentSpec | None = None) -> Card | None:
    """Strongest card (first one on ties) most of the time, otherwise a random one.

    Returns None for an empty pool.
    """
    spec = spec or OpponentSpec()
    if not pool:
        return None
    if rng.random() < spec.best_card_probability:
        return max(pool, key=lambda c: c.total_power)
    return pool[rng.randrange(len(pool))]


def select_opening_stance(rng: random.Random, spec: OpponentSpec | None = None) -> Stance:
    spec = spec or OpponentSpec()
    return _pick_band(rng, spec.opening_bands)


def select_counter_stance(
    opposing: Stance | None, rng: random.Random, spec: OpponentSpec | None = None
) -> Stance:
    spec = spec or OpponentSpec()
    if opposing is None:
        return select_opening_stance(rng, spec)
    bands = spec.counter_bands.get(opposing)
    if bands is None:
        return Stance.DEFENSIVE
    return _pick_band(rng, bands)
