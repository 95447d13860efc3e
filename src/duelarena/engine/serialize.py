from __future__ import annotations

from .actions import Choice
from .duel import DuelState, SideState
from .events import (
    AutomatedSelected,
    BattleStatistics,
    CardsRemoved,
    DuelCompleted,
    DuelEvent,
    DuelStarted,
    ErrorRaised,
    PhaseChanged,
    RoundResolved,
    ScoreUpdated,
)
from .types import Card


def card_to_dict(c: Card) -> dict[str, object]:
    return {
        "card_id": c.card_id,
        "name": c.name,
        "category": c.category,
        "attack": c.attack,
        "defense": c.defense,
        "rarity": c.rarity,
        "level": c.level,
    }


def _choice_to_dict(ch: Choice | None) -> dict[str, object] | None:
    # created_at is left out so snapshots stay reproducible
    if ch is None:
        return None
    return {
        "actor": ch.actor,
        "card_id": ch.card.card_id if ch.card is not None else None,
        "stance": ch.stance.value if ch.stance is not None else None,
        "effective_power": ch.effective_power(),
    }


def event_to_dict(e: DuelEvent) -> dict[str, object]:
    if isinstance(e, DuelStarted):
        return {"type": e.type, "leader": e.leader}
    if isinstance(e, RoundResolved):
        return {
            "type": e.type,
            "human_choice": _choice_to_dict(e.human_choice),
            "automated_choice": _choice_to_dict(e.automated_choice),
            "leader": e.leader,
            "outcome": e.outcome,
        }
    if isinstance(e, ScoreUpdated):
        return {
            "type": e.type,
            "human_victories": e.human_victories,
            "automated_victories": e.automated_victories,
            "human_lives": e.human_lives,
            "automated_lives": e.automated_lives,
        }
    if isinstance(e, DuelCompleted):
        return {"type": e.type, "winner": e.winner, "rounds_played": e.rounds_played}
    if isinstance(e, ErrorRaised):
        return {"type": e.type, "code": e.code, "message": e.message}
    if isinstance(e, CardsRemoved):
        return {
            "type": e.type,
            "human": [card_to_dict(c) for c in e.human],
            "automated": [card_to_dict(c) for c in e.automated],
        }
    if isinstance(e, AutomatedSelected):
        return {"type": e.type, "choice": _choice_to_dict(e.choice)}
    if isinstance(e, PhaseChanged):
        return {"type": e.type, "phase": e.phase, "message": e.message}
    if isinstance(e, BattleStatistics):
        return {
            "type": e.type,
            "human_power": e.human_power,
            "automated_power": e.automated_power,
            "difference": e.difference,
        }
    # should be unreachable
    return {"type": "unknown"}


def _side_to_dict(s: SideState) -> dict[str, object]:
    return {
        "pool": [c.card_id for c in s.pool],
        "victories": s.victories,
        "lives": s.lives,
        "direct_strikes": s.direct_strikes,
        "pending": _choice_to_dict(s.pending),
    }


def snapshot(state: DuelState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current duel state."""
    return {
        "phase": state.phase,
        "leader": state.leader,
        "rounds_played": state.rounds_played,
        "winner": state.winner,
        "human": _side_to_dict(state.human),
        "automated": _side_to_dict(state.automated),
    }
