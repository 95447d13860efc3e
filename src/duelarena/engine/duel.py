from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Literal

from .actions import Choice, Outcome, Side, opponent_of, round_outcome
from .events import (
    AutomatedSelected,
    BattleStatistics,
    CardsRemoved,
    DuelCompleted,
    DuelEvent,
    DuelStarted,
    ErrorCode,
    ErrorRaised,
    PhaseChanged,
    RoundResolved,
    ScoreUpdated,
)
from .policy import OpponentSpec, select_card, select_counter_stance, select_opening_stance
from .types import Card

Phase = Literal["idle", "active", "completed"]


@dataclass(frozen=True)
class DuelConfig:
    win_threshold: int = 2
    initial_lives: int = 3
    min_deck_size: int = 3
    human_name: str = "Human Duelist"
    automated_name: str = "Strategic AI"


@dataclass(frozen=True)
class SideState:
    pool: tuple[Card, ...] = ()
    victories: int = 0
    lives: int = 0
    direct_strikes: int = 0
    pending: Choice | None = None


@dataclass(frozen=True)
class DuelState:
    config: DuelConfig = field(default_factory=DuelConfig)
    phase: Phase = "idle"
    human: SideState = field(default_factory=SideState)
    automated: SideState = field(default_factory=SideState)
    leader: Side | None = None
    rounds_played: int = 0
    winner: Outcome | None = None

    @property
    def is_active(self) -> bool:
        return self.phase == "active"

    def side(self, side: Side) -> SideState:
        return self.human if side == "human" else self.automated

    def with_side(self, side: Side, **changes: object) -> DuelState:
        updated = replace(self.side(side), **changes)
        if side == "human":
            return replace(self, human=updated)
        return replace(self, automated=updated)


@dataclass
class StepResult:
    ok: bool
    state: DuelState
    events: list[DuelEvent]
    error: str | None = None


def _reject(state: DuelState, code: ErrorCode, message: str) -> StepResult:
    return StepResult(
        ok=False,
        state=state,
        events=[ErrorRaised(type="error", code=code, message=message)],
        error=message,
    )


def _score(state: DuelState) -> ScoreUpdated:
    return ScoreUpdated(
        type="score_updated",
        human_victories=state.human.victories,
        automated_victories=state.automated.victories,
        human_lives=state.human.lives,
        automated_lives=state.automated.lives,
    )


def _without(pool: tuple[Card, ...], card: Card) -> tuple[Card, ...]:
    remaining = list(pool)
    remaining.remove(card)
    return tuple(remaining)


def _leader_name(state: DuelState, side: Side) -> str:
    return state.config.human_name if side == "human" else state.config.automated_name


def new_duel(config: DuelConfig | None = None) -> DuelState:
    return DuelState(config=config or DuelConfig())


def commence(
    state: DuelState,
    human_deck: Sequence[Card],
    automated_deck: Sequence[Card],
    rng: random.Random,
    spec: OpponentSpec | None = None,
) -> StepResult:
    """Start a fresh duel, abandoning whatever the previous state held.

    Rejected decks leave ``state`` untouched.
    """
    cfg = state.config
    if len(human_deck) < cfg.min_deck_size or len(automated_deck) < cfg.min_deck_size:
        return _reject(
            state,
            "insufficient_deck",
            f"Both duelists need at least {cfg.min_deck_size} cards to start.",
        )

    human_pool = list(human_deck)
    automated_pool = list(automated_deck)
    rng.shuffle(human_pool)
    rng.shuffle(automated_pool)
    leader: Side = "human" if rng.random() < 0.5 else "automated"

    started = DuelState(
        config=cfg,
        phase="active",
        human=SideState(pool=tuple(human_pool), lives=cfg.initial_lives),
        automated=SideState(pool=tuple(automated_pool), lives=cfg.initial_lives),
        leader=leader,
    )
    name = _leader_name(started, leader)
    events: list[DuelEvent] = [
        _score(started),
        DuelStarted(type="duel_started", leader=leader),
        PhaseChanged(
            type="phase_changed",
            phase="starting",
            message=f"The duel has begun. {name} makes the first move.",
        ),
    ]

    if leader == "automated":
        lead = select_leading(started, rng, spec)
        return StepResult(ok=lead.ok, state=lead.state, events=events + lead.events, error=lead.error)
    return StepResult(ok=True, state=started, events=events)


def select_leading(
    state: DuelState, rng: random.Random, spec: OpponentSpec | None = None
) -> StepResult:
    """The automated side commits first: strongest-ish card, unconditional stance."""
    card = select_card(state.automated.pool, rng, spec)
    if card is None:
        return _exhausted(state)
    stance = select_opening_stance(rng, spec)
    choice = Choice(card=card, stance=stance, actor=state.config.automated_name)
    chosen = state.with_side("automated", pending=choice)
    return StepResult(
        ok=True,
        state=chosen,
        events=[
            AutomatedSelected(type="automated_selected", choice=choice),
            PhaseChanged(
                type="phase_changed",
                phase="awaiting_human",
                message="The opponent has chosen a card. Your move.",
            ),
        ],
    )


def select_reactive(
    state: DuelState, rng: random.Random, spec: OpponentSpec | None = None
) -> StepResult:
    """The automated side answers the human's pending choice with a counter stance."""
    card = select_card(state.automated.pool, rng, spec)
    if card is None:
        return _exhausted(state)
    opposing = state.human.pending.stance if state.human.pending is not None else None
    stance = select_counter_stance(opposing, rng, spec)
    choice = Choice(card=card, stance=stance, actor=state.config.automated_name)
    chosen = state.with_side("automated", pending=choice)
    return StepResult(
        ok=True,
        state=chosen,
        events=[
            PhaseChanged(
                type="phase_changed",
                phase="resolving",
                message="Both sides have chosen. Resolving the round...",
            )
        ],
    )


def _exhausted(state: DuelState) -> StepResult:
    message = "The opponent has no cards left to play."
    finished = _finalize(state)
    return StepResult(
        ok=False,
        state=finished.state,
        events=[ErrorRaised(type="error", code="opponent_pool_exhausted", message=message)]
        + finished.events,
        error=message,
    )


def submit_choice(
    state: DuelState,
    side: Side,
    choice: Choice | None,
    rng: random.Random,
    spec: OpponentSpec | None = None,
) -> StepResult:
    """Store ``choice`` as ``side``'s pending choice.

    When the human side leads the round the automated side answers right away.
    """
    if not state.is_active:
        return _reject(state, "no_active_duel", "There is no active duel.")
    if choice is None or not choice.is_valid():
        return _reject(state, "invalid_choice", "That choice is not valid.")
    if choice.card not in state.side(side).pool:
        return _reject(state, "card_unavailable", "The selected card is not available.")

    chosen = state.with_side(side, pending=choice)
    if side == "human" and state.leader == "human":
        return select_reactive(chosen, rng, spec)
    return StepResult(ok=True, state=chosen, events=[])


def should_end(state: DuelState) -> bool:
    cfg = state.config
    return (
        state.human.victories >= cfg.win_threshold
        or state.automated.victories >= cfg.win_threshold
        or not state.human.pool
        or not state.automated.pool
        or state.human.lives <= 0
        or state.automated.lives <= 0
    )


def _finalize(state: DuelState) -> StepResult:
    if state.human.victories > state.automated.victories:
        winner: Outcome = "human"
    elif state.automated.victories > state.human.victories:
        winner = "automated"
    else:
        winner = "tie"
    finished = replace(
        state,
        phase="completed",
        winner=winner,
        human=replace(state.human, pending=None),
        automated=replace(state.automated, pending=None),
    )
    return StepResult(
        ok=True,
        state=finished,
        events=[
            DuelCompleted(type="duel_completed", winner=winner, rounds_played=finished.rounds_played),
            PhaseChanged(
                type="phase_changed",
                phase="completed",
                message=f"Duel completed. Rounds played: {finished.rounds_played}",
            ),
        ],
    )


def _apply_outcome(state: DuelState, outcome: Outcome) -> DuelState:
    if outcome == "tie":
        return state
    loser = opponent_of(outcome)
    won = state.side(outcome)
    lost = state.side(loser)
    state = state.with_side(
        outcome, victories=won.victories + 1, direct_strikes=won.direct_strikes + 1
    )
    return state.with_side(loser, lives=max(0, lost.lives - 1))


def resolve_round(
    state: DuelState, rng: random.Random, spec: OpponentSpec | None = None
) -> StepResult:
    """Compare both pending choices, score the round and set up the next one."""
    if not state.is_active:
        return _reject(state, "no_active_duel", "There is no active duel.")
    human = state.human.pending
    automated = state.automated.pending
    if human is None or automated is None:
        return _reject(state, "no_pending_selections", "Both sides must choose before resolving.")
    assert human.card is not None and automated.card is not None
    assert state.leader is not None

    human_power = human.effective_power()
    automated_power = automated.effective_power()
    events: list[DuelEvent] = [
        BattleStatistics(
            type="battle_statistics",
            human_power=human_power,
            automated_power=automated_power,
            difference=human_power - automated_power,
        )
    ]

    outcome = round_outcome(human, automated)
    scored = _apply_outcome(state, outcome)
    scored = replace(
        scored,
        human=replace(scored.human, pool=_without(scored.human.pool, human.card), pending=None),
        automated=replace(
            scored.automated, pool=_without(scored.automated.pool, automated.card), pending=None
        ),
        rounds_played=scored.rounds_played + 1,
    )
    events.append(
        RoundResolved(
            type="round_resolved",
            human_choice=human,
            automated_choice=automated,
            leader=state.leader,
            outcome=outcome,
        )
    )
    events.append(CardsRemoved(type="cards_removed", human=(human.card,), automated=(automated.card,)))
    events.append(_score(scored))

    if should_end(scored):
        finished = _finalize(scored)
        return StepResult(ok=True, state=finished.state, events=events + finished.events)

    next_leader = opponent_of(state.leader)
    scored = replace(scored, leader=next_leader)
    if next_leader == "automated":
        lead = select_leading(scored, rng, spec)
        return StepResult(ok=lead.ok, state=lead.state, events=events + lead.events, error=lead.error)

    events.append(
        PhaseChanged(
            type="phase_changed",
            phase="human_turn",
            message="Your turn. Choose a card and a stance.",
        )
    )
    return StepResult(ok=True, state=scored, events=events)
