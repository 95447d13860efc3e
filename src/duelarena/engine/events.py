from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .actions import Choice, Outcome, Side
from .types import Card

ErrorCode = Literal[
    "insufficient_deck",
    "no_active_duel",
    "invalid_choice",
    "card_unavailable",
    "no_pending_selections",
    "opponent_pool_exhausted",
]

PhaseTag = Literal["starting", "awaiting_human", "resolving", "human_turn", "completed"]


@dataclass(frozen=True)
class DuelStarted:
    type: Literal["duel_started"]
    leader: Side


@dataclass(frozen=True)
class RoundResolved:
    type: Literal["round_resolved"]
    human_choice: Choice
    automated_choice: Choice
    leader: Side
    outcome: Outcome


@dataclass(frozen=True)
class ScoreUpdated:
    type: Literal["score_updated"]
    human_victories: int
    automated_victories: int
    human_lives: int
    automated_lives: int


@dataclass(frozen=True)
class DuelCompleted:
    type: Literal["duel_completed"]
    winner: Outcome
    rounds_played: int


@dataclass(frozen=True)
class ErrorRaised:
    type: Literal["error"]
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class CardsRemoved:
    type: Literal["cards_removed"]
    human: tuple[Card, ...]
    automated: tuple[Card, ...]


@dataclass(frozen=True)
class AutomatedSelected:
    type: Literal["automated_selected"]
    choice: Choice


@dataclass(frozen=True)
class PhaseChanged:
    type: Literal["phase_changed"]
    phase: PhaseTag
    message: str


@dataclass(frozen=True)
class BattleStatistics:
    type: Literal["battle_statistics"]
    human_power: int
    automated_power: int
    difference: int


DuelEvent = (
    DuelStarted
    | RoundResolved
    | ScoreUpdated
    | DuelCompleted
    | ErrorRaised
    | CardsRemoved
    | AutomatedSelected
    | PhaseChanged
    | BattleStatistics
)
