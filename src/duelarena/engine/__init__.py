"""Deterministic, headless duel rules for DuelArena.

IMPORTANT: This package must never import a UI toolkit.
"""

from .actions import Choice, Outcome, Side
from .duel import DuelConfig, DuelState, StepResult, commence, resolve_round, submit_choice
from .events import DuelEvent, ErrorCode
from .policy import OpponentSpec
from .session import DuelEngine
from .types import Card, Rarity, Stance

__all__ = [
    "Card",
    "Choice",
    "DuelConfig",
    "DuelEngine",
    "DuelEvent",
    "DuelState",
    "ErrorCode",
    "OpponentSpec",
    "Outcome",
    "Rarity",
    "Side",
    "Stance",
    "StepResult",
    "commence",
    "resolve_round",
    "submit_choice",
]
