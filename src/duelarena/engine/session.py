from __future__ import annotations

import logging
import random
import threading
from collections import deque
from collections.abc import Callable, Sequence

from .actions import Choice, Side
from .duel import (
    DuelConfig,
    StepResult,
    commence,
    new_duel,
    resolve_round,
    submit_choice,
)
from .events import DuelCompleted, DuelEvent, ErrorRaised, RoundResolved
from .policy import OpponentSpec
from .types import Card

logger = logging.getLogger(__name__)

EventHandler = Callable[[DuelEvent], None]


class DuelEngine:
    """Host-facing duel session.

    Holds the current ``DuelState`` and serializes every mutating call behind
    one re-entrant lock. Events from each call are appended to ``event_log``
    and queued for subscribers; one drain loop delivers them in log order, so
    a subscriber may call back into the engine without reordering delivery.
    """

    def __init__(
        self,
        config: DuelConfig | None = None,
        spec: OpponentSpec | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.seed = seed
        self.rng = rng or random.Random(seed)
        self.spec = spec or OpponentSpec()
        self.state = new_duel(config)
        self.event_log: list[DuelEvent] = []
        self._subscribers: list[EventHandler] = []
        self._outbox: deque[DuelEvent] = deque()
        self._delivering = False
        self._lock = threading.RLock()

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler``; returns a callable that unsubscribes it."""
        with self._lock:
            self._subscribers.append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._subscribers:
                    self._subscribers.remove(handler)

        return unsubscribe

    def commence(self, human_deck: Sequence[Card], automated_deck: Sequence[Card]) -> StepResult:
        with self._lock:
            result = commence(self.state, human_deck, automated_deck, self.rng, self.spec)
            if result.ok:
                logger.info(
                    "Duel started: %d vs %d cards, %s leads",
                    len(human_deck),
                    len(automated_deck),
                    result.state.leader,
                )
            return self._commit(result)

    def submit_choice(self, side: Side, choice: Choice | None) -> StepResult:
        with self._lock:
            return self._commit(submit_choice(self.state, side, choice, self.rng, self.spec))

    def resolve_round(self) -> StepResult:
        with self._lock:
            return self._commit(resolve_round(self.state, self.rng, self.spec))

    def _commit(self, result: StepResult) -> StepResult:
        self.state = result.state
        for event in result.events:
            if isinstance(event, ErrorRaised):
                logger.warning("Rejected (%s): %s", event.code, event.message)
            elif isinstance(event, RoundResolved):
                logger.info(
                    "Round %d: %s vs %s -> %s",
                    self.state.rounds_played,
                    event.human_choice.compact_text(),
                    event.automated_choice.compact_text(),
                    event.outcome,
                )
            elif isinstance(event, DuelCompleted):
                logger.info("Duel completed after %d rounds: %s", event.rounds_played, event.winner)
        self.event_log.extend(result.events)
        self._outbox.extend(result.events)
        if not self._delivering:
            self._drain()
        return result

    def _drain(self) -> None:
        # nested commits from handlers only enqueue; this loop delivers them
        self._delivering = True
        try:
            while self._outbox:
                event = self._outbox.popleft()
                for handler in list(self._subscribers):
                    handler(event)
        finally:
            self._delivering = False
            self._outbox.clear()

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    @property
    def rounds_played(self) -> int:
        return self.state.rounds_played

    def victories(self, side: Side) -> int:
        return self.state.side(side).victories

    def lives(self, side: Side) -> int:
        return self.state.side(side).lives

    def pool(self, side: Side) -> tuple[Card, ...]:
        return self.state.side(side).pool

    def pending(self, side: Side) -> Choice | None:
        return self.state.side(side).pending

    def statistics(self) -> str:
        return (
            f"Rounds: {self.state.rounds_played} | Direct strikes - "
            f"{self.state.config.human_name}: {self.state.human.direct_strikes}, "
            f"{self.state.config.automated_name}: {self.state.automated.direct_strikes}"
        )
