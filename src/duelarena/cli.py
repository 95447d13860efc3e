from __future__ import annotations

import argparse
import json
import logging
import random

from duelarena.engine.actions import Choice
from duelarena.engine.events import (
    AutomatedSelected,
    BattleStatistics,
    DuelCompleted,
    DuelEvent,
    ErrorRaised,
    PhaseChanged,
    RoundResolved,
    ScoreUpdated,
)
from duelarena.engine.serialize import event_to_dict
from duelarena.engine.session import DuelEngine
from duelarena.engine.types import Card, Stance
from duelarena.paths import get_paths
from duelarena.services.content import ContentError, ContentService

logger = logging.getLogger(__name__)


def describe_event(e: DuelEvent) -> str | None:
    if isinstance(e, PhaseChanged):
        return f"[{e.phase}] {e.message}"
    if isinstance(e, AutomatedSelected):
        return f"Opponent committed a card in {e.choice.stance.display_name if e.choice.stance else '?'}"
    if isinstance(e, BattleStatistics):
        return f"Power {e.human_power} vs {e.automated_power} (diff {e.difference:+d})"
    if isinstance(e, RoundResolved):
        return (
            f"{e.human_choice.compact_text()} vs {e.automated_choice.compact_text()} "
            f"-> {e.outcome}"
        )
    if isinstance(e, ScoreUpdated):
        return (
            f"Score {e.human_victories}-{e.automated_victories} "
            f"(lives {e.human_lives}/{e.automated_lives})"
        )
    if isinstance(e, DuelCompleted):
        return f"Winner: {e.winner}"
    if isinstance(e, ErrorRaised):
        return f"Error ({e.code}): {e.message}"
    return None


def autopilot_choice(pool: tuple[Card, ...], rng: random.Random, actor: str) -> Choice:
    """Stand-in for a human: any remaining card in any stance."""
    return Choice(card=rng.choice(pool), stance=Stance.random(rng), actor=actor)


def play(engine: DuelEngine, human_deck: list[Card], automated_deck: list[Card], rng: random.Random) -> int:
    if not engine.commence(human_deck, automated_deck).ok:
        return 1
    while engine.is_active:
        if engine.pending("human") is None:
            choice = autopilot_choice(engine.pool("human"), rng, engine.state.config.human_name)
            if not engine.submit_choice("human", choice).ok:
                return 1
            continue
        if not engine.resolve_round().ok:
            return 1
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(prog="duelarena")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--hand-size", type=int, default=5)
    parser.add_argument("--json", action="store_true", help="print events as JSON lines")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    rng = random.Random(args.seed)
    try:
        catalog = content.load_catalog()
        human_deck = catalog.deal(rng, args.hand_size)
        automated_deck = catalog.deal(rng, args.hand_size)
    except ContentError as e:
        logger.error("Could not prepare decks: %s", e)
        return 2

    engine = DuelEngine(seed=args.seed)

    def show(e: DuelEvent) -> None:
        if args.json:
            print(json.dumps(event_to_dict(e), ensure_ascii=False))
            return
        line = describe_event(e)
        if line is not None:
            print(line)

    engine.subscribe(show)
    code = play(engine, human_deck, automated_deck, rng)
    if not args.json:
        print(engine.statistics())
    return code
