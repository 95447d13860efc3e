from __future__ import annotations

import json
import random
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from jsonschema import Draft202012Validator

from duelarena.engine.types import Card


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _optional_str(obj: Mapping[str, object], key: str) -> str | None:
    v = obj.get(key)
    if v is None:
        return None
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def parse_card(raw: Mapping[str, object]) -> Card:
    return Card(
        card_id=_require_int(raw, "id"),
        name=_require_str(raw, "name"),
        category=_require_str(raw, "category"),
        attack=_require_int(raw, "attack"),
        defense=_require_int(raw, "defense"),
        description=_optional_str(raw, "description"),
        image_url=_optional_str(raw, "image_url"),
    )


@dataclass(frozen=True)
class CardCatalog:
    """Card records available to deal from, keyed by card id."""

    cards: dict[int, Card]

    def battle_cards(self) -> list[Card]:
        return [c for c in self.cards.values() if c.is_battle_eligible()]

    def deal(self, rng: random.Random, amount: int) -> list[Card]:
        """Return ``amount`` distinct battle-eligible cards in random order."""
        eligible = self.battle_cards()
        if len(eligible) < amount:
            raise ContentError(
                f"Only {len(eligible)} battle cards available, {amount} requested"
            )
        return rng.sample(eligible, amount)


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_catalog(self) -> CardCatalog:
        cards_path = self._data_dir / "cards.json"
        raw = _load_json(cards_path)
        schema = _load_json(self._schema_dir / "cards.schema.json")
        validate_json(raw, schema, context=str(cards_path))

        if not isinstance(raw, dict):
            raise ContentError("cards.json must be an object")
        raw_cards = raw.get("cards")
        if not isinstance(raw_cards, list):
            raise ContentError("cards.json.cards must be a list")

        cards: dict[int, Card] = {}
        for item in raw_cards:
            if not isinstance(item, dict):
                continue
            card = parse_card(item)
            if card.card_id in cards:
                raise ContentError(f"Duplicate card id: {card.card_id}")
            cards[card.card_id] = card
        return CardCatalog(cards=cards)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_catalog()
