"""
Card catalog service.

Loads card definitions from a JSON file into an immutable CardCatalog.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from deckforge.config import settings
from deckforge.models.card import CardDefinition
from deckforge.models.catalog import CardCatalog, build_catalog

logger = logging.getLogger(__name__)


def _string_list(data: Mapping[str, Any], key: str, card_id: str) -> tuple[str, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"Catalog entry '{card_id}' field '{key}' must be a list of strings")
    return tuple(value)


def parse_card_definition(data: Any, card_id: str | None = None) -> CardDefinition:
    """
    Build a CardDefinition from a raw catalog entry.

    Args:
        data: Card object ({"id", "name", "faction", "types", "power",
              "ability", "allowedPanels"})
        card_id: ID to use when the entry is keyed externally

    Returns:
        CardDefinition

    Raises:
        ValueError: If the entry is not an object, has no ID or name,
            or carries "types"/"allowedPanels" that are not string lists
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Catalog entry is not an object: {data!r}")

    card_id = card_id if card_id is not None else data.get("id")
    name = data.get("name")
    if not isinstance(card_id, str) or not card_id:
        raise ValueError(f"Catalog entry has no card id: {data!r}")
    if not isinstance(name, str) or not name:
        raise ValueError(f"Catalog entry '{card_id}' has no name")

    power = data.get("power") or 0
    if isinstance(power, bool) or not isinstance(power, int):
        raise ValueError(f"Catalog entry '{card_id}' power must be an integer")

    return CardDefinition(
        card_id=card_id,
        name=name,
        faction=data.get("faction"),
        types=_string_list(data, "types", card_id) or (),
        power=power,
        ability=data.get("ability") or "",
        allowed_panels=_string_list(data, "allowedPanels", card_id),
    )


def _iter_definitions(raw: Any) -> Iterable[CardDefinition]:
    if isinstance(raw, Mapping):
        for card_id, data in raw.items():
            yield parse_card_definition(data, card_id=card_id)
    elif isinstance(raw, list):
        for data in raw:
            yield parse_card_definition(data)
    else:
        raise ValueError("Catalog must be a list of cards or a mapping of id to card")


def load_card_catalog(path: Path | None = None) -> CardCatalog:
    """
    Load a card catalog from file.

    Args:
        path: Path to JSON file. Defaults to settings.catalog_path

    Returns:
        CardCatalog keyed by card ID (first definition of an ID wins)

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        ValueError: If the file holds a malformed card entry
    """
    if path is None:
        path = settings.catalog_path

    if path is None or not path.exists():
        raise FileNotFoundError(
            f"Card catalog not found at {path}. Set DECKFORGE_CATALOG_PATH to a catalog file."
        )

    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    catalog = build_catalog(_iter_definitions(raw), source=str(path))
    logger.info("Loaded %d cards from %s", len(catalog), path)
    return catalog
