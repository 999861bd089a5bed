"""
Deck Serializer.

Converts a CustomDeck to and from the portable deck file form.

=============================================================================
RESPONSIBILITY BOUNDARY
=============================================================================

Export trusts its input: a CustomDeck only holds what the rules allowed.

Import trusts NOTHING. The raw payload may be hand-edited or produced by
another tool, so it passes the structural gate here and every other gate
in the composition rules before a CustomDeck is built. On any failure no
deck is produced and the caller's current deck is untouched.

This module does no file I/O. See deckforge.parsers.deck_json.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from deckforge.config import DECK_FILE_EXTENSION, DeckLimits, Settings, settings
from deckforge.models.catalog import CatalogLookup
from deckforge.models.custom_deck import CustomDeck
from deckforge.models.deck_file import DeckFileCard, PortableDeckFile
from deckforge.models.failure import (
    DeckError,
    DeckResult,
    EmptyDeckError,
    InvalidFileStructureError,
)
from deckforge.services.composition_rules import validate_records

logger = logging.getLogger(__name__)

DECK_NAME_KEY = "deckName"
CARDS_KEY = "cards"

# Anything outside [a-z0-9] in a lowercased deck name becomes "_"
_UNSAFE_FILE_CHARS = re.compile(r"[^a-z0-9]")


def export_name(name: str, default_name: str | None = None) -> str:
    """Trimmed deck name, or the default placeholder if nothing is left."""
    trimmed = name.strip()
    if trimmed:
        return trimmed
    return default_name if default_name is not None else settings.default_deck_name


def deck_file_name(deck_name: str) -> str:
    """
    Derive a file name from a deck name.

    Example: "Fire & Ice" -> "fire___ice.json"
    """
    return _UNSAFE_FILE_CHARS.sub("_", deck_name.lower()) + DECK_FILE_EXTENSION


def export_deck(
    deck: CustomDeck,
    config: Settings | None = None,
) -> DeckResult[PortableDeckFile]:
    """
    Export a deck to its portable file form.

    Args:
        deck: The deck being edited
        config: Settings providing the default deck name

    Returns:
        DeckResult carrying the PortableDeckFile, or EmptyDeck if the
        deck has no cards
    """
    config = config or settings

    if deck.total_size() <= 0:
        return DeckResult.failure(EmptyDeckError())

    deck_file = PortableDeckFile(
        deck_name=export_name(deck.name, config.default_deck_name),
        cards=[
            DeckFileCard(card_id=card_id, quantity=quantity) for card_id, quantity in deck.entries()
        ],
    )

    logger.debug(
        "deck_exported",
        extra={
            "deck_name": deck_file.deck_name,
            "unique_cards": len(deck_file.cards),
            "total_cards": deck_file.total_cards(),
        },
    )

    return DeckResult.success(deck_file)


def import_deck(
    raw: Any,
    catalog_lookup: CatalogLookup,
    limits: DeckLimits | None = None,
) -> DeckResult[CustomDeck]:
    """
    Build a CustomDeck from an untrusted deck payload.

    Gates, first failure wins:
        1. Structure: string deckName, list cards (InvalidFileStructure)
        2. Each entry: string cardId, whole-number quantity >= 1 (MalformedEntry)
        3. Catalog: every cardId resolves (UnknownCard)
        4. Size: total within max_deck_size (DeckTooLarge)
        5. Degenerate: non-empty with zero total (DegenerateDeck)

    The copy limit is not applied. Duplicate card IDs collapse, last
    write wins. The deck name is kept exactly as given.

    Args:
        raw: Decoded JSON payload
        catalog_lookup: Catalog lookup function
        limits: Composition limits for the new deck (defaults to settings)

    Returns:
        DeckResult carrying a new CustomDeck, or the failure
    """
    limits = limits if limits is not None else settings.limits()

    if not isinstance(raw, Mapping):
        return _rejected(InvalidFileStructureError("top-level value is not an object"))

    deck_name = raw.get(DECK_NAME_KEY)
    records = raw.get(CARDS_KEY)
    if not isinstance(deck_name, str) or not isinstance(records, list):
        return _rejected(InvalidFileStructureError())

    result = validate_records(records, catalog_lookup, limits, name=deck_name)
    if result.error is not None:
        return _rejected(result.error)

    validated = result.unwrap()
    if len(validated) < len(records):
        logger.warning(
            "duplicate_cards_collapsed",
            extra={"deck_name": deck_name, "records": len(records), "unique_cards": len(validated)},
        )

    deck = CustomDeck(
        catalog_lookup=catalog_lookup,
        limits=limits,
        name=validated.name,
        cards=validated.as_dict(),
    )
    logger.info(
        "deck_imported",
        extra={"deck_name": deck.name, "total_cards": deck.total_size()},
    )
    return DeckResult.success(deck)


def _rejected(error: DeckError) -> DeckResult[CustomDeck]:
    logger.info("deck_import_rejected", extra={"kind": error.kind.value, "reason": error.message})
    return DeckResult.failure(error)
