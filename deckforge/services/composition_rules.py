"""
Composition Rules Engine.

THIS MODULE IS THE ONLY PLACE DECK LEGALITY IS DECIDED.

=============================================================================
TWO CONTEXTS
=============================================================================

1. Mutation guarding (check_add / check_remove)
   Consulted by CustomDeck before every add/remove. Refusals are returned
   as MutationOutcome values, never raised.

2. Whole-deck acceptance (validate_whole_deck / validate_records)
   Consulted on every import. Untrusted input is checked in this order,
   and the FIRST failure is reported:

       per entry:  structure  ──►  catalog
       whole deck: size       ──►  degenerate total

   The per-card copy limit is deliberately NOT applied here. Decks
   exported under a higher limit must still load; the copy limit only
   restrains interactive editing.

All functions are pure. Limits are injected as DeckLimits, never read
from literals.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from deckforge.config import DeckLimits, settings
from deckforge.models.catalog import CatalogLookup
from deckforge.models.failure import (
    DeckError,
    DeckResult,
    DeckTooLargeError,
    DegenerateDeckError,
    InvalidFileStructureError,
    MalformedEntryError,
    MutationOutcome,
    UnknownCardError,
)
from deckforge.models.validated_deck import ValidatedDeck

# Keys of a card record in the portable deck file
CARD_ID_KEY = "cardId"
QUANTITY_KEY = "quantity"

MIN_CARD_QUANTITY = 1


def _resolve_limits(limits: DeckLimits | None) -> DeckLimits:
    return limits if limits is not None else settings.limits()


def is_valid_quantity(value: Any) -> bool:
    """
    True for a whole number >= 1.

    JSON has no integer type, so integral floats such as 2.0 count.
    Booleans, fractional floats and strings do not.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer() and value >= MIN_CARD_QUANTITY
    return isinstance(value, int) and value >= MIN_CARD_QUANTITY


def deck_total(cards: Mapping[str, int]) -> int:
    """Sum of all quantities, recomputed on every call."""
    return sum(cards.values())


# =============================================================================
# MUTATION GUARDS
# =============================================================================


def check_add(
    cards: Mapping[str, int],
    card_id: str,
    catalog_lookup: CatalogLookup,
    limits: DeckLimits | None = None,
) -> MutationOutcome:
    """
    Decide whether one more copy of a card may be added.

    Args:
        cards: Current deck mapping {card_id: quantity}
        card_id: Card to add
        catalog_lookup: Catalog lookup function
        limits: Composition limits (defaults to settings)

    Returns:
        ADDED if legal, otherwise the reason the add is refused.
        The copy limit is checked before the deck size.
    """
    limits = _resolve_limits(limits)

    if catalog_lookup(card_id) is None:
        return MutationOutcome.UNKNOWN_CARD

    if cards.get(card_id, 0) >= limits.copy_limit:
        return MutationOutcome.COPY_LIMIT_REACHED

    if deck_total(cards) >= limits.max_deck_size:
        return MutationOutcome.DECK_SIZE_REACHED

    return MutationOutcome.ADDED


def check_remove(cards: Mapping[str, int], card_id: str) -> MutationOutcome:
    """Decide whether a copy of a card can be removed."""
    if card_id not in cards:
        return MutationOutcome.NOT_IN_DECK
    return MutationOutcome.REMOVED


# =============================================================================
# WHOLE-DECK VALIDATION
# =============================================================================


def validate_entry(entry: Any) -> tuple[str, int]:
    """
    Validate one card record from a deck file.

    Args:
        entry: Raw record, expected {"cardId": str, "quantity": int >= 1}

    Returns:
        (card_id, quantity)

    Raises:
        MalformedEntryError: With the raw entry, if the record is malformed
    """
    if not isinstance(entry, Mapping):
        raise MalformedEntryError(entry, "card entry is not an object")

    card_id = entry.get(CARD_ID_KEY)
    if not isinstance(card_id, str):
        raise MalformedEntryError(entry, f"'{CARD_ID_KEY}' must be a string")

    quantity = entry.get(QUANTITY_KEY)
    if not is_valid_quantity(quantity):
        raise MalformedEntryError(entry, f"'{QUANTITY_KEY}' must be an integer of at least 1")

    return card_id, int(quantity)


def _check_catalog(card_id: str, catalog_lookup: CatalogLookup) -> None:
    if catalog_lookup(card_id) is None:
        raise UnknownCardError(card_id)


def _check_totals(pairs: Sequence[tuple[str, int]], limits: DeckLimits) -> None:
    total = sum(qty for _, qty in pairs)

    if total > limits.max_deck_size:
        raise DeckTooLargeError(total, limits.max_deck_size)

    # Unreachable once quantities are >= 1; kept for producers that skip entry checks
    if pairs and total == 0:
        raise DegenerateDeckError()


def _collapse(pairs: Iterable[tuple[str, int]]) -> tuple[tuple[str, int], ...]:
    """Collapse duplicate card IDs, last write wins."""
    cards: dict[str, int] = {}
    for card_id, quantity in pairs:
        cards[card_id] = quantity
    return tuple(cards.items())


def validate_whole_deck(
    candidate: Any,
    catalog_lookup: CatalogLookup,
    limits: DeckLimits | None = None,
) -> DeckResult[ValidatedDeck]:
    """
    Validate a complete {card_id: quantity} mapping.

    Args:
        candidate: Untrusted mapping of card ID to quantity
        catalog_lookup: Catalog lookup function
        limits: Composition limits (defaults to settings)

    Returns:
        DeckResult carrying a ValidatedDeck, or the first failure found
    """
    limits = _resolve_limits(limits)

    if not isinstance(candidate, Mapping):
        return DeckResult.failure(InvalidFileStructureError("deck cards must be a mapping"))

    pairs: list[tuple[str, int]] = []
    try:
        for card_id, quantity in candidate.items():
            if not isinstance(card_id, str) or not is_valid_quantity(quantity):
                raise MalformedEntryError(
                    {CARD_ID_KEY: card_id, QUANTITY_KEY: quantity},
                    "expected a string card ID with an integer quantity of at least 1",
                )
            _check_catalog(card_id, catalog_lookup)
            pairs.append((card_id, int(quantity)))

        _check_totals(pairs, limits)
    except DeckError as e:
        return DeckResult.failure(e)

    return DeckResult.success(ValidatedDeck(cards=tuple(pairs)))


def validate_records(
    records: Sequence[Any],
    catalog_lookup: CatalogLookup,
    limits: DeckLimits | None = None,
    name: str = "",
) -> DeckResult[ValidatedDeck]:
    """
    Validate an ordered list of raw card records from a deck file.

    Every record counts toward the size limit, duplicates included.
    Duplicate card IDs are then collapsed, last write wins.

    Args:
        records: Untrusted list of {"cardId": ..., "quantity": ...}
        catalog_lookup: Catalog lookup function
        limits: Composition limits (defaults to settings)
        name: Deck name to carry on the validated deck

    Returns:
        DeckResult carrying a ValidatedDeck, or the first failure found
    """
    limits = _resolve_limits(limits)

    pairs: list[tuple[str, int]] = []
    try:
        for entry in records:
            card_id, quantity = validate_entry(entry)
            _check_catalog(card_id, catalog_lookup)
            pairs.append((card_id, quantity))

        _check_totals(pairs, limits)
    except DeckError as e:
        return DeckResult.failure(e)

    return DeckResult.success(ValidatedDeck(cards=_collapse(pairs), name=name))
