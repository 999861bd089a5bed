"""
Card library search.

Filters the catalog for the deck builder's card library by faction,
power and free text. Used for display only; validation never calls it.
"""

from deckforge.models.card import CardDefinition
from deckforge.models.catalog import CardCatalog

# Faction filter value meaning "no faction filter"
ALL_FACTIONS = "all"


def matches_text(card: CardDefinition, text: str) -> bool:
    """Case-insensitive substring match on name or ability."""
    needle = text.lower()
    return needle in card.name.lower() or needle in card.ability.lower()


def search_library(
    catalog: CardCatalog,
    text: str | None = None,
    faction: str | None = None,
    power: int | None = None,
) -> list[CardDefinition]:
    """
    Search the catalog for cards offered in the deck builder.

    All filters are ANDed together. Cards whose allowed panels exclude
    the deck builder are never returned.

    Args:
        catalog: Card catalog
        text: Text to find in name or ability (blank = no filter)
        faction: Exact faction ("all" or None = no filter)
        power: Exact base power

    Returns:
        Matching cards in catalog order
    """
    text = text.strip() if text else ""
    results: list[CardDefinition] = []

    for _, card in catalog.list_all():
        if not card.is_deck_buildable():
            continue

        if faction and faction != ALL_FACTIONS and card.faction != faction:
            continue

        if power is not None and card.power != power:
            continue

        if text and not matches_text(card, text):
            continue

        results.append(card)

    return results


def list_factions(catalog: CardCatalog) -> list[str]:
    """Distinct factions among deck-buildable cards, sorted."""
    return sorted(
        {
            card.faction
            for _, card in catalog.list_all()
            if card.faction and card.is_deck_buildable()
        }
    )
