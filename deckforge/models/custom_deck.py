"""
CustomDeck: the deck under construction.

Holds a display name and {card_id: quantity}. Every mutation asks the
composition rules first, so the mapping never holds an unknown card,
a quantity outside [1, copy_limit], or more than max_deck_size cards.
"""

from dataclasses import dataclass, field

from deckforge.config import DeckLimits, settings
from deckforge.models.catalog import CatalogLookup
from deckforge.models.failure import MutationOutcome
from deckforge.services.composition_rules import check_add, check_remove, deck_total


@dataclass
class CustomDeck:
    """
    A single deck being edited.

    Attributes:
        catalog_lookup: Catalog lookup used to guard additions
        limits: Composition limits for interactive editing
        name: Raw display name; blank names are defaulted on export only
        cards: {card_id: quantity}, insertion-ordered
        default_name: Name restored by clear()
    """

    catalog_lookup: CatalogLookup
    limits: DeckLimits = field(default_factory=lambda: settings.limits())
    name: str = field(default_factory=lambda: settings.default_deck_name)
    cards: dict[str, int] = field(default_factory=dict)
    default_name: str = field(default_factory=lambda: settings.default_deck_name)

    def add_copy(self, card_id: str) -> MutationOutcome:
        """
        Add one copy of a card.

        A card not yet in the deck starts at 0. Refused additions leave
        the deck unchanged and report why.
        """
        outcome = check_add(self.cards, card_id, self.catalog_lookup, self.limits)
        if outcome is MutationOutcome.ADDED:
            self.cards[card_id] = self.cards.get(card_id, 0) + 1
        return outcome

    def remove_copy(self, card_id: str) -> MutationOutcome:
        """Remove one copy of a card, deleting the entry when it reaches 0."""
        outcome = check_remove(self.cards, card_id)
        if outcome is MutationOutcome.REMOVED:
            remaining = self.cards[card_id] - 1
            if remaining <= 0:
                del self.cards[card_id]
            else:
                self.cards[card_id] = remaining
        return outcome

    def remove_all_copies(self, card_id: str) -> MutationOutcome:
        """Remove every copy of a card."""
        outcome = check_remove(self.cards, card_id)
        if outcome is MutationOutcome.REMOVED:
            del self.cards[card_id]
        return outcome

    def clear(self) -> None:
        """Empty the deck and reset the name."""
        self.cards.clear()
        self.name = self.default_name

    def set_name(self, name: str) -> None:
        self.name = name

    def total_size(self) -> int:
        """Total number of cards (counting quantities)."""
        return deck_total(self.cards)

    def quantity(self, card_id: str) -> int:
        """Copies of a card in the deck, 0 if absent."""
        return self.cards.get(card_id, 0)

    def entries(self) -> list[tuple[str, int]]:
        """(card_id, quantity) pairs in insertion order."""
        return list(self.cards.items())

    def is_empty(self) -> bool:
        return not self.cards
