"""
Card Catalog: the read-only reference set of card definitions.

The catalog is passed explicitly to the rules engine and serializer.
Nothing in deckforge reads a process-wide catalog.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from deckforge.models.card import CardDefinition

# Signature of the single-card lookup consumed by validation
CatalogLookup = Callable[[str], CardDefinition | None]


@dataclass(frozen=True)
class CardCatalog:
    """
    An immutable mapping from card ID to card definition.

    Attributes:
        cards: Read-only view of {card_id: CardDefinition}
        source: Description of where the catalog was loaded from
    """

    cards: Mapping[str, CardDefinition] = field(default_factory=lambda: MappingProxyType({}))
    source: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.cards, MappingProxyType):
            object.__setattr__(self, "cards", MappingProxyType(dict(self.cards)))

    def __contains__(self, card_id: object) -> bool:
        return card_id in self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[str]:
        return iter(self.cards)

    def lookup(self, card_id: str) -> CardDefinition | None:
        """Get a card definition by ID, or None if the catalog lacks it."""
        return self.cards.get(card_id)

    def list_all(self) -> list[tuple[str, CardDefinition]]:
        """All (card_id, definition) pairs in catalog order."""
        return list(self.cards.items())


def build_catalog(definitions: Iterable[CardDefinition], source: str = "memory") -> CardCatalog:
    """
    Build a catalog from card definitions.

    The first definition seen for an ID wins; later duplicates are ignored.
    """
    cards: dict[str, CardDefinition] = {}
    for definition in definitions:
        if definition.card_id not in cards:
            cards[definition.card_id] = definition
    return CardCatalog(cards=cards, source=source)
