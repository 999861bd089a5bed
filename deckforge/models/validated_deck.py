"""
ValidatedDeck: A Card Mapping That Passed Whole-Deck Validation.

Only the rules engine constructs these. Holding a ValidatedDeck means:
1. Every entry was a string card ID with an integer quantity >= 1
2. Every card ID resolved in the catalog
3. The total quantity is within the deck size limit

The per-card copy limit is NOT part of this guarantee.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidatedDeck:
    """
    An immutable, trusted card mapping.

    Attributes:
        cards: (card_id, quantity) pairs in input order, card IDs unique
        name: Deck name, if the validated payload carried one
    """

    cards: tuple[tuple[str, int], ...] = field(default_factory=tuple)
    name: str = ""

    def __contains__(self, card_id: str) -> bool:
        return any(cid == card_id for cid, _ in self.cards)

    def __len__(self) -> int:
        """Number of distinct cards."""
        return len(self.cards)

    def as_dict(self) -> dict[str, int]:
        """Get the mapping as a mutable dict."""
        return dict(self.cards)

    def total_cards(self) -> int:
        """Total number of cards (counting quantities)."""
        return sum(qty for _, qty in self.cards)
