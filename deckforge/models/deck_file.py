"""
Portable deck file: the only deck form that crosses the system boundary.

    {
      "deckName": "My Custom Deck",
      "cards": [{"cardId": "...", "quantity": 2}, ...]
    }

These models describe what deckforge WRITES. Incoming files are checked
by the composition rules before any of them is trusted.
"""

from pydantic import BaseModel, ConfigDict, Field


class DeckFileCard(BaseModel):
    """A card record in a deck file."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    card_id: str = Field(..., alias="cardId")
    quantity: int = Field(..., ge=1)


class PortableDeckFile(BaseModel):
    """A deck as written to disk."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    deck_name: str = Field(..., alias="deckName")
    cards: list[DeckFileCard] = Field(default_factory=list)

    def total_cards(self) -> int:
        return sum(card.quantity for card in self.cards)

    def to_payload(self) -> dict[str, object]:
        """Plain JSON-ready dict using the file's camelCase keys."""
        return self.model_dump(by_alias=True)
