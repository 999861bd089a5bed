"""
Deck editing session.

Owns the single active CustomDeck and is the surface a presentation layer
calls. Loads replace the active deck only when the incoming payload passes
every import gate; a failed load leaves the current deck exactly as it was.
"""

import logging
from pathlib import Path
from typing import Any

from deckforge.config import Settings, settings
from deckforge.models.catalog import CardCatalog
from deckforge.models.custom_deck import CustomDeck
from deckforge.models.deck_file import PortableDeckFile
from deckforge.models.failure import DeckResult, MutationOutcome
from deckforge.parsers.deck_json import parse_deck_json, read_deck_file, write_deck_file
from deckforge.services.deck_serializer import export_deck, import_deck

logger = logging.getLogger(__name__)


class DeckEditor:
    """
    A single-deck editing session.

    Not safe for concurrent use; there is exactly one writer.
    """

    def __init__(self, catalog: CardCatalog, config: Settings | None = None) -> None:
        self.catalog = catalog
        self.config = config or settings
        self.deck = self._new_deck()

    def _new_deck(self) -> CustomDeck:
        return CustomDeck(
            catalog_lookup=self.catalog.lookup,
            limits=self.config.limits(),
            name=self.config.default_deck_name,
            default_name=self.config.default_deck_name,
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_copy(self, card_id: str) -> MutationOutcome:
        outcome = self.deck.add_copy(card_id)
        if not outcome.applied:
            logger.debug("Add of %s refused: %s", card_id, outcome.value)
        return outcome

    def remove_copy(self, card_id: str) -> MutationOutcome:
        return self.deck.remove_copy(card_id)

    def remove_all_copies(self, card_id: str) -> MutationOutcome:
        return self.deck.remove_all_copies(card_id)

    def clear(self) -> None:
        self.deck.clear()

    def set_name(self, name: str) -> None:
        self.deck.set_name(name)

    def total_size(self) -> int:
        return self.deck.total_size()

    # -------------------------------------------------------------------------
    # Save / load
    # -------------------------------------------------------------------------

    def export(self) -> DeckResult[PortableDeckFile]:
        """Export the active deck without touching disk."""
        return export_deck(self.deck, self.config)

    def save(self, directory: Path) -> DeckResult[Path]:
        """
        Export the active deck and write it to directory.

        Returns:
            DeckResult carrying the written path, or EmptyDeck

        Raises:
            OSError: If the file cannot be written
        """
        return self.export().map(lambda deck_file: write_deck_file(deck_file, directory))

    def load_data(self, raw: Any) -> DeckResult[CustomDeck]:
        """Replace the active deck with a decoded payload, if it is valid."""
        result = import_deck(raw, self.catalog.lookup, self.config.limits())
        if result.ok:
            self.deck = result.unwrap()
            self.deck.default_name = self.config.default_deck_name
            logger.info("Loaded deck '%s' (%d cards)", self.deck.name, self.deck.total_size())
        return result

    def load_text(self, text: str) -> DeckResult[CustomDeck]:
        """Replace the active deck with deck file text, if it is valid."""
        decoded = parse_deck_json(text)
        if decoded.error is not None:
            return DeckResult.failure(decoded.error)
        return self.load_data(decoded.value)

    def load_file(self, path: Path) -> DeckResult[CustomDeck]:
        """Replace the active deck with a deck file, if it is valid."""
        decoded = read_deck_file(path)
        if decoded.error is not None:
            return DeckResult.failure(decoded.error)
        return self.load_data(decoded.value)
