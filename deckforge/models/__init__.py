from deckforge.models.card import DECK_BUILDER_PANEL, CardDefinition
from deckforge.models.catalog import CardCatalog, CatalogLookup, build_catalog
from deckforge.models.deck_file import DeckFileCard, PortableDeckFile
from deckforge.models.failure import (
    DeckError,
    DeckResult,
    DeckTooLargeError,
    DegenerateDeckError,
    EmptyDeckError,
    FailureDetail,
    FailureKind,
    InvalidFileStructureError,
    MalformedEntryError,
    MutationOutcome,
    UnknownCardError,
    UnreadableDeckFileError,
)
from deckforge.models.validated_deck import ValidatedDeck

__all__ = [
    "DECK_BUILDER_PANEL",
    "CardCatalog",
    "CardDefinition",
    "CatalogLookup",
    "DeckError",
    "DeckFileCard",
    "DeckResult",
    "DeckTooLargeError",
    "DegenerateDeckError",
    "EmptyDeckError",
    "FailureDetail",
    "FailureKind",
    "InvalidFileStructureError",
    "MalformedEntryError",
    "MutationOutcome",
    "PortableDeckFile",
    "UnknownCardError",
    "UnreadableDeckFileError",
    "ValidatedDeck",
    "build_catalog",
]
