"""
Deck Failure Taxonomy: Result Envelope for Validation and Serialization.

Every way a deck can be refused is classified by a FailureKind and carried
by a DeckError subclass. The rules engine and serializer never let these
exceptions escape: they return a DeckResult instead, so the caller always
decides what to show the user.

Failure kinds:
- InvalidFileStructure: top-level shape of an imported payload is wrong
- MalformedEntry: a single card record fails type/range checks
- UnknownCard: a referenced card is absent from the catalog
- DeckTooLarge: composition exceeds the size cap
- DegenerateDeck: non-empty entry list with zero total
- EmptyDeck: attempted export of a deck with zero cards
- UnreadableFile: the deck file could not be read or decoded

Refused mutations (copy limit, deck size) are NOT failures. They are
reported as MutationOutcome values by the composition model.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of deck failures."""

    # Payload shape failures
    INVALID_FILE_STRUCTURE = "invalid_file_structure"
    MALFORMED_ENTRY = "malformed_entry"
    UNREADABLE_FILE = "unreadable_file"

    # Catalog failures
    UNKNOWN_CARD = "unknown_card"

    # Constraint violations
    DECK_TOO_LARGE = "deck_too_large"
    DEGENERATE_DECK = "degenerate_deck"
    EMPTY_DECK = "empty_deck"


class MutationOutcome(str, Enum):
    """Result of a single add/remove on the composition model."""

    ADDED = "added"
    REMOVED = "removed"
    NOT_IN_DECK = "not_in_deck"
    UNKNOWN_CARD = "unknown_card"
    COPY_LIMIT_REACHED = "LimitReached: copy-limit"
    DECK_SIZE_REACHED = "LimitReached: deck-size"

    @property
    def applied(self) -> bool:
        """True if the deck changed."""
        return self in (MutationOutcome.ADDED, MutationOutcome.REMOVED)

    @property
    def limit_reached(self) -> bool:
        """True if the mutation was refused by a composition limit."""
        return self in (MutationOutcome.COPY_LIMIT_REACHED, MutationOutcome.DECK_SIZE_REACHED)


class FailureDetail(BaseModel):
    """Detailed information about a failure, for a presentation layer."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Offending value, rendered for display (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


# =============================================================================
# EXCEPTION HIERARCHY
# =============================================================================


def _render_raw(value: Any) -> str:
    """Render an untrusted value for an error message."""
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


class DeckError(Exception):
    """
    Base class for every explainable deck failure.

    Carries a single human-readable message identifying what is wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class InvalidFileStructureError(DeckError):
    """Raised when an imported payload lacks a string deckName or a list of cards."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            kind=FailureKind.INVALID_FILE_STRUCTURE,
            message=(
                "Invalid file structure. Must have 'deckName' (string) and 'cards' (array)."
            ),
            detail=reason,
            suggestion="Check that the file is a deck exported by the deck builder.",
        )


class MalformedEntryError(DeckError):
    """Raised when a card record is not a string cardId with an integer quantity >= 1."""

    def __init__(self, entry: Any, reason: str | None = None) -> None:
        self.entry = entry
        rendered = _render_raw(entry)
        super().__init__(
            kind=FailureKind.MALFORMED_ENTRY,
            message=f"Invalid card entry: {rendered}",
            detail=reason,
            suggestion="Each card needs a string 'cardId' and a whole-number 'quantity' of 1+.",
        )


class UnknownCardError(DeckError):
    """Raised when a card ID does not resolve in the catalog."""

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.UNKNOWN_CARD,
            message=f"Card with ID '{card_id}' does not exist.",
            detail=card_id,
            suggestion="Remove the card from the file or update the card catalog.",
        )


class DeckTooLargeError(DeckError):
    """Raised when the sum of quantities exceeds the deck size limit."""

    def __init__(self, total: int, limit: int) -> None:
        self.total = total
        self.limit = limit
        super().__init__(
            kind=FailureKind.DECK_TOO_LARGE,
            message=f"Deck exceeds the {limit} card limit (found {total} cards).",
            detail=f"{total}/{limit}",
            suggestion=f"Remove at least {total - limit} card(s).",
        )


class DegenerateDeckError(DeckError):
    """Raised when a deck lists cards but its total quantity is zero."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.DEGENERATE_DECK,
            message="Deck contains cards with zero quantity.",
        )


class EmptyDeckError(DeckError):
    """Raised when exporting a deck that contains no cards."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.EMPTY_DECK,
            message="Cannot save an empty deck.",
            suggestion="Add at least one card before saving.",
        )


class UnreadableDeckFileError(DeckError):
    """Raised when a deck file cannot be read or is not valid JSON."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            kind=FailureKind.UNREADABLE_FILE,
            message=f"Error reading file: {reason}",
            detail=reason,
        )


# =============================================================================
# RESULT ENVELOPE
# =============================================================================

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class DeckResult(Generic[T]):
    """
    Success-with-value or failure-with-error.

    Exactly one of value/error is meaningful; check `ok` first.
    """

    value: T | None = None
    error: DeckError | None = None

    @classmethod
    def success(cls, value: T) -> "DeckResult[T]":
        """Create a success result."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: DeckError) -> "DeckResult[T]":
        """Create a failure result."""
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """
        Get the success value.

        Raises:
            DeckError: The carried error, if this is a failure
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> "DeckResult[U]":
        """Apply fn to the success value; failures pass through unchanged."""
        if self.error is not None:
            return DeckResult(error=self.error)
        return DeckResult(value=fn(self.value))  # type: ignore[arg-type]
