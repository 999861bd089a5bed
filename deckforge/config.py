from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True, slots=True)
class DeckLimits:
    """
    Composition limits consulted by the rules engine.

    Attributes:
        max_deck_size: Maximum total number of cards (sum of quantities)
        copy_limit: Maximum copies of one card, enforced while editing only
    """

    max_deck_size: int = 100
    copy_limit: int = 3


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="DECKFORGE_", env_file=".env")

    app_name: str = "DeckForge"

    max_deck_size: int = Field(default=100, ge=1)
    copy_limit: int = Field(default=3, ge=1)

    # Used for new decks and for exports whose name is blank, so it must not be blank itself
    default_deck_name: str = Field(default="My Custom Deck", min_length=1, pattern=r"\S")

    catalog_path: Path | None = None

    def limits(self) -> DeckLimits:
        """Composition limits as an immutable value for the rules engine."""
        return DeckLimits(max_deck_size=self.max_deck_size, copy_limit=self.copy_limit)


settings = Settings()


# =============================================================================
# DECK FILE CONSTANTS
# =============================================================================

DECK_FILE_EXTENSION = ".json"

# Indentation used when writing deck files (kept small for human review)
DECK_FILE_INDENT = 2
