"""
Deck file I/O.

Reads and writes portable deck files as UTF-8 JSON. Decoding only
extracts structure: the decoded payload is still untrusted and must go
through deck_serializer.import_deck.
"""

import json
import logging
from pathlib import Path
from typing import Any

from deckforge.config import DECK_FILE_INDENT
from deckforge.models.deck_file import PortableDeckFile
from deckforge.models.failure import DeckResult, UnreadableDeckFileError
from deckforge.services.deck_serializer import deck_file_name

logger = logging.getLogger(__name__)


def dump_deck_file(deck_file: PortableDeckFile) -> str:
    """Render a deck file as pretty-printed JSON text."""
    return json.dumps(deck_file.to_payload(), indent=DECK_FILE_INDENT, ensure_ascii=False)


def parse_deck_json(text: str) -> DeckResult[Any]:
    """
    Decode deck file text.

    Args:
        text: Raw file contents

    Returns:
        DeckResult carrying the decoded payload, or UnreadableDeckFile
    """
    try:
        return DeckResult.success(json.loads(text))
    except json.JSONDecodeError as e:
        return DeckResult.failure(UnreadableDeckFileError(f"invalid JSON ({e})"))


def read_deck_file(path: Path) -> DeckResult[Any]:
    """
    Read and decode a deck file.

    Args:
        path: Path to a .json deck file

    Returns:
        DeckResult carrying the decoded payload, or UnreadableDeckFile
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read deck file %s: %s", path, e)
        return DeckResult.failure(UnreadableDeckFileError(f"cannot read {path.name} ({e})"))

    return parse_deck_json(text)


def write_deck_file(deck_file: PortableDeckFile, directory: Path) -> Path:
    """
    Write a deck file named after its deck.

    Args:
        deck_file: Exported deck
        directory: Target directory (created if missing)

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / deck_file_name(deck_file.deck_name)

    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_deck_file(deck_file))
        f.write("\n")

    logger.info("Saved deck '%s' to %s", deck_file.deck_name, path)
    return path
