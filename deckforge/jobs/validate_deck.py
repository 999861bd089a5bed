"""
Validate deck files against a card catalog.

Usage:
    python -m deckforge.jobs.validate_deck catalog.json my_deck.json [more.json ...]

Each deck file goes through the same gates as an interactive load.
Exits 0 when every deck is valid, 1 otherwise.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from deckforge.config import DeckLimits, settings
from deckforge.models.catalog import CardCatalog
from deckforge.models.custom_deck import CustomDeck
from deckforge.models.failure import DeckResult
from deckforge.parsers.deck_json import read_deck_file
from deckforge.services.card_catalog import load_card_catalog
from deckforge.services.deck_serializer import import_deck

logger = logging.getLogger(__name__)


def validate_deck_file(
    path: Path,
    catalog: CardCatalog,
    limits: DeckLimits | None = None,
) -> DeckResult[CustomDeck]:
    """Read one deck file and run it through every import gate."""
    decoded = read_deck_file(path)
    if decoded.error is not None:
        return DeckResult.failure(decoded.error)
    return import_deck(decoded.value, catalog.lookup, limits)


def run_validation(
    catalog_path: Path,
    deck_paths: Sequence[Path],
    limits: DeckLimits | None = None,
) -> dict[Path, DeckResult[CustomDeck]]:
    """
    Validate several deck files against one catalog.

    Args:
        catalog_path: Card catalog JSON file
        deck_paths: Deck files to check
        limits: Composition limits (defaults to settings)

    Returns:
        Dict mapping each deck path to its import result
    """
    catalog = load_card_catalog(catalog_path)
    results: dict[Path, DeckResult[CustomDeck]] = {}

    for path in deck_paths:
        result = validate_deck_file(path, catalog, limits)
        results[path] = result

        if result.error is not None:
            logger.error("%s: %s", path, result.error.message)
        else:
            deck = result.unwrap()
            logger.info("%s: '%s' is valid (%d cards)", path, deck.name, deck.total_size())

    valid = sum(1 for r in results.values() if r.ok)
    logger.info("Validation complete. %d of %d decks valid", valid, len(results))
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate deck files against a card catalog")
    parser.add_argument("catalog", type=Path, help="Path to card catalog JSON file")
    parser.add_argument("decks", type=Path, nargs="+", help="Deck files to validate")
    parser.add_argument(
        "--max-deck-size",
        type=int,
        default=settings.max_deck_size,
        help="Maximum total cards per deck",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    limits = DeckLimits(max_deck_size=args.max_deck_size, copy_limit=settings.copy_limit)

    try:
        results = run_validation(args.catalog, args.decks, limits)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load card catalog: %s", e)
        return 1

    return 0 if all(r.ok for r in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
