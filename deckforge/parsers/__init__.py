from deckforge.parsers.deck_json import (
    dump_deck_file,
    parse_deck_json,
    read_deck_file,
    write_deck_file,
)

__all__ = [
    "dump_deck_file",
    "parse_deck_json",
    "read_deck_file",
    "write_deck_file",
]
