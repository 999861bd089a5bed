"""
Tests for the composition rules engine.

Whole-deck validation reports the FIRST failure only, and never
applies the per-card copy limit.
"""

import pytest

from deckforge.config import DeckLimits
from deckforge.models.catalog import CardCatalog
from deckforge.models.failure import (
    DeckTooLargeError,
    DegenerateDeckError,
    FailureKind,
    InvalidFileStructureError,
    MalformedEntryError,
    MutationOutcome,
    UnknownCardError,
)
from deckforge.services.composition_rules import (
    check_add,
    check_remove,
    deck_total,
    is_valid_quantity,
    validate_entry,
    validate_records,
    validate_whole_deck,
)


class TestQuantity:
    @pytest.mark.parametrize("value", [1, 3, 250, 2.0, 1e0])
    def test_positive_whole_numbers_are_valid(self, value: float) -> None:
        assert is_valid_quantity(value) is True

    @pytest.mark.parametrize("value", [0, -1, 0.0, 1.5, float("nan"), float("inf"), "2", None, True])
    def test_everything_else_is_invalid(self, value: object) -> None:
        assert is_valid_quantity(value) is False

    def test_deck_total(self) -> None:
        assert deck_total({"A": 2, "B": 3}) == 5
        assert deck_total({}) == 0


class TestMutationGuards:
    def test_check_add_allows_new_card(self, catalog: CardCatalog, limits: DeckLimits) -> None:
        assert check_add({}, "HOO_ENFORCER", catalog.lookup, limits) is MutationOutcome.ADDED

    def test_check_add_refuses_unknown_card(
        self, catalog: CardCatalog, limits: DeckLimits
    ) -> None:
        assert check_add({}, "GHOST", catalog.lookup, limits) is MutationOutcome.UNKNOWN_CARD

    def test_check_add_refuses_at_copy_limit(
        self, catalog: CardCatalog, limits: DeckLimits
    ) -> None:
        outcome = check_add({"HOO_ENFORCER": 3}, "HOO_ENFORCER", catalog.lookup, limits)
        assert outcome is MutationOutcome.COPY_LIMIT_REACHED
        assert outcome.limit_reached

    def test_check_add_refuses_at_deck_size(self, catalog: CardCatalog) -> None:
        small = DeckLimits(max_deck_size=2, copy_limit=3)
        outcome = check_add({"FILLER_00": 2}, "FILLER_01", catalog.lookup, small)
        assert outcome is MutationOutcome.DECK_SIZE_REACHED

    def test_check_remove(self) -> None:
        assert check_remove({"A": 1}, "A") is MutationOutcome.REMOVED
        assert check_remove({"A": 1}, "B") is MutationOutcome.NOT_IN_DECK


class TestValidateEntry:
    def test_valid_entry(self) -> None:
        assert validate_entry({"cardId": "A", "quantity": 2}) == ("A", 2)

    def test_whole_float_quantity_is_normalized(self) -> None:
        card_id, quantity = validate_entry({"cardId": "A", "quantity": 2.0})

        assert (card_id, quantity) == ("A", 2)
        assert type(quantity) is int

    @pytest.mark.parametrize(
        "entry",
        [
            {"cardId": 7, "quantity": 1},
            {"quantity": 1},
            {"cardId": "A"},
            {"cardId": "A", "quantity": 0},
            {"cardId": "A", "quantity": 1.5},
            {"cardId": "A", "quantity": "1"},
            ["A", 1],
            "A",
        ],
    )
    def test_malformed_entry_carries_raw_entry(self, entry: object) -> None:
        with pytest.raises(MalformedEntryError) as exc_info:
            validate_entry(entry)

        assert exc_info.value.entry == entry
        assert exc_info.value.kind == FailureKind.MALFORMED_ENTRY


class TestValidateWholeDeck:
    def test_valid_deck(self, catalog: CardCatalog, limits: DeckLimits) -> None:
        result = validate_whole_deck(
            {"HOO_ENFORCER": 2, "SYN_RECON_DRONE": 1}, catalog.lookup, limits
        )

        assert result.ok
        validated = result.unwrap()
        assert validated.as_dict() == {"HOO_ENFORCER": 2, "SYN_RECON_DRONE": 1}
        assert validated.total_cards() == 3

    def test_empty_mapping_is_valid(self, catalog: CardCatalog, limits: DeckLimits) -> None:
        result = validate_whole_deck({}, catalog.lookup, limits)
        assert result.ok
        assert len(result.unwrap()) == 0

    def test_whole_float_quantity_is_normalized(
        self, catalog: CardCatalog, limits: DeckLimits
    ) -> None:
        result = validate_whole_deck({"HOO_ENFORCER": 2.0}, catalog.lookup, limits)

        assert result.ok
        assert result.unwrap().as_dict() == {"HOO_ENFORCER": 2}
        assert all(type(qty) is int for _, qty in result.unwrap().cards)

    def test_non_mapping_is_invalid_structure(
        self, catalog: CardCatalog, limits: DeckLimits
    ) -> None:
        result = validate_whole_deck([("A", 1)], catalog.lookup, limits)
        assert isinstance(result.error, InvalidFileStructureError)

    def test_malformed_quantity(self, catalog: CardCatalog, limits: DeckLimits) -> None:
        result = validate_whole_deck({"HOO_ENFORCER": 0}, catalog.lookup, limits)

        assert isinstance(result.error, MalformedEntryError)
        assert result.error.entry == {"cardId": "HOO_ENFORCER", "quantity": 0}
        assert "HOO_ENFORCER" in result.error.message

    def test_unknown_card_short_circuits(self, catalog: CardCatalog, limits: DeckLimits) -> None:
        result = validate_whole_deck(
            {"HOO_ENFORCER": 1, "GHOST_ONE": 1, "GHOST_TWO": 1}, catalog.lookup, limits
        )

        assert isinstance(result.error, UnknownCardError)
        assert result.error.card_id == "GHOST_ONE"

    def test_deck_too_large(self, catalog: CardCatalog) -> None:
        limits = DeckLimits(max_deck_size=5, copy_limit=3)
        result = validate_whole_deck({"FILLER_00": 3, "FILLER_01": 3}, catalog.lookup, limits)

        assert isinstance(result.error, DeckTooLargeError)
        assert (result.error.total, result.error.limit) == (6, 5)

    def test_copy_limit_not_applied(self, catalog: CardCatalog, limits: DeckLimits) -> None:
        result = validate_whole_deck({"HOO_ENFORCER": 10}, catalog.lookup, limits)

        assert result.ok
        assert result.unwrap().as_dict() == {"HOO_ENFORCER": 10}

    def test_limits_default_to_settings(self, catalog: CardCatalog) -> None:
        result = validate_whole_deck({"HOO_ENFORCER": 101}, catalog.lookup)

        assert isinstance(result.error, DeckTooLargeError)
        assert result.error.limit == 100


class TestValidateRecords:
    def test_collapses_duplicates_last_write_wins(
        self, catalog: CardCatalog, limits: DeckLimits
    ) -> None:
        records = [
            {"cardId": "HOO_ENFORCER", "quantity": 1},
            {"cardId": "OPT_ARCHANGEL", "quantity": 2},
            {"cardId": "HOO_ENFORCER", "quantity": 3},
        ]
        result = validate_records(records, catalog.lookup, limits, name="Dupes")

        validated = result.unwrap()
        assert validated.as_dict() == {"HOO_ENFORCER": 3, "OPT_ARCHANGEL": 2}
        assert validated.name == "Dupes"

    def test_duplicates_count_toward_size_limit(self, catalog: CardCatalog) -> None:
        limits = DeckLimits(max_deck_size=4, copy_limit=3)
        records = [
            {"cardId": "HOO_ENFORCER", "quantity": 3},
            {"cardId": "HOO_ENFORCER", "quantity": 2},
        ]
        result = validate_records(records, catalog.lookup, limits)

        assert isinstance(result.error, DeckTooLargeError)
        assert result.error.total == 5

    def test_malformed_entry_reported_before_later_unknown_card(
        self, catalog: CardCatalog, limits: DeckLimits
    ) -> None:
        records = [
            {"cardId": "HOO_ENFORCER", "quantity": -2},
            {"cardId": "GHOST", "quantity": 1},
        ]
        result = validate_records(records, catalog.lookup, limits)
        assert isinstance(result.error, MalformedEntryError)

    def test_entries_checked_in_order(self, catalog: CardCatalog, limits: DeckLimits) -> None:
        records = [
            {"cardId": "GHOST", "quantity": 1},
            {"cardId": "HOO_ENFORCER", "quantity": "two"},
        ]
        result = validate_records(records, catalog.lookup, limits)
        assert isinstance(result.error, UnknownCardError)

    def test_degenerate_error_message(self) -> None:
        error = DegenerateDeckError()
        assert error.kind == FailureKind.DEGENERATE_DECK
        assert "zero quantity" in error.message
