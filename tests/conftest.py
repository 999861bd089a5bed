import pytest

from deckforge.config import DeckLimits
from deckforge.models.card import CardDefinition
from deckforge.models.catalog import CardCatalog, build_catalog
from deckforge.models.custom_deck import CustomDeck

# Enough distinct filler cards to reach a 100-card deck at 3 copies each
FILLER_CARD_COUNT = 40


@pytest.fixture
def sample_cards() -> list[CardDefinition]:
    """Named cards with varied factions, powers and panel visibility."""
    return [
        CardDefinition(
            card_id="SYN_RECON_DRONE",
            name="Recon Drone",
            faction="SynchroTech",
            types=("Unit", "SynchroTech"),
            power=2,
            ability="Deploy: Reveal the top card of a deck.",
        ),
        CardDefinition(
            card_id="HOO_ENFORCER",
            name="Street Enforcer",
            faction="Hoods",
            types=("Unit", "Hoods"),
            power=4,
            ability="Support: +1 power to adjacent units.",
        ),
        CardDefinition(
            card_id="OPT_ARCHANGEL",
            name="Archangel Protocol",
            faction="Optimates",
            types=("Unit",),
            power=4,
            ability="Shield 1.",
        ),
        CardDefinition(
            card_id="CMD_OVERWATCH",
            name="Overwatch",
            types=("Command",),
            ability="Reveal a card in an opponent's hand.",
            allowed_panels=("DECK_BUILDER",),
        ),
        CardDefinition(
            card_id="TKN_MACHINE_SPIRIT",
            name="Machine Spirit",
            types=("Token",),
            power=1,
            allowed_panels=("TOKEN_PANEL",),
        ),
    ]


@pytest.fixture
def filler_cards() -> list[CardDefinition]:
    return [
        CardDefinition(card_id=f"FILLER_{i:02d}", name=f"Filler {i:02d}", faction="Neutral")
        for i in range(FILLER_CARD_COUNT)
    ]


@pytest.fixture
def catalog(sample_cards: list[CardDefinition], filler_cards: list[CardDefinition]) -> CardCatalog:
    return build_catalog(sample_cards + filler_cards, source="fixture")


@pytest.fixture
def limits() -> DeckLimits:
    return DeckLimits(max_deck_size=100, copy_limit=3)


@pytest.fixture
def empty_deck(catalog: CardCatalog, limits: DeckLimits) -> CustomDeck:
    return CustomDeck(catalog_lookup=catalog.lookup, limits=limits, name="Test Deck")


@pytest.fixture
def sample_payload() -> dict:
    """A valid deck file payload as decoded from JSON."""
    return {
        "deckName": "Synchro Rush",
        "cards": [
            {"cardId": "SYN_RECON_DRONE", "quantity": 3},
            {"cardId": "HOO_ENFORCER", "quantity": 2},
            {"cardId": "CMD_OVERWATCH", "quantity": 1},
        ],
    }
