from dataclasses import dataclass

# Panel name a card must list in allowed_panels to appear in the deck builder
DECK_BUILDER_PANEL = "DECK_BUILDER"


@dataclass(frozen=True, slots=True)
class CardDefinition:
    """
    A card as defined by the reference catalog.

    Attributes:
        card_id: Unique identifier, stable across sessions
        name: Display name
        faction: Faction the card belongs to (used for filtering only)
        types: Type tags (e.g., ("Unit", "SynchroTech"))
        power: Base power printed on the card
        ability: Ability text, opaque to deck validation
        allowed_panels: Panels the card may appear in. None means all panels.
    """

    card_id: str
    name: str
    faction: str | None = None
    types: tuple[str, ...] = ()
    power: int = 0
    ability: str = ""
    allowed_panels: tuple[str, ...] | None = None

    def is_deck_buildable(self) -> bool:
        """True if the card may be offered in the deck builder library."""
        return self.allowed_panels is None or DECK_BUILDER_PANEL in self.allowed_panels
