"""DeckForge: custom deck composition and validation."""

__version__ = "0.1.0"
