"""
DeckForge services.

Composition rules, deck serialization, catalog loading and the editing
session. Import from the submodules directly.
"""
