"""
story_engine/models/ -- Pydantic v2 records for entries, story and style.

Submodules:
    entry   Detail, Entry and the suggested entry-type vocabulary.
    story   Scene, Chapter, Story and InvalidCoordinate.
    style   StyleConfiguration.
"""

from story_engine.models.entry import ENTRY_TYPES, Detail, Entry
from story_engine.models.story import Chapter, InvalidCoordinate, Scene, Story
from story_engine.models.style import STYLE_FIELDS, StyleConfiguration

__all__ = [
    "ENTRY_TYPES",
    "STYLE_FIELDS",
    "Chapter",
    "Detail",
    "Entry",
    "InvalidCoordinate",
    "Scene",
    "Story",
    "StyleConfiguration",
]
