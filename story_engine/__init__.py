"""
story_engine -- Prompt compiler and world-building records for story authoring.

Public entry points:
    find_referenced_entries   Entries whose titles occur in a text.
    compile_writing_prompt    Prompt asking for a scene's prose.
    compile_idea_prompt       Prompt asking for brainstorming on a scene.
    DetailRegistry            Learned detail titles and values.
    ProjectContext            Caller-owned bundle of one project's data.
"""

from story_engine.context import ProjectContext
from story_engine.detail_registry import DetailRegistry, DetailType
from story_engine.entry_store import EntryStore
from story_engine.linker import find_referenced_entries
from story_engine.models import (
    ENTRY_TYPES,
    Chapter,
    Detail,
    Entry,
    InvalidCoordinate,
    Scene,
    Story,
    StyleConfiguration,
)
from story_engine.prompt_compiler import (
    compile_idea_prompt,
    compile_writing_prompt,
    gather_context,
)

__version__ = "0.1.0"

__all__ = [
    "ENTRY_TYPES",
    "Chapter",
    "Detail",
    "DetailRegistry",
    "DetailType",
    "Entry",
    "EntryStore",
    "InvalidCoordinate",
    "ProjectContext",
    "Scene",
    "Story",
    "StyleConfiguration",
    "compile_idea_prompt",
    "compile_writing_prompt",
    "find_referenced_entries",
    "gather_context",
]
