"""
story_engine/context.py -- Caller-owned project session.

A ProjectContext bundles the story, the entry store, the style
configuration and the detail registry of one open project.  The host
application creates one per project and passes it around; nothing in the
package keeps project data in module-level globals.

The compiler itself is pure, but the records it reads are mutable.  The
context owns a re-entrant lock so a multi-threaded host can serialize
edits and compiles, or hand a deep-copied :meth:`snapshot` to a worker.

Usage::

    from story_engine.context import ProjectContext

    project = ProjectContext()
    project.with_lock(lambda p: p.story.add_chapter())
    prompt = project.compile_writing_prompt(0, 0)
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable

from story_engine.detail_registry import DetailRegistry
from story_engine.entry_store import EntryStore
from story_engine.linker import find_referenced_entries
from story_engine.models.entry import Entry
from story_engine.models.story import Story
from story_engine.models.style import StyleConfiguration
from story_engine.prompt_compiler import compile_idea_prompt, compile_writing_prompt

logger = logging.getLogger(__name__)


class ProjectContext:
    """Story, entries, style and registry of one project.

    Parameters
    ----------
    story : Story, optional
    entries : EntryStore, optional
        If given without a registry attached, the context's registry is
        attached to it.
    style : StyleConfiguration, optional
    registry : DetailRegistry, optional
    """

    def __init__(
        self,
        story: Story | None = None,
        entries: EntryStore | None = None,
        style: StyleConfiguration | None = None,
        registry: DetailRegistry | None = None,
    ):
        self.registry = registry if registry is not None else DetailRegistry()
        if entries is None:
            entries = EntryStore(registry=self.registry)
        elif entries.registry is None:
            entries.registry = self.registry
            self.registry.learn_from_entries(entries)
        self.entries = entries
        self.story = story if story is not None else Story()
        self.style = style if style is not None else StyleConfiguration()
        self._lock = threading.RLock()

    def with_lock(self, callback: Callable[[ProjectContext], Any]) -> Any:
        """Run ``callback(self)`` while holding the project lock."""
        with self._lock:
            return callback(self)

    def snapshot(self) -> ProjectContext:
        """Return an independent deep copy of the project data."""
        with self._lock:
            registry = DetailRegistry.from_export(self.registry.export_data())
            entries = EntryStore(
                [entry.model_copy(deep=True) for entry in self.entries],
            )
            entries.registry = registry
            return ProjectContext(
                story=self.story.model_copy(deep=True),
                entries=entries,
                style=self.style.model_copy(),
                registry=registry,
            )

    # ------------------------------------------------------------------
    # Compiler entry points
    # ------------------------------------------------------------------

    def find_referenced_entries(self, text: str) -> list[Entry]:
        with self._lock:
            return find_referenced_entries(text, self.entries)

    def compile_writing_prompt(self, chapter_index: int, scene_index: int) -> str:
        with self._lock:
            return compile_writing_prompt(
                chapter_index, scene_index, self.story, self.entries, self.style,
            )

    def compile_idea_prompt(self, chapter_index: int, scene_index: int) -> str:
        with self._lock:
            return compile_idea_prompt(
                chapter_index, scene_index, self.story, self.entries, self.style,
            )
