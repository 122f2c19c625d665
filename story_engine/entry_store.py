"""
story_engine/entry_store.py -- Ordered collection of world-building entries.

The store is the place where title uniqueness is enforced: two entries may
not share a title under case-insensitive comparison.  Store order matters
to the linker, which breaks ties between equally long titles by it.

When a DetailRegistry is attached, every entry added to the store (and
every entry passed to :meth:`EntryStore.learn`) feeds its details to the
registry.

Usage::

    from story_engine.entry_store import EntryStore

    store = EntryStore()
    store.create("Mira", type="Character", description="A healer.")
    store.get("mira").title    # "Mira"
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from story_engine.detail_registry import DetailRegistry
from story_engine.models.entry import Detail, Entry

logger = logging.getLogger(__name__)


def _title_key(title: str) -> str:
    return title.strip().lower()


class EntryStore:
    """Ordered, title-unique collection of :class:`Entry` records.

    Parameters
    ----------
    entries : iterable of Entry, optional
        Initial entries, added in order (duplicates raise ``ValueError``).
    registry : DetailRegistry, optional
        Registry to auto-populate from entry details.
    """

    def __init__(
        self,
        entries: Iterable[Entry] | None = None,
        registry: DetailRegistry | None = None,
    ):
        self._entries: list[Entry] = []
        self.registry = registry
        for entry in entries or ():
            self.add(entry)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, title: object) -> bool:
        return isinstance(title, str) and self.get(title) is not None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, title: str) -> Entry | None:
        """Return the entry titled *title* (case-insensitive), or ``None``."""
        key = _title_key(title)
        for entry in self._entries:
            if _title_key(entry.title) == key:
                return entry
        return None

    def titles(self) -> list[str]:
        return [entry.title for entry in self._entries]

    def global_entries(self) -> list[Entry]:
        return [entry for entry in self._entries if entry.is_global]

    def _require(self, title: str) -> Entry:
        entry = self.get(title)
        if entry is None:
            raise KeyError(f"No entry titled '{title}'")
        return entry

    def _check_title_free(self, title: str, ignore: Entry | None = None) -> None:
        if not title.strip():
            raise ValueError("An entry needs a title before it can be saved.")
        existing = self.get(title)
        if existing is not None and existing is not ignore:
            raise ValueError(
                f"The title '{title}' is already used by the entry "
                f"'{existing.title}'. Titles must be unique, ignoring case."
            )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, entry: Entry) -> Entry:
        """Append *entry*.

        Raises
        ------
        ValueError
            If the title is blank or already used.
        """
        self._check_title_free(entry.title)
        self._entries.append(entry)
        logger.debug("Added entry %r", entry.title)
        self.learn(entry)
        return entry

    def create(
        self,
        title: str,
        type: str = "",
        description: str = "",
        is_global: bool = False,
        details: Iterable[tuple[str, str]] | None = None,
    ) -> Entry:
        """Build an entry from plain values and add it."""
        entry = Entry(
            title=title,
            type=type,
            description=description,
            is_global=is_global,
            details=[Detail(title=t, value=v) for t, v in details or ()],
        )
        return self.add(entry)

    def rename(self, old_title: str, new_title: str) -> Entry:
        """Change an entry's title, keeping titles unique."""
        entry = self._require(old_title)
        self._check_title_free(new_title, ignore=entry)
        entry.title = new_title
        return entry

    def remove(self, title: str) -> Entry:
        entry = self._require(title)
        self._entries.remove(entry)
        logger.debug("Removed entry %r", entry.title)
        return entry

    def move(self, from_index: int, to_index: int) -> None:
        """Move the entry at *from_index* so it ends up at *to_index*."""
        if not (0 <= from_index < len(self._entries)):
            raise IndexError(f"Entry index {from_index} is out of range")
        if not (0 <= to_index < len(self._entries)):
            raise IndexError(f"Entry index {to_index} is out of range")
        entry = self._entries.pop(from_index)
        self._entries.insert(to_index, entry)

    def learn(self, entry: Entry) -> None:
        """Feed *entry*'s details to the attached registry, if any."""
        if self.registry is not None:
            self.registry.learn_from_entry(entry)
