"""
story_engine/models/entry.py -- World-building entries and their details.

An Entry is one fact record in the writer's library (a character, a
location, a piece of lore...).  Its ``details`` are free-text title/value
pairs with no fixed schema; the DetailRegistry learns which titles and
values are in use.

Usage::

    from story_engine.models import Entry

    mira = Entry(title="Mira", type="Character", description="A healer.")
    mira.set_detail("Eye Color", "Green")
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Suggested values for Entry.type.  Not enforced.
ENTRY_TYPES: tuple[str, ...] = ("Character", "Location", "Lore", "Object", "Subplot")


class Detail(BaseModel):
    """A single free-text attribute attached to an Entry."""

    model_config = ConfigDict(validate_assignment=True)

    title: str = ""
    value: str = ""

    def update(self, title: str, value: str) -> None:
        self.title = title
        self.value = value

    def formatted(self) -> str:
        """Return the detail as ``"Title: Value"``."""
        return f"{self.title}: {self.value}"


class Entry(BaseModel):
    """A world-building record.

    ``title`` is the text the linker searches scene summaries for, so it
    must be unique (case-insensitively) inside an EntryStore.  Entries
    flagged ``is_global`` are included in every compiled prompt.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str = ""
    type: str = ""
    is_global: bool = False
    description: str = ""
    details: list[Detail] = Field(default_factory=list)

    @field_validator("details", mode="before")
    @classmethod
    def _copy_details(cls, value: Any) -> Any:
        # Details are owned by value; never alias another entry's records.
        if isinstance(value, list):
            return [
                d.model_copy() if isinstance(d, Detail) else d
                for d in value
            ]
        return value

    # ------------------------------------------------------------------
    # Detail helpers
    # ------------------------------------------------------------------

    def get_detail(self, title: str) -> Detail | None:
        """Return the first detail whose title equals *title*, or ``None``."""
        for detail in self.details:
            if detail.title == title:
                return detail
        return None

    def add_detail(self, title: str, value: str = "") -> Detail:
        """Append a new detail, even if one with the same title exists."""
        detail = Detail(title=title, value=value)
        self.details.append(detail)
        return detail

    def set_detail(self, title: str, value: str) -> Detail:
        """Update the first detail titled *title*, or append a new one."""
        existing = self.get_detail(title)
        if existing is not None:
            existing.value = value
            return existing
        return self.add_detail(title, value)

    def remove_detail(self, title: str) -> Detail | None:
        """Remove and return the first detail titled *title*."""
        for i, detail in enumerate(self.details):
            if detail.title == title:
                return self.details.pop(i)
        return None

    def summary(self) -> dict[str, Any]:
        """Return a flat dict describing the entry, for list views."""
        return {
            "title": self.title,
            "type": self.type,
            "is_global": self.is_global,
            "description": self.description,
            "details": [d.formatted() for d in self.details],
        }
