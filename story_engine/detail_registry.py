"""
story_engine/detail_registry.py -- Self-learning schema for entry details.

Entries carry free-text details ("Eye Color: Green") with no fixed schema.
The DetailRegistry remembers every detail title that has been used and,
for titles marked ``enumerated``, the set of values seen so far, so the
editor can offer suggestions.

Value kinds:
    freeform    Any text; values are not remembered.
    enumerated  Values are remembered and offered back as choices.

An enumerated type can only be turned back into a freeform one while it
has no known values.  Once values have been collected, a downgrade
request is ignored so learned suggestions are never thrown away silently.

Serialization (used by whatever persists the project)::

    {
        "Eye Color": {"valueKind": "enumerated", "knownValues": ["Blue", "Green"]},
        "Nickname":  {"valueKind": "freeform",   "knownValues": []}
    }

Usage::

    from story_engine.detail_registry import DetailRegistry

    registry = DetailRegistry()
    registry.register_type("Eye Color", "enumerated")
    registry.record_value("Eye Color", " Green ")
    registry.values_for("Eye Color")   # ["Green"]
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Literal

import jsonschema
from jsonschema.exceptions import best_match
from pydantic import BaseModel, ConfigDict, Field

from story_engine.models.entry import Entry

logger = logging.getLogger(__name__)

FREEFORM = "freeform"
ENUMERATED = "enumerated"
VALUE_KINDS = (FREEFORM, ENUMERATED)

ValueKind = Literal["freeform", "enumerated"]

# Schema for one item of an exported registry mapping.
DETAIL_TYPE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "valueKind": {"type": "string", "enum": list(VALUE_KINDS)},
        "knownValues": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["valueKind"],
}


def _key(title: Any) -> str:
    """Registry key for a title: trimmed, otherwise exact."""
    return (title or "").strip() if isinstance(title, str) else ""


class DetailType(BaseModel):
    """Registry record for one detail title."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    value_kind: ValueKind = Field(default=FREEFORM, alias="valueKind")
    known_values: set[str] = Field(default_factory=set, alias="knownValues")

    def to_export(self) -> dict[str, Any]:
        return {
            "valueKind": self.value_kind,
            "knownValues": sorted(self.known_values),
        }


class DetailRegistry:
    """Mapping of detail title (trimmed, case-sensitive) to :class:`DetailType`."""

    def __init__(self):
        self._types: dict[str, DetailType] = {}

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, title: object) -> bool:
        return isinstance(title, str) and _key(title) in self._types

    def get(self, title: str) -> DetailType | None:
        return self._types.get(_key(title))

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def register_type(self, title: str, value_kind: str = FREEFORM) -> None:
        """Create *title* if absent, otherwise adjust its value kind.

        Upgrading freeform -> enumerated is always allowed.  Downgrading an
        enumerated type that already has known values is ignored.  A blank
        title or an unknown *value_kind* is a no-op.
        """
        title = _key(title)
        if not title:
            return
        if value_kind not in VALUE_KINDS:
            logger.warning(
                "Ignoring detail type %r with unknown value kind %r", title, value_kind,
            )
            return

        existing = self._types.get(title)
        if existing is None:
            self._types[title] = DetailType(title=title, value_kind=value_kind)
            logger.debug("Registered detail type %r (%s)", title, value_kind)
            return

        if existing.value_kind == value_kind:
            return
        if value_kind == FREEFORM and existing.known_values:
            logger.debug(
                "Keeping %r enumerated: %d known values",
                title, len(existing.known_values),
            )
            return
        existing.value_kind = value_kind

    def record_value(self, title: str, value: str) -> None:
        """Remember *value* for an enumerated type.  Otherwise a no-op."""
        detail_type = self._types.get(_key(title))
        if detail_type is None or detail_type.value_kind != ENUMERATED:
            return
        value = (value or "").strip()
        if value:
            detail_type.known_values.add(value)

    def learn_from_entry(self, entry: Entry) -> None:
        """Register every detail title on *entry* and record its values.

        A title seen for the first time with a value becomes enumerated;
        one seen without a value becomes freeform.  Kinds of titles already
        in the registry are left alone.
        """
        for detail in entry.details:
            if _key(detail.title) not in self._types:
                kind = ENUMERATED if detail.value.strip() else FREEFORM
                self.register_type(detail.title, kind)
            self.record_value(detail.title, detail.value)

    def learn_from_entries(self, entries: Iterable[Entry]) -> None:
        for entry in entries:
            self.learn_from_entry(entry)

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def titles(self) -> list[str]:
        return sorted(self._types)

    def values_for(self, title: str) -> list[str]:
        detail_type = self._types.get(_key(title))
        if detail_type is None:
            return []
        return sorted(detail_type.known_values)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def export_data(self) -> dict[str, dict[str, Any]]:
        """Return the full registry as a JSON-ready mapping keyed by title."""
        return {title: self._types[title].to_export() for title in sorted(self._types)}

    def import_data(self, data: Any) -> int:
        """Merge an exported mapping into this registry.

        Types already present are replaced.  Items that do not match
        :data:`DETAIL_TYPE_SCHEMA` or have a blank title are skipped with a
        warning.

        Returns
        -------
        int
            Number of types imported.
        """
        if not isinstance(data, dict):
            logger.warning(
                "Ignoring detail registry data of type %s", type(data).__name__,
            )
            return 0

        validator = jsonschema.Draft7Validator(DETAIL_TYPE_SCHEMA)
        imported = 0
        for raw_title, item in data.items():
            title = str(raw_title).strip()
            if not title:
                logger.warning("Skipping detail type with a blank title")
                continue
            error = best_match(validator.iter_errors(item))
            if error is not None:
                logger.warning("Skipping detail type %r: %s", title, error.message)
                continue
            values = {
                v.strip() for v in item.get("knownValues", []) if v.strip()
            }
            self._types[title] = DetailType(
                title=title,
                value_kind=item["valueKind"],
                known_values=values,
            )
            imported += 1
        logger.debug("Imported %d detail types", imported)
        return imported

    @classmethod
    def from_export(cls, data: Any) -> DetailRegistry:
        registry = cls()
        registry.import_data(data)
        return registry
