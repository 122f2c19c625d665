"""
Tests for story_engine/detail_registry.py -- DetailRegistry.

Validates:
    - register_type creation, idempotence, upgrade and guarded downgrade
    - record_value normalization and set semantics
    - Sorted titles and values for suggestion lists
    - Learning from entries
    - export_data / import_data round trip and tolerance of malformed data
"""

import logging

import pytest

from story_engine.detail_registry import ENUMERATED, FREEFORM, DetailRegistry
from story_engine.models import Detail, Entry


@pytest.fixture
def registry():
    reg = DetailRegistry()
    reg.register_type("Eye Color", ENUMERATED)
    reg.record_value("Eye Color", "Green")
    reg.record_value("Eye Color", "Blue")
    reg.register_type("Nickname", FREEFORM)
    return reg


# ---------------------------------------------------------------------------
# register_type
# ---------------------------------------------------------------------------

class TestRegisterType:
    """Creating and updating detail types."""

    def test_creates_freeform_by_default(self):
        reg = DetailRegistry()
        reg.register_type("Age")
        assert reg.get("Age").value_kind == FREEFORM
        assert "Age" in reg

    def test_idempotent(self, registry):
        registry.register_type("Eye Color", ENUMERATED)
        assert registry.values_for("Eye Color") == ["Blue", "Green"]
        assert len(registry) == 2

    def test_blank_title_is_noop(self):
        reg = DetailRegistry()
        reg.register_type("")
        reg.register_type("   ")
        assert len(reg) == 0

    def test_title_is_trimmed(self):
        reg = DetailRegistry()
        reg.register_type("  Age  ")
        assert reg.titles() == ["Age"]

    def test_titles_are_case_sensitive(self):
        reg = DetailRegistry()
        reg.register_type("age")
        reg.register_type("Age")
        assert reg.titles() == ["Age", "age"]

    def test_upgrade_to_enumerated(self):
        reg = DetailRegistry()
        reg.register_type("Hair", FREEFORM)
        reg.register_type("Hair", ENUMERATED)
        assert reg.get("Hair").value_kind == ENUMERATED

    def test_downgrade_refused_with_known_values(self, registry):
        registry.register_type("Eye Color", FREEFORM)
        assert registry.get("Eye Color").value_kind == ENUMERATED
        assert registry.values_for("Eye Color") == ["Blue", "Green"]

    def test_downgrade_allowed_without_values(self):
        reg = DetailRegistry()
        reg.register_type("Hair", ENUMERATED)
        reg.register_type("Hair", FREEFORM)
        assert reg.get("Hair").value_kind == FREEFORM

    def test_unknown_kind_ignored(self, caplog):
        reg = DetailRegistry()
        with caplog.at_level(logging.WARNING, logger="story_engine.detail_registry"):
            reg.register_type("Age", "numeric")
        assert "Age" not in reg
        assert "unknown value kind" in caplog.text

    def test_unknown_kind_keeps_existing_type(self, registry):
        registry.register_type("Eye Color", "numeric")
        assert registry.get("Eye Color").value_kind == ENUMERATED

    def test_blank_title_with_unknown_kind_is_noop(self):
        reg = DetailRegistry()
        reg.register_type("", "bogus")
        reg.register_type(None, "bogus")
        assert len(reg) == 0

    def test_lookups_trim_title(self):
        reg = DetailRegistry()
        reg.register_type(" Eye Color ", ENUMERATED)
        reg.record_value(" Eye Color ", "Green")
        assert reg.values_for(" Eye Color ") == ["Green"]
        assert reg.values_for("Eye Color") == ["Green"]
        assert reg.get(" Eye Color ").title == "Eye Color"
        assert " Eye Color " in reg


# ---------------------------------------------------------------------------
# record_value
# ---------------------------------------------------------------------------

class TestRecordValue:
    """Remembering values for enumerated types."""

    def test_value_is_trimmed(self, registry):
        registry.record_value("Eye Color", "  Amber \n")
        assert "Amber" in registry.values_for("Eye Color")

    def test_duplicate_is_noop(self, registry):
        registry.record_value("Eye Color", "Green")
        registry.record_value("Eye Color", " Green ")
        assert registry.values_for("Eye Color") == ["Blue", "Green"]

    def test_blank_value_ignored(self, registry):
        registry.record_value("Eye Color", "")
        registry.record_value("Eye Color", "   ")
        assert registry.values_for("Eye Color") == ["Blue", "Green"]

    def test_freeform_type_ignores_values(self, registry):
        registry.record_value("Nickname", "Red")
        assert registry.values_for("Nickname") == []

    def test_unknown_title_ignored(self, registry):
        registry.record_value("Height", "Tall")
        assert "Height" not in registry
        assert registry.values_for("Height") == []


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------

class TestSuggestions:
    """Sorted suggestion lists."""

    def test_titles_sorted(self, registry):
        registry.register_type("Allegiance")
        assert registry.titles() == ["Allegiance", "Eye Color", "Nickname"]

    def test_values_sorted(self, registry):
        registry.record_value("Eye Color", "Amber")
        assert registry.values_for("Eye Color") == ["Amber", "Blue", "Green"]

    def test_unknown_title_has_no_values(self):
        assert DetailRegistry().values_for("Anything") == []


# ---------------------------------------------------------------------------
# Learning from entries
# ---------------------------------------------------------------------------

class TestLearnFromEntries:
    """Auto-population from entry details."""

    def test_new_title_with_value_becomes_enumerated(self):
        reg = DetailRegistry()
        entry = Entry(title="Mira", details=[Detail(title="Eye Color", value="Green")])
        reg.learn_from_entry(entry)
        assert reg.titles() == ["Eye Color"]
        assert reg.get("Eye Color").value_kind == ENUMERATED
        assert reg.values_for("Eye Color") == ["Green"]

    def test_new_title_without_value_is_freeform(self):
        reg = DetailRegistry()
        reg.learn_from_entry(Entry(title="Mira", details=[Detail(title="Age", value=" ")]))
        assert reg.get("Age").value_kind == FREEFORM

    def test_existing_freeform_kind_left_alone(self, registry):
        registry.learn_from_entry(
            Entry(title="Mira", details=[Detail(title="Nickname", value="Mi")]),
        )
        assert registry.get("Nickname").value_kind == FREEFORM
        assert registry.values_for("Nickname") == []

    def test_enumerated_titles_collect_values(self):
        reg = DetailRegistry()
        reg.register_type("Eye Color", ENUMERATED)
        reg.learn_from_entries([
            Entry(title="Mira", details=[Detail(title="Eye Color", value="Green")]),
            Entry(title="Kell", details=[Detail(title="Eye Color", value="Grey")]),
        ])
        assert reg.values_for("Eye Color") == ["Green", "Grey"]

    def test_blank_detail_title_ignored(self):
        reg = DetailRegistry()
        reg.learn_from_entry(Entry(title="Mira", details=[Detail(title=" ", value="x")]))
        assert len(reg) == 0


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

class TestSerialization:
    """export_data / import_data."""

    def test_export_shape(self, registry):
        assert registry.export_data() == {
            "Eye Color": {"valueKind": "enumerated", "knownValues": ["Blue", "Green"]},
            "Nickname": {"valueKind": "freeform", "knownValues": []},
        }

    def test_round_trip(self, registry):
        restored = DetailRegistry.from_export(registry.export_data())
        assert restored.titles() == registry.titles()
        for title in registry.titles():
            assert restored.values_for(title) == registry.values_for(title)
            assert restored.get(title).value_kind == registry.get(title).value_kind

    def test_import_merges_and_replaces(self, registry):
        count = registry.import_data({
            "Eye Color": {"valueKind": "enumerated", "knownValues": ["Violet"]},
            "Rank": {"valueKind": "freeform"},
        })
        assert count == 2
        assert registry.values_for("Eye Color") == ["Violet"]
        assert registry.titles() == ["Eye Color", "Nickname", "Rank"]

    def test_import_normalizes_values(self):
        reg = DetailRegistry.from_export({
            "Eye Color": {"valueKind": "enumerated", "knownValues": [" Green ", "", "Green"]},
        })
        assert reg.values_for("Eye Color") == ["Green"]

    def test_import_skips_malformed_items(self, caplog):
        with caplog.at_level(logging.WARNING, logger="story_engine.detail_registry"):
            reg = DetailRegistry.from_export({
                "Good": {"valueKind": "freeform", "knownValues": []},
                "Bad Kind": {"valueKind": "numeric"},
                "Missing Kind": {"knownValues": ["x"]},
                "Bad Values": {"valueKind": "enumerated", "knownValues": [1, 2]},
                "Not A Dict": "enumerated",
                "  ": {"valueKind": "freeform"},
            })
        assert reg.titles() == ["Good"]
        assert "Skipping detail type" in caplog.text

    def test_import_non_mapping_is_ignored(self):
        reg = DetailRegistry()
        assert reg.import_data(["not", "a", "mapping"]) == 0
        assert reg.import_data(None) == 0
        assert len(reg) == 0
