"""
Shared pytest fixtures for the story engine test suite.

Provides:
    - mira_entry: the healer character used in the end-to-end example
    - sample_entries: a small mixed entry list (one global entry)
    - sample_story: two chapters of summarized scenes
    - full_style: a StyleConfiguration with every field filled in
"""

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Ensure story_engine/ is importable regardless of where pytest is invoked
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from story_engine.models import Detail, Entry, Story, StyleConfiguration  # noqa: E402


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mira_entry():
    """Return the Mira character entry with one detail."""
    return Entry(
        title="Mira",
        type="Character",
        is_global=False,
        description="A healer.",
        details=[Detail(title="Eye Color", value="Green")],
    )


@pytest.fixture
def sample_entries(mira_entry):
    """Return entries covering a character, a location, lore and a global subplot."""
    return [
        mira_entry,
        Entry(
            title="Thornwood",
            type="Location",
            description="An ancient forest north of the river.",
            details=[Detail(title="Climate", value="Damp and cold")],
        ),
        Entry(
            title="Dr. Smith",
            type="Character",
            description="The village physician.",
        ),
        Entry(
            title="The Drought",
            type="Subplot",
            is_global=True,
            description="No rain has fallen for three summers.",
        ),
    ]


@pytest.fixture
def sample_story():
    """Return a story with two chapters.

    Chapter 0: "Mira enters Thornwood." / "She finds a hidden spring."
    Chapter 1: "Dr. Smith arrives." / "Mira and Dr. Smith argue."
               / "The spring runs dry."
    """
    story = Story()
    story.add_chapter()
    story.add_scene_to_chapter(0, "", "Mira enters Thornwood.")
    story.add_scene_to_chapter(0, "", "She finds a hidden spring.")
    story.add_chapter()
    story.add_scene_to_chapter(1, "", "Dr. Smith arrives.")
    story.add_scene_to_chapter(1, "", "Mira and Dr. Smith argue.")
    story.add_scene_to_chapter(1, "Water trickles, then stops.", "The spring runs dry.")
    return story


@pytest.fixture
def full_style():
    """Return a StyleConfiguration with all seven fields populated."""
    return StyleConfiguration(
        system_prompt="You are a novelist.",
        style_guide="Short sentences.",
        genre="Fantasy",
        tense="Past",
        language="English",
        point_of_view="Third person limited",
        character_perspective="Mira",
    )
