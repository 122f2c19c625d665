"""
story_engine/models/style.py -- Author-supplied style configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Field order used by the writing prompt header.
STYLE_FIELDS: tuple[str, ...] = (
    "system_prompt",
    "style_guide",
    "genre",
    "tense",
    "language",
    "point_of_view",
    "character_perspective",
)


class StyleConfiguration(BaseModel):
    """One per project.  Every field is optional; blank fields are skipped
    when a prompt is compiled."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    system_prompt: str = ""
    style_guide: str = ""
    genre: str = ""
    tense: str = ""
    language: str = ""
    point_of_view: str = ""
    character_perspective: str = ""
