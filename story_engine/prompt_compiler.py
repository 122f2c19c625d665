"""
story_engine/prompt_compiler.py -- Structured prompt documents for a scene.

Builds the text a writer copies into an external text-generation tool.
Two documents are available for any scene coordinate:

    compile_writing_prompt   Asks for the scene's prose.
    compile_idea_prompt      Asks for brainstorming on the scene.

Both start from the same context: the summaries of every scene before the
target (all earlier chapters, then earlier scenes of the target chapter)
plus the target's own summary are scanned for entry titles, and the
matched entries are merged with the global entries.

The output is a sequence of ``<tag>...</tag>`` blocks separated by blank
lines.  Tag names, nesting and block order are a contract with saved
prompts and workflows, so they must not change.  A block whose content
would be blank is left out entirely.

Usage::

    from story_engine.prompt_compiler import compile_writing_prompt

    text = compile_writing_prompt(0, 1, story, entries, style)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from story_engine.linker import find_referenced_entries
from story_engine.models.entry import Entry
from story_engine.models.story import InvalidCoordinate, Scene, Story
from story_engine.models.style import STYLE_FIELDS, StyleConfiguration

logger = logging.getLogger(__name__)

IDEA_STYLE_FIELDS: tuple[str, ...] = (
    "genre",
    "point_of_view",
    "character_perspective",
)

BRAINSTORMING_REQUEST = (
    "Using the world information, the previous scenes and the current scene "
    "draft above, brainstorm ways this scene could develop. Offer:\n"
    "1. Scene ideas: several distinct directions the scene could take.\n"
    "2. Conflict options: obstacles, disagreements or complications that "
    "could arise.\n"
    "3. Character moments: opportunities to reveal or deepen the characters "
    "involved.\n"
    "4. Plot advancement: ways the scene could move the larger story "
    "forward.\n"
    "5. Emotional beats: the feelings the scene could build toward and "
    "how to land them."
)


@dataclass
class PromptContext:
    """Everything gathered for one scene coordinate before rendering."""

    chapter_index: int
    scene_index: int
    target: Scene
    # (chapter_index, scene_index, scene) in story order
    previous_scenes: list[tuple[int, int, Scene]] = field(default_factory=list)
    entries: list[Entry] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Context gathering
# ---------------------------------------------------------------------------

def gather_context(
    chapter_index: int,
    scene_index: int,
    story: Story,
    entries: Iterable[Entry],
) -> PromptContext:
    """Collect previous scenes and relevant entries for a coordinate.

    Raises
    ------
    InvalidCoordinate
        If the coordinate does not reference an existing scene.
    """
    target = story.scene_at(chapter_index, scene_index)
    entries = list(entries)

    previous: list[tuple[int, int, Scene]] = []
    for ci in range(chapter_index + 1):
        scenes = story.chapters[ci].scenes
        limit = len(scenes) if ci < chapter_index else scene_index
        previous.extend((ci, si, scenes[si]) for si in range(limit))

    linking_text = "\n".join(
        [scene.summary for _, _, scene in previous] + [target.summary]
    )
    linked = find_referenced_entries(linking_text, entries)

    merged = list(linked)
    seen = {entry.title.strip().lower() for entry in linked}
    for entry in entries:
        key = entry.title.strip().lower()
        if entry.is_global and key and key not in seen:
            merged.append(entry)
            seen.add(key)

    logger.debug(
        "Context for (%d, %d): %d previous scenes, %d linked, %d total entries",
        chapter_index, scene_index, len(previous), len(linked), len(merged),
    )
    return PromptContext(
        chapter_index=chapter_index,
        scene_index=scene_index,
        target=target,
        previous_scenes=previous,
        entries=merged,
    )


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def detail_tag_name(title: str) -> str:
    """Tag name for a detail: lowercased, spaces replaced by underscores."""
    return title.strip().lower().replace(" ", "_")


def _block(tag: str, content: str) -> str:
    content = (content or "").strip()
    if not content:
        return ""
    return f"<{tag}>\n{content}\n</{tag}>"


def _render_entry(entry: Entry) -> str:
    lines = ["<entry>", f"<title>{entry.title.strip()}</title>"]
    description = entry.description.strip()
    if description:
        lines.append(f"<description>{description}</description>")
    for detail in entry.details:
        tag = detail_tag_name(detail.title)
        value = detail.value.strip()
        if tag and value:
            lines.append(f"<{tag}>{value}</{tag}>")
    lines.append("</entry>")
    return "\n".join(lines)


def _world_info_block(entries: list[Entry]) -> str:
    rendered = [_render_entry(e) for e in entries if e.title.strip()]
    return _block("world_info", "\n".join(rendered))


def _previous_scenes_block(previous: list[tuple[int, int, Scene]]) -> str:
    rendered = []
    for ci, si, scene in previous:
        summary = scene.summary.strip()
        if not summary:
            continue
        rendered.append(
            f'<scene chapter="{ci + 1}" number="{si + 1}">\n{summary}\n</scene>'
        )
    return _block("previous_scenes", "\n".join(rendered))


def _style_blocks(style: StyleConfiguration | None, names: Iterable[str]) -> list[str]:
    if style is None:
        return []
    return [_block(name, getattr(style, name)) for name in names]


def _join(blocks: list[str]) -> str:
    return "\n\n".join(block for block in blocks if block)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compile_writing_prompt(
    chapter_index: int,
    scene_index: int,
    story: Story,
    entries: Iterable[Entry],
    style: StyleConfiguration | None = None,
) -> str:
    """Build the prompt asking for the prose of one scene.

    Blocks, in order: the seven style fields, ``world_info``,
    ``previous_scenes`` and ``scene_to_write`` (the target's summary).

    Raises
    ------
    InvalidCoordinate
        If the coordinate does not reference an existing scene.
    """
    ctx = gather_context(chapter_index, scene_index, story, entries)
    blocks = _style_blocks(style, STYLE_FIELDS)
    blocks.append(_world_info_block(ctx.entries))
    blocks.append(_previous_scenes_block(ctx.previous_scenes))
    blocks.append(_block("scene_to_write", ctx.target.summary))
    return _join(blocks)


def compile_idea_prompt(
    chapter_index: int,
    scene_index: int,
    story: Story,
    entries: Iterable[Entry],
    style: StyleConfiguration | None = None,
) -> str:
    """Build the prompt asking for brainstorming on one scene.

    Blocks, in order: ``genre``, ``point_of_view``,
    ``character_perspective``, ``world_info``, ``previous_scenes``,
    ``current_scene_draft`` and the fixed ``brainstorming_request``.
    """
    ctx = gather_context(chapter_index, scene_index, story, entries)
    blocks = _style_blocks(style, IDEA_STYLE_FIELDS)
    blocks.append(_world_info_block(ctx.entries))
    blocks.append(_previous_scenes_block(ctx.previous_scenes))
    blocks.append(_block("current_scene_draft", ctx.target.summary))
    blocks.append(_block("brainstorming_request", BRAINSTORMING_REQUEST))
    return _join(blocks)


__all__ = [
    "BRAINSTORMING_REQUEST",
    "IDEA_STYLE_FIELDS",
    "InvalidCoordinate",
    "PromptContext",
    "compile_idea_prompt",
    "compile_writing_prompt",
    "detail_tag_name",
    "gather_context",
]
