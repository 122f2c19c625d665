"""
story_engine/models/story.py -- The narrative hierarchy.

A Story holds ordered Chapters; a Chapter holds ordered Scenes.  Scenes
are addressed by ``(chapter_index, scene_index)``, both 0-based.  Removing
a chapter or scene shifts every later index, so callers that need to hold
on to a position across edits should keep the scene's ``id`` and resolve
it again with :meth:`Story.locate_scene`.
"""

from __future__ import annotations

import secrets

from pydantic import BaseModel, Field


def _new_id() -> str:
    """Return a short random hex identifier."""
    return secrets.token_hex(6)


class InvalidCoordinate(IndexError):
    """A chapter or scene index does not reference an existing item."""

    def __init__(self, chapter_index: int, scene_index: int | None = None):
        self.chapter_index = chapter_index
        self.scene_index = scene_index
        if scene_index is None:
            message = f"Chapter index {chapter_index} is out of range"
        else:
            message = (
                f"Scene ({chapter_index}, {scene_index}) does not exist"
            )
        super().__init__(message)


class Scene(BaseModel):
    """A single scene: planning ``summary`` plus draft prose ``text``."""

    text: str = ""
    summary: str = ""
    id: str = Field(default_factory=_new_id)

    def update(self, text: str | None = None, summary: str | None = None) -> None:
        """Replace whichever of *text* / *summary* is not ``None``."""
        if text is not None:
            self.text = text
        if summary is not None:
            self.summary = summary

    def word_count(self) -> int:
        return len(self.text.split())


class Chapter(BaseModel):
    """An ordered sequence of scenes."""

    scenes: list[Scene] = Field(default_factory=list)
    id: str = Field(default_factory=_new_id)

    @property
    def scene_count(self) -> int:
        return len(self.scenes)

    def add_scene(self, text: str = "", summary: str = "") -> int:
        """Append a scene and return its index."""
        self.scenes.append(Scene(text=text, summary=summary))
        return len(self.scenes) - 1

    def scene(self, index: int) -> Scene:
        """Return the scene at *index*.

        Raises
        ------
        IndexError
            If *index* is negative or past the end.
        """
        if 0 <= index < len(self.scenes):
            return self.scenes[index]
        raise IndexError(f"Scene index {index} is out of range")

    def update_scene(
        self, index: int, text: str | None = None, summary: str | None = None,
    ) -> Scene:
        scene = self.scene(index)
        scene.update(text=text, summary=summary)
        return scene

    def remove_scene(self, index: int) -> Scene:
        """Remove and return the scene at *index*; later scenes shift down."""
        self.scene(index)
        return self.scenes.pop(index)

    def summary_text(self) -> str:
        """All scene summaries joined by a single space."""
        return " ".join(scene.summary for scene in self.scenes)


class Story(BaseModel):
    """Root of the narrative hierarchy."""

    chapters: list[Chapter] = Field(default_factory=list)

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    # ------------------------------------------------------------------
    # Chapters
    # ------------------------------------------------------------------

    def add_chapter(self) -> int:
        """Append an empty chapter and return its index."""
        self.chapters.append(Chapter())
        return len(self.chapters) - 1

    def chapter(self, index: int) -> Chapter:
        """Return the chapter at *index* or raise :class:`InvalidCoordinate`."""
        if 0 <= index < len(self.chapters):
            return self.chapters[index]
        raise InvalidCoordinate(index)

    def remove_chapter(self, index: int) -> Chapter:
        """Remove and return a chapter; later chapters shift down."""
        self.chapter(index)
        return self.chapters.pop(index)

    # ------------------------------------------------------------------
    # Scenes
    # ------------------------------------------------------------------

    def add_scene_to_chapter(
        self, chapter_index: int, text: str = "", summary: str = "",
    ) -> int:
        """Append a scene to a chapter and return the new scene's index."""
        return self.chapter(chapter_index).add_scene(text, summary)

    def scene_at(self, chapter_index: int, scene_index: int) -> Scene:
        """Return the scene at the coordinate.

        Raises
        ------
        InvalidCoordinate
            If either index is out of range.
        """
        chapter = self.chapter(chapter_index)
        if 0 <= scene_index < len(chapter.scenes):
            return chapter.scenes[scene_index]
        raise InvalidCoordinate(chapter_index, scene_index)

    def locate_scene(self, scene_id: str) -> tuple[int, int]:
        """Return the current ``(chapter_index, scene_index)`` of a scene id.

        Raises
        ------
        KeyError
            If no scene has that id.
        """
        for ci, chapter in enumerate(self.chapters):
            for si, scene in enumerate(chapter.scenes):
                if scene.id == scene_id:
                    return ci, si
        raise KeyError(scene_id)

    def locate_chapter(self, chapter_id: str) -> int:
        for ci, chapter in enumerate(self.chapters):
            if chapter.id == chapter_id:
                return ci
        raise KeyError(chapter_id)

    # ------------------------------------------------------------------
    # Overviews
    # ------------------------------------------------------------------

    def stats(self) -> dict[str, int]:
        """Return chapter, scene and draft word totals."""
        scenes = 0
        words = 0
        for chapter in self.chapters:
            scenes += chapter.scene_count
            words += sum(scene.word_count() for scene in chapter.scenes)
        return {"chapters": len(self.chapters), "scenes": scenes, "words": words}

    def outline(self) -> list[dict]:
        """Return one row per chapter: 1-based number, scene count, summary."""
        return [
            {
                "chapter": i + 1,
                "scene_count": chapter.scene_count,
                "summary": chapter.summary_text(),
            }
            for i, chapter in enumerate(self.chapters)
        ]
