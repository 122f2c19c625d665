"""
story_engine/linker.py -- Find the entries a block of text refers to.

Matching is literal: an entry is referenced when its title appears in the
text as a whole word, ignoring case.  "Whole word" means the match is not
directly preceded or followed by a letter or digit, so "Ann" is not found
inside "Anna".  Titles are escaped before being compiled, so punctuation
such as the dot in "Dr. Smith" is matched literally.

Candidates are tried longest title first (ties in store order) and the
result lists entries in that order, each at most once.

Cost is one regex search per distinct title, which is fine for the tens to
low hundreds of entries a project holds.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from story_engine.models.entry import Entry

logger = logging.getLogger(__name__)

# Lookarounds for "not adjacent to a letter or digit" ([^\W_] == alphanumeric).
_WORD_START = r"(?<![^\W_])"
_WORD_END = r"(?![^\W_])"


def _title_pattern(title: str) -> re.Pattern:
    return re.compile(_WORD_START + re.escape(title) + _WORD_END, re.IGNORECASE)


def _candidates(entries: Iterable[Entry]) -> list[tuple[str, Entry]]:
    """Return ``(title, entry)`` pairs, one per distinct title, longest first.

    When two entries share a title (ignoring case) the first one wins.
    """
    by_title: dict[str, tuple[str, Entry]] = {}
    for entry in entries:
        title = entry.title.strip()
        if not title:
            continue
        by_title.setdefault(title.lower(), (title, entry))
    # sorted() is stable, so equal lengths keep store order.
    return sorted(by_title.values(), key=lambda pair: len(pair[0]), reverse=True)


def find_referenced_entries(text: str, entries: Iterable[Entry]) -> list[Entry]:
    """Return the entries whose titles occur in *text* as whole words.

    Parameters
    ----------
    text : str
        Free-form text, typically concatenated scene summaries.
    entries : iterable of Entry
        The entry store (a list or an EntryStore).

    Returns
    -------
    list[Entry]
        Matched entries without duplicates, longest title first.
    """
    if not text:
        return []
    candidates = _candidates(entries)
    if not candidates:
        return []

    found: list[Entry] = []
    for title, entry in candidates:
        if _title_pattern(title).search(text):
            found.append(entry)

    logger.debug(
        "Linked %d of %d entries in %d chars of text",
        len(found), len(candidates), len(text),
    )
    return found
