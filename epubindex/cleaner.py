"""
Line classification and cleanup for rendered pages.

Rendered pages contain structural noise next to the narrative: empty lines,
header and table artifacts, and the chapter's own title. This module drops that
noise, normalizes punctuation artifacts and recognizes scene breaks.
"""

from collections.abc import Iterable

from .renderer import (
    EMPHASIS_MARKERS,
    HORIZONTAL_RULE,
    IMAGE_SENTINEL,
    STRIKE_MARKERS,
)

IGNORABLE_PREFIXES = ("#", "│", "─┴", "─┬")

SCENE_BORDERS = frozenset({HORIZONTAL_RULE, "~", IMAGE_SENTINEL})


def strip_markers(text: str) -> str:
    """Remove inline emphasis and strike markers."""
    for marker in (*EMPHASIS_MARKERS, *STRIKE_MARKERS):
        text = text.replace(marker, "")
    return text


def is_ignorable(line: str) -> bool:
    """Return True for lines that never carry narrative text."""
    stripped = line.strip()
    if not strip_markers(stripped).strip():
        return True
    return stripped.startswith(IGNORABLE_PREFIXES)


def is_scene_border(line: str) -> bool:
    """Return True if the line is exactly a scene-break sentinel."""
    return line.strip() in SCENE_BORDERS


def normalize_line(line: str) -> str:
    """
    Normalize punctuation artifacts in a narrative line.

    Bold markers are removed before ellipses are collapsed, so a bold-wrapped
    ``. . .`` still collapses.
    """
    line = line.strip().replace("**", "")
    line = line.replace(". . .", "…")
    return line.replace(" …", "…")


def clean_lines(lines: Iterable[str], chapter_title: str = "") -> list[str]:
    """
    Filter and normalize the rendered lines of one page.

    Args:
        lines: Rendered lines in document order
        chapter_title: Display label of the page's chapter; a line that the
            label ends with is treated as the chapter heading and dropped

    Returns:
        Cleaned lines, order preserved
    """
    cleaned = []
    for line in lines:
        if is_ignorable(line):
            continue
        stripped = line.strip()
        if chapter_title and chapter_title.endswith(stripped):
            continue
        cleaned.append(normalize_line(stripped))
    return cleaned
