"""Sliding 3-line context windows over cleaned page lines."""

from collections.abc import Iterator, Sequence

from .cleaner import is_ignorable, is_scene_border, strip_markers

PARAGRAPH_BREAK = "</p><p>"

WINDOW_SIZE = 3


def _is_context(line: str) -> bool:
    return not (is_scene_border(line) or is_ignorable(line))


def assemble(lines: Sequence[str]) -> Iterator[tuple[str, str]]:
    """
    Yield ``(searchable_text, display_text)`` for every window of 3 lines.

    The centre line of each window is the searchable text. Its neighbours are
    folded into the display text as separate paragraphs unless they are scene
    borders. Windows centred on a scene border yield nothing, and the first and
    last line of the page are never a centre.
    """
    for start in range(len(lines) - WINDOW_SIZE + 1):
        prev, curr, nxt = lines[start : start + WINDOW_SIZE]
        if is_scene_border(curr):
            continue

        prev_fragment = f"{prev}{PARAGRAPH_BREAK}" if _is_context(prev) else ""
        next_fragment = f"{PARAGRAPH_BREAK}{nxt}" if _is_context(nxt) else ""

        yield strip_markers(curr), f"{prev_fragment}{curr}{next_fragment}"
