"""
Chapter labels from spine identifiers.

Identifiers are classified by an ordered list of rules; the first rule whose
predicate accepts the identifier produces the label.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional

from .errors import ChapterTitleError
from .models import BookDescriptor


@dataclass(frozen=True)
class ChapterRule:
    """A named predicate/transform pair."""

    name: str
    predicate: Callable[[str, Optional[BookDescriptor]], bool]
    transform: Callable[[str, Optional[BookDescriptor]], str]


def _stem(identifier: str) -> str:
    return PurePosixPath(identifier).stem


def _is_suppressed(identifier: str, book: Optional[BookDescriptor]) -> bool:
    return book is not None and book.suppress_chapter_titles


def _named(word: str) -> Callable[[str, Optional[BookDescriptor]], bool]:
    def predicate(identifier: str, book: Optional[BookDescriptor]) -> bool:
        return word in (identifier.lower(), _stem(identifier).lower())

    return predicate


def _is_numbered(identifier: str, book: Optional[BookDescriptor]) -> bool:
    return identifier.lower().startswith("chapter")


def numbered_chapter(identifier: str, book: Optional[BookDescriptor] = None) -> str:
    """``Chapter07.html`` -> ``Chapter 7``."""
    digits = "".join(ch for ch in identifier if ch in "0123456789")
    if not digits:
        raise ChapterTitleError(f"Chapter identifier has no number: {identifier!r}")
    return f"Chapter {digits.lstrip('0') or '0'}"


def _is_part_and_chapter(identifier: str, book: Optional[BookDescriptor]) -> bool:
    return identifier.startswith("x") and identifier.endswith(".html")


def part_and_chapter(identifier: str, book: Optional[BookDescriptor] = None) -> str:
    """``x2_4.html`` -> ``Part 2, Chapter 4``; position 1 is the part, 3 the chapter."""
    if len(identifier) < 4 or not (
        identifier[1].isdigit() and identifier[3].isdigit()
    ):
        raise ChapterTitleError(
            f"Identifier does not follow the part/chapter scheme: {identifier!r}"
        )
    return f"Part {identifier[1]}, Chapter {identifier[3]}"


def _lookup(identifier: str, book: Optional[BookDescriptor]) -> str:
    if book is not None:
        return book.chapter_labels.get(identifier, identifier)
    return identifier


CHAPTER_RULES: tuple[ChapterRule, ...] = (
    ChapterRule("suppressed", _is_suppressed, lambda _i, _b: ""),
    ChapterRule("prologue", _named("prologue"), lambda _i, _b: "Prologue"),
    ChapterRule("epilogue", _named("epilogue"), lambda _i, _b: "Epilogue"),
    ChapterRule("numbered", _is_numbered, numbered_chapter),
    ChapterRule("part_and_chapter", _is_part_and_chapter, part_and_chapter),
    ChapterRule("lookup", lambda _i, _b: True, _lookup),
)


def pretty_chapter(identifier: str, book: Optional[BookDescriptor] = None) -> str:
    """
    Map a spine identifier to a human-readable chapter label.

    Args:
        identifier: Spine idref of the page
        book: Catalog entry of the owning book, for suppression and
            per-book label overrides

    Returns:
        Chapter label; empty for books without visible chapter titles

    Raises:
        ChapterTitleError: If the identifier claims a numbering scheme it
            does not follow
    """
    for rule in CHAPTER_RULES:
        if rule.predicate(identifier, book):
            return rule.transform(identifier, book)
    return identifier
