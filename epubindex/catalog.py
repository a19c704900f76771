"""
Book catalog and title matching.

The catalog is hand-curated: the novels' page ranges and skip lists were
checked against the actual EPUB files on the shelf, so a mismatch between
catalog and book is a configuration bug and surfaces as an error during
indexing.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from .errors import CatalogError
from .models import BookDescriptor

logger = logging.getLogger(__name__)

ANTHOLOGY_MARKER = "Arcanum Unbounded"

ANTHOLOGY_PIECES = frozenset(
    {
        "The Hope of Elantris",
        "The Eleventh Metal",
        "Allomancer Jak and the Pits of Eltania",
        "Shadows for Silence in the Forests of Hell",
        "Sixth of the Dusk",
        "Edgedancer",
        "The Emperor's Soul",
    }
)

EMPERORS_SOUL_DAYS = {
    "Day_02.html": "Day Two",
    "Day_03.html": "Day Three",
    "Day_05.html": "Day Five",
    "Day_12.html": "Day Twelve",
    "Day_17.html": "Day Seventeen",
    "Day_30.html": "Day Thirty",
    "Day_42.html": "Day Forty-Two",
    "Day_58.html": "Day Fifty-Eight",
    "Day_59.html": "Day Fifty-Nine",
    "Day_70.html": "Day Seventy",
    "Day_76.html": "Day Seventy-Six",
    "Day_85.html": "Day Eighty-Five",
    "Day_97.html": "Day Ninety-Seven",
    "Day_98.html": "Day Ninety-Eight",
    "Day_101.html": "Day One Hundred and One",
}

DEFAULT_CATALOG: tuple[BookDescriptor, ...] = (
    BookDescriptor(
        title="The Alloy of Law",
        first_page_index=7,
        last_page_index=32,
        skippable_pages=frozenset({10, 16, 22, 26}),
    ),
    BookDescriptor(
        title="Shadows of Self",
        first_page_index=7,
        last_page_index=37,
        skippable_pages=frozenset({8, 13, 31}),
    ),
    BookDescriptor(
        title="The Bands of Mourning",
        first_page_index=7,
        last_page_index=42,
        skippable_pages=frozenset({8, 13, 26}),
    ),
    BookDescriptor(
        title="Secret History",
        first_page_index=5,
        last_page_index=35,
        skippable_pages=frozenset({7, 12, 16, 21, 25}),
        markup_deletions=(
            '<p class="center">This novella contains major spoilers for '
            "the original Mistborn trilogy.</p>",
        ),
    ),
    BookDescriptor(
        title="Warbreaker",
        first_page_index=5,
        last_page_index=66,
    ),
    # Arcanum Unbounded: every piece shares the anthology archive. These page
    # ranges and both markup_deletions literals have not been checked against
    # the shipped files yet; confirm them with `epubindex pages FILE`, since an
    # out-of-range index aborts the run with InvalidPageIndexError.
    BookDescriptor(
        title="The Hope of Elantris",
        first_page_index=9,
        last_page_index=10,
    ),
    BookDescriptor(
        title="The Emperor's Soul",
        first_page_index=14,
        last_page_index=30,
        chapter_labels=EMPERORS_SOUL_DAYS,
        markup_deletions=(
            '<p class="title">The Emperor\'s Soul</p>',
        ),
    ),
    BookDescriptor(
        title="Shadows for Silence in the Forests of Hell",
        first_page_index=40,
        last_page_index=47,
    ),
    BookDescriptor(
        title="Sixth of the Dusk",
        first_page_index=51,
        last_page_index=58,
    ),
    BookDescriptor(
        title="The Eleventh Metal",
        first_page_index=62,
        last_page_index=62,
        suppress_chapter_titles=True,
    ),
    BookDescriptor(
        title="Allomancer Jak and the Pits of Eltania",
        first_page_index=65,
        last_page_index=66,
    ),
    BookDescriptor(
        title="Edgedancer",
        first_page_index=92,
        last_page_index=114,
        skippable_pages=frozenset({93}),
    ),
)


def load_catalog(path: Optional[Path] = None) -> tuple[BookDescriptor, ...]:
    """
    Load a catalog from a JSON file.

    Args:
        path: JSON file with a top-level ``books`` list. If None, the
            built-in catalog is returned.

    Returns:
        Tuple of BookDescriptor objects in file order

    Raises:
        CatalogError: If the file cannot be read or an entry is invalid
    """
    if path is None:
        return DEFAULT_CATALOG

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise CatalogError(f"Failed to load catalog from {path}: {e}") from e

    entries = data.get("books") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise CatalogError(f"Catalog {path} has no 'books' list")

    books = []
    for position, entry in enumerate(entries):
        try:
            book = BookDescriptor.from_dict(entry)
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(
                f"Invalid catalog entry #{position} in {path}: {e}"
            ) from e
        if book.first_page_index > book.last_page_index:
            raise CatalogError(
                f"Catalog entry '{book.title}' has first_page_index "
                f"{book.first_page_index} after last_page_index {book.last_page_index}"
            )
        books.append(book)

    logger.info(f"Loaded {len(books)} catalog entries from {path}")
    return tuple(books)


def match_books(
    declared_title: str, catalog: Sequence[BookDescriptor]
) -> list[BookDescriptor]:
    """
    Find the catalog entries that describe an EPUB.

    A regular book matches the first entry whose title is contained in the
    declared title (case-insensitive). An anthology archive matches every
    anthology piece, unless it names one piece explicitly.

    Args:
        declared_title: Title from the EPUB metadata
        catalog: Catalog entries, in priority order

    Returns:
        Matching entries; empty if the book is unknown
    """
    lowered = declared_title.lower()

    if ANTHOLOGY_MARKER.lower() in lowered:
        pieces = [book for book in catalog if book.title in ANTHOLOGY_PIECES]
        for piece in pieces:
            if piece.title.lower() in lowered:
                return [piece]
        return pieces

    for book in catalog:
        if book.title.lower() in lowered:
            return [book]
    return []
