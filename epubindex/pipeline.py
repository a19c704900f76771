"""
Indexing pipeline: discover EPUB files, match them to the catalog and write
one JSON line per context window.
"""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TextIO

from .catalog import DEFAULT_CATALOG, match_books
from .chapters import pretty_chapter
from .cleaner import clean_lines
from .document import EpubDocument
from .models import BookDescriptor, OutputRecord
from .renderer import DEFAULT_POLICY, RenderPolicy, render_page
from .windows import assemble

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("output.json")
EPUB_SUFFIX = ".epub"


def discover_books(directory: Path, suffix: str = EPUB_SUFFIX) -> list[Path]:
    """
    List candidate EPUB files in a directory (non-recursive).

    Raises:
        OSError: If the directory cannot be read
    """
    paths = [
        path
        for path in directory.iterdir()
        if path.is_file() and path.name.endswith(suffix)
    ]
    return sorted(paths)


def iter_page_records(
    document: EpubDocument,
    book: BookDescriptor,
    index: int,
    policy: RenderPolicy = DEFAULT_POLICY,
) -> Iterator[OutputRecord]:
    """Yield the records of one spine page."""
    chapter_title = pretty_chapter(document.page_identifier(index), book)
    lines = render_page(
        document.page_content(index), policy, deletions=book.markup_deletions
    )
    for searchable_text, display_text in assemble(clean_lines(lines, chapter_title)):
        yield OutputRecord(
            book_title=book.title,
            chapter_title=chapter_title,
            searchable_text=searchable_text,
            display_text=display_text,
        )


def iter_book_records(
    document: EpubDocument,
    book: BookDescriptor,
    policy: RenderPolicy = DEFAULT_POLICY,
) -> Iterator[OutputRecord]:
    """Yield the records of every catalogued page of a book, in spine order."""
    for index in book.page_indices():
        logger.debug(f"Indexing page {index} of '{book.title}'")
        yield from iter_page_records(document, book, index, policy)


def index_book(
    document: EpubDocument,
    book: BookDescriptor,
    stream: TextIO,
    policy: RenderPolicy = DEFAULT_POLICY,
) -> int:
    """Write a book's records to ``stream``; return how many were written."""
    count = 0
    for record in iter_book_records(document, book, policy):
        stream.write(record.to_json())
        stream.write("\n")
        count += 1
    return count


def index_directory(
    directory: Path = Path("."),
    output_path: Path = DEFAULT_OUTPUT,
    catalog: Sequence[BookDescriptor] = DEFAULT_CATALOG,
    suffix: str = EPUB_SUFFIX,
) -> int:
    """
    Index every catalogued EPUB in a directory.

    The output file is truncated first and written as books are processed; an
    error aborts the run and leaves what was written so far.

    Args:
        directory: Directory to scan for EPUB files
        output_path: Newline-delimited JSON output file
        catalog: Catalog entries, in priority order
        suffix: File name suffix of candidate files

    Returns:
        Number of records written
    """
    total = 0
    with open(output_path, "w", encoding="utf-8") as stream:
        for path in discover_books(directory, suffix):
            document = EpubDocument(path)
            declared_title = document.declared_title
            logger.info(f"Found book: {declared_title}")

            books = match_books(declared_title, catalog)
            if not books:
                logger.debug(f"No catalog entry for {path.name}, skipping")
                continue

            for book in books:
                logger.info(f"Indexing {book.title}")
                total += index_book(document, book, stream)

    return total
