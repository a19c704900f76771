"""Shared fixtures: synthetic EPUB files written with ebooklib."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from ebooklib import epub  # type: ignore[import-untyped]

EpubFactory = Callable[..., Path]


def page_html(*paragraphs: str) -> str:
    """Build a minimal XHTML body from paragraph markup."""
    body = "".join(f"<p>{p}</p>" for p in paragraphs)
    return f"<html><head><title>page</title></head><body>{body}</body></html>"


def write_epub(
    path: Path,
    title: str,
    pages: Sequence[tuple[str, str]],
) -> Path:
    """
    Write an EPUB whose spine is exactly ``pages``.

    Args:
        path: Destination file
        title: Declared title
        pages: ``(idref, xhtml)`` pairs in spine order
    """
    book = epub.EpubBook()
    book.set_identifier(f"test-{path.stem}")
    book.set_title(title)
    book.set_language("en")

    items = []
    for idref, content in pages:
        file_name = idref if idref.endswith(".html") else f"{idref}.xhtml"
        item = epub.EpubHtml(uid=idref, file_name=file_name, title=idref, lang="en")
        item.content = content
        book.add_item(item)
        items.append(item)

    book.toc = items
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = items

    epub.write_epub(str(path), book)
    return path


@pytest.fixture
def epub_factory(tmp_path: Path) -> EpubFactory:
    """Return a function that writes EPUB files into ``tmp_path``."""

    def factory(
        name: str, title: str, pages: Sequence[tuple[str, str]]
    ) -> Path:
        return write_epub(tmp_path / name, title, pages)

    return factory


@pytest.fixture
def numbered_pages() -> Callable[[int], list[tuple[str, str]]]:
    """Pages ``Chapter00`` .. ``ChapterNN``, each with three paragraphs."""

    def build(count: int) -> list[tuple[str, str]]:
        return [
            (
                f"Chapter{i:02d}",
                page_html(
                    f"Page {i} opening.",
                    f"Page {i} middle.",
                    f"Page {i} closing.",
                ),
            )
            for i in range(count)
        ]

    return build
