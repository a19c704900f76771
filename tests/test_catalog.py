"""Tests for catalog loading and title matching."""

import json
from pathlib import Path

import pytest

from epubindex.catalog import (
    ANTHOLOGY_PIECES,
    DEFAULT_CATALOG,
    load_catalog,
    match_books,
)
from epubindex.errors import CatalogError
from epubindex.models import BookDescriptor


def test_default_catalog_is_returned_without_path() -> None:
    assert load_catalog() is DEFAULT_CATALOG


def test_match_is_case_insensitive_substring() -> None:
    [book] = match_books("SHADOWS OF SELF: A Mistborn Novel", DEFAULT_CATALOG)

    assert book.title == "Shadows of Self"


def test_unknown_book_matches_nothing() -> None:
    assert match_books("The Way of Kings", DEFAULT_CATALOG) == []


def test_first_match_wins() -> None:
    catalog = (
        BookDescriptor(title="Secret", first_page_index=1, last_page_index=2),
        BookDescriptor(title="Secret History", first_page_index=3, last_page_index=4),
    )

    [book] = match_books("Mistborn: Secret History", catalog)

    assert book.first_page_index == 1


def test_anthology_resolves_to_every_piece() -> None:
    books = match_books("Arcanum Unbounded: The Cosmere Collection", DEFAULT_CATALOG)

    assert {book.title for book in books} == ANTHOLOGY_PIECES
    assert len(books) == 7
    # catalog order is preserved
    expected_order = [b.title for b in DEFAULT_CATALOG if b.title in ANTHOLOGY_PIECES]
    assert [b.title for b in books] == expected_order


@pytest.mark.parametrize("piece", sorted(ANTHOLOGY_PIECES))
def test_anthology_piece_supplied_separately(piece: str) -> None:
    """An archive naming one piece resolves to that piece only."""
    [book] = match_books(f"Arcanum Unbounded: {piece}", DEFAULT_CATALOG)

    assert book.title == piece


def test_anthology_marker_does_not_match_regular_books() -> None:
    """Secret History is in the anthology but catalogued as its own book."""
    books = match_books("Arcanum Unbounded", DEFAULT_CATALOG)

    assert "Secret History" not in {book.title for book in books}


def test_page_indices_skip_listed_pages() -> None:
    book = BookDescriptor(
        title="Test",
        first_page_index=3,
        last_page_index=7,
        skippable_pages=frozenset({4, 7}),
    )

    assert list(book.page_indices()) == [3, 5, 6]


def test_load_catalog_from_json(tmp_path: Path) -> None:
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text(
        json.dumps(
            {
                "books": [
                    {
                        "title": "Elantris",
                        "first_page_index": 4,
                        "last_page_index": 70,
                        "skippable_pages": [5, 6],
                    },
                    {
                        "title": "The Emperor's Soul",
                        "first_page_index": 2,
                        "last_page_index": 20,
                        "chapter_labels": {"Day_02.html": "Day Two"},
                        "markup_deletions": ["<p>dup</p>"],
                        "suppress_chapter_titles": True,
                    },
                ]
            }
        ),
        encoding="utf-8",
    )

    first, second = load_catalog(catalog_file)

    assert first == BookDescriptor(
        title="Elantris",
        first_page_index=4,
        last_page_index=70,
        skippable_pages=frozenset({5, 6}),
    )
    assert second.chapter_labels == {"Day_02.html": "Day Two"}
    assert second.markup_deletions == ("<p>dup</p>",)
    assert second.suppress_chapter_titles is True


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        json.dumps({"shelf": []}),
        json.dumps({"books": [{"title": "No range"}]}),
        json.dumps(
            {"books": [{"title": "Bad", "first_page_index": 9, "last_page_index": 2}]}
        ),
        json.dumps(
            {
                "books": [
                    {
                        "title": "Bad",
                        "first_page_index": 1,
                        "last_page_index": 2,
                        "markup_deletions": "<p>dup</p>",
                    }
                ]
            }
        ),
        json.dumps(
            {
                "books": [
                    {
                        "title": "Bad",
                        "first_page_index": 1,
                        "last_page_index": 20,
                        "skippable_pages": "12",
                    }
                ]
            }
        ),
    ],
)
def test_load_catalog_rejects_invalid_files(tmp_path: Path, content: str) -> None:
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text(content, encoding="utf-8")

    with pytest.raises(CatalogError):
        load_catalog(catalog_file)


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "missing.json")
