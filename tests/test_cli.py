"""Tests for the command-line interface."""

import json
from pathlib import Path

from click.testing import CliRunner

from epubindex.cli import cli


def test_index_writes_output(epub_factory, numbered_pages) -> None:
    path = epub_factory("shadows.epub", "Shadows of Self", numbered_pages(40))
    output = path.parent / "records.json"

    result = CliRunner().invoke(
        cli, ["index", "--directory", str(path.parent), "--output", str(output)]
    )

    assert result.exit_code == 0, result.output
    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 28
    assert json.loads(lines[0])["book_title"] == "Shadows of Self"
    assert "Shadows of Self" in result.output


def test_index_with_catalog_file(tmp_path: Path, epub_factory, numbered_pages) -> None:
    path = epub_factory("book.epub", "Elantris", numbered_pages(5))
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text(
        json.dumps(
            {
                "books": [
                    {"title": "Elantris", "first_page_index": 1, "last_page_index": 2}
                ]
            }
        ),
        encoding="utf-8",
    )
    output = tmp_path / "records.json"

    result = CliRunner().invoke(
        cli,
        [
            "index",
            "-d",
            str(path.parent),
            "-o",
            str(output),
            "--catalog",
            str(catalog_file),
        ],
    )

    assert result.exit_code == 0, result.output
    lines = output.read_text(encoding="utf-8").splitlines()
    searchable = [json.loads(line)["searchable_text"] for line in lines]
    assert searchable == ["Page 1 middle.", "Page 2 middle."]


def test_index_fails_on_invalid_page_index(
    tmp_path: Path, epub_factory, numbered_pages
) -> None:
    epub_factory("book.epub", "Warbreaker", numbered_pages(3))

    result = CliRunner().invoke(
        cli, ["index", "-d", str(tmp_path), "-o", str(tmp_path / "out.json")]
    )

    assert result.exit_code == 1
    assert "Error" in result.output
    assert "out of range" in result.output


def test_index_fails_on_bad_catalog(tmp_path: Path) -> None:
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text("{", encoding="utf-8")

    result = CliRunner().invoke(
        cli,
        [
            "index",
            "-d",
            str(tmp_path),
            "-o",
            str(tmp_path / "out.json"),
            "--catalog",
            str(catalog_file),
        ],
    )

    assert result.exit_code == 1
    assert "Error" in result.output


def test_catalog_command_lists_books() -> None:
    result = CliRunner().invoke(cli, ["catalog"])

    assert result.exit_code == 0, result.output
    assert "Warbreaker" in result.output
    assert "Edgedancer" in result.output


def test_pages_command(epub_factory) -> None:
    path = epub_factory(
        "book.epub",
        "Warbreaker",
        [
            ("prologue", "<html><body><p>Vivenna.</p></body></html>"),
            ("Chapter01", "<html><body><p>Siri.</p></body></html>"),
        ],
    )

    result = CliRunner().invoke(cli, ["pages", str(path)])

    assert result.exit_code == 0, result.output
    assert "Prologue" in result.output
    assert "Chapter01" in result.output


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "epubindex" in result.output
