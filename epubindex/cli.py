"""
Command-line interface for epubindex.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .catalog import load_catalog
from .chapters import pretty_chapter
from .document import EpubDocument
from .models import BookDescriptor
from .pipeline import DEFAULT_OUTPUT, EPUB_SUFFIX, index_directory

console = Console()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route log records through rich."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def display_catalog_table(books: tuple[BookDescriptor, ...]) -> None:
    """Display catalog entries in a table format."""
    table = Table(title="📚 Catalog", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="cyan")
    table.add_column("Pages", justify="right", style="green")
    table.add_column("Skipped", style="yellow")
    table.add_column("Chapter titles", justify="center")

    for idx, book in enumerate(books, 1):
        skipped = ", ".join(str(i) for i in sorted(book.skippable_pages))
        table.add_row(
            str(idx),
            book.title,
            f"{book.first_page_index}-{book.last_page_index}",
            skipped or "-",
            "hidden" if book.suppress_chapter_titles else "shown",
        )

    console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="epubindex")
@click.option("--verbose", "-v", is_flag=True, help="Log every indexed page")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def cli(verbose: bool, quiet: bool):
    """
    epubindex - Turn a shelf of EPUB novels into search index records.
    """
    configure_logging(verbose, quiet)


@cli.command()
@click.option(
    "--directory",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory to scan for EPUB files (default: current directory)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT,
    help=f"Output file, truncated if it exists (default: {DEFAULT_OUTPUT})",
)
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON catalog file (default: built-in catalog)",
)
@click.option(
    "--suffix",
    type=str,
    default=EPUB_SUFFIX,
    help=f"File name suffix of candidate books (default: {EPUB_SUFFIX})",
)
def index(
    directory: Path, output: Path, catalog_path: Optional[Path], suffix: str
):
    """
    Write one JSON line per context window for every catalogued book.
    """
    try:
        catalog = load_catalog(catalog_path)
        total = index_directory(directory, output, catalog, suffix)
        logging.getLogger(__name__).debug(f"Wrote {total} records to {output}")
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON catalog file (default: built-in catalog)",
)
def catalog(catalog_path: Optional[Path]):
    """List the books the indexer knows about."""
    try:
        display_catalog_table(load_catalog(catalog_path))
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, path_type=Path))
def pages(filepath: Path):
    """List the spine pages of an EPUB file with their chapter labels."""
    try:
        document = EpubDocument(filepath)
        table = Table(
            title=f"📖 {document.declared_title}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Index", style="dim", justify="right")
        table.add_column("Identifier", style="cyan")
        table.add_column("Chapter", style="green")

        for idx in range(document.page_count):
            identifier = document.page_identifier(idx)
            try:
                label = pretty_chapter(identifier)
            except ValueError as e:
                label = f"[red]{e}[/red]"
            table.add_row(str(idx), identifier, label)

        console.print(table)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
