"""
EPUB access by spine position.

Pages are addressed by their index in the spine, which is how catalog entries
describe page ranges. No navigation document is consulted.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from ebooklib import epub  # type: ignore[import-untyped]

from .errors import DocumentOpenError, InvalidPageIndexError, MissingMetadataError

logger = logging.getLogger(__name__)


class EpubDocument:
    """Random access to the spine pages of one EPUB file."""

    def __init__(self, filepath: str | Path):
        """
        Open an EPUB file.

        Args:
            filepath: Path to the EPUB file

        Raises:
            DocumentOpenError: If the file is missing or not a valid EPUB
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise DocumentOpenError(f"File not found: {filepath}")

        self.book: Any = None
        self._load_epub()

    def _load_epub(self) -> None:
        """Load and parse the EPUB file."""
        try:
            self.book = epub.read_epub(str(self.filepath))
            logger.debug(f"Loaded EPUB: {self.filepath.name}")
        except Exception as e:
            raise DocumentOpenError(
                f"Failed to read EPUB file {self.filepath}: {e}"
            ) from e

    def _get_single_metadata(self, field: str) -> Optional[str]:
        """Extract a single metadata value from Dublin Core field."""
        items = self.book.get_metadata("DC", field)
        if items and len(items) > 0:
            value: Optional[str] = items[0][0]
            return value
        return None

    @property
    def declared_title(self) -> str:
        """
        Title from the EPUB metadata.

        Raises:
            MissingMetadataError: If the EPUB declares no title
        """
        title = self._get_single_metadata("title")
        if not title or not title.strip():
            raise MissingMetadataError(f"EPUB has no title: {self.filepath}")
        return title

    @property
    def page_count(self) -> int:
        return len(self.book.spine)

    def page_identifier(self, index: int) -> str:
        """Return the spine idref of the page at ``index``."""
        self._check_index(index)
        spine_entry = self.book.spine[index]
        # ebooklib keeps (idref, linear) tuples; older files may give bare ids
        if isinstance(spine_entry, tuple):
            return str(spine_entry[0])
        return str(spine_entry)

    def page_content(self, index: int) -> bytes:
        """
        Return the raw markup of the page at ``index``.

        Raises:
            InvalidPageIndexError: If the index is outside the spine or the
                spine entry has no manifest item
        """
        idref = self.page_identifier(index)
        item = self.book.get_item_with_id(idref)
        if item is None:
            raise InvalidPageIndexError(
                f"Spine entry {index} ('{idref}') of {self.filepath} has no content"
            )
        content: bytes = item.get_content()
        return content

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.page_count:
            raise InvalidPageIndexError(
                f"Page index {index} is out of range for {self.filepath} "
                f"({self.page_count} spine entries)"
            )
