"""Exceptions raised while indexing books."""


class IndexingError(Exception):
    """Base class for errors that abort an indexing run."""


class CatalogError(IndexingError, ValueError):
    """The book catalog is malformed or cannot be loaded."""


class DocumentOpenError(IndexingError, ValueError):
    """An EPUB file could not be opened."""


class MissingMetadataError(IndexingError):
    """An EPUB file has no declared title."""


class InvalidPageIndexError(IndexingError, IndexError):
    """A catalog page index does not exist in the EPUB spine."""


class ChapterTitleError(IndexingError, ValueError):
    """A page identifier does not fit the naming scheme it claims."""
