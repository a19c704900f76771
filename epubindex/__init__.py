"""
epubindex - Turn EPUB novels into full-text search index records.

Extracts narrative lines from catalogued EPUB books, wraps each line in
its neighbouring paragraphs and writes newline-delimited JSON records.
"""

from .catalog import DEFAULT_CATALOG, load_catalog, match_books
from .document import EpubDocument
from .models import BookDescriptor, OutputRecord
from .pipeline import index_directory

__all__ = [
    "DEFAULT_CATALOG",
    "BookDescriptor",
    "EpubDocument",
    "OutputRecord",
    "index_directory",
    "load_catalog",
    "match_books",
]

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "0.0.0+unknown"
