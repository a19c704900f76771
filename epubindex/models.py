"""Data models for catalog entries and output records."""

import json
from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class BookDescriptor:
    """Indexing parameters for one known book."""

    title: str
    first_page_index: int
    last_page_index: int
    skippable_pages: frozenset[int] = frozenset()
    suppress_chapter_titles: bool = False
    chapter_labels: Mapping[str, str] = field(default_factory=dict)
    markup_deletions: tuple[str, ...] = ()

    def page_indices(self) -> Iterator[int]:
        """Yield the spine indices to visit, in ascending order."""
        for index in range(self.first_page_index, self.last_page_index + 1):
            if index in self.skippable_pages:
                continue
            yield index

    @staticmethod
    def _sequence_field(data: dict[str, Any], key: str) -> list:
        value = data.get(key, [])
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
        return list(value)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BookDescriptor":
        """Create a BookDescriptor from a dictionary."""
        return cls(
            title=str(data["title"]),
            first_page_index=int(data["first_page_index"]),
            last_page_index=int(data["last_page_index"]),
            skippable_pages=frozenset(
                int(i) for i in cls._sequence_field(data, "skippable_pages")
            ),
            suppress_chapter_titles=bool(data.get("suppress_chapter_titles", False)),
            chapter_labels=dict(data.get("chapter_labels", {})),
            markup_deletions=tuple(
                str(s) for s in cls._sequence_field(data, "markup_deletions")
            ),
        )


@dataclass
class OutputRecord:
    """One context window, as written to the output stream."""

    book_title: str
    chapter_title: str
    searchable_text: str
    display_text: str

    def to_json(self) -> str:
        """Serialize to a single JSON line (without the trailing newline)."""
        return json.dumps(asdict(self), ensure_ascii=False)
