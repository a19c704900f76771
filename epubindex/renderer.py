"""
Render one page of EPUB markup to plain text lines.

Decoration is driven by a RenderPolicy table: tags listed there are wrapped in
a marker pair, everything else contributes only its text. Lines are never
wrapped to a width; each block element becomes its own line.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from bs4 import BeautifulSoup  # type: ignore[import-untyped]
from bs4.element import NavigableString, PreformattedString, Tag

# Replaces every image's alt text, so image-only scene dividers survive as text.
IMAGE_SENTINEL = "⁂"
HORIZONTAL_RULE = "* * *"

EMPHASIS_MARKERS = ("<em>", "</em>")
STRIKE_MARKERS = ("<s>", "</s>")

BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "body",
        "dd",
        "div",
        "dl",
        "dt",
        "figcaption",
        "figure",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "section",
        "table",
        "td",
        "th",
        "tr",
        "ul",
    }
)

DROPPED_TAGS = frozenset({"head", "script", "style", "title", "noscript"})

_WHITESPACE = re.compile(r"\s+")
_SPACES = re.compile(r" {2,}")


@dataclass(frozen=True)
class RenderPolicy:
    """Which tags keep an inline marker pair in the rendered text."""

    wrap: Mapping[str, tuple[str, str]] = field(default_factory=dict)

    def markers_for(self, tag_name: str) -> tuple[str, str]:
        return self.wrap.get(tag_name, ("", ""))


DEFAULT_POLICY = RenderPolicy(
    wrap={
        "em": EMPHASIS_MARKERS,
        "i": EMPHASIS_MARKERS,
        "s": STRIKE_MARKERS,
        "strike": STRIKE_MARKERS,
        "del": STRIKE_MARKERS,
    }
)


def preprocess_markup(markup: bytes | str, deletions: Iterable[str] = ()) -> str:
    """Decode page markup and remove book-specific literal fragments."""
    if isinstance(markup, bytes):
        html = markup.decode("utf-8", errors="ignore")
    else:
        html = markup
    for fragment in deletions:
        html = html.replace(fragment, "")
    return html


def render_page(
    markup: bytes | str,
    policy: RenderPolicy = DEFAULT_POLICY,
    deletions: Iterable[str] = (),
) -> list[str]:
    """
    Render page markup to text lines.

    Args:
        markup: Raw XHTML of one spine page
        policy: Decoration table for inline elements
        deletions: Literal markup fragments to remove before parsing

    Returns:
        Rendered lines in document order, including empty lines
    """
    html = preprocess_markup(markup, deletions)
    soup = BeautifulSoup(html, "html.parser")
    for img in soup.find_all("img"):
        img["alt"] = IMAGE_SENTINEL

    parts: list[str] = []
    _render_children(soup.body or soup, policy, parts)

    return [_SPACES.sub(" ", line).strip() for line in "".join(parts).split("\n")]


def _render_children(node: Tag, policy: RenderPolicy, parts: list[str]) -> None:
    for child in node.children:
        if isinstance(child, PreformattedString):
            # comments, doctypes, processing instructions
            continue
        if isinstance(child, NavigableString):
            parts.append(_WHITESPACE.sub(" ", str(child)))
            continue
        if not isinstance(child, Tag):
            continue

        name = child.name
        if name in DROPPED_TAGS:
            continue
        if name == "br":
            parts.append("\n")
        elif name == "hr":
            parts.append(f"\n{HORIZONTAL_RULE}\n")
        elif name == "img":
            parts.append(str(child.get("alt", "")))
        elif name == "pre":
            parts.append(f"\n{child.get_text()}\n")
        else:
            is_block = name in BLOCK_TAGS
            opening, closing = policy.markers_for(name)
            if is_block:
                parts.append("\n")
            if opening or closing:
                inner: list[str] = []
                _render_children(child, policy, inner)
                parts.append(_wrap_lines("".join(inner), opening, closing))
            else:
                _render_children(child, policy, parts)
            if is_block:
                parts.append("\n")


def _wrap_lines(text: str, opening: str, closing: str) -> str:
    """Wrap each non-blank line of ``text`` in its own marker pair."""
    wrapped = []
    for segment in text.split("\n"):
        core = segment.strip()
        if not core:
            wrapped.append(segment)
            continue
        lead = segment[: len(segment) - len(segment.lstrip())]
        trail = segment[len(segment.rstrip()) :]
        wrapped.append(f"{lead}{opening}{core}{closing}{trail}")
    return "\n".join(wrapped)
