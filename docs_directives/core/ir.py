"""Intermediate representation dataclasses for parsed documents.

WHY: A documentation page is Markdown prose interleaved with brace
directives, links, and image references. Checks (lint rules) and
renderers each need those pieces, but in different groupings. The IR
provides a single, well-typed form that all consumers share, decoupling
parsing from linting and rendering.

HOW: Five dataclasses form the model:
  DirectiveBlock : one tagged span (code sample, callout, files list)
  DocumentLink   : a cross-document or external link
  ImageReference : a link to an image asset
  ParseProblem   : a structural mistake found while parsing
  Document       : one Markdown file with everything above

RULES:
- DirectiveBlock keeps the exact source text around its content, so
  open_marker + leading + content + trailing + close_marker is the
  original span byte for byte
- Blocks are ordered by start offset and never overlap
- Links and images inside code-block content are never collected
- Paths are POSIX strings relative to the corpus root
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from typing import List, Optional

# A URL scheme ("https:", "mailto:") or a protocol-relative "//host".
_EXTERNAL_RE = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.\-]*:|//)")


def _is_external(target: str) -> bool:
    return bool(_EXTERNAL_RE.match(target))


@dataclass
class DirectiveBlock:
    """A tagged span delimited by brace markers.

    RULES:
    - kind: "code", "callout" or "files_list"
    - tag: "CODE" for code samples, otherwise the directive name
    - language: the <lang> of a code block, None for other kinds
    - start / end: character offsets of the whole span in the document
    - line: 1-based line of the opening marker
    """

    kind: str
    tag: str
    content: str
    open_marker: str
    close_marker: str
    start: int
    end: int
    line: int
    leading: str = ""
    trailing: str = ""
    language: Optional[str] = None

    @property
    def content_start(self) -> int:
        """Offset of the first content character in the document."""
        return self.start + len(self.open_marker) + len(self.leading)

    @property
    def content_end(self) -> int:
        return self.content_start + len(self.content)


@dataclass
class DocumentLink:
    """A link from a document, either an href attribute or Markdown syntax."""

    target: str
    line: int
    style: str  # "href" or "markdown"

    @property
    def is_external(self) -> bool:
        return _is_external(self.target)

    @property
    def is_anchor(self) -> bool:
        return self.target.startswith("#")

    @property
    def path(self) -> str:
        """The target with any #fragment or ?query removed."""
        return re.split(r"[#?]", self.target, maxsplit=1)[0]


@dataclass
class ImageReference:
    """An image embedded in a document."""

    source: str
    alt: str
    line: int
    style: str  # "markdown" or "html"

    @property
    def is_external(self) -> bool:
        return _is_external(self.source)


@dataclass
class ParseProblem:
    """A structural mistake found while parsing.

    Codes: unclosed-code-block, stray-code-end, unclosed-callout,
    nested-directive.
    """

    code: str
    message: str
    line: int


@dataclass
class Document:
    """The complete intermediate representation of one Markdown file."""

    path: str
    text: str
    title: Optional[str] = None
    title_line: Optional[int] = None
    blocks: List[DirectiveBlock] = field(default_factory=list)
    links: List[DocumentLink] = field(default_factory=list)
    images: List[ImageReference] = field(default_factory=list)
    problems: List[ParseProblem] = field(default_factory=list)

    @property
    def code_blocks(self) -> List[DirectiveBlock]:
        return [b for b in self.blocks if b.kind == "code"]

    @property
    def callouts(self) -> List[DirectiveBlock]:
        return [b for b in self.blocks if b.kind == "callout"]

    @property
    def files_lists(self) -> List[DirectiveBlock]:
        return [b for b in self.blocks if b.kind == "files_list"]

    @property
    def directory(self) -> str:
        """Directory of the document relative to the corpus root ("" at the root)."""
        return posixpath.dirname(self.path)

    @property
    def stem(self) -> str:
        return posixpath.splitext(posixpath.basename(self.path))[0]
