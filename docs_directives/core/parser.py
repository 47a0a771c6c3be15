"""Directive parsing, reference extraction, and block re-emission.

WHY: Every consumer (lint checks, renderers, the HTTP API) needs the
same view of a page: which directive blocks it holds, where they start,
what literal content they carry, and which links and images the prose
points at. Parsing once into the Document IR keeps those consumers
format-agnostic.

HOW: parse_document() walks the text with a small state machine driven
by lexer.next_marker(). Outside a block it looks for any opener. After
a CODE-START it only looks for CODE-END (or the next CODE-START, which
means the first block was never closed). After a callout tag it looks
for the first "/}". Malformed spans become ParseProblems instead of
exceptions. A second pass collects the title, links, and images from
text outside code blocks.

RULES:
- Code content excludes one line break after the start marker and one
  before the end marker: "{CODE-START:json /}\\n{ "a": 1 }\\n{CODE-END /}"
  has content '{ "a": 1 }'
- Callout content excludes the whitespace around it; that whitespace is
  kept in leading/trailing
- emit_block(block) == text[block.start:block.end] for every parsed block
- No block is produced for a malformed span
"""

from __future__ import annotations

import bisect
import re
from typing import List, Optional, Tuple

from docs_directives.config import FILES_LIST_TAG
from docs_directives.core.ir import (
    DirectiveBlock,
    Document,
    DocumentLink,
    ImageReference,
    ParseProblem,
)
from docs_directives.core.lexer import (
    CLOSER_RE,
    CODE_BOUNDARY_RE,
    LineIndex,
    next_marker,
)

_TITLE_RE = re.compile(
    r"^#{1,6}(?!#)[ \t]*(?P<title>[^\s#][^\r\n]*?)(?:[ \t]+#+)?[ \t]*\r?$",
    re.MULTILINE,
)
_HREF_RE = re.compile(r"""\bhref\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""")
_MD_LINK_RE = re.compile(
    r"(?<!!)\[(?P<text>[^\]\n]*)\]\(\s*(?P<target><[^>\n]*>|[^)\s]+)(?:\s+\"[^\"]*\")?\s*\)"
)
_MD_IMAGE_RE = re.compile(
    r"!\[(?P<alt>[^\]\n]*)\]\(\s*(?P<src><[^>\n]*>|[^)\s]+)(?:\s+\"[^\"]*\")?\s*\)"
)
_IMG_TAG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_IMG_SRC_RE = re.compile(r"""\bsrc\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""", re.IGNORECASE)
_IMG_ALT_RE = re.compile(r"""\balt\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""", re.IGNORECASE)


def _split_line_break(body: str, at_start: bool) -> Tuple[str, str]:
    """Peel one line break off the start (or end) of ``body``.

    Returns (line_break, rest).
    """
    for brk in ("\r\n", "\n"):
        if at_start and body.startswith(brk):
            return brk, body[len(brk):]
        if not at_start and body.endswith(brk):
            return brk, body[:-len(brk)]
    return "", body


def _quoted(match: "re.Match[str]") -> str:
    value = match.group("dq")
    return value if value is not None else match.group("sq")


def _unbracket(target: str) -> str:
    if target.startswith("<") and target.endswith(">"):
        return target[1:-1]
    return target


def _parse_blocks(
    text: str,
    lines: LineIndex,
) -> Tuple[List[DirectiveBlock], List[ParseProblem]]:
    blocks: List[DirectiveBlock] = []
    problems: List[ParseProblem] = []
    pos = 0

    while True:
        marker = next_marker(text, pos)
        if marker is None:
            break

        if marker.kind == "code_end":
            problems.append(ParseProblem(
                code="stray-code-end",
                message="{CODE-END /} without a preceding {CODE-START /}",
                line=lines.line_of(marker.start),
            ))
            pos = marker.end
            continue

        if marker.kind == "code_start":
            boundary = next_marker(text, marker.end, CODE_BOUNDARY_RE)
            if boundary is None or boundary.kind == "code_start":
                problems.append(ParseProblem(
                    code="unclosed-code-block",
                    message="{{CODE-START:{} /}} is not closed by {{CODE-END /}}".format(
                        marker.language
                    ),
                    line=lines.line_of(marker.start),
                ))
                pos = boundary.start if boundary is not None else marker.end
                continue

            body = text[marker.end:boundary.start]
            leading, rest = _split_line_break(body, at_start=True)
            trailing, content = _split_line_break(rest, at_start=False)
            blocks.append(DirectiveBlock(
                kind="code",
                tag="CODE",
                language=marker.language,
                content=content,
                open_marker=marker.text,
                leading=leading,
                trailing=trailing,
                close_marker=boundary.text,
                start=marker.start,
                end=boundary.end,
                line=lines.line_of(marker.start),
            ))
            pos = boundary.end
            continue

        # Callout or files-list: ends at the first "/}".
        closer = CLOSER_RE.search(text, marker.end)
        if closer is None:
            problems.append(ParseProblem(
                code="unclosed-callout",
                message="{{{} is not closed by /}}".format(marker.tag),
                line=lines.line_of(marker.start),
            ))
            pos = marker.end
            continue

        # endpos includes the closer so a swallowed "{CODE-START:x /}" still matches.
        nested = next_marker(text, marker.end, endpos=closer.end())
        if nested is not None:
            problems.append(ParseProblem(
                code="nested-directive",
                message="{{{} contains another directive before its closing /}}".format(
                    marker.tag
                ),
                line=lines.line_of(marker.start),
            ))
            pos = nested.start
            continue

        body = text[marker.end:closer.start()]
        content = body.strip()
        if content:
            leading = body[:len(body) - len(body.lstrip())]
            trailing = body[len(body.rstrip()):]
        else:
            leading, trailing = body, ""
        blocks.append(DirectiveBlock(
            kind="files_list" if marker.tag == FILES_LIST_TAG else "callout",
            tag=marker.tag or "",
            content=content,
            open_marker=marker.text,
            leading=leading,
            trailing=trailing,
            close_marker=closer.group(0),
            start=marker.start,
            end=closer.end(),
            line=lines.line_of(marker.start),
        ))
        pos = closer.end()

    return blocks, problems


class _CodeSpans:
    """Offsets covered by code blocks, for skipping literal sample text."""

    def __init__(self, blocks: List[DirectiveBlock]) -> None:
        spans = sorted((b.start, b.end) for b in blocks if b.kind == "code")
        self._starts = [s for s, _ in spans]
        self._ends = [e for _, e in spans]

    def covers(self, offset: int) -> bool:
        i = bisect.bisect_right(self._starts, offset) - 1
        return i >= 0 and offset < self._ends[i]


def _find_title(text: str, spans: _CodeSpans, lines: LineIndex) -> Tuple[Optional[str], Optional[int]]:
    for match in _TITLE_RE.finditer(text):
        if not spans.covers(match.start()):
            return match.group("title"), lines.line_of(match.start())
    return None, None


def _find_links(text: str, spans: _CodeSpans, lines: LineIndex) -> List[DocumentLink]:
    found = []  # type: List[Tuple[int, DocumentLink]]
    for match in _HREF_RE.finditer(text):
        if spans.covers(match.start()):
            continue
        link = DocumentLink(target=_quoted(match), line=lines.line_of(match.start()), style="href")
        found.append((match.start(), link))
    for match in _MD_LINK_RE.finditer(text):
        if spans.covers(match.start()):
            continue
        link = DocumentLink(
            target=_unbracket(match.group("target")),
            line=lines.line_of(match.start()),
            style="markdown",
        )
        found.append((match.start(), link))
    found.sort(key=lambda pair: pair[0])
    return [link for _, link in found]


def _find_images(text: str, spans: _CodeSpans, lines: LineIndex) -> List[ImageReference]:
    found = []  # type: List[Tuple[int, ImageReference]]
    for match in _MD_IMAGE_RE.finditer(text):
        if spans.covers(match.start()):
            continue
        found.append((match.start(), ImageReference(
            source=_unbracket(match.group("src")),
            alt=match.group("alt"),
            line=lines.line_of(match.start()),
            style="markdown",
        )))
    for match in _IMG_TAG_RE.finditer(text):
        if spans.covers(match.start()):
            continue
        tag = match.group(0)
        src = _IMG_SRC_RE.search(tag)
        if src is None:
            continue
        alt = _IMG_ALT_RE.search(tag)
        found.append((match.start(), ImageReference(
            source=_quoted(src),
            alt=_quoted(alt) if alt else "",
            line=lines.line_of(match.start()),
            style="html",
        )))
    found.sort(key=lambda pair: pair[0])
    return [image for _, image in found]


def parse_document(text: str, path: str = "") -> Document:
    """Parse one Markdown file into the Document IR.

    Args:
        text: Full document text.
        path: POSIX path relative to the corpus root.

    Returns:
        Document with blocks, links, images, title, and parse problems.
    """
    lines = LineIndex(text)
    blocks, problems = _parse_blocks(text, lines)
    spans = _CodeSpans(blocks)
    title, title_line = _find_title(text, spans, lines)
    return Document(
        path=path,
        text=text,
        title=title,
        title_line=title_line,
        blocks=blocks,
        links=_find_links(text, spans, lines),
        images=_find_images(text, spans, lines),
        problems=problems,
    )


def emit_block(block: DirectiveBlock) -> str:
    """Re-emit a block between its original markers."""
    return block.open_marker + block.leading + block.content + block.trailing + block.close_marker


def extract_code_blocks(text: str, language: Optional[str] = None) -> List[DirectiveBlock]:
    """Return the code blocks of ``text``, optionally only one language."""
    blocks = parse_document(text).code_blocks
    if language is None:
        return blocks
    return [b for b in blocks if b.language == language]
