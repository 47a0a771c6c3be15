"""Directive marker scanning and offset-to-line mapping.

WHY: The parser is a small state machine that needs to find the next
directive marker from a given offset, and every issue it reports needs
a line number. Keeping the marker patterns here means the directive
vocabulary lives in one place, next to config.CALLOUT_TAGS.

HOW: One compiled regex finds any opener (CODE-START, CODE-END, or a
callout/files-list tag). Two narrower regexes are used inside spans:
CODE_BOUNDARY_RE while a code block is open, CLOSER_RE after a callout
tag. LineIndex turns character offsets into 1-based line numbers with a
binary search over line starts.

RULES:
- Markers tolerate optional spaces before "/}": {CODE-END/} == {CODE-END /}
- A callout tag must be followed by whitespace or "/}" ({NOTES} is prose)
- Tags are case-sensitive: {note ...} is not a directive
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern

from docs_directives.config import CALLOUT_TAGS, FILES_LIST_TAG

_TAGS = "|".join(re.escape(tag) for tag in CALLOUT_TAGS + (FILES_LIST_TAG,))

_CODE_START = r"(?P<code_start>\{CODE-START:(?P<language>[^\s/{}]*)[ \t]*/\})"
_CODE_END = r"(?P<code_end>\{CODE-END[ \t]*/\})"
_CALLOUT = r"(?P<callout>\{(?P<tag>" + _TAGS + r")(?=\s|/\}))"

OPENER_RE: Pattern[str] = re.compile("|".join((_CODE_START, _CODE_END, _CALLOUT)))
CODE_BOUNDARY_RE: Pattern[str] = re.compile("|".join((_CODE_START, _CODE_END)))
CLOSER_RE: Pattern[str] = re.compile(r"/\}")


@dataclass
class Marker:
    """One directive marker found in the text.

    RULES:
    - kind: "code_start", "code_end" or "callout"
    - text: the exact marker source (for callouts, "{" plus the tag)
    - language: set for code_start only
    - tag: set for callout only
    """

    kind: str
    text: str
    start: int
    end: int
    language: Optional[str] = None
    tag: Optional[str] = None


def next_marker(
    text: str,
    pos: int,
    pattern: Pattern[str] = OPENER_RE,
    endpos: Optional[int] = None,
) -> Optional[Marker]:
    """Return the first marker matching ``pattern`` at or after ``pos``."""
    if endpos is None:
        endpos = len(text)
    match = pattern.search(text, pos, endpos)
    if match is None:
        return None
    if match.group("code_start") is not None:
        return Marker(
            kind="code_start",
            text=match.group(0),
            start=match.start(),
            end=match.end(),
            language=match.group("language"),
        )
    if match.group("code_end") is not None:
        return Marker(kind="code_end", text=match.group(0), start=match.start(), end=match.end())
    return Marker(
        kind="callout",
        text=match.group(0),
        start=match.start(),
        end=match.end(),
        tag=match.group("tag"),
    )


class LineIndex:
    """Map character offsets to 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._starts: List[int] = [0]
        for match in re.finditer(r"\n", text):
            self._starts.append(match.end())

    def line_of(self, offset: int) -> int:
        return bisect.bisect_right(self._starts, offset)
