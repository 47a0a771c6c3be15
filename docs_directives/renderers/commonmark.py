"""Reference renderer: directives to plain CommonMark.

WHY: The brace directives only mean something to the publishing
renderer. Rewriting them as standard Markdown shows exactly what that
renderer is expected to produce, makes the {FILES-LIST /} contract
testable, and yields pages any Markdown viewer can display.

HOW: Text between directive blocks is copied verbatim. Each block is
replaced by its CommonMark equivalent:
  code        → fenced code block with the language as info string
  callout     → blockquote, first line prefixed with a bold label
  files_list  → bullet list of links to corpus.child_documents()

RULES:
- "plain" code blocks get a fence with no info string
- The fence is longer than any backtick run inside the content
- BLOCK callouts render as a blockquote without a label
- Files-list links are relative and extension-less: "[Title](stem)"
- Malformed spans (parse problems) are left untouched
- A directive sharing a line with prose is set off by blank lines
- Output suffix: ".md"; media type: "text/markdown"
"""

from __future__ import annotations

import re
from typing import List

from docs_directives.config import CALLOUT_LABELS
from docs_directives.core.corpus import Corpus
from docs_directives.core.ir import DirectiveBlock, Document
from docs_directives.renderers.base import BaseRenderer, RenderOutput

_BACKTICK_RUN_RE = re.compile(r"`{3,}")
_UNLABELED_LANGUAGES = frozenset({"", "plain"})


def render_code(block: DirectiveBlock) -> str:
    longest = max((len(m.group(0)) for m in _BACKTICK_RUN_RE.finditer(block.content)), default=2)
    fence = "`" * max(3, longest + 1)
    info = "" if (block.language or "") in _UNLABELED_LANGUAGES else block.language
    if not block.content:
        return "{}{}\n{}".format(fence, info, fence)
    return "{}{}\n{}\n{}".format(fence, info, block.content, fence)


def render_callout(block: DirectiveBlock) -> str:
    lines = [line.strip() for line in block.content.splitlines()] or [""]
    label = CALLOUT_LABELS.get(block.tag)
    if label:
        first = "**{}:** {}".format(label, lines[0]).rstrip()
        lines = [first] + lines[1:]
    return "\n".join("> " + line if line else ">" for line in lines)


def render_files_list(document: Document, corpus: Corpus) -> str:
    items = []
    for child in corpus.child_documents(document):
        items.append("- [{}]({})".format(child.title or child.stem, child.stem))
    return "\n".join(items)


def _separate(gap: str, after_block: bool, before_block: bool) -> str:
    """Put a blank line between prose and a block that shares its line.

    A fence, blockquote or list only parses as such at the start of a
    line, so an inline directive is moved onto lines of its own.
    """
    if after_block and gap and not gap.startswith(("\n", "\r\n")):
        gap = "\n\n" + gap.lstrip(" \t")
    if before_block and (gap or after_block) and not gap.endswith("\n"):
        gap = gap.rstrip(" \t") + "\n\n"
    return gap


class CommonMarkRenderer(BaseRenderer):
    """Rewrites every directive as standard Markdown."""

    @property
    def name(self) -> str:
        return "CommonMark"

    def render(self, document: Document, corpus: Corpus) -> List[RenderOutput]:
        parts: List[str] = []
        pos = 0
        for block in document.blocks:
            gap = document.text[pos:block.start]
            parts.append(_separate(gap, after_block=pos > 0, before_block=True))
            if block.kind == "code":
                parts.append(render_code(block))
            elif block.kind == "callout":
                parts.append(render_callout(block))
            else:
                parts.append(render_files_list(document, corpus))
            pos = block.end
        parts.append(_separate(document.text[pos:], after_block=pos > 0, before_block=False))

        return [
            RenderOutput(
                suffix=".md",
                content="".join(parts),
                media_type="text/markdown",
            )
        ]
