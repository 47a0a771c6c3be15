"""Code sample extraction as JSON.

WHY: Code samples embedded in prose drift from the client API they
describe. Extracting them as data lets a separate job compile or
validate them (e.g. parse every json sample) without re-implementing
the directive grammar.

RULES:
- One JSON array per document, in document order
- Each item: language, line, content (literal, unmodified)
- Output suffix: "-code-blocks.json"; media type: "application/json"
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from docs_directives.core.corpus import Corpus
from docs_directives.core.ir import DirectiveBlock, Document
from docs_directives.renderers.base import BaseRenderer, RenderOutput


def code_block_to_dict(block: DirectiveBlock) -> Dict[str, Any]:
    return {
        "language": block.language,
        "line": block.line,
        "content": block.content,
    }


class CodeBlocksRenderer(BaseRenderer):

    @property
    def name(self) -> str:
        return "Code blocks (JSON)"

    def render(self, document: Document, corpus: Corpus) -> List[RenderOutput]:
        items = [code_block_to_dict(block) for block in document.code_blocks]
        return [
            RenderOutput(
                suffix="-code-blocks.json",
                content=json.dumps(items, indent=2, ensure_ascii=False) + "\n",
                media_type="application/json",
            )
        ]
