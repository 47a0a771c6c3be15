"""Renderer registry.

HOW: RENDERERS maps string keys to renderer *classes* (not instances).
Callers instantiate as needed: ``renderer = RENDERERS["commonmark"]()``.

RULES:
- Keys are snake_case identifiers (used in --formats and API bodies)
- Values are BaseRenderer subclasses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docs_directives.renderers.code_blocks import CodeBlocksRenderer
from docs_directives.renderers.commonmark import CommonMarkRenderer

if TYPE_CHECKING:
    from docs_directives.renderers.base import BaseRenderer

RENDERERS: dict[str, type[BaseRenderer]] = {
    "commonmark": CommonMarkRenderer,
    "code_blocks": CodeBlocksRenderer,
}
