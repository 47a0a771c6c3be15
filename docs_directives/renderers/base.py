"""Abstract base renderer and output container.

WHY: The publishing pipeline that consumes this corpus lives elsewhere,
but its directive contract (code fences, callouts, files lists) has to
be checkable in-repo. Renderers turn one Document into output files;
this base class gives the CLI and the API a single interface for all of
them.

HOW: BaseRenderer is an ABC with a ``name`` property and a ``render()``
method that receives the document and its corpus (needed to expand
{FILES-LIST /}). RenderOutput bundles a file suffix with its content
and MIME type.

RULES:
- ``render()`` returns a list; most renderers return one item
- ``suffix`` is appended to the document stem, e.g. ".md" → "includes.md"
- The caller is responsible for choosing the output directory
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from docs_directives.core.corpus import Corpus
from docs_directives.core.ir import Document


@dataclass
class RenderOutput:
    """One output file produced by a renderer.

    Attributes:
        suffix: File suffix appended to the document stem,
                e.g. ``"-code-blocks.json"`` → ``"includes-code-blocks.json"``.
        content: The rendered text.
        media_type: MIME type for the content, e.g. ``"text/markdown"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseRenderer(ABC):
    """Abstract base for all renderers.

    To add a new output:
    1. Create a new file in renderers/
    2. Subclass BaseRenderer
    3. Implement render() and name
    4. Register in RENDERERS dict in renderers/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable renderer name, e.g. 'CommonMark'."""

    @abstractmethod
    def render(self, document: Document, corpus: Corpus) -> List[RenderOutput]:
        """Render one document.

        Args:
            document: The parsed document to render.
            corpus: The corpus it belongs to (for child documents and links).

        Returns:
            List of RenderOutput objects.
        """
