"""Corpus loading, path resolution, and child-document discovery.

WHY: Most lint rules are about relations between files: a link must
reach another document, an image must exist in the sibling images/
folder, a {FILES-LIST /} must expand to the documents next to it. The
Corpus holds every parsed document plus the set of other files so those
questions can be answered without touching the filesystem again, and so
in-memory corpora (tests, the HTTP API) behave exactly like real trees.

HOW: load_corpus() walks a root directory, parses every file with the
document extension, and records all other files as assets.
build_corpus() does the same from a path → text mapping. Paths are kept
as POSIX strings relative to the root; resolve() joins and normalizes
them the way a browser resolves relative links.

RULES:
- Hidden directories (".git") and config.EXCLUDE_DIRS are never walked
- Documents are keyed and iterated in sorted path order
- resolve() returns None when a target climbs above the corpus root
- A link resolves to <target><ext>, then <target>/index<ext>, then to a
  directory that contains documents
- child_documents() = documents in the same directory, minus the page itself
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Set

from docs_directives.config import DOCUMENT_EXTENSION, EXCLUDE_DIRS, INDEX_STEM
from docs_directives.core.ir import Document, DocumentLink
from docs_directives.core.parser import parse_document

logger = logging.getLogger(__name__)


class CorpusError(ValueError):
    """Raised when a corpus root or one of its files cannot be read."""


@dataclass
class Corpus:
    """A set of parsed documents and the asset files around them."""

    documents: Dict[str, Document] = field(default_factory=dict)
    assets: Set[str] = field(default_factory=set)
    extension: str = DOCUMENT_EXTENSION
    root: Optional[Path] = None

    def __iter__(self):
        for path in sorted(self.documents):
            yield self.documents[path]

    def __len__(self) -> int:
        return len(self.documents)

    def get(self, path: str) -> Optional[Document]:
        return self.documents.get(path)

    def has_file(self, path: str) -> bool:
        return path in self.assets or path in self.documents

    def has_directory(self, path: str) -> bool:
        """True if any document lives at or below ``path``."""
        prefix = path.rstrip("/") + "/"
        return any(p.startswith(prefix) for p in self.documents)

    def resolve(self, document: Document, target: str) -> Optional[str]:
        """Join ``target`` to the document's directory and normalize it."""
        joined = posixpath.join(document.directory, target)
        normalized = posixpath.normpath(joined)
        if normalized == ".":
            return ""
        if normalized == ".." or normalized.startswith("../") or normalized.startswith("/"):
            return None
        return normalized

    def document_for_link(self, document: Document, link: DocumentLink) -> Optional[Document]:
        """Resolve an internal link to the document it names, if any."""
        if not link.path:
            return None
        resolved = self.resolve(document, link.path)
        if resolved is None:
            return None
        for candidate in (
            resolved + self.extension,
            posixpath.join(resolved, INDEX_STEM + self.extension),
            resolved,
        ):
            if candidate in self.documents:
                return self.documents[candidate]
        return None

    def link_resolves(self, document: Document, link: DocumentLink) -> bool:
        """True if an internal link names a document or a section directory."""
        if self.document_for_link(document, link) is not None:
            return True
        resolved = self.resolve(document, link.path)
        if resolved is None:
            return False
        if resolved == "":
            return bool(self.documents)
        return self.has_directory(resolved) or resolved in self.assets

    def child_documents(self, document: Document) -> List[Document]:
        """Documents in the same directory as ``document``, excluding it.

        This is exactly the set a {FILES-LIST /} in ``document`` expands to.
        """
        directory = document.directory
        return [
            doc for doc in self
            if doc.path != document.path and doc.directory == directory
        ]


def _is_excluded(relative: Path, exclude_dirs: Iterable[str]) -> bool:
    excluded = set(exclude_dirs)
    for part in relative.parts[:-1]:
        if part.startswith(".") or part in excluded:
            return True
    return relative.name.startswith(".")


def load_corpus(
    root: str | Path,
    extension: str = DOCUMENT_EXTENSION,
    exclude_dirs: Iterable[str] = EXCLUDE_DIRS,
) -> Corpus:
    """Walk ``root`` and parse every document below it.

    Raises:
        CorpusError: If root is not a directory or a document is not UTF-8.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise CorpusError("Corpus root is not a directory: {}".format(root_path))

    corpus = Corpus(extension=extension, root=root_path.resolve())
    exclude = tuple(exclude_dirs)

    for path in sorted(root_path.rglob("*")):
        if not path.is_file():
            continue
        relative = path.relative_to(root_path)
        if _is_excluded(relative, exclude):
            continue
        rel = relative.as_posix()
        if path.suffix != extension:
            corpus.assets.add(rel)
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CorpusError("{} is not valid UTF-8: {}".format(rel, exc)) from exc
        corpus.documents[rel] = parse_document(text, rel)
        logger.debug("Parsed %s (%d blocks)", rel, len(corpus.documents[rel].blocks))

    logger.info(
        "Loaded %d documents and %d assets from %s",
        len(corpus.documents), len(corpus.assets), root_path,
    )
    return corpus


def build_corpus(
    texts: Mapping[str, str],
    assets: Iterable[str] = (),
    extension: str = DOCUMENT_EXTENSION,
) -> Corpus:
    """Build a corpus from in-memory documents.

    Args:
        texts: POSIX relative path → document text.
        assets: POSIX relative paths of non-document files (images, etc.).
        extension: Document extension used for link resolution.
    """
    corpus = Corpus(extension=extension)
    for path in sorted(texts):
        rel = posixpath.normpath(path.lstrip("/"))
        corpus.documents[rel] = parse_document(texts[path], rel)
    corpus.assets = {posixpath.normpath(a.lstrip("/")) for a in assets}
    return corpus
