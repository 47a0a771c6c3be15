"""Cross-document link checks: linking convention and broken targets.

WHY: The renderer maps extension-less relative paths to published pages.
A link that keeps its ".markdown" suffix, or starts at "/", works in a
Markdown previewer but breaks once published. A link whose target was
renamed or moved breaks everywhere.

HOW: LinkConventionCheck looks at each internal link on its own.
LinkTargetCheck asks the Corpus to resolve it against the documents
that actually exist.

RULES:
- External links (with a URL scheme) and "#anchor" links are skipped
- Internal link paths must not end with the document extension
- Internal link paths must be relative
- Internal links must resolve to a document or a section directory
"""

from __future__ import annotations

from typing import List

from docs_directives.checks.base import BaseCheck, Issue, Severity
from docs_directives.core.corpus import Corpus
from docs_directives.core.ir import DocumentLink


def _is_internal(link: DocumentLink) -> bool:
    return not link.is_external and not link.is_anchor and bool(link.path)


class LinkConventionCheck(BaseCheck):
    key = "links"
    name = "Link convention"
    description = "Internal links are relative and omit the document extension."

    def check(self, corpus: Corpus) -> List[Issue]:
        issues: List[Issue] = []
        for doc in corpus:
            for link in doc.links:
                if not _is_internal(link):
                    continue
                if link.path.endswith(corpus.extension):
                    issues.append(self.issue(
                        "link-extension", Severity.ERROR, doc.path, link.line,
                        "Link '{}' must omit the '{}' extension".format(
                            link.target, corpus.extension
                        ),
                    ))
                if link.path.startswith("/"):
                    issues.append(self.issue(
                        "absolute-link", Severity.ERROR, doc.path, link.line,
                        "Link '{}' must be relative".format(link.target),
                    ))
        return issues


class LinkTargetCheck(BaseCheck):
    key = "link_targets"
    name = "Link targets"
    description = "Internal links resolve to an existing document or section."

    def check(self, corpus: Corpus) -> List[Issue]:
        issues: List[Issue] = []
        for doc in corpus:
            for link in doc.links:
                if not _is_internal(link) or link.path.startswith("/"):
                    continue
                if not corpus.link_resolves(doc, link):
                    issues.append(self.issue(
                        "broken-link", Severity.ERROR, doc.path, link.line,
                        "Link '{}' does not resolve to a document".format(link.target),
                    ))
        return issues
