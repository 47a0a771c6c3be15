"""Document title check: every page opens with a heading."""

from __future__ import annotations

from typing import List

from docs_directives.checks.base import BaseCheck, Issue, Severity
from docs_directives.core.corpus import Corpus


class TitleCheck(BaseCheck):
    key = "titles"
    name = "Titles"
    description = "Every document has a heading that names it."

    def check(self, corpus: Corpus) -> List[Issue]:
        return [
            self.issue(
                "missing-title", Severity.WARNING, doc.path, None,
                "Document has no heading; the title falls back to '{}'".format(doc.stem),
            )
            for doc in corpus
            if doc.title is None
        ]
