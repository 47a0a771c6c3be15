"""Callout directive check: {BLOCK}, {NOTE}, {INFO}, {WARNING}, {TIP}.

RULES:
- Every callout is closed by "/}" (unclosed-callout: error)
- Callouts do not contain other directives (nested-directive: error)
- A callout with no text is a warning
"""

from __future__ import annotations

from typing import List

from docs_directives.checks.base import BaseCheck, Issue, Severity
from docs_directives.core.corpus import Corpus

_STRUCTURE_CODES = frozenset({"unclosed-callout", "nested-directive"})


class CalloutCheck(BaseCheck):
    key = "callouts"
    name = "Callouts"
    description = "Callout directives are closed, not nested, and not empty."

    def check(self, corpus: Corpus) -> List[Issue]:
        issues: List[Issue] = []
        for doc in corpus:
            for problem in doc.problems:
                if problem.code in _STRUCTURE_CODES:
                    issues.append(self.issue(
                        problem.code, Severity.ERROR, doc.path, problem.line, problem.message,
                    ))
            for block in doc.callouts:
                if not block.content:
                    issues.append(self.issue(
                        "empty-callout", Severity.WARNING, doc.path, block.line,
                        "{{{} /}} has no text".format(block.tag),
                    ))
        return issues
