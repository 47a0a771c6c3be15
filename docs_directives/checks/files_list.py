"""{FILES-LIST /} placeholder check.

WHY: The renderer replaces {FILES-LIST /} with links to the documents
next to the page. If that directory holds no other document, the
published page shows an empty list and nobody notices.

RULES:
- The placeholder carries no text (files-list-content: warning)
- It appears at most once per document (duplicate-files-list: warning)
- Its directory holds at least one other document (empty-files-list: warning)
"""

from __future__ import annotations

from typing import List

from docs_directives.checks.base import BaseCheck, Issue, Severity
from docs_directives.core.corpus import Corpus


class FilesListCheck(BaseCheck):
    key = "files_list"
    name = "Files list"
    description = "{FILES-LIST /} placeholders are bare, unique, and have children."

    def check(self, corpus: Corpus) -> List[Issue]:
        issues: List[Issue] = []
        for doc in corpus:
            placeholders = doc.files_lists
            if not placeholders:
                continue
            for block in placeholders:
                if block.content:
                    issues.append(self.issue(
                        "files-list-content", Severity.WARNING, doc.path, block.line,
                        "{FILES-LIST /} ignores its text: '" + block.content + "'",
                    ))
            for block in placeholders[1:]:
                issues.append(self.issue(
                    "duplicate-files-list", Severity.WARNING, doc.path, block.line,
                    "{FILES-LIST /} appears more than once",
                ))
            if not corpus.child_documents(doc):
                issues.append(self.issue(
                    "empty-files-list", Severity.WARNING, doc.path, placeholders[0].line,
                    "{FILES-LIST /} has no child documents to list",
                ))
        return issues
