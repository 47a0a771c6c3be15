"""Code sample directive check: pairing, language tags, empty samples.

WHY: A {CODE-START /} that is never closed swallows the rest of the page
into a code sample when the renderer publishes it, and a language tag the
renderer does not know loses its highlighting. Both are easy to miss in
review because the raw Markdown still reads fine.

HOW: Pairing problems are already recorded by the parser as
ParseProblems (unclosed-code-block, stray-code-end); this check turns
them into errors. It then inspects every well-formed code block for its
language tag and content.

RULES:
- Every CODE-START has exactly one CODE-END before the next CODE-START or EOF
- Language must be one of the configured tags (default json, csharp, plain)
- A code block whose content is only whitespace is a warning
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from docs_directives.checks.base import BaseCheck, Issue, Severity
from docs_directives.config import CODE_LANGUAGES
from docs_directives.core.corpus import Corpus

_PAIRING_CODES = frozenset({"unclosed-code-block", "stray-code-end"})


class CodeBlockCheck(BaseCheck):
    key = "code_blocks"
    name = "Code blocks"
    description = (
        "CODE-START/CODE-END markers are paired and use a known language tag."
    )

    def __init__(self, languages: Optional[Iterable[str]] = None) -> None:
        self.languages = tuple(languages) if languages is not None else CODE_LANGUAGES

    def check(self, corpus: Corpus) -> List[Issue]:
        issues: List[Issue] = []
        for doc in corpus:
            for problem in doc.problems:
                if problem.code in _PAIRING_CODES:
                    issues.append(self.issue(
                        problem.code, Severity.ERROR, doc.path, problem.line, problem.message,
                    ))
            for block in doc.code_blocks:
                if not block.language:
                    issues.append(self.issue(
                        "missing-language", Severity.ERROR, doc.path, block.line,
                        "Code block has no language tag",
                    ))
                elif block.language not in self.languages:
                    issues.append(self.issue(
                        "unknown-language", Severity.ERROR, doc.path, block.line,
                        "Unknown code language '{}'. Expected one of: {}".format(
                            block.language, ", ".join(self.languages)
                        ),
                    ))
                if not block.content.strip():
                    issues.append(self.issue(
                        "empty-code-block", Severity.WARNING, doc.path, block.line,
                        "Code block is empty",
                    ))
        return issues
