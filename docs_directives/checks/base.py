"""Abstract base check and lint issue container.

WHY: Every lint rule consumes the same Corpus but looks for a different
authoring mistake. This base class enforces a consistent interface so
the CLI, the linter, and the HTTP API can run any check generically.

HOW: BaseCheck is an ABC with class attributes (key, name, description,
requires_network) and one ``check()`` method. Issue is a plain dataclass
that pins a message to a document path and line.

RULES:
- Subclasses MUST set ``key`` and ``name`` and implement ``check()``
- ``check()`` returns a list; an empty list means the corpus passed
- requires_network checks are opt-in and never part of the default set
- severity is "error" or "warning"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from docs_directives.core.corpus import Corpus


class Severity(str, Enum):
    """How bad an issue is. Errors fail a lint run by default."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class Issue:
    """One authoring mistake found by a check.

    Attributes:
        check: Registry key of the check that reported it, e.g. "links".
        code: Stable kebab-case identifier, e.g. "link-extension".
        severity: Severity.ERROR or Severity.WARNING.
        path: Document path relative to the corpus root.
        line: 1-based line number, or None for whole-document issues.
        message: Human-readable explanation.
    """

    check: str
    code: str
    severity: Severity
    path: str
    line: Optional[int]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


class BaseCheck(ABC):
    """Abstract base for all lint checks.

    To add a new check:
    1. Create a new file in checks/
    2. Subclass BaseCheck, set key/name/description
    3. Implement check()
    4. Register in CHECKS dict in checks/__init__.py
    """

    key: str = ""
    name: str = ""
    description: str = ""
    requires_network: bool = False

    def issue(
        self,
        code: str,
        severity: Severity,
        path: str,
        line: Optional[int],
        message: str,
    ) -> Issue:
        return Issue(
            check=self.key,
            code=code,
            severity=severity,
            path=path,
            line=line,
            message=message,
        )

    @abstractmethod
    def check(self, corpus: Corpus) -> List[Issue]:
        """Inspect the corpus and return every issue found.

        Args:
            corpus: Parsed documents plus the asset files around them.

        Returns:
            List of Issue objects, in any order (the linter sorts them).
        """
