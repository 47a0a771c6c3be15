"""Lint runner and report.

WHY: The CLI and the HTTP API both run a selection of checks over a
corpus and present the result. Keeping the selection, the ordering of
issues, and the pass/fail rule in one place means both surfaces agree
on what "clean" means.

HOW: run_checks() validates the requested keys against the CHECKS
registry, instantiates each check (with optional per-check keyword
arguments), collects issues, and sorts them by path, line, and code.
LintReport exposes counts, the pass/fail decision, and a dict form that
is validated with jsonschema against lint_report.schema.json before it
is returned.

RULES:
- check_keys=None runs DEFAULT_CHECKS (offline checks only)
- Unknown keys raise ValueError listing the available keys
- Whole-document issues (line None) sort before line-specific ones
- passed(fail_on="error") ignores warnings; fail_on="warning" does not
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import jsonschema

from docs_directives.checks import CHECKS, DEFAULT_CHECKS
from docs_directives.checks.base import Issue, Severity
from docs_directives.core.corpus import Corpus

logger = logging.getLogger(__name__)

FAIL_LEVELS = ("error", "warning")

SCHEMA_PATH = Path(__file__).resolve().parent / "lint_report.schema.json"

_CACHED_SCHEMA: Dict[str, Any] | None = None


def get_report_schema() -> Dict[str, Any]:
    """Load the lint report JSON schema, cached after the first call."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


@dataclass
class LintReport:
    """Outcome of one lint run."""

    documents_checked: int
    checks_run: List[str]
    issues: List[Issue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    def passed(self, fail_on: str = "error") -> bool:
        if fail_on not in FAIL_LEVELS:
            raise ValueError(
                "Unknown fail level '{}'. Available: {}".format(fail_on, ", ".join(FAIL_LEVELS))
            )
        if fail_on == "warning":
            return not self.issues
        return self.error_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the report.

        Raises:
            jsonschema.ValidationError: If the dict does not conform to
                lint_report.schema.json (e.g. a check used a bad code).
        """
        data = {
            "documents_checked": self.documents_checked,
            "checks_run": list(self.checks_run),
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "issues": [issue.to_dict() for issue in self.issues],
        }
        jsonschema.validate(instance=data, schema=get_report_schema())
        return data


def resolve_check_keys(check_keys: Optional[Sequence[str]]) -> List[str]:
    """Validate requested check keys; None means the default set."""
    if not check_keys:
        return list(DEFAULT_CHECKS)
    keys: List[str] = []
    for key in check_keys:
        if key not in CHECKS:
            raise ValueError(
                "Unknown check '{}'. Available checks: {}".format(
                    key, ", ".join(sorted(CHECKS))
                )
            )
        if key not in keys:
            keys.append(key)
    return keys


def _sort_key(issue: Issue):
    return (issue.path, issue.line or 0, issue.code, issue.message)


def run_checks(
    corpus: Corpus,
    check_keys: Optional[Sequence[str]] = None,
    options: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> LintReport:
    """Run the selected checks over ``corpus``.

    Args:
        corpus: Parsed corpus to inspect.
        check_keys: Registry keys to run; None runs DEFAULT_CHECKS.
        options: Per-check constructor keyword arguments, e.g.
                 ``{"code_blocks": {"languages": ["json"]}}``.

    Returns:
        LintReport with issues sorted by path, line, and code.
    """
    keys = resolve_check_keys(check_keys)
    options = options or {}
    issues: List[Issue] = []
    for key in keys:
        check = CHECKS[key](**dict(options.get(key, {})))
        found = check.check(corpus)
        logger.debug("Check %s reported %d issues", key, len(found))
        issues.extend(found)
    issues.sort(key=_sort_key)
    logger.info(
        "Linted %d documents with %d checks: %d issues",
        len(corpus), len(keys), len(issues),
    )
    return LintReport(documents_checked=len(corpus), checks_run=keys, issues=issues)


def format_text_report(report: LintReport) -> str:
    """Render a report as ``path:line: severity [code] message`` lines."""
    lines = []
    for issue in report.issues:
        location = issue.path if issue.line is None else "{}:{}".format(issue.path, issue.line)
        lines.append("{}: {} [{}] {}".format(
            location, issue.severity.value, issue.code, issue.message,
        ))
    lines.append("{} document(s) checked: {} error(s), {} warning(s)".format(
        report.documents_checked, report.error_count, report.warning_count,
    ))
    return "\n".join(lines) + "\n"
