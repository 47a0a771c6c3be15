"""Lint check registry: pluggable authoring rules.

WHY: The CLI, the linter, and the HTTP API need a single lookup to find
a check by name. A central dict makes it trivial to add a rule: create
the check class, import it here, add one line.

HOW: CHECKS maps string keys to check *classes* (not instances).
Callers instantiate as needed: ``check = CHECKS["links"]()``.
DEFAULT_CHECKS lists every key whose check runs offline.

RULES:
- Keys are snake_case identifiers (used in --checks, API bodies, reports)
- Values are BaseCheck subclasses whose ``key`` equals the dict key
- Every check listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from docs_directives.checks.callouts import CalloutCheck
from docs_directives.checks.code_blocks import CodeBlockCheck
from docs_directives.checks.external_links import ExternalLinkCheck
from docs_directives.checks.files_list import FilesListCheck
from docs_directives.checks.images import ImageCheck
from docs_directives.checks.links import LinkConventionCheck, LinkTargetCheck
from docs_directives.checks.titles import TitleCheck

if TYPE_CHECKING:
    from docs_directives.checks.base import BaseCheck

CHECKS: dict[str, type[BaseCheck]] = {
    "code_blocks": CodeBlockCheck,
    "callouts": CalloutCheck,
    "links": LinkConventionCheck,
    "link_targets": LinkTargetCheck,
    "images": ImageCheck,
    "files_list": FilesListCheck,
    "titles": TitleCheck,
    "external_links": ExternalLinkCheck,
}

DEFAULT_CHECKS: List[str] = [
    key for key, cls in CHECKS.items() if not cls.requires_network
]
