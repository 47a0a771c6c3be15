"""Configuration constants, directive vocabulary, and .env loading.

WHY: Centralizes every configurable value so it is easy to find, update,
and override. The directive vocabulary, the document extension, and the
asset folder name are plain data structures, not buried in parser logic,
so both humans and tooling can adjust them confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level tuples, sets, and strings. Helper functions parse list
and integer environment values and raise a clear error when a value is
malformed.

RULES:
- CODE_LANGUAGES is the default set of accepted <lang> tags
- CALLOUT_TAGS are the highlighted-callout directive names
- All defaults can be overridden via environment variables
- Invalid numeric environment values raise ValueError naming the variable
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

from dotenv import load_dotenv

# Load .env from the project root (where the tool is run from)
load_dotenv()


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated setting into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got '{}'".format(name, raw)
        ) from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(
            "{} must be a number, got '{}'".format(name, raw)
        ) from None


# ---------------------------------------------------------------------------
# Directive vocabulary
# ---------------------------------------------------------------------------

CALLOUT_TAGS: Tuple[str, ...] = ("BLOCK", "NOTE", "INFO", "WARNING", "TIP")
"""Highlighted callouts: ``{NOTE text /}``, single-line or wrapped."""

FILES_LIST_TAG = "FILES-LIST"
"""Placeholder expanded by the renderer into links to child documents."""

CALLOUT_LABELS = {
    "NOTE": "Note",
    "INFO": "Info",
    "WARNING": "Warning",
    "TIP": "Tip",
}
"""Labels used when rendering callouts. BLOCK renders without a label."""

CODE_LANGUAGES: Tuple[str, ...] = tuple(
    parse_csv(os.getenv("DOCS_CODE_LANGUAGES", "json,csharp,plain"))
)

# ---------------------------------------------------------------------------
# Corpus layout
# ---------------------------------------------------------------------------

DOCUMENT_EXTENSION = os.getenv("DOCS_EXTENSION", ".markdown")
IMAGES_DIR = os.getenv("DOCS_IMAGES_DIR", "images")
INDEX_STEM = "index"

EXCLUDE_DIRS: Tuple[str, ...] = tuple(
    parse_csv(os.getenv("DOCS_EXCLUDE_DIRS", "node_modules,_site,build"))
)
"""Directory names skipped when walking a corpus (hidden dirs are always skipped)."""

# ---------------------------------------------------------------------------
# Runtime
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("DOCS_LOG_LEVEL", "WARNING").upper()
HTTP_TIMEOUT_S = _env_float("DOCS_HTTP_TIMEOUT", 10.0)
HTTP_CONCURRENCY = _env_int("DOCS_HTTP_CONCURRENCY", 8)
API_HOST = os.getenv("DOCS_API_HOST", "127.0.0.1")
API_PORT = _env_int("DOCS_API_PORT", 8000)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the CLI and the API server.

    RULES:
    - level defaults to DOCS_LOG_LEVEL
    - Unknown level names raise ValueError
    """
    name = (level or LOG_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError("Unknown log level '{}'".format(name))
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
