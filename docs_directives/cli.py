"""Command-line interface for docs-directives.

WHY: Maintainers need to lint the corpus before publishing, pull code
samples out for validation, and preview what the renderer will make of
the directives. The CLI wires corpus loading, the check registry, and
the renderer registry behind one command with subcommands.

HOW: Uses argparse with one subparser per task:
  lint     load a corpus, run checks, print a text or JSON report
  extract  print the code samples of one document
  render   write rendered outputs for every document of a corpus
  checks   list the registered checks
  serve    run the HTTP API under uvicorn
Status messages go to stderr; reports and extracted content go to stdout
so the CLI can be piped.

RULES:
- lint exits 0 when the report passes --fail-on (default: error), else 1
- --checks / --formats: comma-separated registry keys (default: all offline)
- render mirrors the corpus tree under --output-dir and never overwrites:
  numeric suffixes (-2, -3) are added on conflict
- Errors print "Error: <message>" to stderr and exit 1; Ctrl-C exits 130
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from docs_directives import __version__
from docs_directives.checks import CHECKS, DEFAULT_CHECKS
from docs_directives.config import (
    API_HOST,
    API_PORT,
    CODE_LANGUAGES,
    DOCUMENT_EXTENSION,
    IMAGES_DIR,
    configure_logging,
    parse_csv,
)
from docs_directives.core.corpus import Corpus, load_corpus
from docs_directives.core.ir import Document
from docs_directives.core.parser import parse_document
from docs_directives.linter import FAIL_LEVELS, format_text_report, run_checks
from docs_directives.renderers import RENDERERS
from docs_directives.renderers.base import RenderOutput
from docs_directives.renderers.code_blocks import code_block_to_dict

DEFAULT_OUTPUT_DIRNAME = "_site"


def _status(msg: str) -> None:
    """Print a status message to stderr (stdout stays pipeable)."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(directory: Path, stem: str, suffix: str) -> Path:
    """Return ``directory/{stem}{suffix}``, adding -2, -3... on conflict.

    RULES:
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. includes-code-blocks-2.json)
    """
    base_path = directory / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx >= 0:
        suffix_name, suffix_ext = suffix[:dot_idx], suffix[dot_idx:]
    else:
        suffix_name, suffix_ext = suffix, ""

    counter = 2
    while True:
        candidate = directory / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: RenderOutput, document: Document, output_dir: Path) -> Path:
    directory = output_dir / document.directory if document.directory else output_dir
    directory.mkdir(parents=True, exist_ok=True)
    path = _resolve_output_path(directory, document.stem, output.suffix)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_keys(raw: Optional[str], registry: Dict, kind: str) -> Optional[List[str]]:
    if not raw:
        return None
    keys = parse_csv(raw)
    for key in keys:
        if key not in registry:
            raise ValueError(
                "Unknown {} '{}'. Available: {}".format(kind, key, ", ".join(sorted(registry)))
            )
    return keys


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_lint(args: argparse.Namespace) -> int:
    check_keys = _parse_keys(args.checks, CHECKS, "check")
    languages = parse_csv(args.languages) if args.languages else list(CODE_LANGUAGES)

    _status("Loading corpus from {}...".format(args.root))
    corpus = load_corpus(args.root, extension=args.extension)
    _status("  {} documents, {} assets".format(len(corpus), len(corpus.assets)))

    report = run_checks(
        corpus,
        check_keys,
        options={
            "code_blocks": {"languages": languages},
            "images": {"images_dir": args.images_dir},
        },
    )

    if args.format == "json":
        sys.stdout.write(json.dumps(report.to_dict(), indent=2) + "\n")
    else:
        sys.stdout.write(format_text_report(report))

    return 0 if report.passed(args.fail_on) else 1


def _cmd_extract(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.is_file():
        raise ValueError("File not found: {}".format(path))
    document = parse_document(path.read_text(encoding="utf-8"), path.name)
    blocks = document.code_blocks
    if args.language:
        blocks = [b for b in blocks if b.language == args.language]

    if args.format == "json":
        sys.stdout.write(json.dumps([code_block_to_dict(b) for b in blocks], indent=2) + "\n")
    else:
        sys.stdout.write("\n\n".join(b.content for b in blocks))
        if blocks:
            sys.stdout.write("\n")
    _status("Extracted {} code block(s) from {}".format(len(blocks), path.name))
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    format_keys = _parse_keys(args.formats, RENDERERS, "format") or list(RENDERERS)
    source = Path(args.root)

    only: Optional[str] = None
    if source.is_file():
        only = source.name
        source = source.parent
    corpus: Corpus = load_corpus(source, extension=args.extension)

    output_dir = Path(args.output_dir) if args.output_dir else source / DEFAULT_OUTPUT_DIRNAME
    documents = [doc for doc in corpus if only is None or doc.path == only]
    if only is not None and not documents:
        raise ValueError("{} is not a {} document".format(args.root, args.extension))

    saved: List[Path] = []
    for key in format_keys:
        renderer = RENDERERS[key]()
        _status("Running {} renderer...".format(renderer.name))
        for document in documents:
            for output in renderer.render(document, corpus):
                saved.append(_save_output(output, document, output_dir))

    _status("Done! Saved {} file(s) to {}".format(len(saved), output_dir))
    return 0


def _cmd_checks(args: argparse.Namespace) -> int:
    for key in sorted(CHECKS):
        cls = CHECKS[key]
        flags = []
        if key in DEFAULT_CHECKS:
            flags.append("default")
        if cls.requires_network:
            flags.append("network")
        print("{:<16} {} ({})".format(key, cls.description, ", ".join(flags)))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("docs_directives.server.app:app", host=args.host, port=args.port)
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without touching files.
    """
    parser = argparse.ArgumentParser(
        prog="docs_directives",
        description="Parse, lint, and render a Markdown corpus written with "
                    "{CODE-START}/{NOTE}/{FILES-LIST} directives.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress details to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    lint = sub.add_parser("lint", help="Lint a documentation corpus.")
    lint.add_argument("root", help="Corpus root directory.")
    lint.add_argument(
        "--checks",
        default=None,
        help="Comma-separated checks to run. Available: {}. Default: {}.".format(
            ", ".join(sorted(CHECKS)), ", ".join(DEFAULT_CHECKS)
        ),
    )
    lint.add_argument("--format", choices=("text", "json"), default="text",
                      help="Report format (default: %(default)s).")
    lint.add_argument("--fail-on", choices=FAIL_LEVELS, default="error",
                      help="Lowest severity that fails the run (default: %(default)s).")
    lint.add_argument("--extension", default=DOCUMENT_EXTENSION,
                      help="Document file extension (default: %(default)s).")
    lint.add_argument("--languages", default=None,
                      help="Comma-separated code languages (default: {}).".format(
                          ",".join(CODE_LANGUAGES)))
    lint.add_argument("--images-dir", default=IMAGES_DIR,
                      help="Sibling image folder name (default: %(default)s).")
    lint.set_defaults(func=_cmd_lint)

    extract = sub.add_parser("extract", help="Print the code samples of a document.")
    extract.add_argument("file", help="Markdown document to read.")
    extract.add_argument("--language", default=None, help="Only blocks with this language tag.")
    extract.add_argument("--format", choices=("text", "json"), default="text",
                         help="Output format (default: %(default)s).")
    extract.set_defaults(func=_cmd_extract)

    render = sub.add_parser("render", help="Render documents with the reference renderers.")
    render.add_argument("root", help="Corpus root directory, or a single document.")
    render.add_argument(
        "--formats",
        default=None,
        help="Comma-separated renderers. Available: {}. Default: all.".format(
            ", ".join(sorted(RENDERERS))
        ),
    )
    render.add_argument("--output-dir", default=None,
                        help="Output directory (default: <root>/{}).".format(DEFAULT_OUTPUT_DIRNAME))
    render.add_argument("--extension", default=DOCUMENT_EXTENSION,
                        help="Document file extension (default: %(default)s).")
    render.set_defaults(func=_cmd_render)

    checks = sub.add_parser("checks", help="List available checks.")
    checks.set_defaults(func=_cmd_checks)

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=API_HOST, help="Bind host (default: %(default)s).")
    serve.add_argument("--port", type=int, default=API_PORT, help="Bind port (default: %(default)s).")
    serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Returns normally on success; exits with the command's code otherwise
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    command: Callable[[argparse.Namespace], int] = args.func

    try:
        configure_logging("DEBUG" if args.verbose else None)
        code = command(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (ValueError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
