"""FastAPI application exposing lint, extract, and render over HTTP.

WHY: Editor plugins and preview tools want lint feedback and rendered
previews while a page is being written, before it ever lands in the
corpus on disk. An HTTP API lets them post page text and get the same
answers the CLI gives.

HOW: Requests carry documents as {path, text} pairs; each request builds
an in-memory Corpus with build_corpus() and runs the same linter and
renderers as the CLI. There is no server-side state.

RULES:
- Every endpoint has an OpenAPI summary and description
- Error responses use the ErrorResponse schema
- ValueError from the library maps to HTTP 400
- Network checks (external_links) are rejected with 400
"""

from __future__ import annotations

import logging
import posixpath
from typing import List

from fastapi import FastAPI, HTTPException

from docs_directives import __version__
from docs_directives.checks import CHECKS
from docs_directives.config import API_HOST, API_PORT
from docs_directives.core.corpus import build_corpus
from docs_directives.core.parser import extract_code_blocks
from docs_directives.linter import resolve_check_keys, run_checks
from docs_directives.renderers import RENDERERS
from docs_directives.renderers.code_blocks import code_block_to_dict
from docs_directives.server.models import (
    CheckInfo,
    CodeBlockResponse,
    ErrorResponse,
    ExtractRequest,
    HealthResponse,
    LintRequest,
    LintResponse,
    RendererInfo,
    RenderRequest,
    RenderResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="docs-directives API",
    description=(
        "Lint, extract code samples from, and render Markdown pages written "
        "with {CODE-START}/{NOTE}/{FILES-LIST} directives."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Endpoints: Lint
# ---------------------------------------------------------------------------


@app.post(
    "/lint",
    response_model=LintResponse,
    tags=["lint"],
    summary="Lint posted documents",
    description=(
        "Builds an in-memory corpus from the posted documents and asset paths, "
        "runs the selected checks, and returns every issue found."
    ),
    responses={400: {"model": ErrorResponse, "description": "Unknown or network check"}},
)
async def lint(request: LintRequest) -> LintResponse:
    try:
        keys = resolve_check_keys(request.checks)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    network = [k for k in keys if CHECKS[k].requires_network]
    if network:
        raise HTTPException(
            status_code=400,
            detail="Checks requiring network access are not available over the API: {}".format(
                ", ".join(network)
            ),
        )

    corpus = build_corpus(
        {d.path: d.text for d in request.documents},
        assets=request.assets,
    )
    options = {}
    if request.languages is not None:
        options["code_blocks"] = {"languages": request.languages}
    report = run_checks(corpus, keys, options=options)
    logger.info("Linted %d posted documents: %d issues", len(corpus), len(report.issues))
    return LintResponse(**report.to_dict())


# ---------------------------------------------------------------------------
# Endpoints: Extract / Render
# ---------------------------------------------------------------------------


@app.post(
    "/extract",
    response_model=List[CodeBlockResponse],
    tags=["extract"],
    summary="Extract code samples",
    description="Returns the literal content of every well-formed code block, in order.",
)
async def extract(request: ExtractRequest) -> List[CodeBlockResponse]:
    blocks = extract_code_blocks(request.text, request.language)
    return [CodeBlockResponse(**code_block_to_dict(b)) for b in blocks]


@app.post(
    "/render",
    response_model=RenderResponse,
    tags=["render"],
    summary="Render one document",
    description=(
        "Renders the document at 'path' with the chosen renderer. The other "
        "posted documents are used to expand {FILES-LIST /}."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown renderer"},
        404: {"model": ErrorResponse, "description": "Path not among posted documents"},
    },
)
async def render(request: RenderRequest) -> RenderResponse:
    if request.format not in RENDERERS:
        raise HTTPException(
            status_code=400,
            detail="Unknown format '{}'. Available: {}".format(
                request.format, ", ".join(sorted(RENDERERS))
            ),
        )
    corpus = build_corpus({d.path: d.text for d in request.documents})
    document = corpus.get(posixpath.normpath(request.path.lstrip("/")))
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found: {}".format(request.path))

    output = RENDERERS[request.format]().render(document, corpus)[0]
    return RenderResponse(
        path=document.path,
        format=request.format,
        suffix=output.suffix,
        media_type=output.media_type,
        content=output.content,
    )


# ---------------------------------------------------------------------------
# Endpoints: Registries / Health
# ---------------------------------------------------------------------------


@app.get(
    "/checks",
    response_model=List[CheckInfo],
    tags=["registry"],
    summary="List available checks",
)
async def list_checks() -> List[CheckInfo]:
    return [
        CheckInfo(
            key=key,
            name=cls.name,
            description=cls.description,
            requires_network=cls.requires_network,
        )
        for key, cls in sorted(CHECKS.items())
    ]


@app.get(
    "/renderers",
    response_model=List[RendererInfo],
    tags=["registry"],
    summary="List available renderers",
)
async def list_renderers() -> List[RendererInfo]:
    return [RendererInfo(key=key, name=cls().name) for key, cls in sorted(RENDERERS.items())]


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api() -> None:
    """Entry point for the docs-directives-api console script."""
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT)
