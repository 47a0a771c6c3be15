"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Editors and
preview tools post page text and get issues or rendered output back.

HOW: Each endpoint has its own request and response model. Documents
travel as {path, text} pairs so a client can lint a page together with
the neighbours its links and {FILES-LIST /} depend on.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Paths are POSIX paths relative to an imaginary corpus root
- Response models never expose parser internals (offsets, raw markers)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class DocumentInput(BaseModel):
    """One document posted to the API."""

    path: str = Field(description="POSIX path relative to the corpus root, e.g. 'client-api/includes.markdown'.")
    text: str = Field(description="Full Markdown text of the document.")


class LintRequest(BaseModel):
    """Documents (and the asset paths around them) to lint.

    RULES:
    - checks defaults to every offline check
    - Network checks are rejected
    """

    documents: List[DocumentInput] = Field(description="Documents forming the corpus.", min_length=1)
    assets: List[str] = Field(
        default_factory=list,
        description="Relative paths of non-document files (images) that exist.",
    )
    checks: Optional[List[str]] = Field(
        default=None,
        description="Check keys to run. Defaults to all offline checks.",
    )
    languages: Optional[List[str]] = Field(
        default=None,
        description="Accepted code block languages. Defaults to the configured set.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "documents": [
                    {
                        "path": "client-api/includes.markdown",
                        "text": "# Includes\n\n{CODE-START:csharp /}\nsession.Load<Order>(\"orders/1\");\n{CODE-END /}\n",
                    }
                ],
                "assets": ["client-api/images/includes.png"],
                "checks": ["code_blocks", "links"],
            }
        ]
    }}


class ExtractRequest(BaseModel):
    text: str = Field(description="Markdown text to extract code blocks from.")
    language: Optional[str] = Field(default=None, description="Only return blocks with this language tag.")


class RenderRequest(BaseModel):
    """Render one document of a posted corpus."""

    documents: List[DocumentInput] = Field(description="Documents forming the corpus.", min_length=1)
    path: str = Field(description="Path of the document to render.")
    format: str = Field(default="commonmark", description="Renderer key.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class IssueResponse(BaseModel):
    check: str = Field(description="Check key that reported the issue.")
    code: str = Field(description="Stable issue identifier, e.g. 'link-extension'.")
    severity: str = Field(description="'error' or 'warning'.")
    path: str = Field(description="Document path.")
    line: Optional[int] = Field(default=None, description="1-based line, absent for whole-document issues.")
    message: str = Field(description="Human-readable explanation.")


class LintResponse(BaseModel):
    documents_checked: int = Field(description="Number of documents linted.")
    checks_run: List[str] = Field(description="Check keys that ran.")
    error_count: int = Field(description="Number of error issues.")
    warning_count: int = Field(description="Number of warning issues.")
    issues: List[IssueResponse] = Field(description="Issues sorted by path and line.")


class CodeBlockResponse(BaseModel):
    language: Optional[str] = Field(description="Language tag of the block.")
    line: int = Field(description="1-based line of the CODE-START marker.")
    content: str = Field(description="Literal block content.")


class RenderResponse(BaseModel):
    path: str = Field(description="Rendered document path.")
    format: str = Field(description="Renderer key.")
    suffix: str = Field(description="Output file suffix.")
    media_type: str = Field(description="MIME type of the content.")
    content: str = Field(description="Rendered content.")


class CheckInfo(BaseModel):
    key: str = Field(description="Check identifier used in requests.")
    name: str = Field(description="Human-readable check name.")
    description: str = Field(description="What the check enforces.")
    requires_network: bool = Field(description="True if the check needs outbound HTTP.")


class RendererInfo(BaseModel):
    key: str = Field(description="Renderer identifier used in requests.")
    name: str = Field(description="Human-readable renderer name.")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
