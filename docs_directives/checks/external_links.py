"""Opt-in external link check over HTTP.

WHY: Pages link to product downloads, blog posts, and API references
outside the corpus. Those targets move without notice. Checking them
needs the network, so this check is never part of the default set; the
CLI runs it with ``--checks external_links``.

HOW: LinkProber wraps httpx.AsyncClient as an async context manager.
Every distinct http(s) URL in the corpus is probed once with HEAD
(falling back to GET when the server refuses HEAD), bounded by a
semaphore. The synchronous check() drives the probes with asyncio.run().

RULES:
- Only http:// and https:// targets are probed
- Each distinct URL is requested at most once per run
- Status >= 400 or a transport error is a dead link (warning, not error:
  the remote side may just be down)
- Redirects are followed
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

import httpx

from docs_directives.checks.base import BaseCheck, Issue, Severity
from docs_directives.config import HTTP_CONCURRENCY, HTTP_TIMEOUT_S
from docs_directives.core.corpus import Corpus

logger = logging.getLogger(__name__)

_FALLBACK_TO_GET = frozenset({405, 501})


class LinkProber:
    """Async HTTP prober for external links.

    RULES:
    - Use as: async with LinkProber() as prober: ...
    - probe() returns (ok, detail) and never raises for HTTP failures
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        concurrency: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout if timeout is not None else HTTP_TIMEOUT_S
        self._concurrency = concurrency or HTTP_CONCURRENCY
        self._semaphore: asyncio.Semaphore | None = None
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> LinkProber:
        self._semaphore = asyncio.Semaphore(self._concurrency)
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=self._transport,
            headers={"User-Agent": "docs-directives link checker"},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._semaphore is None:
            raise RuntimeError(
                "LinkProber must be used as an async context manager: "
                "async with LinkProber() as prober: ..."
            )
        return self._client

    async def probe(self, url: str) -> Tuple[bool, str]:
        client = self._ensure_client()
        async with self._semaphore:  # type: ignore[union-attr]
            try:
                resp = await client.head(url)
                if resp.status_code in _FALLBACK_TO_GET:
                    resp = await client.get(url)
            except httpx.HTTPError as exc:
                logger.info("Probe failed for %s: %s", url, exc)
                return False, "{}: {}".format(type(exc).__name__, exc)
        if resp.status_code >= 400:
            return False, "HTTP {}".format(resp.status_code)
        return True, "HTTP {}".format(resp.status_code)


class ExternalLinkCheck(BaseCheck):
    key = "external_links"
    name = "External links"
    description = "http(s) links answer with a non-error status (needs network)."
    requires_network = True

    def __init__(
        self,
        timeout: Optional[float] = None,
        concurrency: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._concurrency = concurrency
        self._transport = transport

    async def _probe_all(self, urls: List[str]) -> Dict[str, Tuple[bool, str]]:
        async with LinkProber(self._timeout, self._concurrency, self._transport) as prober:
            results = await asyncio.gather(*(prober.probe(url) for url in urls))
        return dict(zip(urls, results))

    def check(self, corpus: Corpus) -> List[Issue]:
        urls: List[str] = []
        seen = set()
        for doc in corpus:
            for link in doc.links:
                url = link.target
                if url.startswith(("http://", "https://")) and url not in seen:
                    seen.add(url)
                    urls.append(url)
        if not urls:
            return []

        logger.info("Probing %d external links", len(urls))
        results = asyncio.run(self._probe_all(urls))

        issues: List[Issue] = []
        for doc in corpus:
            for link in doc.links:
                outcome = results.get(link.target)
                if outcome is None or outcome[0]:
                    continue
                issues.append(self.issue(
                    "dead-external-link", Severity.WARNING, doc.path, link.line,
                    "External link '{}' failed ({})".format(link.target, outcome[1]),
                ))
        return issues
