"""Shared test fixtures for the docs_directives test suite.

WHY: Most test modules need the same small documentation corpus: a
section index with {FILES-LIST /}, a page with code samples, callouts,
links and an image, and a page in another section that links resolve to.
Centralizing it here keeps every test on the same authoritative sample.

HOW: SAMPLE_TEXTS maps corpus paths to page text. The ``sample_corpus``
fixture builds it in memory; ``sample_root`` writes it (plus a fake
image) under tmp_path for CLI and loader tests.

RULES:
- The sample corpus lints clean with the default checks
- Tests that need a broken page build their own corpus
"""

from typing import Dict

import pytest

from docs_directives.core.corpus import build_corpus

INCLUDES_PAGE = """#Includes

Includes let the client load related documents in a single round trip.

{CODE-START:csharp /}
var order = session.Include<Order>(x => x.CustomerId).Load("orders/1");
{CODE-END /}

The server answers with both documents:

{CODE-START:json /}
{ "a": 1 }
{CODE-END /}

{NOTE Includes are resolved on the server. /}

{WARNING Denormalization copies data:
it must be updated when the source changes. /}

See <a href="live-projections">Live Projections</a> and
[deployment](../server/deployment) for more.

![Includes diagram](images/includes-diagram.png)
"""

LIVE_PROJECTIONS_PAGE = """# Live Projections

{INFO Live projections run on the server when results are returned. /}

{CODE-START:plain /}
from order in results select new { order.Id }
{CODE-END /}

Back to [includes](includes#overview).
"""

INDEX_PAGE = """# Client API

{FILES-LIST /}
"""

DEPLOYMENT_PAGE = """# Deployment

Read more at <a href="https://example.com/docs">the product site</a>.
"""

SAMPLE_TEXTS: Dict[str, str] = {
    "client-api/index.markdown": INDEX_PAGE,
    "client-api/includes.markdown": INCLUDES_PAGE,
    "client-api/live-projections.markdown": LIVE_PROJECTIONS_PAGE,
    "server/deployment.markdown": DEPLOYMENT_PAGE,
}

SAMPLE_ASSETS = ["client-api/images/includes-diagram.png"]


@pytest.fixture
def sample_corpus():
    """The sample corpus built in memory."""
    return build_corpus(SAMPLE_TEXTS, assets=SAMPLE_ASSETS)


@pytest.fixture
def sample_root(tmp_path):
    """The sample corpus written to disk; returns the root directory."""
    root = tmp_path / "docs"
    for rel, text in SAMPLE_TEXTS.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    for rel in SAMPLE_ASSETS:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\x89PNG\r\n\x1a\n")
    return root
