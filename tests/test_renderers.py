"""Tests for the CommonMark and code-block renderers.

WHY: The CommonMark renderer is the executable statement of what the
publishing renderer must do with each directive. If it drifts, pages
that lint clean can still publish wrong, most visibly a {FILES-LIST /}
that lists the wrong pages.

HOW: Each directive kind is rendered on its own, then whole sample pages
are rendered through the registry.

RULES:
- All tests use the sample corpus from conftest.py unless they need a
  specific edge case
"""

import json

from docs_directives.core.corpus import build_corpus
from docs_directives.core.parser import parse_document
from docs_directives.renderers import RENDERERS
from docs_directives.renderers.code_blocks import CodeBlocksRenderer
from docs_directives.renderers.commonmark import (
    CommonMarkRenderer,
    render_callout,
    render_code,
)


def _first_block(text):
    return parse_document(text).blocks[0]


class TestRenderCode:

    def test_json_fence(self):
        block = _first_block('{CODE-START:json /}\n{ "a": 1 }\n{CODE-END /}')
        assert render_code(block) == '```json\n{ "a": 1 }\n```'

    def test_plain_has_no_info_string(self):
        block = _first_block("{CODE-START:plain /}\nhello\n{CODE-END /}")
        assert render_code(block) == "```\nhello\n```"

    def test_fence_longer_than_content_backticks(self):
        block = _first_block("{CODE-START:plain /}\n```\nx\n```\n{CODE-END /}")
        assert render_code(block) == "````\n```\nx\n```\n````"

    def test_empty(self):
        block = _first_block("{CODE-START:csharp /}\n{CODE-END /}")
        assert render_code(block) == "```csharp\n```"


class TestRenderCallout:

    def test_labeled(self):
        assert render_callout(_first_block("{NOTE Read this. /}")) == "> **Note:** Read this."

    def test_wrapped(self):
        block = _first_block("{WARNING first\n  second /}")
        assert render_callout(block) == "> **Warning:** first\n> second"

    def test_block_has_no_label(self):
        assert render_callout(_first_block("{BLOCK Plain box. /}")) == "> Plain box."

    def test_blank_line_inside(self):
        block = _first_block("{TIP one\n\ntwo /}")
        assert render_callout(block) == "> **Tip:** one\n>\n> two"


class TestFilesList:

    def test_expands_to_exactly_the_children(self, sample_corpus):
        index = sample_corpus.get("client-api/index.markdown")
        output = CommonMarkRenderer().render(index, sample_corpus)[0]
        assert output.content == (
            "# Client API\n\n"
            "- [Includes](includes)\n"
            "- [Live Projections](live-projections)\n"
        )

    def test_stem_used_without_title(self):
        corpus = build_corpus({"index.markdown": "{FILES-LIST /}", "untitled.markdown": "text"})
        output = CommonMarkRenderer().render(corpus.get("index.markdown"), corpus)[0]
        assert output.content == "- [untitled](untitled)"

    def test_crlf_child_title(self):
        corpus = build_corpus({
            "s/index.markdown": "# S\r\n\r\n{FILES-LIST /}\r\n",
            "s/a.markdown": "# Page A\r\n\r\nBody\r\n",
        })
        output = CommonMarkRenderer().render(corpus.get("s/index.markdown"), corpus)[0]
        assert output.content == "# S\r\n\r\n- [Page A](a)\r\n"


class TestCommonMarkRenderer:

    def test_registry(self):
        assert set(RENDERERS) == {"commonmark", "code_blocks"}
        assert RENDERERS["commonmark"]().name == "CommonMark"

    def test_sample_page(self, sample_corpus):
        doc = sample_corpus.get("client-api/includes.markdown")
        output = CommonMarkRenderer().render(doc, sample_corpus)[0]
        assert output.suffix == ".md"
        assert output.media_type == "text/markdown"
        assert "{CODE-START" not in output.content
        assert "{NOTE" not in output.content
        assert '```json\n{ "a": 1 }\n```' in output.content
        assert "> **Note:** Includes are resolved on the server." in output.content
        assert output.content.startswith("#Includes\n\nIncludes let")
        assert output.content.endswith("![Includes diagram](images/includes-diagram.png)\n")

    def test_malformed_span_left_untouched(self):
        text = "# A\n{TIP unclosed\n"
        corpus = build_corpus({"a.markdown": text})
        output = CommonMarkRenderer().render(corpus.get("a.markdown"), corpus)[0]
        assert output.content == text


class TestInlineDirectives:
    """Directives that share a line with prose still render as blocks."""

    def _render(self, text):
        corpus = build_corpus({"a.markdown": text})
        return CommonMarkRenderer().render(corpus.get("a.markdown"), corpus)[0].content

    def test_callout_mid_paragraph(self):
        assert self._render("Some text {NOTE careful /} more.\n") == (
            "Some text\n\n> **Note:** careful\n\nmore.\n"
        )

    def test_adjacent_callouts(self):
        assert self._render("{NOTE a /}{TIP b /}") == "> **Note:** a\n\n> **Tip:** b"

    def test_code_after_prose(self):
        assert self._render("See: {CODE-START:json /}\n1\n{CODE-END /}\n") == (
            "See:\n\n```json\n1\n```\n"
        )


class TestCodeBlocksRenderer:

    def test_sample_page(self, sample_corpus):
        doc = sample_corpus.get("client-api/includes.markdown")
        output = CodeBlocksRenderer().render(doc, sample_corpus)[0]
        assert output.suffix == "-code-blocks.json"
        assert output.media_type == "application/json"
        items = json.loads(output.content)
        assert [item["language"] for item in items] == ["csharp", "json"]
        assert items[1] == {"language": "json", "line": 11, "content": '{ "a": 1 }'}

    def test_no_blocks(self, sample_corpus):
        doc = sample_corpus.get("server/deployment.markdown")
        output = CodeBlocksRenderer().render(doc, sample_corpus)[0]
        assert json.loads(output.content) == []
