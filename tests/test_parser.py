"""Unit tests for the directive parser.

WHY: The parser is the most critical transformation in the tool: every
check and renderer trusts its view of where blocks start and end and
what literal content they hold. A wrong cut leaks prose into code
samples or silently drops a sample from a published page.

HOW: Tests cover each parsing rule:
  - Code block extraction (language, content cut, line numbers)
  - Pairing problems (unclosed, stray end, next CODE-START)
  - Callouts (single-line, wrapped, empty, unclosed, nested)
  - Round trip: emit_block() reproduces the source span exactly
  - Title, link, and image collection outside code samples

RULES:
- Expected values are written out literally, never recomputed
"""

import pytest

from docs_directives.core.parser import emit_block, extract_code_blocks, parse_document

from conftest import INCLUDES_PAGE, LIVE_PROJECTIONS_PAGE


class TestCodeBlocks:
    """{CODE-START:<lang> /} ... {CODE-END /} extraction."""

    def test_single_json_block(self):
        doc = parse_document('{CODE-START:json /}\n{ "a": 1 }\n{CODE-END /}')
        assert len(doc.code_blocks) == 1
        block = doc.code_blocks[0]
        assert block.language == "json"
        assert block.content == '{ "a": 1 }'
        assert doc.problems == []

    def test_multiline_content_kept_verbatim(self):
        text = "{CODE-START:csharp /}\nvar a = 1;\n\n    var b = 2;\n{CODE-END /}\n"
        block = parse_document(text).code_blocks[0]
        assert block.content == "var a = 1;\n\n    var b = 2;"

    def test_crlf_line_breaks(self):
        text = "{CODE-START:plain /}\r\nhello\r\n{CODE-END /}"
        block = parse_document(text).code_blocks[0]
        assert block.content == "hello"
        assert block.leading == "\r\n"
        assert block.trailing == "\r\n"

    def test_marker_without_space(self):
        doc = parse_document("{CODE-START:json/}\n1\n{CODE-END/}")
        assert len(doc.code_blocks) == 1
        assert doc.code_blocks[0].content == "1"

    def test_empty_block(self):
        block = parse_document("{CODE-START:json /}\n{CODE-END /}").code_blocks[0]
        assert block.content == ""

    def test_line_numbers(self):
        text = "# Title\n\ntext\n{CODE-START:json /}\n{}\n{CODE-END /}\n"
        block = parse_document(text).code_blocks[0]
        assert block.line == 4

    def test_braces_in_code_are_not_directives(self):
        text = "{CODE-START:csharp /}\nnew { NOTE = 1 };\n{NOTE x /}\n{CODE-END /}"
        doc = parse_document(text)
        assert len(doc.blocks) == 1
        assert doc.callouts == []

    def test_sample_page_blocks(self):
        doc = parse_document(INCLUDES_PAGE)
        assert [b.language for b in doc.code_blocks] == ["csharp", "json"]
        assert doc.code_blocks[1].content == '{ "a": 1 }'


class TestPairingProblems:
    """Every CODE-START needs one CODE-END before the next CODE-START or EOF."""

    def test_unclosed_at_eof(self):
        doc = parse_document("{CODE-START:json /}\n{}\n")
        assert doc.code_blocks == []
        assert [p.code for p in doc.problems] == ["unclosed-code-block"]
        assert doc.problems[0].line == 1

    def test_unclosed_before_next_start(self):
        text = (
            "{CODE-START:json /}\n{}\n"
            "{CODE-START:csharp /}\nvar x = 1;\n{CODE-END /}\n"
        )
        doc = parse_document(text)
        assert [p.code for p in doc.problems] == ["unclosed-code-block"]
        assert doc.problems[0].line == 1
        assert len(doc.code_blocks) == 1
        assert doc.code_blocks[0].language == "csharp"
        assert doc.code_blocks[0].content == "var x = 1;"

    def test_stray_end(self):
        doc = parse_document("text\n{CODE-END /}\n")
        assert [p.code for p in doc.problems] == ["stray-code-end"]
        assert doc.problems[0].line == 2

    def test_double_end(self):
        doc = parse_document("{CODE-START:json /}\n1\n{CODE-END /}\n{CODE-END /}")
        assert len(doc.code_blocks) == 1
        assert [p.code for p in doc.problems] == ["stray-code-end"]


class TestCallouts:
    """{BLOCK|NOTE|INFO|WARNING|TIP ... /} and {FILES-LIST /}."""

    def test_single_line(self):
        doc = parse_document("{NOTE Remember this. /}")
        block = doc.callouts[0]
        assert block.tag == "NOTE"
        assert block.kind == "callout"
        assert block.content == "Remember this."

    def test_wrapped(self):
        doc = parse_document("{WARNING first line\nsecond line /}")
        assert doc.callouts[0].content == "first line\nsecond line"

    @pytest.mark.parametrize("tag", ["BLOCK", "NOTE", "INFO", "WARNING", "TIP"])
    def test_all_callout_tags(self, tag):
        doc = parse_document("{" + tag + " text /}")
        assert doc.callouts[0].tag == tag

    def test_files_list(self):
        doc = parse_document("{FILES-LIST /}")
        assert doc.callouts == []
        assert len(doc.files_lists) == 1
        assert doc.files_lists[0].content == ""

    def test_content_sliced_between_markers(self):
        doc = parse_document("a {NOTE x /} b {FILES-LIST/}")
        assert [(b.kind, b.content) for b in doc.blocks] == [("callout", "x"), ("files_list", "")]

    def test_lowercase_is_prose(self):
        assert parse_document("{note not a directive /}").blocks == []

    def test_tag_must_be_followed_by_space(self):
        assert parse_document("{NOTES} are prose").blocks == []

    def test_unclosed(self):
        doc = parse_document("{TIP never closed\n")
        assert doc.callouts == []
        assert [p.code for p in doc.problems] == ["unclosed-callout"]

    def test_nested(self):
        doc = parse_document("{NOTE outer {TIP inner /} /}")
        assert [p.code for p in doc.problems] == ["nested-directive"]
        assert [b.tag for b in doc.callouts] == ["TIP"]

    def test_callout_swallowing_code_start_is_nested(self):
        text = "{NOTE see\n{CODE-START:json /}\n1\n{CODE-END /}\n"
        doc = parse_document(text)
        assert [p.code for p in doc.problems] == ["nested-directive"]
        assert len(doc.code_blocks) == 1


class TestRoundTrip:
    """emit_block() reproduces the original span byte for byte."""

    @pytest.mark.parametrize("text", [
        INCLUDES_PAGE,
        LIVE_PROJECTIONS_PAGE,
        "{CODE-START:json/}\r\n{}\r\n{CODE-END/}",
        "{FILES-LIST/}",
        "{TIP   spaced out\n\n/}",
    ])
    def test_emit_matches_source(self, text):
        doc = parse_document(text)
        assert doc.blocks
        for block in doc.blocks:
            assert emit_block(block) == text[block.start:block.end]
            assert text[block.content_start:block.content_end] == block.content


class TestReferences:
    """Title, links, and images outside code samples."""

    def test_title_without_space(self):
        doc = parse_document(INCLUDES_PAGE)
        assert doc.title == "Includes"
        assert doc.title_line == 1

    def test_title_inside_code_is_ignored(self):
        doc = parse_document("{CODE-START:csharp /}\n#region Foo\n{CODE-END /}\n## Real\n")
        assert doc.title == "Real"

    def test_crlf_title(self):
        doc = parse_document("# Includes \r\n\r\nBody\r\n")
        assert doc.title == "Includes"

    def test_closing_hashes_stripped(self):
        assert parse_document("## Setup ##\r\n").title == "Setup"

    def test_no_title(self):
        assert parse_document("just text").title is None

    def test_links(self):
        doc = parse_document(INCLUDES_PAGE)
        assert [(l.target, l.style) for l in doc.links] == [
            ("live-projections", "href"),
            ("../server/deployment", "markdown"),
        ]

    def test_link_path_strips_fragment(self):
        doc = parse_document(LIVE_PROJECTIONS_PAGE)
        assert doc.links[0].path == "includes"

    def test_external_and_anchor_links(self):
        doc = parse_document('<a href="https://example.com">x</a> [y](#top)')
        assert doc.links[0].is_external
        assert doc.links[1].is_anchor

    def test_images(self):
        doc = parse_document(INCLUDES_PAGE)
        assert len(doc.images) == 1
        assert doc.images[0].source == "images/includes-diagram.png"
        assert doc.images[0].alt == "Includes diagram"
        assert doc.links  # image is not counted as a link
        assert all(l.target != "images/includes-diagram.png" for l in doc.links)

    def test_html_image(self):
        doc = parse_document('<img alt="Diagram" src="images/a.png" />')
        assert doc.images[0].source == "images/a.png"
        assert doc.images[0].alt == "Diagram"
        assert doc.images[0].style == "html"

    def test_links_inside_code_are_ignored(self):
        text = '{CODE-START:plain /}\n<a href="x.markdown">x</a>\n{CODE-END /}\n'
        assert parse_document(text).links == []


class TestExtractCodeBlocks:

    def test_filter_by_language(self):
        blocks = extract_code_blocks(INCLUDES_PAGE, language="json")
        assert [b.content for b in blocks] == ['{ "a": 1 }']

    def test_all_languages(self):
        assert len(extract_code_blocks(INCLUDES_PAGE)) == 2
