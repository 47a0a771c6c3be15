"""docs-directives: parse, lint, and render a directive-flavoured Markdown corpus.

WHY: The documentation corpus is Markdown prose plus a small custom
directive syntax ({CODE-START:json /} ... {CODE-END /}, {NOTE ... /},
{FILES-LIST /}) that only the external publishing renderer understands.
Authoring mistakes (an unclosed code sample, a link that kept its
.markdown suffix, an image outside the sibling images/ folder) are only
discovered after publishing. This package catches them before.

HOW: Three-stage pipeline: load (walk a corpus into parsed Documents),
check (pluggable lint rules over the whole corpus), render (pluggable
outputs such as plain CommonMark or extracted code samples). Each stage
is independently testable.

RULES:
- All checks and renderers consume the same Document IR
- Adding a rule = one new check module, no parser changes
- Malformed directives never raise; they surface as lint issues
"""

__version__ = "0.1.0"
