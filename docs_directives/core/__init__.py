"""Core parsing and intermediate representation modules.

WHY: The core package is the stable heart of the tool: the Document IR,
the directive parser, and the corpus model. Checks and renderers consume
them and must not reach into parsing details.

HOW: ir.py defines the data structures, lexer.py finds directive
markers, parser.py builds Documents from text, corpus.py loads whole
trees and answers cross-file questions (links, images, child documents).

RULES:
- IR dataclasses are the contract; change with care
- Parsing never raises on malformed directives, it records ParseProblems
"""
