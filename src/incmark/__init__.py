"""incmark - streaming-safe markdown toolkit.

incmark parses an extended markdown dialect (plain inline markup plus fenced,
nestable block components with property blocks) into a small tree, rewrites
the tree with transforms and renders it back out.

Its central job is keeping every intermediate render of a token-by-token
stream well formed: the tail of a partial buffer (``**bol``, an open
``::card`` component, a half-typed table row) is repaired deterministically on
each call, without touching structure that is already closed.

Key Features
------------
- Auto-closure of inline markers, components, property blocks and tables
- Read-only detection of unclosed syntax
- Text / Comment / Element tree with a mutation-safe ``visit``
- mistune-based parser with YAML frontmatter and component blocks
- HTML rendering and compact JSON serialization
- TOC, summary and sanitization transforms

Examples
--------
Repair a streaming buffer:

    >>> import incmark
    >>> incmark.close_markup(":::card\\nSome **bold")
    ':::card\\nSome **bold**\\n:::'

Parse, transform and render:

    >>> doc = incmark.parse("# Title\\n\\n::alert{type=\\"info\\"}\\nHi")
    >>> incmark.render_html(doc)
    '<h1>Title</h1><alert type="info"><p>Hi</p></alert>'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "incmark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.3.0"

from incmark.ast import (  # noqa: E402
    KEEP,
    REMOVE,
    Comment,
    Document,
    Element,
    Node,
    Replace,
    Text,
    text_content,
    visit,
)
from incmark.autoclose import UnclosedComponent, UnclosedReport, close_markup, close_table, detect_unclosed  # noqa: E402
from incmark.exceptions import (  # noqa: E402
    IncmarkError,
    InvariantViolationError,
    ParsingError,
    TransformError,
    ValidationError,
    VisitorContractError,
)
from incmark.options import AutoCloseOptions, HtmlRendererOptions, MarkdownParserOptions  # noqa: E402
from incmark.parsers import parse  # noqa: E402
from incmark.renderers import render_html  # noqa: E402

__all__ = [
    "__version__",
    # Auto-closure
    "close_markup",
    "close_table",
    "detect_unclosed",
    "UnclosedReport",
    "UnclosedComponent",
    # Tree
    "Node",
    "Text",
    "Comment",
    "Element",
    "Document",
    "KEEP",
    "REMOVE",
    "Replace",
    "visit",
    "text_content",
    # Parsing and rendering
    "parse",
    "render_html",
    # Options
    "AutoCloseOptions",
    "MarkdownParserOptions",
    "HtmlRendererOptions",
    # Exceptions
    "IncmarkError",
    "ValidationError",
    "ParsingError",
    "TransformError",
    "VisitorContractError",
    "InvariantViolationError",
]
