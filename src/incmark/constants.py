#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the incmark library.

This module centralizes the hardcoded values used across incmark so that the
closers, parser, renderer and transforms agree on a single definition.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Auto-closure - Markers, fences and table defaults
3. Parsing - Markdown parser defaults
4. Rendering - HTML renderer defaults
5. Transforms - Sanitization, TOC and summary defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputFormat = Literal["html", "json"]
InlineMarkerKind = Literal["bold_italic", "bold", "strikethrough", "code", "italic"]

# =============================================================================
# Auto-closure
# =============================================================================

# Inline markers in the priority order they are tested. Shorter markers are
# substrings of longer ones, so the longer ones must come first.
INLINE_MARKER_PRIORITY: tuple[tuple[str, InlineMarkerKind], ...] = (
    ("***", "bold_italic"),
    ("**", "bold"),
    ("~~", "strikethrough"),
    ("`", "code"),
    ("*", "italic"),
)

ASTERISK = "*"
BACKTICK = "`"
TILDE_MARKER = "~~"

# Labels reported by detect_unclosed()
UNCLOSED_BOLD_LABEL = "**bold**"
UNCLOSED_ITALIC_LABEL = "*italic*"
UNCLOSED_CODE_LABEL = "`code`"
UNCLOSED_STRIKETHROUGH_LABEL = "~~strikethrough~~"

DEFAULT_FENCE_CHAR = ":"
DEFAULT_MIN_FENCE_LENGTH = 2
DEFAULT_CLOSE_INLINE = True
DEFAULT_CLOSE_COMPONENTS = True
DEFAULT_CLOSE_PROPS = True
DEFAULT_CLOSE_TABLES = False

TABLE_PIPE = "|"
TABLE_DEFAULT_SEPARATOR_CELL = "---"
TABLE_MIN_SEPARATOR_DASHES = 3

# Repair passes close_markup runs before giving up on a buffer that does not settle
MAX_CLOSE_PASSES = 8

# =============================================================================
# Parsing
# =============================================================================

DEFAULT_PARSER_AUTO_CLOSE = True
DEFAULT_PARSE_FRONTMATTER = True
DEFAULT_PARSE_COMPONENTS = True
DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_STRIKETHROUGH = True

FRONTMATTER_DELIMITER = "---"

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_RENDER_COMMENTS = True
DEFAULT_HTML_PRETTY = False

HTML_VOID_ELEMENTS = frozenset({"area", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"})

# Attribute names written by the renderer and accepted in property blocks
ATTRIBUTE_NAME_PATTERN = r"[A-Za-z_:@][\w:.@-]*"

# =============================================================================
# Transforms
# =============================================================================

DEFAULT_BLOCKED_TAGS = frozenset({"script", "style", "iframe", "object", "embed", "frame", "frameset", "base"})
DANGEROUS_SCHEMES = ("javascript:", "vbscript:", "data:text/html")
URL_ATTRIBUTES = frozenset({"href", "src", "action", "formaction", "xlink:href"})

DEFAULT_TOC_MAX_DEPTH = 3
DEFAULT_SUMMARY_DELIMITER = "<!-- more -->"

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_UNCLOSED = 3

CONFIG_FILENAMES = (".incmark.toml", ".incmark.yaml", ".incmark.yml", ".incmark.json")
