#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering."""
# src/incmark/options/html.py

from __future__ import annotations

from dataclasses import dataclass, field

from incmark.constants import DEFAULT_HTML_PRETTY, DEFAULT_RENDER_COMMENTS
from incmark.options.base import CloneFrozenMixin, _require_bool


@dataclass(frozen=True)
class HtmlRendererOptions(CloneFrozenMixin):
    """Configuration options for tree-to-HTML rendering.

    Parameters
    ----------
    render_comments : bool, default True
        Emit ``Comment`` nodes as ``<!--...-->``; drop them when False.
    pretty : bool, default False
        Put a newline after every top-level node.

    """

    render_comments: bool = field(
        default=DEFAULT_RENDER_COMMENTS,
        metadata={"help": "Render comment nodes as HTML comments", "importance": "core"},
    )
    pretty: bool = field(
        default=DEFAULT_HTML_PRETTY,
        metadata={"help": "Separate top-level nodes with newlines", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate field types."""
        _require_bool(self, "render_comments", "pretty")
