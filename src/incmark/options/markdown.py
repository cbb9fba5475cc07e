#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing."""
# src/incmark/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from incmark.constants import (
    DEFAULT_PARSE_COMPONENTS,
    DEFAULT_PARSE_FRONTMATTER,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSER_AUTO_CLOSE,
)
from incmark.exceptions import ValidationError
from incmark.options.autoclose import AutoCloseOptions
from incmark.options.base import CloneFrozenMixin, _require_bool


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for Markdown-to-tree parsing.

    Parameters
    ----------
    auto_close : bool, default True
        Repair the incomplete tail of the input (inline markers, components,
        props and the trailing table) before parsing.
    parse_frontmatter : bool, default True
        Extract a leading YAML ``---`` block into ``Document.frontmatter``.
    parse_components : bool, default True
        Recognize ``::name{props}`` ... ``::`` block components.
    parse_tables : bool, default True
        Parse GFM pipe tables.
    parse_strikethrough : bool, default True
        Parse ``~~text~~``.
    autoclose : AutoCloseOptions
        Options forwarded to the closure pipeline when ``auto_close`` is on.

    """

    auto_close: bool = field(
        default=DEFAULT_PARSER_AUTO_CLOSE,
        metadata={"help": "Repair incomplete trailing syntax before parsing", "importance": "core"},
    )
    parse_frontmatter: bool = field(
        default=DEFAULT_PARSE_FRONTMATTER,
        metadata={"help": "Extract YAML frontmatter into the document", "importance": "core"},
    )
    parse_components: bool = field(
        default=DEFAULT_PARSE_COMPONENTS,
        metadata={"help": "Parse fenced block components", "importance": "core"},
    )
    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Parse pipe tables", "importance": "advanced"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse ~~strikethrough~~", "importance": "advanced"},
    )
    autoclose: AutoCloseOptions = field(
        default_factory=lambda: AutoCloseOptions(close_tables=True),
        metadata={"help": "Auto-closure settings used before parsing", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate field types.

        Raises
        ------
        ValidationError
            If a flag is not a bool or ``autoclose`` is not AutoCloseOptions.

        """
        _require_bool(self, "auto_close", "parse_frontmatter", "parse_components", "parse_tables", "parse_strikethrough")
        if not isinstance(self.autoclose, AutoCloseOptions):
            raise ValidationError(
                f"autoclose must be AutoCloseOptions, got {type(self.autoclose).__name__}",
                parameter_name="autoclose",
                parameter_value=self.autoclose,
            )
