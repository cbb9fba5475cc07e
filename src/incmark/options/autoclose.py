#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the auto-closure engine."""
# src/incmark/options/autoclose.py

from __future__ import annotations

from dataclasses import dataclass, field

from incmark.constants import (
    DEFAULT_CLOSE_COMPONENTS,
    DEFAULT_CLOSE_INLINE,
    DEFAULT_CLOSE_PROPS,
    DEFAULT_CLOSE_TABLES,
    DEFAULT_FENCE_CHAR,
    DEFAULT_MIN_FENCE_LENGTH,
)
from incmark.exceptions import ValidationError
from incmark.options.base import CloneFrozenMixin, _require_bool


@dataclass(frozen=True)
class AutoCloseOptions(CloneFrozenMixin):
    """Configuration options for :func:`incmark.autoclose.close_markup`.

    Parameters
    ----------
    fence_char : str, default ":"
        Character whose runs open and close block components.
    min_fence_length : int, default 2
        Shortest run of ``fence_char`` that counts as a fence.
    close_inline : bool, default True
        Repair unclosed bold/italic/strikethrough/code on the last line.
    close_components : bool, default True
        Append closing fences for components left open.
    close_props : bool, default True
        Close a trailing ``{...`` property block (quotes, then brace).
    close_tables : bool, default False
        Also run the table closer as the last pipeline stage.

    """

    fence_char: str = field(
        default=DEFAULT_FENCE_CHAR,
        metadata={"help": "Character whose runs open and close block components", "importance": "advanced"},
    )
    min_fence_length: int = field(
        default=DEFAULT_MIN_FENCE_LENGTH,
        metadata={"help": "Shortest fence run that opens or closes a component", "type": int, "importance": "advanced"},
    )
    close_inline: bool = field(
        default=DEFAULT_CLOSE_INLINE,
        metadata={"help": "Close unbalanced inline markers on the last line", "importance": "core"},
    )
    close_components: bool = field(
        default=DEFAULT_CLOSE_COMPONENTS,
        metadata={"help": "Append closing fences for open block components", "importance": "core"},
    )
    close_props: bool = field(
        default=DEFAULT_CLOSE_PROPS,
        metadata={"help": "Close a trailing property block left open on the last line", "importance": "core"},
    )
    close_tables: bool = field(
        default=DEFAULT_CLOSE_TABLES,
        metadata={"help": "Repair the trailing markdown table as part of the pipeline", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate fence settings.

        Raises
        ------
        ValidationError
            If the fence character is not a single non-space character or the
            minimum fence length is below 2.

        """
        if not isinstance(self.fence_char, str) or len(self.fence_char) != 1 or self.fence_char.isspace():
            raise ValidationError(
                f"fence_char must be a single non-space character, got {self.fence_char!r}",
                parameter_name="fence_char",
                parameter_value=self.fence_char,
            )
        if isinstance(self.min_fence_length, bool) or not isinstance(self.min_fence_length, int):
            raise ValidationError(
                f"min_fence_length must be an int, got {type(self.min_fence_length).__name__}",
                parameter_name="min_fence_length",
                parameter_value=self.min_fence_length,
            )
        if self.min_fence_length < 2:
            raise ValidationError(
                f"min_fence_length must be at least 2, got {self.min_fence_length}",
                parameter_name="min_fence_length",
                parameter_value=self.min_fence_length,
            )
        _require_bool(self, "close_inline", "close_components", "close_props", "close_tables")

    @property
    def fence_marker(self) -> str:
        """The shortest fence string, used to decide if component repair is needed."""
        return self.fence_char * self.min_fence_length
