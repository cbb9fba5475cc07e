#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for incmark options.

Every options object is a frozen dataclass. Fields carry ``help`` metadata so
the CLI and config loader can describe and validate them without duplicating
the definitions.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from incmark.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build options from a plain mapping (e.g. a config file section).

        Keys may use dashes or underscores. Unknown keys are rejected so that
        typos in configuration files do not pass silently.

        Parameters
        ----------
        data : dict
            Field values keyed by field name

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValidationError
            If a key does not name a field of this options class

        """
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown option '{key}' for {cls.__name__}. Valid options are: {', '.join(sorted(known))}",
                    parameter_name=str(key),
                    parameter_value=value,
                )
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the field values as a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]


def _require_bool(options: object, *names: str) -> None:
    """Raise ValidationError unless every named field holds a bool."""
    for name in names:
        value = getattr(options, name)
        if not isinstance(value, bool):
            raise ValidationError(
                f"{name} must be a bool, got {type(value).__name__}",
                parameter_name=name,
                parameter_value=value,
            )


__all__ = ["CloneFrozenMixin"]
