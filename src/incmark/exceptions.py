#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the incmark library.

The auto-closure engine never raises for malformed markdown: incomplete input
is the normal state of a streaming buffer. The exceptions below cover caller
mistakes (bad options, malformed serialized trees, broken visitor contracts)
and failures in the optional parser layer.

Exception Hierarchy
-------------------
- IncmarkError (base exception)

  - ValidationError (parameter/option validation, malformed serialized trees)

  - ParsingError (markdown or frontmatter parsing failures)

  - TransformError (tree transformation failures)
    - VisitorContractError (transform returned an unrecognized outcome)
    - InvariantViolationError (tree shape violates the node model)

"""

from typing import Any


class IncmarkError(Exception):
    """Base exception class for all incmark-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(IncmarkError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ParsingError(IncmarkError):
    """Exception raised when markdown or its frontmatter cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    stage : str, optional
        Parser stage that failed (e.g. ``"frontmatter"``, ``"markdown"``)
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.stage = stage


class TransformError(IncmarkError):
    """Exception raised when a tree transformation fails.

    Parameters
    ----------
    message : str
        Description of the transformation error
    transform_name : str, optional
        Name of the transform that failed
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, transform_name: str | None = None, original_error: Exception | None = None):
        """Initialize the transform error."""
        super().__init__(message, original_error=original_error)
        self.transform_name = transform_name


class VisitorContractError(TransformError):
    """Raised when a visit() transform returns something that is not an outcome.

    Parameters
    ----------
    outcome : any
        The value the transform returned

    """

    def __init__(self, outcome: Any):
        """Initialize with the offending outcome."""
        super().__init__(
            f"Visitor transform returned an unrecognized outcome of type '{type(outcome).__name__}': {outcome!r}. "
            "Return None/KEEP, a Node or Replace(node), or REMOVE/False.",
            transform_name="visit",
        )
        self.outcome = outcome


class InvariantViolationError(TransformError):
    """Raised when a tree does not respect the node model.

    Only ``Element`` nodes may own children, and every child must be a node.

    Parameters
    ----------
    message : str
        Description of the violated invariant
    node : any, optional
        The offending value

    """

    def __init__(self, message: str, node: Any = None):
        """Initialize with the offending node."""
        super().__init__(message, transform_name="visit")
        self.node = node


__all__ = [
    "IncmarkError",
    "ValidationError",
    "ParsingError",
    "TransformError",
    "VisitorContractError",
    "InvariantViolationError",
]
