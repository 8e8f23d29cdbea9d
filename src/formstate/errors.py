"""Formstate exception hierarchy.

Shared across the validation engine, the controller, and the notifier so
every module raises and catches the same types. User-input problems are
never raised: they end up in the controller's error map.
"""

from typing import Any


class FormError(Exception):
    """Base for all formstate-specific errors."""


class SchemaError(FormError):
    """Raised when a schema entry is not a callable validator.

    A malformed schema is a programming defect, not user input, so it
    always propagates.
    """

    def __init__(self, field: str, entry: Any) -> None:
        self.field = field
        self.entry = entry
        super().__init__(
            f"Validator for field {field!r} must be callable, got {type(entry).__name__}"
        )


class UnknownFieldError(FormError, KeyError):
    """Raised when an operation names a field the form was not created with."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(field)

    def __str__(self) -> str:
        return f"Unknown form field: {self.field!r}"


class SessionClosedError(FormError):
    """Raised when a closed form session is mutated."""


class NotifierClosedError(FormError):
    """Raised when a toast is emitted outside the notifier's lifecycle."""
