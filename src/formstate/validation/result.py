"""Validation result: immutable container for one evaluation's errors."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a value snapshot against a schema.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validate(values, schema)
        if not result:
            show(result.errors)

    ``errors`` maps each failing field to the message of its first
    failing validator::

        {"email": "Email is required",
         "confirm": "Passwords do not match"}
    """

    errors: dict[str, str]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid, enables ``if not result:`` pattern."""
        return self.is_valid
