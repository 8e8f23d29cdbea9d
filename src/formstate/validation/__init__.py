"""Form validation: ordered rules, first failure wins.

Usage::

    from formstate.validation import evaluate, required, email, matches_field

    errors = evaluate({
        "email": [required("Email"), email()],
        "password": [required("Password")],
        "confirm": [matches_field("password", "Passwords do not match")],
    }, values)
    # errors == {"email": "Email is required"}
"""

from collections.abc import Mapping
from typing import Any

from formstate.validation.presets import registration_schema
from formstate.validation.result import ValidationResult
from formstate.validation.rules import (
    BLOOD_GROUPS,
    UploadedFile,
    Validator,
    blood_group,
    email,
    future_date,
    matches,
    matches_field,
    max_length,
    min_length,
    number_range,
    password,
    phone,
    required,
    time_of_day,
    upload,
    url,
    when,
)
from formstate.validation.schema import Schema, SchemaEntry, as_schema

__all__ = [
    "BLOOD_GROUPS",
    "Schema",
    "SchemaEntry",
    "UploadedFile",
    "ValidationResult",
    "Validator",
    "as_schema",
    "blood_group",
    "email",
    "evaluate",
    "future_date",
    "matches",
    "matches_field",
    "max_length",
    "min_length",
    "number_range",
    "password",
    "phone",
    "registration_schema",
    "required",
    "time_of_day",
    "upload",
    "url",
    "validate",
    "when",
]


def evaluate(
    schema: Schema | Mapping[str, SchemaEntry],
    values: Mapping[str, Any],
) -> dict[str, str]:
    """Evaluate *values* against *schema* and return the error map.

    Args:
        schema: A ``Schema`` or a plain mapping of field names to
            validator lists. A plain mapping is checked on every call;
            a non-callable entry raises ``SchemaError``.
        values: The whole value snapshot. Every validator receives its
            own field's value plus this mapping, so cross-field rules
            work. Fields missing from the snapshot are checked as
            ``None``.

    Returns:
        A new dict of field name to the first failing validator's
        message. Valid fields have no key. ``None`` and ``""`` both
        count as a pass.

    Exceptions raised by validators propagate unchanged.
    """
    errors: dict[str, str] = {}

    for field_name, validators in as_schema(schema).items():
        value = values.get(field_name)
        for validator in validators:
            error = validator(value, values)
            if error:
                errors[field_name] = error
                break

    return errors


def validate(
    values: Mapping[str, Any],
    schema: Schema | Mapping[str, SchemaEntry],
) -> ValidationResult:
    """Validate *values* against *schema*.

    Same evaluation as ``evaluate()``, wrapped in a falsy-when-invalid
    ``ValidationResult``::

        result = validate(form_values, registration_schema())
        if not result:
            return result.errors
    """
    return ValidationResult(errors=evaluate(schema, values))
