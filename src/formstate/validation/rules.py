"""Built-in validators for formstate schemas.

Each validator is a callable with the signature::

    def rule(value: Any, values: Mapping[str, Any]) -> str | None:
        '''Return an error message, or None if valid.'''

``value`` is the field's own value and ``values`` the whole snapshot, so
a rule can look at other fields (password confirmation, conditional
requiredness). All built-ins are factories that return a validator::

    def max_length(n: int, label: str = "This field") -> Validator:
        def check(value, values):
            if isinstance(value, Sized) and value and len(value) > n:
                return f"{label} must not exceed {n} characters"
            return None
        return check

Format rules pass on empty values. Put ``required`` first in the list
when the field must be filled in.
"""

import math
import re
from collections.abc import Callable, Mapping, Sized
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, TypeAlias
from urllib.parse import urlsplit

# Type alias for a validator function
Validator: TypeAlias = Callable[[Any, Mapping[str, Any]], str | None]

BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

DEFAULT_LABEL = "This field"


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(label: str = DEFAULT_LABEL) -> Validator:
    """Field must be present and non-empty. ``0`` counts as present."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return f"{label} is required"
        return None

    return check


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def min_length(n: int, label: str = DEFAULT_LABEL) -> Validator:
    """Value must be at least *n* characters (or items) long."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if isinstance(value, Sized) and value and len(value) < n:
            return f"{label} must be at least {n} characters"
        return None

    return check


def max_length(n: int, label: str = DEFAULT_LABEL) -> Validator:
    """Value must be at most *n* characters (or items) long."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if isinstance(value, Sized) and value and len(value) > n:
            return f"{label} must not exceed {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def email(message: str = "Please enter a valid email address") -> Validator:
    """Value must look like ``local@domain.tld``."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        if not _EMAIL_RE.fullmatch(str(value)):
            return message
        return None

    return check


# Bangladeshi mobile numbers, optional +88 / 88 country prefix
_PHONE_RE = re.compile(r"^(?:\+88|88)?(01[3-9]\d{8})$")


def phone(message: str = "Please enter a valid phone number") -> Validator:
    """Value must be a mobile number such as ``01712345678``."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        if not _PHONE_RE.fullmatch(str(value)):
            return message
        return None

    return check


def url(message: str = "Please enter a valid URL") -> Validator:
    """Value must be an absolute URL with a scheme and a host."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        try:
            parts = urlsplit(str(value))
        except ValueError:
            return message
        if not parts.scheme or not parts.netloc:
            return message
        return None

    return check


_TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def time_of_day(message: str = "Please enter a valid time (HH:MM)") -> Validator:
    """Value must be a 24-hour ``HH:MM`` time."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        if not _TIME_RE.fullmatch(str(value)):
            return message
        return None

    return check


def matches(pattern: str, message: str | None = None) -> Validator:
    """The whole value must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        if not compiled.fullmatch(str(value)):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------


def blood_group(message: str = "Please select a valid blood group") -> Validator:
    """Value must be one of the eight ABO/Rh groups."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        if value not in BLOOD_GROUPS:
            return message
        return None

    return check


_PASSWORD_CLASSES = {
    "uppercase": (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    "lowercase": (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    "numbers": (re.compile(r"\d"), "Password must contain at least one number"),
    "special": (
        re.compile(r"[!@#$%^&*(),.?\":{}|<>]"),
        "Password must contain at least one special character",
    ),
}


def password(
    min_length: int = 6,
    *,
    require_uppercase: bool = False,
    require_lowercase: bool = False,
    require_numbers: bool = False,
    require_special: bool = False,
) -> Validator:
    """Password strength. The first unmet requirement is reported."""
    wanted = {
        "uppercase": require_uppercase,
        "lowercase": require_lowercase,
        "numbers": require_numbers,
        "special": require_special,
    }
    classes = [_PASSWORD_CLASSES[name] for name, on in wanted.items() if on]

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        text = str(value)
        if len(text) < min_length:
            return f"Password must be at least {min_length} characters long"
        for pattern, message in classes:
            if not pattern.search(text):
                return message
        return None

    return check


def _as_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None


def future_date(
    today: Callable[[], date] = date.today,
    message: str = "Date cannot be in the past",
) -> Validator:
    """Value must be an ISO date (or ``date``) on or after today.

    Unparseable values fail with the same message.
    """

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        parsed = _as_date(value)
        if parsed is None or parsed < today():
            return message
        return None

    return check


def number_range(
    min: float | None = None,
    max: float | None = None,
    label: str = DEFAULT_LABEL,
) -> Validator:
    """Numeric value (or numeric string) within ``[min, max]``."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if _is_empty(value):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return f"{label} must be a number"
        if min is not None and number < min:
            return f"{label} must be at least {min}"
        if max is not None and number > max:
            return f"{label} must not exceed {max}"
        return None

    return check


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Metadata of a file picked in an upload field."""

    filename: str
    content_type: str
    size: int


def upload(
    max_size: int = 2 * 1024 * 1024,
    allowed_types: tuple[str, ...] = ("image/jpeg", "image/png", "image/gif"),
    allowed_extensions: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".gif"),
) -> Validator:
    """File must fit size, MIME type, and extension limits.

    Accepts ``UploadedFile`` or anything with ``filename``,
    ``content_type`` and ``size`` attributes. Empty tuples disable the
    type or extension checks.
    """

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if value is None:
            return None
        if value.size > max_size:
            return f"File size must be less than {max_size / (1024 * 1024):g}MB"
        if allowed_types and value.content_type not in allowed_types:
            return f"File type must be one of: {', '.join(allowed_types)}"
        if allowed_extensions:
            extension = "." + value.filename.rsplit(".", 1)[-1].lower()
            if extension not in allowed_extensions:
                return f"File extension must be one of: {', '.join(allowed_extensions)}"
        return None

    return check


# ---------------------------------------------------------------------------
# Cross-field
# ---------------------------------------------------------------------------


def matches_field(other: str, message: str = "Values do not match") -> Validator:
    """Value must equal the value of field *other* (confirmation inputs)."""

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if value != values.get(other):
            return message
        return None

    return check


def when(predicate: Callable[[Mapping[str, Any]], bool], validator: Validator) -> Validator:
    """Run *validator* only while *predicate* holds for the whole snapshot.

    Conditional requiredness::

        "hospital": [when(lambda v: v["status"] == "inprogress", required("Hospital"))]
    """

    def check(value: Any, values: Mapping[str, Any]) -> str | None:
        if not predicate(values):
            return None
        return validator(value, values)

    return check
