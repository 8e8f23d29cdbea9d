"""Form and notifier configuration.

Frozen dataclasses: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Behaviour switches for a ``FormController``. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(retain_last_error=True)
    """

    # Re-run the full validation whenever a field is blurred
    validate_on_blur: bool = True

    # Keep the last submit-action exception on ``FormState.last_error``
    retain_last_error: bool = False


@dataclass(frozen=True, slots=True)
class NotifierConfig:
    """Toast list configuration."""

    # Seconds a toast stays visible when emit() is not given a duration
    default_duration: float = 3.0

    # Oldest toasts are dropped past this many; None keeps them all
    max_toasts: int | None = None
