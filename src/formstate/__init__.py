"""Formstate: form state and validation for the donor and request forms.

Holds the live values of a form, tracks touched and dirty fields, runs
ordered per-field validators, and guards submission against double
clicks.

Basic usage::

    from formstate import FormController
    from formstate.validation import required, email

    form = FormController({"email": ""}, {"email": [required("Email"), email()]})
    form.set_value("email", "donor@example.com")

    async def save(values, helpers):
        await api.post("/auth/register", values)
        helpers.reset_form()

    ok = await form.submit(save)
"""

__version__ = "0.1.0"
__all__ = [
    "FieldEvent",
    "FormConfig",
    "FormController",
    "FormError",
    "FormState",
    "Notifier",
    "NotifierConfig",
    "Schema",
    "SchemaError",
    "SessionClosedError",
    "Toast",
    "UnknownFieldError",
    "evaluate",
    "validate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formstate`` fast while providing a clean top-level API.
    """
    if name in ("FormController", "FormState"):
        from formstate import controller as _controller

        return getattr(_controller, name)

    if name in ("FormConfig", "NotifierConfig"):
        from formstate import config as _config

        return getattr(_config, name)

    if name == "FieldEvent":
        from formstate.events import FieldEvent

        return FieldEvent

    if name in ("Notifier", "Toast"):
        from formstate import notify as _notify

        return getattr(_notify, name)

    if name in ("Schema", "evaluate", "validate"):
        from formstate import validation as _validation

        return getattr(_validation, name)

    if name in ("FormError", "SchemaError", "SessionClosedError", "UnknownFieldError"):
        from formstate import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
