"""Form session controller.

``FormController`` owns the live state of one form: the value snapshot,
touched flags, the current error map, and the submit-in-flight flag.
Every correctness check is delegated to ``formstate.validation.evaluate``.

Usage::

    form = FormController(
        {"email": "", "password": "", "confirm": ""},
        {
            "email": [required("Email"), email()],
            "password": [required("Password")],
            "confirm": [matches_field("password", "Passwords do not match")],
        },
    )

    form.set_value("email", "donor@example.com")
    form.mark_touched("email")

    async def save(values, helpers):
        await api.post("/auth/register", values)
        helpers.reset_form()

    await form.submit(save)

Values are only validated on blur and on submit, never on change, so
typing does not flash errors at the user.

Lifecycle:
    idle -> submitting -> idle. ``submitting`` is the only externally
    visible discriminator; validation happens inside the operation that
    asks for it. ``close()`` ends the session. A submit that settles after
    ``close()`` writes nothing.
"""

import copy
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeAlias

from formstate._internal.invoke import invoke_action
from formstate.config import FormConfig
from formstate.errors import SessionClosedError, UnknownFieldError
from formstate.events import FieldEvent
from formstate.reporting import ErrorReporter, LoggingReporter
from formstate.validation import Schema, SchemaEntry, as_schema, evaluate

logger = logging.getLogger("formstate.controller")


@dataclass(frozen=True, slots=True)
class FormState:
    """Read-only snapshot handed to the rendering layer.

    ``is_valid`` reflects the last computed errors; reading it never
    re-validates. ``is_dirty`` compares values with the initial snapshot
    structurally.
    """

    values: dict[str, Any]
    errors: dict[str, str]
    touched: dict[str, bool]
    submitting: bool
    is_valid: bool
    is_dirty: bool
    last_error: BaseException | None = None


@dataclass(frozen=True, slots=True)
class SubmitHelpers:
    """Passed to submit actions next to the values."""

    reset_form: Callable[[], None]


# (values) or (values, helpers), sync or async
SubmitAction: TypeAlias = Callable[..., Any]
Listener: TypeAlias = Callable[[FormState], None]


class FormController:
    """Mutable state of one form, with validation and a guarded submit."""

    def __init__(
        self,
        initial: Mapping[str, Any],
        schema: Schema | Mapping[str, SchemaEntry] | None = None,
        *,
        config: FormConfig | None = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self._schema = as_schema(schema or {})
        self._config = config or FormConfig()
        self._reporter: ErrorReporter = reporter or LoggingReporter()
        # Never aliased to the caller's mapping
        self._initial: dict[str, Any] = copy.deepcopy(dict(initial))
        self._values: dict[str, Any] = copy.deepcopy(self._initial)
        self._errors: dict[str, str] = {}
        self._touched: dict[str, bool] = {}
        self._submitting = False
        self._submit_id = 0
        self._last_error: BaseException | None = None
        self._listeners: list[Listener] = []
        self._closed = False

    # -- Read access --

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def values(self) -> Mapping[str, Any]:
        return MappingProxyType(self._values)

    @property
    def errors(self) -> Mapping[str, str]:
        return MappingProxyType(self._errors)

    @property
    def touched(self) -> Mapping[str, bool]:
        return MappingProxyType(self._touched)

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def is_dirty(self) -> bool:
        return self._values != self._initial

    @property
    def last_error(self) -> BaseException | None:
        return self._last_error

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> FormState:
        """Independent copy of the whole session."""
        return FormState(
            values=copy.deepcopy(self._values),
            errors=dict(self._errors),
            touched=dict(self._touched),
            submitting=self._submitting,
            is_valid=self.is_valid,
            is_dirty=self.is_dirty,
            last_error=self._last_error,
        )

    # -- Change notification --

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with the new ``FormState`` after every change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.state
        for listener in tuple(self._listeners):
            listener(state)

    # -- Mutations --

    def set_value(self, field: str, value: Any) -> None:
        """Overwrite one field. Does not validate."""
        self._ensure_open()
        if field not in self._values:
            raise UnknownFieldError(field)
        self._values[field] = value
        self._notify()

    def set_values(self, values: Mapping[str, Any]) -> None:
        """Overwrite several fields at once (e.g. pre-fill from a record).

        Nothing is written unless every key is a known field.
        """
        self._ensure_open()
        for field in values:
            if field not in self._values:
                raise UnknownFieldError(field)
        self._values.update(values)
        self._notify()

    def mark_touched(self, field: str) -> None:
        """Record a blur on *field* and re-validate the whole form."""
        self._ensure_open()
        if field not in self._values and field not in self._schema:
            raise UnknownFieldError(field)
        self._touched[field] = True
        if self._config.validate_on_blur:
            self._errors = evaluate(self._schema, self._values)
        self._notify()

    def handle_change(self, event: FieldEvent) -> None:
        self.set_value(event.name, event.field_value)

    def handle_blur(self, event: FieldEvent) -> None:
        self.mark_touched(event.name)

    def validate_all(self) -> bool:
        """Validate every field, replace the error map, return True if clean.

        Callable while a submit is in flight.
        """
        self._ensure_open()
        self._errors = evaluate(self._schema, self._values)
        self._notify()
        return not self._errors

    def reset_form(self) -> None:
        """Restore the initial snapshot and clear errors, touches, and submitting."""
        self._ensure_open()
        self._reset(clear_submitting=True)

    def _reset(self, *, clear_submitting: bool) -> None:
        self._values = copy.deepcopy(self._initial)
        self._errors = {}
        self._touched = {}
        if clear_submitting:
            self._submitting = False
        self._last_error = None
        self._notify()

    # -- Submission --

    async def submit(self, action: SubmitAction) -> bool:
        """Validate, then run *action* with a copy of the values.

        Returns True only when the action ran and completed. Returns
        False without calling the action when a submit is already in
        flight or the form is invalid. An exception from the action is
        handed to the reporter and never propagates; ``submitting`` is
        cleared on every path.

        *action* may be sync or async. It receives a copy of the values,
        plus the submit helpers when it declares a second parameter (or a
        keyword-only ``helpers``). ``helpers.reset_form()`` restores the
        initial snapshot and leaves ``submitting`` set until the action
        settles.
        """
        self._ensure_open()
        if self._submitting:
            logger.debug("Submit ignored: another submit is in flight")
            return False

        self._submitting = True
        self._submit_id += 1
        submit_id = self._submit_id
        try:
            if not self.validate_all():
                logger.debug("Submit blocked: %d invalid field(s)", len(self._errors))
                return False

            helpers = SubmitHelpers(reset_form=self._reset_from_action)
            try:
                await invoke_action(action, copy.deepcopy(self._values), helpers)
            except Exception as exc:
                self._reporter.report(exc)
                if self._config.retain_last_error and not self._closed:
                    self._last_error = exc
                return False

            if not self._closed:
                self._last_error = None
            logger.debug("Submit completed")
            return True
        finally:
            # A later submit owns the flag once reset_form() freed it
            if not self._closed and self._submit_id == submit_id:
                self._submitting = False
                self._notify()

    def _reset_from_action(self) -> None:
        # The running submit clears submitting when it settles
        if not self._closed:
            self._reset(clear_submitting=False)

    # -- Lifecycle --

    def close(self) -> None:
        """End the session. Pending submits settle without writing state."""
        self._closed = True
        self._listeners.clear()

    def _ensure_open(self) -> None:
        if self._closed:
            msg = "Form session is closed"
            raise SessionClosedError(msg)

    def __repr__(self) -> str:
        return (
            f"FormController(fields={list(self._values)!r}, "
            f"errors={len(self._errors)}, submitting={self._submitting})"
        )
