"""Submit-action calling convention.

An action may take just the values, or the values plus the submit
helpers, and may be ``def`` or ``async def``::

    async def save(values):
        await api.post("/donation-requests", values)

    async def save(values, helpers):
        await api.post("/donation-requests", values)
        helpers.reset_form()

    def save(values, *, helpers):
        store.put(values)
"""

import inspect
from typing import Any

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _helpers_slot(action: Any) -> str | None:
    """How *action* takes the helpers: "positional", "keyword", or None."""
    try:
        params = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        # Builtins and some C callables have no signature
        return "positional"

    positional = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return "positional"
        if param.kind in _POSITIONAL:
            positional += 1
    if positional >= 2:
        return "positional"

    for param in params:
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            return "keyword"
        if param.kind is inspect.Parameter.KEYWORD_ONLY and param.name == "helpers":
            return "keyword"
    return None


async def invoke_action(action: Any, values: dict[str, Any], helpers: Any) -> Any:
    """Call *action* with *values* (and *helpers* if it accepts them).

    Awaits the result when the action returns an awaitable.
    """
    slot = _helpers_slot(action)
    if slot == "positional":
        result = action(values, helpers)
    elif slot == "keyword":
        result = action(values, helpers=helpers)
    else:
        result = action(values)
    if inspect.isawaitable(result):
        result = await result
    return result
