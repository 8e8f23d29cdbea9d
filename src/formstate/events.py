"""UI field events.

The rendering layer turns each change or blur into a ``FieldEvent`` and
hands it to ``FormController.handle_change`` / ``handle_blur``.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FieldEvent:
    """One change or blur on a named input.

    ``kind`` is the input type (``"text"``, ``"checkbox"``, ``"select"``...).
    Checkboxes carry their state in ``checked``, not ``value``.
    """

    name: str
    value: Any = None
    kind: str = "text"
    checked: bool = False

    @property
    def field_value(self) -> Any:
        """The value to store for this field."""
        if self.kind == "checkbox":
            return self.checked
        return self.value
