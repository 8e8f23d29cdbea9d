"""Compiled validation schemas.

A schema maps field names to an ordered list of validators. Order is
priority: the first validator that fails decides the field's message.
``Schema`` checks every entry once, up front, and freezes the lists so
evaluation never has to re-inspect them.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, TypeAlias

from formstate.errors import SchemaError
from formstate.validation.rules import Validator

SchemaEntry: TypeAlias = Validator | Sequence[Validator]


def _compile_entry(field: str, entry: Any) -> tuple[Validator, ...]:
    # A bare callable is shorthand for a one-validator list
    if callable(entry):
        return (entry,)
    if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence):
        raise SchemaError(field, entry)
    for validator in entry:
        if not callable(validator):
            raise SchemaError(field, validator)
    return tuple(entry)


class Schema(Mapping[str, tuple[Validator, ...]]):
    """Immutable, pre-checked mapping of field name to validators.

    Usage::

        schema = Schema({
            "email": [required("Email"), email()],
            "confirm": [matches_field("password")],
        })

    Raises ``SchemaError`` at construction when an entry is not callable.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: "Mapping[str, SchemaEntry] | None" = None) -> None:
        compiled = {
            name: _compile_entry(name, entry) for name, entry in (fields or {}).items()
        }
        object.__setattr__(self, "_fields", compiled)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = "Schema is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> tuple[Validator, ...]:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Schema({list(self._fields)!r})"


def as_schema(schema: "Schema | Mapping[str, SchemaEntry]") -> Schema:
    """Return *schema* unchanged if compiled, else compile it."""
    if isinstance(schema, Schema):
        return schema
    return Schema(schema)
