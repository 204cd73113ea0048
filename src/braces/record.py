"""Attribute access over mapping data.

Templates read nested fields with dots (`user.name`), the way data records
are usually written. Mappings in the data record are wrapped in `Record` so
that both `user.name` and `user["name"]` work.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class Record(Mapping):
    """Read-only mapping whose keys are also readable as attributes.

    Mapping methods (`get`, `items`, `keys`, `values`) take precedence over
    keys of the same name for attribute access; use item access for those.
    A missing key read as an attribute is None.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any]):
        object.__setattr__(self, "_fields", dict(fields))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_fields":
            raise AttributeError(name)
        return self._fields.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Record is read-only: {name}")

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Record({self._fields!r})"

    def __str__(self) -> str:
        return str(self._fields)


def to_record(value: Any) -> Any:
    """Wrap mappings (recursively, through lists and tuples) in Record."""
    if isinstance(value, Record):
        return value
    if isinstance(value, Mapping):
        return Record({key: to_record(item) for key, item in value.items()})
    if isinstance(value, list):
        return [to_record(item) for item in value]
    if isinstance(value, tuple):
        return tuple(to_record(item) for item in value)
    return value
