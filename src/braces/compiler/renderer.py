"""Renderer - a compiled template bound to its global defaults."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional

from braces.compiler.builder import to_str
from braces.record import to_record


def merge_data(
    defaults: Mapping[str, Any], data: Optional[Any] = None
) -> Dict[str, Any]:
    """Merge a data record over the global defaults.

    `data` may be a mapping or any object with attributes (dataclass, model
    instance); its fields win over the defaults.
    """
    merged: Dict[str, Any] = dict(defaults)
    if data is None:
        return merged
    if isinstance(data, Mapping):
        merged.update(data)
    else:
        merged.update(vars(data))
    return merged


class Renderer:
    """Callable produced by compiling a template: data record -> text.

    Renderers own no resources and are pure functions of the global defaults
    and the data passed in.
    """

    def __init__(
        self,
        function: Callable[..., str],
        source: str,
        variables: List[str],
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        self.function = function
        self.source = source
        self.variables = variables
        # Shared with the engine; read on every call
        self.defaults: Mapping[str, Any] = defaults if defaults is not None else {}

    def __call__(self, data: Optional[Any] = None) -> str:
        """Render the template with `data` merged over the global defaults."""
        merged = merge_data(self.defaults, data)
        record = {key: to_record(value) for key, value in merged.items()}
        return self.function(record, to_str)

    async def render_async(self, data: Optional[Any] = None) -> str:
        """Render from async code; the work itself is synchronous."""
        return self(data)

    def __repr__(self) -> str:
        return f"Renderer(variables={self.variables!r})"
