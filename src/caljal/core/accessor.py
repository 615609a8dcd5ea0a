from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Protocol, runtime_checkable

from .types import ValueRange


@runtime_checkable
class FieldAccessor(Protocol):
    """
    The narrow surface a formatter/parser needs from a date, time or
    date-time: read a field, replace a field, ask for its range.
    """
    def is_supported(self, field: Any) -> bool: ...
    def get(self, field: Any) -> int: ...
    def range(self, field: Any) -> ValueRange: ...
    def with_field(self, field: Any, value: int) -> "FieldAccessor": ...


def field_values(accessor: FieldAccessor, fields: Optional[Iterable[Any]] = None) -> Dict[Any, int]:
    """Snapshot of the requested (default: all supported) fields as a field -> value map."""
    if fields is None:
        from ..fields import Field
        fields = list(Field)
    return {f: accessor.get(f) for f in fields if accessor.is_supported(f)}
