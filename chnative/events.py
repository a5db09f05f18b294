"""Profile events reported by the server during query execution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Sequence

_UINT64 = 1 << 64
_INT64_MAX = (1 << 63) - 1


@dataclass
class ProfileEvent:
    """One row of a profile-events block."""

    hostname: str = ""
    current_time: datetime | None = None
    thread_id: int = 0
    type: str = ""
    name: str = ""
    value: int = 0


def _as_int64(value: Any) -> int:
    number = int(value)
    if number > _INT64_MAX:
        number -= _UINT64
    return number


def _identity(value: Any) -> Any:
    return value


_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "host_name": ("hostname", _identity),
    "current_time": ("current_time", _identity),
    "thread_id": ("thread_id", int),
    "type": ("type", _identity),
    "name": ("name", _identity),
    "value": ("value", _as_int64),
}


def profile_events_from_columns(
    names: Sequence[str], columns: Sequence[Sequence[Any]]
) -> list[ProfileEvent]:
    """Build one event per row of a block; unknown columns are ignored."""
    if len(names) != len(columns):
        raise ValueError(f"{len(names)} column names for {len(columns)} columns")
    if not columns:
        return []
    rows = len(columns[0])
    if any(len(column) != rows for column in columns):
        raise ValueError("columns of a block must have the same number of rows")
    events = []
    for row in zip(*columns):
        event = ProfileEvent()
        for name, value in zip(names, row):
            field = _FIELDS.get(name)
            if field is not None:
                attribute, convert = field
                setattr(event, attribute, convert(value))
        events.append(event)
    return events