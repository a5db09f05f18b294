"""Per-query options: settings, identifiers and progress callbacks."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

Settings = dict[str, Any]
QueryOption = Callable[["QueryOptions"], None]


@dataclass
class OnProcess:
    """Callbacks invoked while server packets of a query are processed."""

    logs: Callable[[Iterable[Any]], None]
    progress: Callable[[Any], None]
    profile_info: Callable[[Any], None]
    profile_events: Callable[[list], None]
    data: Optional[Callable[[Any], None]] = None


@dataclass
class QueryOptions:
    span: Any = None
    query_id: str = ""
    quota_key: str = ""
    async_insert: bool = False
    async_wait: bool = False
    logs: Optional[Callable[[Any], None]] = None
    progress: Optional[Callable[[Any], None]] = None
    profile_info: Optional[Callable[[Any], None]] = None
    profile_events: Optional[Callable[[list], None]] = None
    settings: Settings = field(default_factory=dict)
    external: list = field(default_factory=list)

    def effective(self, deadline: datetime | None) -> "QueryOptions":
        """Options to send, with max_execution_time derived from a deadline over a second away."""
        settings = dict(self.settings)
        if deadline is not None:
            now = datetime.now(deadline.tzinfo)
            seconds = (deadline - now).total_seconds()
            if seconds > 1:
                settings["max_execution_time"] = int(seconds + 5)
        return dataclasses.replace(self, settings=settings, external=list(self.external))

    def on_process(self) -> OnProcess:
        def logs(entries: Iterable[Any]) -> None:
            if self.logs is not None:
                for entry in entries:
                    self.logs(entry)

        def progress(value: Any) -> None:
            if self.progress is not None:
                self.progress(value)

        def profile_info(value: Any) -> None:
            if self.profile_info is not None:
                self.profile_info(value)

        def profile_events(events: list) -> None:
            if self.profile_events is not None:
                self.profile_events(events)

        return OnProcess(logs, progress, profile_info, profile_events)


def _setter(name: str, value: Any) -> QueryOption:
    def apply(options: QueryOptions) -> None:
        setattr(options, name, value)

    return apply


def with_span(span: Any) -> QueryOption:
    return _setter("span", span)


def with_query_id(query_id: str) -> QueryOption:
    return _setter("query_id", query_id)


def with_quota_key(quota_key: str) -> QueryOption:
    return _setter("quota_key", quota_key)


def with_settings(settings: Settings) -> QueryOption:
    return _setter("settings", settings)


def with_logs(fn: Callable[[Any], None]) -> QueryOption:
    return _setter("logs", fn)


def with_progress(fn: Callable[[Any], None]) -> QueryOption:
    return _setter("progress", fn)


def with_profile_info(fn: Callable[[Any], None]) -> QueryOption:
    return _setter("profile_info", fn)


def with_profile_events(fn: Callable[[list], None]) -> QueryOption:
    return _setter("profile_events", fn)


def with_external_table(*tables: Any) -> QueryOption:
    def apply(options: QueryOptions) -> None:
        options.external.extend(tables)

    return apply


def with_std_async(wait: bool) -> QueryOption:
    def apply(options: QueryOptions) -> None:
        options.async_insert = True
        options.async_wait = wait

    return apply


def build_query_options(*options: QueryOption) -> QueryOptions:
    result = QueryOptions()
    for option in options:
        option(result)
    return result