"""Session and request collaborators consumed by the locale resolver.

The resolver never touches ``flask.session`` or ``flask.request`` directly.
Callers hand it a :class:`SessionContext` and a :class:`LocaleHints` snapshot,
which keeps the resolution logic testable without an application context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, runtime_checkable

from flask import Request, current_app, has_request_context, session

SESSION_LOCALE_KEY = "locale"
COOKIE_LOCALE_KEY = "locale"
QUERY_LOCALE_KEY = "locale"


@runtime_checkable
class SessionContext(Protocol):
    """Minimal key/value session contract."""

    @property
    def active(self) -> bool: ...

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class FlaskSessionContext:
    """Adapter exposing ``flask.session`` through :class:`SessionContext`."""

    @property
    def active(self) -> bool:
        if not has_request_context():
            return False
        return not current_app.session_interface.is_null_session(session)

    def get(self, key: str) -> Any:
        return session.get(key) if self.active else None

    def set(self, key: str, value: Any) -> None:
        session[key] = value


class InMemorySessionContext:
    """Dictionary-backed session used by scripts and tests."""

    def __init__(self, values: Mapping[str, Any] | None = None, *, active: bool = True) -> None:
        self.values: dict[str, Any] = dict(values or {})
        self._active = active

    @property
    def active(self) -> bool:
        return self._active

    def get(self, key: str) -> Any:
        return self.values.get(key)

    def set(self, key: str, value: Any) -> None:
        self.values[key] = value


@dataclass(frozen=True)
class LocaleHints:
    """Locale hints supplied by the incoming request."""

    cookie: str | None = None
    query: str | None = None
    accept_language: str | None = None

    @classmethod
    def from_request(cls, req: Request) -> LocaleHints:
        return cls(
            cookie=req.cookies.get(COOKIE_LOCALE_KEY),
            query=req.args.get(QUERY_LOCALE_KEY),
            accept_language=req.headers.get("Accept-Language"),
        )


__all__ = [
    "COOKIE_LOCALE_KEY",
    "FlaskSessionContext",
    "InMemorySessionContext",
    "LocaleHints",
    "QUERY_LOCALE_KEY",
    "SESSION_LOCALE_KEY",
    "SessionContext",
]
