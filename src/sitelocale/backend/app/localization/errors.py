"""Exceptions raised by the locale resolver."""

from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a domain or locale fails validation."""


class SessionInactive(RuntimeError):
    """Raised when a session-backed operation runs without an active session."""


__all__ = ["InvalidArgument", "SessionInactive"]
