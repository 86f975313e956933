"""Providers listing the locales installed on the host system."""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from typing import Iterable, Protocol, Sequence, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_COMMAND: tuple[str, ...] = ("locale", "-a")
FAILURE_BACKOFF_SECONDS = 60.0


@runtime_checkable
class InstalledLocaleProvider(Protocol):
    """Source of installed locale identifiers."""

    def list_installed_locales(self) -> tuple[str, ...]: ...


class StaticInstalledLocales:
    """Fixed installed-locale list, used by tests and pinned deployments."""

    def __init__(self, locales: Iterable[str]) -> None:
        self._locales = tuple(locales)

    def list_installed_locales(self) -> tuple[str, ...]:
        return self._locales


class SystemInstalledLocales:
    """Enumerate installed locales by running a listing command.

    The first successful result is cached and reused until ``refresh_seconds``
    elapse (``None`` keeps it for the lifetime of the process). A command that
    times out, is missing, or exits non-zero yields an empty list so that
    validation fails closed without breaking the request. Failures are cached
    for a short backoff so a hung command does not stall every lookup.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        *,
        timeout_seconds: float = 2.0,
        refresh_seconds: float | None = 3600.0,
    ) -> None:
        self._command = tuple(command)
        self._timeout = timeout_seconds
        self._refresh_seconds = refresh_seconds
        self._lock = threading.Lock()
        self._cached: tuple[str, ...] | None = None
        self._expires_at: float | None = None

    @property
    def failure_backoff_seconds(self) -> float:
        if self._refresh_seconds is None:
            return FAILURE_BACKOFF_SECONDS
        return min(self._refresh_seconds, FAILURE_BACKOFF_SECONDS)

    def _is_stale(self, now: float) -> bool:
        if self._cached is None:
            return True
        if self._expires_at is None:
            return False
        return now >= self._expires_at

    def _run_command(self) -> tuple[str, ...] | None:
        try:
            completed = subprocess.run(
                self._command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=True,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "Listing installed locales timed out after %.1fs: %s",
                self._timeout,
                " ".join(self._command),
            )
            return None
        except subprocess.CalledProcessError as error:
            logger.warning(
                "Listing installed locales failed with exit status %s: %s",
                error.returncode,
                (error.stderr or "").strip(),
            )
            return None
        except OSError as error:
            logger.warning("Unable to run %s: %s", self._command[0], error)
            return None

        locales = tuple(
            line.strip() for line in completed.stdout.splitlines() if line.strip()
        )
        logger.debug("Discovered %d installed locales", len(locales))
        return locales

    def refresh(self) -> tuple[str, ...]:
        """Re-run the listing command and replace the cached result."""

        locales = self._run_command()
        now = time.monotonic()
        with self._lock:
            if locales is None:
                self._cached = ()
                self._expires_at = now + self.failure_backoff_seconds
            else:
                self._cached = locales
                self._expires_at = (
                    None if self._refresh_seconds is None else now + self._refresh_seconds
                )
            return self._cached

    def list_installed_locales(self) -> tuple[str, ...]:
        with self._lock:
            if not self._is_stale(time.monotonic()):
                return self._cached or ()
        return self.refresh()


__all__ = [
    "DEFAULT_COMMAND",
    "FAILURE_BACKOFF_SECONDS",
    "InstalledLocaleProvider",
    "StaticInstalledLocales",
    "SystemInstalledLocales",
]
