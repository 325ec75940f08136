"""Host collaborators.

The query logic never reads ambient process state; the host supplies the local
zone, the current instant and the culture, and they are frozen into a
:class:`~tzconvert.models.SessionContext` for each query.
"""

from __future__ import annotations

import locale
import os
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from tzlocal import get_localzone_name

from tzconvert.models import SessionContext
from tzconvert.utils.logger import get_logger

logger = get_logger("host")

DEFAULT_ZONE = "UTC"
DEFAULT_CULTURE = "en-US"


@runtime_checkable
class HostEnvironment(Protocol):
    """Read-only values the host provides to the pipeline."""

    def current_local_zone_id(self) -> str: ...

    def now_utc(self) -> datetime: ...

    def current_culture_name(self) -> str: ...


class SystemHostEnvironment:
    """Host values read from the operating system."""

    def current_local_zone_id(self) -> str:
        try:
            return get_localzone_name() or DEFAULT_ZONE
        except LookupError as e:
            # Raised when the system zone is not configured
            logger.warning(f"Cannot determine local time zone ({e}); using {DEFAULT_ZONE}")
            return DEFAULT_ZONE

    def now_utc(self) -> datetime:
        return datetime.now(UTC)

    def current_culture_name(self) -> str:
        name = locale.getlocale(locale.LC_TIME)[0] or os.environ.get("LC_ALL") or os.environ.get("LANG") or ""
        name = name.split(".")[0]
        if not name or name in ("C", "POSIX"):
            return DEFAULT_CULTURE
        return name.replace("_", "-")


class FixedHostEnvironment:
    """Host with fixed values, for tests and reproducible CLI runs."""

    def __init__(self, local_zone_id: str, now: datetime, culture_name: str = DEFAULT_CULTURE) -> None:
        self._local_zone_id = local_zone_id
        self._now = now
        self._culture_name = culture_name

    def current_local_zone_id(self) -> str:
        return self._local_zone_id

    def now_utc(self) -> datetime:
        return self._now.astimezone(UTC)

    def current_culture_name(self) -> str:
        return self._culture_name


def session_context(
    host: HostEnvironment,
    local_zone: str | None = None,
    culture: str | None = None,
) -> SessionContext:
    """Snapshot the host into a SessionContext, applying configured overrides."""
    return SessionContext(
        local_zone_id=local_zone or host.current_local_zone_id(),
        now=host.now_utc(),
        culture_name=culture or host.current_culture_name(),
    )


__all__ = [
    "FixedHostEnvironment",
    "HostEnvironment",
    "SystemHostEnvironment",
    "session_context",
]
