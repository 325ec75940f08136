"""Data model for the time zone query pipeline.

These types are passed between the classifier, the conversion engine, the
formatter and the pipeline. Everything here is immutable: result lists are
rebuilt for every query and reordering only moves list positions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, field_validator

# === Catalog Types ===


@dataclass(frozen=True)
class ZoneRecord:
    """A single catalog entry.

    Attributes:
        zone_id: Catalog key (an IANA zone identifier)
        display_name: Localized display name, e.g. "(UTC-05:00) Eastern Time (US & Canada)"
        standard_abbreviation: Abbreviation outside daylight saving ("" if unknown)
        daylight_abbreviation: Abbreviation during daylight saving ("" if unknown)
    """

    zone_id: str
    display_name: str
    standard_abbreviation: str = ""
    daylight_abbreviation: str = ""

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.zone_id)


@dataclass(frozen=True)
class ResolvedZone:
    """A catalog record bound to the session's notion of the local zone."""

    record: ZoneRecord
    is_local: bool = False

    @property
    def zone_id(self) -> str:
        return self.record.zone_id


# === Instant Types ===


class InterpretationMode(str, Enum):
    """How an instant's datetime value should be read."""

    UNSPECIFIED = "unspecified"  # Naive wall clock, no zone attached yet
    RESOLVED = "resolved"  # Absolute moment with a definite zone


@dataclass(frozen=True)
class Instant:
    """A point in time together with its interpretation mode.

    A parsed date/time string is always UNSPECIFIED until it is attached to a
    zone. Attaching happens once; every later conversion starts from the
    resolved value so the wall clock is never re-interpreted.
    """

    value: datetime
    mode: InterpretationMode

    @classmethod
    def wall_clock(cls, value: datetime) -> Instant:
        """Create an unspecified instant from a naive wall-clock reading."""
        return cls(value=value.replace(tzinfo=None), mode=InterpretationMode.UNSPECIFIED)

    @classmethod
    def resolved(cls, value: datetime) -> Instant:
        """Create a resolved instant from a timezone-aware datetime."""
        if value.tzinfo is None:
            raise ValueError("Resolved instants require a timezone-aware datetime")
        return cls(value=value, mode=InterpretationMode.RESOLVED)

    @property
    def is_resolved(self) -> bool:
        return self.mode is InterpretationMode.RESOLVED

    def attach(self, zone_id: str) -> Instant:
        """Bind this instant to a zone.

        An unspecified wall clock is read as a clock reading in ``zone_id``
        (the earlier of two readings when the clock repeats). A resolved
        instant keeps its absolute moment and is only re-expressed in the zone.
        """
        tz = ZoneInfo(zone_id)
        if self.is_resolved:
            return Instant(value=self.value.astimezone(tz), mode=InterpretationMode.RESOLVED)
        return Instant(value=self.value.replace(tzinfo=tz, fold=0), mode=InterpretationMode.RESOLVED)

    def in_zone(self, zone_id: str) -> datetime:
        """Wall-clock datetime of this resolved instant in ``zone_id``."""
        if not self.is_resolved:
            raise ValueError("Cannot convert an unspecified instant; attach it to a zone first")
        return self.value.astimezone(ZoneInfo(zone_id))

    def to_utc(self) -> datetime:
        return self.in_zone("UTC")


# === Result Types ===


@dataclass(frozen=True)
class ResultItem:
    """One display line of the result list.

    Items compare by rendered content only; ``zone_id`` is bookkeeping for
    reordering and is excluded from equality.

    Attributes:
        title: Clock time plus abbreviation, e.g. "10:00 AM GMT"
        subtitle: Zone name, offset, countries and long date
        copy_value: Text placed on the clipboard (the clock string)
        zone_id: Zone this line was formatted for
    """

    title: str
    subtitle: str
    copy_value: str
    zone_id: str = field(default="", compare=False)


@dataclass(frozen=True)
class QueryState:
    """Committed snapshot of the pipeline output.

    Written only by the pipeline's consumer task and replaced as a whole, so a
    reader never sees results from one query with flags from another.
    """

    results: tuple[ResultItem, ...] = ()
    is_loading: bool = False
    is_error: bool = False
    query: str | None = None

    def loading(self, query: str) -> QueryState:
        return replace(self, is_loading=True, query=query)


@dataclass(frozen=True)
class EmptyStateDescriptor:
    """Placeholder shown by the host when the result list is empty."""

    title: str
    subtitle: str
    icon: str


# === Session ===


class SessionContext(BaseModel):
    """Explicit replacement for the ambient "local zone" and "now".

    Every classifier and engine call receives one of these instead of reading
    process state, which keeps the query logic deterministic under test.

    :param local_zone_id: IANA id of the zone marked local for this session
    :param now: Current instant (timezone-aware, stored as UTC)
    :param culture_name: Culture used for date parsing, e.g. "en-US"
    """

    model_config = ConfigDict(frozen=True)

    DEFAULT_CULTURE: ClassVar[str] = "en-US"

    local_zone_id: str
    now: datetime
    culture_name: str = DEFAULT_CULTURE

    @field_validator("local_zone_id")
    @classmethod
    def validate_zone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone '{v}'") from e
        return v

    @field_validator("now")
    @classmethod
    def validate_now(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("SessionContext.now must be timezone-aware")
        return v.astimezone(UTC)

    @field_validator("culture_name")
    @classmethod
    def validate_culture(cls, v: str) -> str:
        return v.strip().replace("_", "-") or cls.DEFAULT_CULTURE

    def now_instant(self) -> Instant:
        return Instant.resolved(self.now)

    def local_now(self) -> datetime:
        return self.now.astimezone(ZoneInfo(self.local_zone_id))


__all__ = [
    "EmptyStateDescriptor",
    "Instant",
    "InterpretationMode",
    "QueryState",
    "ResolvedZone",
    "ResultItem",
    "SessionContext",
    "ZoneRecord",
]
