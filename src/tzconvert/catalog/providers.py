"""Protocol definitions and the bundled catalog provider.

The pipeline depends only on the two protocols below. The catalog provider
supplies zone records (display names and abbreviations); the geo provider maps
zones, or offsets, to the countries observing them.

Using Protocol (structural subtyping) so hosts can plug in their own sources.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from importlib import resources
from pathlib import Path
from typing import Any, Protocol, runtime_checkable
from zoneinfo import ZoneInfo

import yaml

from tzconvert.models import ZoneRecord
from tzconvert.utils.logger import get_logger

logger = get_logger("catalog")

# tzdata uses numeric names ("+04", "-0330") for zones without a common abbreviation
_NUMERIC_TZNAME_RE = re.compile(r"^[+-]\d{2,4}$")


@runtime_checkable
class TimeZoneCatalogProvider(Protocol):
    """Protocol for catalog sources.

    Implementations:
        - BundledCatalogProvider: YAML display-name table plus zoneinfo rules
    """

    def records(self) -> Iterable[ZoneRecord]:
        """Return every catalog record in stable display order."""
        ...


@runtime_checkable
class GeoLookupProvider(Protocol):
    """Protocol for geographic lookup sources.

    Implementations:
        - TzdataGeoProvider: tzdata zone1970.tab / iso3166.tab tables
    """

    def translate_zone_id(self, zone_id: str) -> str | None:
        """Map a catalog zone id to the provider's own id space.

        Returns:
            Provider id, or None when the zone has no mapping
        """
        ...

    def countries_for_zone(self, geo_id: str, instant: datetime) -> list[str]:
        """Countries observing the zone at the instant."""
        ...

    def countries_for_offset(self, offset: timedelta, instant: datetime) -> list[str]:
        """Countries with at least one zone at ``offset`` at the instant."""
        ...


def derive_abbreviations(zone_id: str, year: int | None = None) -> tuple[str, str]:
    """Derive (standard, daylight) abbreviations from the zone rules.

    Samples the first day of every month of ``year``. Numeric tzdata names
    count as no abbreviation.

    Args:
        zone_id: IANA zone id
        year: Year whose rules are sampled (defaults to the current year)

    Returns:
        Tuple of (standard, daylight); either may be empty
    """
    tz = ZoneInfo(zone_id)
    year = year or datetime.now(UTC).year
    standard = daylight = ""
    for month in range(1, 13):
        sample = datetime(year, month, 1, 12, tzinfo=tz)
        name = sample.tzname() or ""
        if _NUMERIC_TZNAME_RE.match(name):
            name = ""
        if sample.dst():
            daylight = daylight or name
        else:
            standard = standard or name
    return standard, daylight


def standard_offset(zone_id: str, year: int | None = None) -> timedelta:
    """Smallest UTC offset of the zone during ``year`` (its standard offset)."""
    tz = ZoneInfo(zone_id)
    year = year or datetime.now(UTC).year
    return min(datetime(year, month, 1, 12, tzinfo=tz).utcoffset() for month in (1, 7))


def build_record(
    zone_id: str,
    display_name: str | None = None,
    standard: str | None = None,
    daylight: str | None = None,
) -> ZoneRecord:
    """Build a ZoneRecord, filling gaps from the zone rules.

    Used for catalog entries without explicit abbreviations and for a local
    zone that the catalog does not list.
    """
    derived_standard, derived_daylight = derive_abbreviations(zone_id)
    if display_name is None:
        # Local import: the accessor module imports this one
        from tzconvert.catalog.accessor import format_offset

        offset = format_offset(standard_offset(zone_id))
        display_name = f"{offset} {zone_id.split('/')[-1].replace('_', ' ')}"
    return ZoneRecord(
        zone_id=zone_id,
        display_name=display_name,
        standard_abbreviation=derived_standard if standard is None else standard,
        daylight_abbreviation=derived_daylight if daylight is None else daylight,
    )


class BundledCatalogProvider:
    """Catalog provider backed by a YAML display-name table.

    The table lists zones in display order; abbreviations may be given per
    entry and are otherwise derived from the zone rules.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the provider.

        Args:
            path: Catalog YAML file (None = the catalog shipped with the package)
        """
        self._path = Path(path).expanduser() if path else None
        self._data: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        return str(self._path) if self._path else "bundled"

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            if self._path is not None:
                text = self._path.read_text(encoding="utf-8")
            else:
                text = resources.files("tzconvert").joinpath("data/zones.yaml").read_text(encoding="utf-8")
            data = yaml.safe_load(text) or {}
            if not isinstance(data.get("zones"), list):
                raise ValueError(f"Catalog {self.name} has no 'zones' list")
            self._data = data
            logger.debug(f"Loaded {len(data['zones'])} zones from {self.name} catalog")
        return self._data

    def records(self) -> list[ZoneRecord]:
        """Return catalog records in file order."""
        return [
            build_record(
                entry["id"],
                display_name=entry.get("name") or entry["id"],
                standard=entry.get("standard"),
                daylight=entry.get("daylight"),
            )
            for entry in self._load()["zones"]
        ]

    def links(self) -> dict[str, str]:
        """Return the legacy-id to canonical-id table."""
        return dict(self._load().get("links") or {})


__all__ = [
    "BundledCatalogProvider",
    "GeoLookupProvider",
    "TimeZoneCatalogProvider",
    "build_record",
    "derive_abbreviations",
    "standard_offset",
]
