"""Zone Catalog Accessor.

Stable query surface over the external catalog and geo-lookup providers:
resolve a zone by id, alias or display-name substring, and compute the
abbreviation, UTC offset and country list of a zone at an instant.

Every exception raised by a provider leaves this module as a
:class:`~tzconvert.exceptions.ProviderFault`. A zone without a geo mapping is
not an error; it simply has no countries.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import timedelta
from typing import TYPE_CHECKING

from tzconvert.catalog.providers import build_record
from tzconvert.exceptions import ProviderFault, TimezoneConverterError, ZoneResolutionFailure
from tzconvert.models import Instant, ResolvedZone, SessionContext, ZoneRecord
from tzconvert.utils.logger import get_logger

if TYPE_CHECKING:
    from tzconvert.catalog.providers import GeoLookupProvider, TimeZoneCatalogProvider

logger = get_logger("catalog")


def format_offset(offset: timedelta | None) -> str:
    """Format a UTC offset as ``(UTC±H:MM)``.

    The sign is always explicit and minutes always have two digits,
    e.g. ``(UTC-5:00)``, ``(UTC+5:30)``, ``(UTC+0:00)``.
    """
    total = int(offset.total_seconds()) if offset is not None else 0
    sign = "+" if total >= 0 else "-"
    hours, rem = divmod(abs(total), 3600)
    minutes = rem // 60
    return f"(UTC{sign}{hours}:{minutes:02d})"


def format_countries(countries: list[str]) -> str:
    """Comma-join countries with a leading separator, or "" when there are none."""
    if not countries:
        return ""
    return ", " + ", ".join(countries)


def _provider_name(provider: object) -> str:
    return getattr(provider, "name", type(provider).__name__)


class ZoneCatalogAccessor:
    """Query surface over the catalog and geo providers.

    The catalog is loaded lazily on first use and kept for the lifetime of the
    accessor; call :meth:`reload` to pick up provider changes.
    """

    def __init__(
        self,
        catalog_provider: TimeZoneCatalogProvider,
        geo_provider: GeoLookupProvider | None = None,
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the accessor.

        Args:
            catalog_provider: Source of zone records
            geo_provider: Source of country data (None = no countries)
            aliases: Legacy or alternate zone id -> canonical zone id
        """
        self._catalog_provider = catalog_provider
        self._geo_provider = geo_provider
        self._aliases = {key.lower(): value for key, value in (aliases or {}).items()}
        self._catalog: dict[str, ZoneRecord] | None = None

    @contextmanager
    def _provider_call(self, provider: object, operation: str) -> Iterator[None]:
        try:
            yield
        except TimezoneConverterError:
            raise
        except Exception as e:
            raise ProviderFault(
                f"{operation} failed: {e}",
                provider=_provider_name(provider),
                operation=operation,
            ) from e

    # === Catalog ===

    @property
    def catalog(self) -> dict[str, ZoneRecord]:
        """Zone id -> record, in the provider's stable order."""
        if self._catalog is None:
            with self._provider_call(self._catalog_provider, "load catalog"):
                catalog: dict[str, ZoneRecord] = {}
                for record in self._catalog_provider.records():
                    if not isinstance(record, ZoneRecord):
                        raise TypeError(f"Catalog returned {type(record).__name__}, expected ZoneRecord")
                    if record.zone_id in catalog:
                        logger.warning(f"Duplicate catalog id {record.zone_id}; keeping the first entry")
                        continue
                    catalog[record.zone_id] = record
            logger.success(f"Catalog loaded from {_provider_name(self._catalog_provider)} with {len(catalog)} zones")
            self._catalog = catalog
        return self._catalog

    def reload(self) -> None:
        self._catalog = None

    def resolve_by_id(self, zone_id: str) -> ZoneRecord | None:
        """Exact catalog id lookup (case-insensitive as a second try)."""
        zone_id = zone_id.strip()
        catalog = self.catalog
        if zone_id in catalog:
            return catalog[zone_id]
        lowered = zone_id.lower()
        for key, record in catalog.items():
            if key.lower() == lowered:
                return record
        return None

    def resolve_by_name_substring(self, text: str) -> ZoneRecord | None:
        """First record whose display name contains ``text``, ignoring case.

        The zone id, with underscores read as spaces, is checked for each
        record in the same pass, so "new york" finds America/New_York.
        """
        needle = text.strip().lower()
        if not needle:
            return None
        for record in self.catalog.values():
            if needle in record.display_name.lower():
                return record
            if needle in record.zone_id.replace("_", " ").lower():
                return record
        return None

    def canonical_id(self, zone_id: str) -> str:
        return self._aliases.get(zone_id.strip().lower(), zone_id.strip())

    def resolve_alias(self, zone_id: str) -> ZoneRecord | None:
        """Catalog record sharing ``zone_id``'s canonical id, in either direction."""
        canonical = self.canonical_id(zone_id)
        for key, record in self.catalog.items():
            if self.canonical_id(key).lower() == canonical.lower():
                return record
        return None

    def resolve(self, text: str) -> ZoneRecord:
        """Resolve zone text by id, then by alias, then by display-name substring.

        Raises:
            ZoneResolutionFailure: If nothing in the catalog matches
        """
        record = self.resolve_by_id(text) or self.resolve_alias(text) or self.resolve_by_name_substring(text)
        if record is None:
            raise ZoneResolutionFailure(f"No time zone matches '{text.strip()}'", zone_text=text.strip())
        return record

    def local_zone(self, context: SessionContext) -> ZoneRecord:
        """Catalog record of the session's local zone.

        An alternate id such as ``Etc/UTC`` or ``US/Eastern`` maps to the
        catalog record of the same zone through the alias table. When the
        catalog does not list the local zone at all, a record is built from
        the zone rules so the local row can still be shown.
        """
        record = self.resolve_by_id(context.local_zone_id) or self.resolve_alias(context.local_zone_id)
        if record is None:
            with self._provider_call(self._catalog_provider, "build local zone"):
                record = build_record(context.local_zone_id)
        return record

    def zones(self, context: SessionContext) -> list[ResolvedZone]:
        """All catalog zones in order, local zone flagged (and appended if missing)."""
        local = self.local_zone(context)
        zones = [
            ResolvedZone(record=record, is_local=record.zone_id == local.zone_id)
            for record in self.catalog.values()
        ]
        if local.zone_id not in self.catalog:
            zones.append(ResolvedZone(record=local, is_local=True))
        return zones

    # === Per-instant data ===

    def abbreviation(self, zone: ZoneRecord, instant: Instant) -> str:
        """Daylight abbreviation when the zone observes DST at the instant, else standard.

        An empty result means the zone should be left out of comparison views.
        """
        with self._provider_call(self._catalog_provider, "abbreviation"):
            in_dst = bool(instant.in_zone(zone.zone_id).dst())
        return zone.daylight_abbreviation if in_dst else zone.standard_abbreviation

    def utc_offset(self, zone: ZoneRecord, instant: Instant) -> timedelta:
        with self._provider_call(self._catalog_provider, "utc offset"):
            return instant.in_zone(zone.zone_id).utcoffset() or timedelta(0)

    def countries(self, zone: ZoneRecord, instant: Instant) -> list[str]:
        """Ordered, de-duplicated countries observing the zone at the instant."""
        if self._geo_provider is None:
            return []
        with self._provider_call(self._geo_provider, "countries"):
            geo_id = self._geo_provider.translate_zone_id(zone.zone_id)
            if geo_id is None:
                logger.debug(f"No geo mapping for {zone.zone_id}")
                return []
            countries = self._geo_provider.countries_for_zone(geo_id, instant.to_utc())
        return list(dict.fromkeys(countries))

    def countries_for_offset(self, offset: timedelta, instant: Instant) -> list[str]:
        """Countries with a zone at ``offset`` at the instant."""
        if self._geo_provider is None:
            return []
        with self._provider_call(self._geo_provider, "countries for offset"):
            countries = self._geo_provider.countries_for_offset(offset, instant.to_utc())
        return list(dict.fromkeys(countries))


__all__ = ["ZoneCatalogAccessor", "format_countries", "format_offset"]
