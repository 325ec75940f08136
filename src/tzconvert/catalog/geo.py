"""Geographic lookup backed by the tzdata country tables.

Reads ``iso3166.tab`` (country code -> name) and ``zone1970.tab`` (country
codes -> zone), falling back to the older ``zone.tab``. The tables are looked
up in the configured directory, then the system zoneinfo directory, then the
``tzdata`` package.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzconvert.utils.logger import get_logger

logger = get_logger("catalog")

SYSTEM_ZONEINFO_DIR = "/usr/share/zoneinfo"
ISO_TABLE = "iso3166.tab"
ZONE_TABLES = ("zone1970.tab", "zone.tab")


def _candidate_dirs(zoneinfo_dir: str | None) -> list[Traversable]:
    dirs: list[Traversable] = []
    if zoneinfo_dir:
        dirs.append(Path(zoneinfo_dir).expanduser())
    dirs.append(Path(SYSTEM_ZONEINFO_DIR))
    try:
        dirs.append(resources.files("tzdata").joinpath("zoneinfo"))
    except ModuleNotFoundError:
        pass
    return dirs


def _table_lines(source: Traversable) -> list[list[str]]:
    rows = []
    for line in source.read_text(encoding="utf-8").splitlines():
        if not line or line.startswith("#"):
            continue
        rows.append(line.strip().split("\t"))
    return rows


class TzdataGeoProvider:
    """Country lookup from the tzdata tab files.

    Zone ids outside the tables go through the alias table (legacy names such
    as ``US/Arizona``); ids with no mapping at all translate to None.
    """

    def __init__(
        self,
        zoneinfo_dir: str | None = None,
        aliases: dict[str, str] | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            zoneinfo_dir: Directory with the tab files (searched first)
            aliases: Legacy zone id -> canonical zone id
        """
        self._zoneinfo_dir = zoneinfo_dir
        self._aliases = dict(aliases or {})
        self._zone_countries: dict[str, list[str]] | None = None

    @property
    def name(self) -> str:
        return "tzdata"

    def _load(self) -> dict[str, list[str]]:
        if self._zone_countries is not None:
            return self._zone_countries

        for directory in _candidate_dirs(self._zoneinfo_dir):
            iso_file = directory.joinpath(ISO_TABLE)
            zone_file = next(
                (directory.joinpath(t) for t in ZONE_TABLES if directory.joinpath(t).is_file()),
                None,
            )
            if iso_file.is_file() and zone_file is not None:
                break
        else:
            logger.warning("tzdata country tables not found; country lists will be empty")
            self._zone_countries = {}
            return self._zone_countries

        iso_map: dict[str, str] = {}
        for parts in _table_lines(iso_file):
            if len(parts) >= 2:
                iso_map[parts[0]] = parts[1]

        mapping: dict[str, list[str]] = {}
        for parts in _table_lines(zone_file):
            if len(parts) < 3:
                continue
            names = mapping.setdefault(parts[2], [])
            for cc in parts[0].split(","):
                name = iso_map.get(cc, cc)
                if name not in names:
                    names.append(name)

        logger.debug(f"Loaded country data for {len(mapping)} zones from {zone_file}")
        self._zone_countries = mapping
        return mapping

    def translate_zone_id(self, zone_id: str) -> str | None:
        """Map a catalog zone id to a zone listed in the country tables."""
        mapping = self._load()
        if zone_id in mapping:
            return zone_id
        canonical = self._aliases.get(zone_id)
        if canonical in mapping:
            return canonical
        return None

    def countries_for_zone(self, geo_id: str, instant: datetime) -> list[str]:
        return list(self._load().get(geo_id, []))

    def countries_for_offset(self, offset: timedelta, instant: datetime) -> list[str]:
        countries: list[str] = []
        for zone_id, names in self._load().items():
            try:
                zone_offset = instant.astimezone(ZoneInfo(zone_id)).utcoffset()
            except ZoneInfoNotFoundError:
                continue
            if zone_offset != offset:
                continue
            for name in names:
                if name not in countries:
                    countries.append(name)
        return countries


__all__ = ["TzdataGeoProvider"]
