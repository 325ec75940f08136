"""Shared fixtures for tzconvert tests.

The catalog fixture is a small, fixed list of zones so expected result lists
do not depend on the bundled catalog. The session is pinned to
2025-01-15 15:00 UTC (10:00 AM in New York) with New York as the local zone.
"""

import logging
from datetime import UTC, datetime

import pytest

from tzconvert.catalog.accessor import ZoneCatalogAccessor
from tzconvert.host import FixedHostEnvironment
from tzconvert.models import SessionContext, ZoneRecord
from tzconvert.service import TimezoneQueryService

FIXED_NOW = datetime(2025, 1, 15, 15, 0, tzinfo=UTC)

TEST_ZONES = [
    ZoneRecord("Etc/GMT+12", "(UTC-12:00) International Date Line West"),
    ZoneRecord("America/Phoenix", "(UTC-07:00) Arizona", "MST", ""),
    ZoneRecord("America/New_York", "(UTC-05:00) Eastern Time (US & Canada)", "EST", "EDT"),
    ZoneRecord("Europe/London", "(UTC+00:00) Dublin, Edinburgh, Lisbon, London", "GMT", "BST"),
    ZoneRecord("Asia/Tokyo", "(UTC+09:00) Osaka, Sapporo, Tokyo", "JST", ""),
]

TEST_COUNTRIES = {
    "America/Phoenix": ["United States"],
    "America/New_York": ["United States"],
    "Europe/London": ["United Kingdom"],
    "Asia/Tokyo": ["Japan"],
}


class StaticCatalogProvider:
    """Catalog provider returning a fixed record list."""

    name = "static"

    def __init__(self, records=None):
        self._records = list(TEST_ZONES if records is None else records)
        self.calls = 0

    def records(self):
        self.calls += 1
        return list(self._records)


class StaticGeoProvider:
    """Geo provider backed by a fixed zone -> countries table."""

    name = "static-geo"

    def __init__(self, countries=None):
        self._countries = dict(TEST_COUNTRIES if countries is None else countries)

    def translate_zone_id(self, zone_id):
        return zone_id if zone_id in self._countries else None

    def countries_for_zone(self, geo_id, instant):
        return list(self._countries[geo_id])

    def countries_for_offset(self, offset, instant):
        from zoneinfo import ZoneInfo

        result = []
        for zone_id, names in self._countries.items():
            if instant.astimezone(ZoneInfo(zone_id)).utcoffset() == offset:
                result.extend(n for n in names if n not in result)
        return result


class FailingGeoProvider(StaticGeoProvider):
    """Geo provider whose lookups always raise."""

    def countries_for_zone(self, geo_id, instant):
        raise RuntimeError("geo backend unavailable")


@pytest.fixture(autouse=True)
def reset_tzconvert_logging():
    """Undo configure_logging() so caplog keeps working across tests."""
    yield
    root = logging.getLogger("tzconvert")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def catalog_provider():
    return StaticCatalogProvider()


@pytest.fixture
def geo_provider():
    return StaticGeoProvider()


@pytest.fixture
def accessor(catalog_provider, geo_provider):
    return ZoneCatalogAccessor(catalog_provider, geo_provider)


@pytest.fixture
def context():
    """Session with New York as the local zone at 2025-01-15 10:00 EST."""
    return SessionContext(local_zone_id="America/New_York", now=FIXED_NOW, culture_name="en-US")


@pytest.fixture
def host():
    return FixedHostEnvironment("America/New_York", FIXED_NOW, "en-US")


@pytest.fixture
def service(accessor, host):
    return TimezoneQueryService(accessor, host)


@pytest.fixture
def make_accessor():
    """Factory for accessors over custom record lists or geo providers."""

    def _make(records=None, geo=None, failing_geo=False, aliases=None):
        if failing_geo:
            geo = FailingGeoProvider()
        return ZoneCatalogAccessor(StaticCatalogProvider(records), geo or StaticGeoProvider(), aliases=aliases)

    return _make
