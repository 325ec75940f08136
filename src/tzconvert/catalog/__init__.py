"""Zone catalog access.

Example:
    from tzconvert.catalog import create_accessor

    accessor = create_accessor(config)
    record = accessor.resolve("London")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tzconvert.catalog.accessor import ZoneCatalogAccessor, format_countries, format_offset
from tzconvert.catalog.geo import TzdataGeoProvider
from tzconvert.catalog.providers import (
    BundledCatalogProvider,
    GeoLookupProvider,
    TimeZoneCatalogProvider,
    build_record,
)

if TYPE_CHECKING:
    from tzconvert.config import CatalogConfig


def create_accessor(config: CatalogConfig | None = None) -> ZoneCatalogAccessor:
    """Build an accessor over the bundled (or configured) catalog and tzdata tables."""
    catalog_provider = BundledCatalogProvider(config.path if config else None)
    geo_provider = TzdataGeoProvider(
        zoneinfo_dir=config.zoneinfo_dir if config else None,
        aliases=catalog_provider.links(),
    )
    return ZoneCatalogAccessor(catalog_provider, geo_provider, aliases=catalog_provider.links())


__all__ = [
    "BundledCatalogProvider",
    "GeoLookupProvider",
    "TimeZoneCatalogProvider",
    "TzdataGeoProvider",
    "ZoneCatalogAccessor",
    "build_record",
    "create_accessor",
    "format_countries",
    "format_offset",
]
