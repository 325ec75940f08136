"""Conversion Engine.

Turns a classified :class:`~tzconvert.query.classifier.Query` into the ordered
result list. Each run is one pass through exactly one mode's procedure:

    BARE_INSTANT       every zone at the instant, local zone first
    TWO_ZONE           target, source, local (rows without abbreviation dropped)
    TWO_ZONE_FALLBACK  every zone at the instant, filtered by the target text
    IN_ZONE            source, local (rows without abbreviation dropped)
    COMMA_ZONE         like IN_ZONE, or with comma_layout="reorder" every zone
                       with the source first and the local zone second
    FILTER             every zone now, filtered by the query text

An unspecified wall clock is attached to a zone once per run and that resolved
instant is reused for every row. A mode that ends up with no rows falls back
to the unfiltered list at the query's instant.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from tzconvert.formatting import InstantFormatter
from tzconvert.models import Instant, ResultItem, SessionContext, ZoneRecord
from tzconvert.query.classifier import Query, QueryKind
from tzconvert.utils.logger import get_logger

if TYPE_CHECKING:
    from tzconvert.catalog.accessor import ZoneCatalogAccessor

logger = get_logger("engine")


def matches_filter(item: ResultItem, text: str) -> bool:
    """Case-insensitive substring match on title or subtitle, or an exact title word."""
    needle = text.strip().lower()
    if not needle:
        return True
    title = item.title.lower()
    if needle in title or needle in item.subtitle.lower():
        return True
    return needle in title.split()


def ensure_first(items: list[ResultItem], item: ResultItem) -> list[ResultItem]:
    """Return ``items`` with ``item`` present, inserting it at position 0 if missing."""
    if item in items:
        return items
    return [item, *items]


class ConversionEngine:
    """Builds result lists for classified queries."""

    def __init__(
        self,
        accessor: ZoneCatalogAccessor,
        formatter: InstantFormatter | None = None,
        comma_layout: str = "minimal",
    ) -> None:
        """Initialize the engine.

        Args:
            accessor: Zone catalog accessor
            formatter: Row formatter (built on the accessor if omitted)
            comma_layout: "minimal" or "reorder" for COMMA_ZONE queries
        """
        self._accessor = accessor
        self._formatter = formatter or InstantFormatter(accessor)
        self.comma_layout = comma_layout
        self._handlers: dict[QueryKind, Callable[[Query, SessionContext], list[ResultItem]]] = {
            QueryKind.BARE_INSTANT: self._bare_instant,
            QueryKind.TWO_ZONE: self._two_zone,
            QueryKind.TWO_ZONE_FALLBACK: self._two_zone_fallback,
            QueryKind.IN_ZONE: self._single_zone,
            QueryKind.COMMA_ZONE: self._comma_zone,
            QueryKind.FILTER: self._filter,
        }

    def run(self, query: Query, context: SessionContext) -> list[ResultItem]:
        """Produce the ordered result list for ``query``."""
        items = self._handlers[query.kind](query, context)
        if not items:
            logger.debug(f"{query.kind.value} produced no rows for '{query.text}'; showing all zones")
            instant = query.instant or context.now_instant()
            if query.source is not None:
                instant = instant.attach(query.source.zone_id)
            items = self.all_zones(instant, context)
        return items

    # === Building blocks ===

    def all_zones(self, instant: Instant, context: SessionContext) -> list[ResultItem]:
        """Every zone at the instant: local zone first, the rest in catalog order.

        An unspecified instant is read as a wall clock in the local zone.
        """
        resolved = instant.attach(context.local_zone_id)
        zones = sorted(self._accessor.zones(context), key=lambda zone: not zone.is_local)
        return self._formatter.format_many((zone.record, resolved) for zone in zones)

    def _comparison_rows(
        self,
        zones: list[ZoneRecord],
        instant: Instant,
    ) -> list[ResultItem]:
        """Rows for a short comparison view.

        Zones are de-duplicated by id, and zones without an abbreviation at the
        instant are dropped rather than shown blank.
        """
        kept: list[ZoneRecord] = []
        seen: set[str] = set()
        for zone in zones:
            if zone.zone_id in seen:
                continue
            seen.add(zone.zone_id)
            if not self._accessor.abbreviation(zone, instant):
                logger.debug(f"Dropping {zone.zone_id}: no abbreviation")
                continue
            kept.append(zone)
        return self._formatter.format_many((zone, instant) for zone in kept)

    # === Modes ===

    def _bare_instant(self, query: Query, context: SessionContext) -> list[ResultItem]:
        return self.all_zones(query.instant, context)

    def _two_zone(self, query: Query, context: SessionContext) -> list[ResultItem]:
        resolved = query.instant.attach(query.source.zone_id)
        local = self._accessor.local_zone(context)
        return self._comparison_rows([query.target, query.source, local], resolved)

    def _two_zone_fallback(self, query: Query, context: SessionContext) -> list[ResultItem]:
        items = self.all_zones(query.instant, context)
        filtered = [item for item in items if matches_filter(item, query.filter_text)]
        return ensure_first(filtered, items[0]) if items else filtered

    def _single_zone(self, query: Query, context: SessionContext) -> list[ResultItem]:
        resolved = query.instant.attach(query.source.zone_id)
        local = self._accessor.local_zone(context)
        return self._comparison_rows([query.source, local], resolved)

    def _comma_zone(self, query: Query, context: SessionContext) -> list[ResultItem]:
        if self.comma_layout != "reorder":
            return self._single_zone(query, context)

        resolved = query.instant.attach(query.source.zone_id)
        items = self.all_zones(resolved, context)
        by_zone = {item.zone_id: item for item in items}
        local_id = self._accessor.local_zone(context).zone_id
        head = [by_zone[z] for z in dict.fromkeys([query.source.zone_id, local_id]) if z in by_zone]
        return head + [item for item in items if item not in head]

    def _filter(self, query: Query, context: SessionContext) -> list[ResultItem]:
        items = self.all_zones(context.now_instant(), context)
        filtered = [item for item in items if matches_filter(item, query.filter_text)]
        return ensure_first(filtered, items[0]) if items else filtered


__all__ = ["ConversionEngine", "ensure_first", "matches_filter"]
