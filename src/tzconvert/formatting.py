"""Instant formatter.

Renders one zone at one instant into a :class:`ResultItem`. Every query mode
reduces to picking a sequence of (zone, instant) pairs and formatting each.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tzconvert.catalog.accessor import format_countries, format_offset
from tzconvert.models import Instant, ResultItem, ZoneRecord

if TYPE_CHECKING:
    from tzconvert.catalog.accessor import ZoneCatalogAccessor

CLOCK_FORMAT = "%I:%M %p"
LONG_DATE_FORMAT = "%A, %B %d, %Y"

# "(UTC-05:00)", "(UTC)", "(UTC+5:30)" at any position in a display name
_OFFSET_PARENTHETICAL_RE = re.compile(r"\(UTC(?:[+-]\d{1,2}(?::\d{2})?)?\)")


def replace_offset(display_name: str, offset_text: str) -> str:
    """Swap the display name's offset parenthetical for ``offset_text``.

    Names without one get the offset prefixed.
    """
    if _OFFSET_PARENTHETICAL_RE.search(display_name):
        return _OFFSET_PARENTHETICAL_RE.sub(offset_text, display_name, count=1)
    return f"{offset_text} {display_name}"


class InstantFormatter:
    """Builds result items from (zone, instant) pairs."""

    def __init__(self, accessor: ZoneCatalogAccessor) -> None:
        self._accessor = accessor

    def format(
        self,
        zone: ZoneRecord,
        instant: Instant,
        display_name: str | None = None,
    ) -> ResultItem:
        """Format ``zone`` at a resolved ``instant``.

        Args:
            zone: Catalog record
            instant: Resolved instant
            display_name: Name override (defaults to the record's display name)

        Returns:
            ResultItem with title "hh:mm AM ABBR", subtitle
            "(UTC±H:MM) Name, Countries - Weekday, Month DD, YYYY" and the
            clock string as copy value
        """
        local = instant.in_zone(zone.zone_id)
        clock = local.strftime(CLOCK_FORMAT)

        abbreviation = self._accessor.abbreviation(zone, instant)
        title = f"{clock} {abbreviation}" if abbreviation else clock

        offset_text = format_offset(self._accessor.utc_offset(zone, instant))
        name = replace_offset(display_name or zone.display_name, offset_text)
        countries = format_countries(self._accessor.countries(zone, instant))
        subtitle = f"{name}{countries} - {local.strftime(LONG_DATE_FORMAT)}"

        return ResultItem(title=title, subtitle=subtitle, copy_value=clock, zone_id=zone.zone_id)

    def format_many(self, pairs: Iterable[tuple[ZoneRecord, Instant]]) -> list[ResultItem]:
        """Format each (zone, instant) pair, keeping the input order."""
        return [self.format(zone, instant) for zone, instant in pairs]


__all__ = ["CLOCK_FORMAT", "InstantFormatter", "LONG_DATE_FORMAT", "replace_offset"]
