"""Query Classifier.

Decides which conversion a free-form query asks for. The recognized forms are
a closed set, tried in priority order; the first matcher that accepts the text
wins:

    1. BARE_INSTANT       "10:00 AM", "2025-04-22 12:30pm", "" (now)
    2. TWO_ZONE           "<date>[, | in] <zone> to <zone>", "<date> to <zone>"
       TWO_ZONE_FALLBACK  same shape, neither zone known: filter by the target text
    3. IN_ZONE            "<date> in <zone>"
    4. COMMA_ZONE         "<date>, <zone>"
    5. FILTER             anything else

A matcher declines when its date part does not parse or its zone text does not
resolve, and the next form is tried. Adding a phrasing means adding a matcher.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from tzconvert.exceptions import ParseFailure, ZoneResolutionFailure
from tzconvert.models import Instant, SessionContext, ZoneRecord
from tzconvert.query.parser import DateTimeParser
from tzconvert.utils.logger import get_logger

if TYPE_CHECKING:
    from tzconvert.catalog.accessor import ZoneCatalogAccessor

logger = get_logger("classifier")

_TO_RE = re.compile(r"\bto\b", re.IGNORECASE)
_IN_RE = re.compile(r"(?:^|\s+)in\s+", re.IGNORECASE)
_SOURCE_SPLIT_RE = re.compile(r",|\s+in(?:\s+|$)", re.IGNORECASE)

NOW_WORDS = frozenset({"", "now"})


class QueryKind(str, Enum):
    """Conversion intents, one per query mode."""

    BARE_INSTANT = "bare_instant"
    TWO_ZONE = "two_zone"
    TWO_ZONE_FALLBACK = "two_zone_fallback"
    IN_ZONE = "in_zone"
    COMMA_ZONE = "comma_zone"
    FILTER = "filter"


@dataclass(frozen=True)
class Query:
    """A classified query.

    Attributes:
        kind: Which form matched
        text: Trimmed query text
        instant: Parsed instant (unspecified wall clock, or resolved "now")
        source: Zone the instant's wall clock belongs to
        target: Zone to convert into (TWO_ZONE only)
        filter_text: Text to filter rows by (FILTER and TWO_ZONE_FALLBACK)
    """

    kind: QueryKind
    text: str
    instant: Instant | None = None
    source: ZoneRecord | None = None
    target: ZoneRecord | None = None
    filter_text: str = ""


def split_source(before: str) -> tuple[str, str | None]:
    """Split "<date>, <zone>" or "<date> in <zone>" at the first separator.

    Returns:
        (date_part, zone_part); zone_part is None when there is no separator
    """
    match = _SOURCE_SPLIT_RE.search(before)
    if match is None:
        return before.strip(), None
    return before[: match.start()].strip(), before[match.end() :].strip()


class QueryClassifier:
    """Priority-ordered pattern matcher over the supported query forms."""

    def __init__(self, accessor: ZoneCatalogAccessor, parser: DateTimeParser | None = None) -> None:
        self._accessor = accessor
        self._parser = parser or DateTimeParser()
        self._matchers: list[Callable[[str, SessionContext], Query | None]] = [
            self._match_bare_instant,
            self._match_to,
            self._match_in,
            self._match_comma,
        ]

    def classify(self, text: str, context: SessionContext) -> Query:
        """Classify ``text`` into exactly one query form."""
        text = text.strip()
        for matcher in self._matchers:
            try:
                query = matcher(text, context)
            except (ParseFailure, ZoneResolutionFailure) as e:
                logger.debug(f"{matcher.__name__} declined '{text}': {e.message}")
                continue
            if query is not None:
                logger.debug(f"Classified '{text}' as {query.kind.value}")
                return query
        return self._match_filter(text, context)

    # === Helpers ===

    def _instant(self, date_part: str, context: SessionContext, zone_id: str | None = None) -> Instant:
        """Parse a date part; an empty part (or "now") means the current instant.

        Missing date fields default to today in ``zone_id`` (the local zone if None).

        Raises:
            ParseFailure: If neither grammar accepts the text
        """
        if date_part.strip().lower() in NOW_WORDS:
            return context.now_instant()
        today: datetime = context.now_instant().in_zone(zone_id or context.local_zone_id)
        result = self._parser.try_parse(date_part, context.culture_name, default=today.replace(tzinfo=None))
        if not result.ok:
            raise result.failure
        return result.instant

    def _try_resolve(self, zone_text: str | None) -> ZoneRecord | None:
        if not zone_text:
            return None
        try:
            return self._accessor.resolve(zone_text)
        except ZoneResolutionFailure:
            return None

    # === Matchers (priority order) ===

    def _match_bare_instant(self, text: str, context: SessionContext) -> Query | None:
        if text.lower() in NOW_WORDS:
            return Query(QueryKind.BARE_INSTANT, text, instant=context.now_instant())
        result = self._parser.try_parse(text, context.culture_name, default=context.local_now().replace(tzinfo=None))
        if not result.ok:
            return None
        return Query(QueryKind.BARE_INSTANT, text, instant=result.instant)

    def _match_to(self, text: str, context: SessionContext) -> Query | None:
        match = _TO_RE.search(text)
        if match is None:
            return None
        before, after = text[: match.start()], text[match.end() :].strip()
        if not after:
            return None
        date_part, source_part = split_source(before)

        source = self._try_resolve(source_part)
        target = self._try_resolve(after)
        if source_part and source is None and target is not None:
            raise ZoneResolutionFailure(f"Unknown source zone '{source_part}'", zone_text=source_part)
        if target is None and source is not None:
            raise ZoneResolutionFailure(f"Unknown target zone '{after}'", zone_text=after)

        if target is None:
            # Neither side resolved: all zones at the instant, filtered by the target text
            instant = self._instant(date_part, context)
            return Query(QueryKind.TWO_ZONE_FALLBACK, text, instant=instant, filter_text=after)

        source = source or self._accessor.local_zone(context)
        instant = self._instant(date_part, context, source.zone_id)
        return Query(QueryKind.TWO_ZONE, text, instant=instant, source=source, target=target)

    def _match_in(self, text: str, context: SessionContext) -> Query | None:
        match = _IN_RE.search(text)
        if match is None:
            return None
        source = self._accessor.resolve(text[match.end() :])
        instant = self._instant(text[: match.start()], context, source.zone_id)
        return Query(QueryKind.IN_ZONE, text, instant=instant, source=source)

    def _match_comma(self, text: str, context: SessionContext) -> Query | None:
        date_part, sep, zone_part = text.partition(",")
        if not sep:
            return None
        source = self._accessor.resolve(zone_part)
        instant = self._instant(date_part, context, source.zone_id)
        return Query(QueryKind.COMMA_ZONE, text, instant=instant, source=source)

    def _match_filter(self, text: str, context: SessionContext) -> Query:
        return Query(QueryKind.FILTER, text, instant=context.now_instant(), filter_text=text)


__all__ = ["Query", "QueryClassifier", "QueryKind", "split_source"]
