"""Date/Time Parser.

Parses the date/time part of a query into an unspecified wall-clock
:class:`~tzconvert.models.Instant`. The culture's own field order is tried
first, then the invariant US month/day/year grammar. The culture attempt
reads the culture's month and weekday names and only accepts numeric dates
written in its field order; the invariant attempt uses English names and lets
dateutil settle ambiguous orders. Parsing never raises; callers branch on
:attr:`ParseResult.ok`.
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from datetime import datetime

from dateutil.parser import UnknownTimezoneWarning

from tzconvert.exceptions import ParseFailure
from tzconvert.models import Instant
from tzconvert.query.cultures import language_of, parser_for

INVARIANT_CULTURE = "en-US"

# Cultures writing month before day
MONTH_FIRST_CULTURES = frozenset({"en-US", "en-PH", "en-BZ", "es-US", "en-FM", "en-MH"})

# Languages (and a few cultures) writing year first
YEAR_FIRST_LANGUAGES = frozenset({"zh", "ja", "ko", "hu", "lt", "mn"})
YEAR_FIRST_CULTURES = frozenset({"en-CA", "fr-CA", "sv-SE"})

TIME_KEYWORDS = {
    "noon": "12:00 PM",
    "midday": "12:00 PM",
    "midnight": "12:00 AM",
}

# Years whose wall clock converts to every UTC offset without leaving datetime's range
MIN_YEAR = 2
MAX_YEAR = 9998

_LEADING_YEAR_RE = re.compile(r"^\s*\d{4}[-/.]")
_NUMERIC_DATE_RE = re.compile(r"(?<![\d:])(\d{1,4})([-/.])(\d{1,2})(?:\2(\d{1,4}))?(?![\d:])")
_HAS_DIGIT_RE = re.compile(r"\d")


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a parse attempt.

    Attributes:
        ok: Whether either grammar accepted the text
        instant: Unspecified wall-clock instant (None on failure)
        culture: Culture whose grammar succeeded
        failure: Failure details (None on success)
    """

    ok: bool
    instant: Instant | None = None
    culture: str | None = None
    failure: ParseFailure | None = None


def field_order(culture_name: str) -> tuple[bool, bool]:
    """Return (dayfirst, yearfirst) for a culture name such as "de-DE"."""
    culture = culture_name.replace("_", "-")
    language = language_of(culture)
    if culture in YEAR_FIRST_CULTURES or language in YEAR_FIRST_LANGUAGES:
        return False, True
    if culture in MONTH_FIRST_CULTURES or not language:
        return False, False
    return True, False


def matches_field_order(text: str, parsed: datetime, dayfirst: bool, yearfirst: bool) -> bool:
    """Check that the first numeric date in ``text`` was read in the given field order.

    dateutil treats ``dayfirst`` as a hint and swaps day and month when the
    hinted reading is impossible, so "04/22/2025" still parses day-first as
    April 22. This rejects such readings. Text without a numeric date, and
    year-month pairs such as "2025-04", always pass.
    """
    match = _NUMERIC_DATE_RE.search(text)
    if match is None:
        return True
    first, _, second, third = match.groups()
    leading_year = len(first) == 4 or yearfirst
    if third is None:
        if leading_year:
            return True
        day, month = (first, second) if dayfirst else (second, first)
    elif leading_year:
        month, day = second, third
    elif dayfirst:
        day, month = first, second
    else:
        month, day = first, second
    return parsed.day == int(day) and parsed.month == int(month)


class DateTimeParser:
    """Culture-aware date/time parser with an invariant fallback."""

    def __init__(self, fallback_culture: str = INVARIANT_CULTURE) -> None:
        self.fallback_culture = fallback_culture

    def _parse_with(self, text: str, culture: str, default: datetime, strict: bool) -> datetime | None:
        dayfirst, yearfirst = field_order(culture)
        if _LEADING_YEAR_RE.match(text):
            # ISO-style dates are year-month-day regardless of culture
            dayfirst, yearfirst = False, True

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", UnknownTimezoneWarning)
            try:
                parsed = parser_for(culture).parse(
                    text,
                    default=default,
                    dayfirst=dayfirst,
                    yearfirst=yearfirst,
                )
            except (ValueError, OverflowError):
                return None

        # A zone name inside the text belongs to the classifier, not the date
        if parsed.tzinfo is not None or any(issubclass(w.category, UnknownTimezoneWarning) for w in caught):
            return None
        if not MIN_YEAR <= parsed.year <= MAX_YEAR:
            return None
        if strict and not matches_field_order(text, parsed, dayfirst, yearfirst):
            return None
        return parsed

    def try_parse(
        self,
        text: str,
        culture_name: str = INVARIANT_CULTURE,
        default: datetime | None = None,
    ) -> ParseResult:
        """Parse ``text`` into an unspecified wall-clock instant.

        The culture attempt is strict about numeric field order; the fallback
        attempt is not. When the culture is the fallback culture, only the
        lenient attempt runs.

        Args:
            text: Date/time text, e.g. "10:00 AM", "2025-04-22 12:30pm"
            culture_name: Culture for the primary grammar
            default: Naive datetime supplying missing fields (defaults to today)

        Returns:
            ParseResult; never raises
        """
        cleaned = text.strip()
        keyword = TIME_KEYWORDS.get(cleaned.lower())
        if keyword:
            cleaned = keyword

        cultures = list(dict.fromkeys([culture_name, self.fallback_culture]))
        if not cleaned or not _HAS_DIGIT_RE.search(cleaned):
            return ParseResult(
                ok=False,
                failure=ParseFailure(f"'{text}' is not a date or time", text=text, cultures=cultures),
            )

        default = (default or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
        for culture in cultures:
            parsed = self._parse_with(cleaned, culture, default, strict=culture != self.fallback_culture)
            if parsed is not None:
                return ParseResult(ok=True, instant=Instant.wall_clock(parsed), culture=culture)

        return ParseResult(
            ok=False,
            failure=ParseFailure(f"Unrecognized date/time '{text}'", text=text, cultures=cultures),
        )


__all__ = ["DateTimeParser", "MAX_YEAR", "MIN_YEAR", "ParseResult", "field_order", "matches_field_order"]
