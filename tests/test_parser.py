"""Tests for the culture-aware date/time parser."""

from datetime import datetime

import pytest

from tzconvert.exceptions import ParseFailure
from tzconvert.models import InterpretationMode
from tzconvert.query.parser import MAX_YEAR, MIN_YEAR, DateTimeParser, field_order, matches_field_order

DEFAULT = datetime(2025, 1, 15, 8, 45)


@pytest.fixture
def parser():
    return DateTimeParser()


class TestFieldOrder:
    """Culture to (dayfirst, yearfirst) mapping."""

    @pytest.mark.parametrize(
        "culture, expected",
        [
            ("en-US", (False, False)),
            ("en-GB", (True, False)),
            ("de-DE", (True, False)),
            ("de_DE", (True, False)),
            ("ja-JP", (False, True)),
            ("sv-SE", (False, True)),
            ("", (False, False)),
        ],
    )
    def test_field_order(self, culture, expected):
        """Cultures map to their day, month and year order."""
        assert field_order(culture) == expected


class TestTryParse:
    """Parsing date/time text into unspecified instants."""

    def test_time_only_uses_default_date(self, parser):
        """A lone time takes the default date."""
        result = parser.try_parse("10:00 AM", "en-US", default=DEFAULT)
        assert result.ok
        assert result.instant.value == datetime(2025, 1, 15, 10, 0)
        assert result.instant.mode is InterpretationMode.UNSPECIFIED
        assert result.culture == "en-US"

    def test_iso_date_with_compact_time(self, parser):
        """ISO dates accept times like 12:30pm."""
        result = parser.try_parse("2025-04-22 12:30pm", "en-US", default=DEFAULT)
        assert result.instant.value == datetime(2025, 4, 22, 12, 30)

    def test_iso_date_is_year_first_in_any_culture(self, parser):
        """Leading-year dates read year-month-day in any culture."""
        result = parser.try_parse("2025-04-03", "en-GB", default=DEFAULT)
        assert result.instant.value == datetime(2025, 4, 3)

    def test_culture_decides_day_month_order(self, parser):
        """The culture picks day-first or month-first."""
        us = parser.try_parse("03/04/2025", "en-US", default=DEFAULT)
        gb = parser.try_parse("03/04/2025", "en-GB", default=DEFAULT)
        assert us.instant.value == datetime(2025, 3, 4)
        assert gb.instant.value == datetime(2025, 4, 3)

    @pytest.mark.parametrize(
        "text, hour",
        [("noon", 12), ("Midnight", 0), ("midday", 12)],
    )
    def test_time_keywords(self, parser, text, hour):
        """noon, midday and midnight are times."""
        result = parser.try_parse(text, "en-US", default=DEFAULT)
        assert result.ok
        assert result.instant.value == datetime(2025, 1, 15, hour, 0)

    def test_default_time_fields_are_cleared(self, parser):
        """A date without a time is midnight."""
        result = parser.try_parse("2025-04-22", "en-US", default=DEFAULT)
        assert result.instant.value == datetime(2025, 4, 22, 0, 0)

    @pytest.mark.parametrize("text", ["", "   ", "asdkfj", "London", "10:00 AM, London", "99:99"])
    def test_unrecognized_text(self, parser, text):
        """Text that is not a date fails without raising."""
        result = parser.try_parse(text, "en-US", default=DEFAULT)
        assert not result.ok
        assert result.instant is None
        assert isinstance(result.failure, ParseFailure)

    @pytest.mark.parametrize("text", ["10:00 AM EST", "10:00 UTC", "2025-04-22T12:30:00+02:00"])
    def test_text_with_zone_is_rejected(self, parser, text):
        """Text carrying a zone is not a plain date."""
        assert not parser.try_parse(text, "en-US", default=DEFAULT).ok

    def test_failure_lists_attempted_cultures(self, parser):
        """Failures list the culture and the fallback."""
        result = parser.try_parse("asdkfj1", "de-DE", default=DEFAULT)
        assert result.failure.cultures == ["de-DE", "en-US"]

    def test_same_culture_tried_once(self, parser):
        """A culture equal to the fallback is tried once."""
        result = parser.try_parse("asdkfj1", "en-US", default=DEFAULT)
        assert result.failure.cultures == ["en-US"]

    def test_never_raises(self, parser):
        """Malformed text never raises."""
        for text in ["10:00 AM, London to", "in in in", "2025-13-45"]:
            result = parser.try_parse(text, "en-US", default=DEFAULT)
            assert result.ok or result.failure is not None


class TestCultureGrammar:
    """The culture attempt reads native names and the culture's field order."""

    @pytest.mark.parametrize(
        "text, culture, expected",
        [
            ("22 avril 2025", "fr-FR", datetime(2025, 4, 22)),
            ("mardi 22 avril 2025 14:30", "fr-FR", datetime(2025, 4, 22, 14, 30)),
            ("3 März 2025", "de-DE", datetime(2025, 3, 3)),
            ("22 de abril de 2025", "es-ES", datetime(2025, 4, 22)),
            ("5 maart 2025", "nl-NL", datetime(2025, 3, 5)),
        ],
    )
    def test_native_month_names(self, parser, text, culture, expected):
        """Month names in the culture's language parse under that culture."""
        result = parser.try_parse(text, culture, default=DEFAULT)
        assert result.ok
        assert result.culture == culture
        assert result.instant.value == expected

    def test_native_month_name_not_read_by_fallback(self, parser):
        """The invariant grammar alone does not know French month names."""
        result = parser.try_parse("22 avril 2025", "en-US", default=DEFAULT)
        assert not result.ok

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("04/22/2025", datetime(2025, 4, 22)),
            ("12/31/2025 5pm", datetime(2025, 12, 31, 17, 0)),
            ("December 5, 2025", datetime(2025, 12, 5)),
        ],
    )
    def test_culture_attempt_fails_and_fallback_succeeds(self, parser, text, expected):
        """Text the culture rejects is read by the en-US fallback."""
        result = parser.try_parse(text, "de-DE", default=DEFAULT)
        assert result.ok
        assert result.culture == "en-US"
        assert result.instant.value == expected

    @pytest.mark.parametrize("text", ["22/04/2025", "22.04.2025", "1/2/3"])
    def test_day_first_dates_stay_with_culture(self, parser, text):
        """Dates written day-first are accepted by a day-first culture."""
        result = parser.try_parse(text, "de-DE", default=DEFAULT)
        assert result.ok
        assert result.culture == "de-DE"

    def test_day_first_reading(self, parser):
        """A day-first culture reads 22.04.2025 as April 22."""
        result = parser.try_parse("22.04.2025", "de-DE", default=DEFAULT)
        assert result.instant.value == datetime(2025, 4, 22)

    def test_month_first_text_under_british_culture(self, parser):
        """en-GB rejects 04/22/2025 and the fallback reads it month-first."""
        result = parser.try_parse("04/22/2025", "en-GB", default=DEFAULT)
        assert result.culture == "en-US"
        assert result.instant.value == datetime(2025, 4, 22)

    @pytest.mark.parametrize("text", ["13/13/2025", "02/30/2025"])
    def test_impossible_dates_fail_both_attempts(self, parser, text):
        """Dates no field order can read fail with both cultures listed."""
        result = parser.try_parse(text, "de-DE", default=DEFAULT)
        assert not result.ok
        assert result.failure.cultures == ["de-DE", "en-US"]


class TestMatchesFieldOrder:
    """Checking a parsed date against the numeric fields of the text."""

    @pytest.mark.parametrize(
        "text, parsed, dayfirst, yearfirst, expected",
        [
            ("22/04/2025", datetime(2025, 4, 22), True, False, True),
            ("04/22/2025", datetime(2025, 4, 22), True, False, False),
            ("04/22/2025", datetime(2025, 4, 22), False, False, True),
            ("2025-04-22 10:00", datetime(2025, 4, 22, 10), False, True, True),
            ("25/04/22", datetime(2025, 4, 22), False, True, True),
            ("22/04", datetime(2025, 4, 22), True, False, True),
            ("2025-04", datetime(2025, 4, 1), False, True, True),
            ("10:00 AM", datetime(2025, 1, 15, 10), True, False, True),
            ("22 avril 2025", datetime(2025, 4, 22), True, False, True),
        ],
    )
    def test_matches_field_order(self, text, parsed, dayfirst, yearfirst, expected):
        """Only the first numeric date decides, and only day and month are compared."""
        assert matches_field_order(text, parsed, dayfirst, yearfirst) is expected


class TestYearRange:
    """Dates near the ends of the calendar."""

    @pytest.mark.parametrize("text", ["9999-12-31 11:00 PM", "0001-01-01 00:30", "12/31/9999"])
    def test_out_of_range_years_are_rejected(self, parser, text):
        """Years that cannot be shown in every zone do not parse."""
        result = parser.try_parse(text, "en-US", default=DEFAULT)
        assert not result.ok
        assert isinstance(result.failure, ParseFailure)

    @pytest.mark.parametrize("year", [MIN_YEAR, MAX_YEAR])
    def test_boundary_years_are_accepted(self, parser, year):
        """The first and last supported years still parse."""
        result = parser.try_parse(f"{year:04d}-06-15 12:00", "en-US", default=DEFAULT)
        assert result.ok
        assert result.instant.value == datetime(year, 6, 15, 12, 0)
