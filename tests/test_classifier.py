"""Tests for query classification."""

from datetime import datetime

import pytest

from tzconvert.models import InterpretationMode
from tzconvert.query import DateTimeParser, QueryClassifier, QueryKind, split_source


@pytest.fixture
def classifier(accessor):
    return QueryClassifier(accessor, DateTimeParser())


class TestSplitSource:
    """Separating the date part from the source zone."""

    @pytest.mark.parametrize(
        "before, expected",
        [
            ("2025-04-22 12:30pm in Arizona ", ("2025-04-22 12:30pm", "Arizona")),
            ("10:00 AM, London ", ("10:00 AM", "London")),
            ("10:00 AM ", ("10:00 AM", None)),
            ("9am in ", ("9am", "")),
        ],
    )
    def test_split(self, before, expected):
        """The source zone is split off after "in" or a comma."""
        assert split_source(before) == expected


class TestBareInstant:
    """A lone date/time, or nothing at all."""

    @pytest.mark.parametrize("text", ["", "   ", "now", "NOW"])
    def test_now(self, classifier, context, text):
        """Empty text and "now" mean the current instant."""
        query = classifier.classify(text, context)
        assert query.kind is QueryKind.BARE_INSTANT
        assert query.instant.mode is InterpretationMode.RESOLVED
        assert query.instant.to_utc() == context.now

    def test_time_only(self, classifier, context):
        """A lone time is an unspecified instant today."""
        query = classifier.classify("10:00 AM", context)
        assert query.kind is QueryKind.BARE_INSTANT
        assert query.instant.mode is InterpretationMode.UNSPECIFIED
        assert query.instant.value == datetime(2025, 1, 15, 10, 0)

    def test_full_date(self, classifier, context):
        """A full date and time is a bare instant."""
        query = classifier.classify("2025-04-22 12:30pm", context)
        assert query.kind is QueryKind.BARE_INSTANT
        assert query.instant.value == datetime(2025, 4, 22, 12, 30)


class TestTwoZone:
    """Queries like "<date> [in <zone>] to <zone>"."""

    def test_explicit_source_and_target(self, classifier, context):
        """Both zones resolve from the query."""
        query = classifier.classify("2025-04-22 12:30pm in Arizona to London", context)
        assert query.kind is QueryKind.TWO_ZONE
        assert query.source.zone_id == "America/Phoenix"
        assert query.target.zone_id == "Europe/London"
        assert query.instant.value == datetime(2025, 4, 22, 12, 30)

    def test_comma_source(self, classifier, context):
        """A comma can introduce the source zone."""
        query = classifier.classify("9:00 AM, London to Tokyo", context)
        assert query.kind is QueryKind.TWO_ZONE
        assert query.source.zone_id == "Europe/London"
        assert query.target.zone_id == "Asia/Tokyo"

    def test_missing_source_means_local(self, classifier, context):
        """Without a source zone the local zone is used."""
        query = classifier.classify("10:00 AM to Tokyo", context)
        assert query.kind is QueryKind.TWO_ZONE
        assert query.source.zone_id == "America/New_York"

    def test_neither_zone_resolves_falls_back_to_filter(self, classifier, context):
        """Two unknown zones filter by the target text."""
        query = classifier.classify("10:00 AM in Atlantis to Japan", context)
        assert query.kind is QueryKind.TWO_ZONE_FALLBACK
        assert query.filter_text == "Japan"
        assert query.instant.value == datetime(2025, 1, 15, 10, 0)

    def test_unknown_source_with_known_target_declines(self, classifier, context):
        """One unknown zone makes the rule decline."""
        query = classifier.classify("10:00 AM in Atlantis to London", context)
        assert query.kind is QueryKind.FILTER

    def test_to_inside_a_word_is_not_a_separator(self, classifier, context):
        """"to" inside a word does not split the query."""
        query = classifier.classify("Toronto", context)
        assert query.kind is QueryKind.FILTER
        assert query.filter_text == "Toronto"


class TestInZone:
    """Queries like "<date> in <zone>"."""

    def test_in_zone(self, classifier, context):
        """"<date> in <zone>" names the source zone."""
        query = classifier.classify("10:00 AM in Tokyo", context)
        assert query.kind is QueryKind.IN_ZONE
        assert query.source.zone_id == "Asia/Tokyo"

    def test_missing_date_defaults_to_today_in_source_zone(self, classifier, context):
        """Missing date fields default to today in the source zone."""
        # 2025-01-15 15:00 UTC is already January 16 in Tokyo
        query = classifier.classify("10:00 AM in Tokyo", context)
        assert query.instant.value == datetime(2025, 1, 16, 10, 0)

    @pytest.mark.parametrize("text", ["in Tokyo", "now in Tokyo"])
    def test_no_date_means_now(self, classifier, context, text):
        """Without a date the current instant is used."""
        query = classifier.classify(text, context)
        assert query.kind is QueryKind.IN_ZONE
        assert query.instant.is_resolved
        assert query.instant.to_utc() == context.now

    def test_unknown_zone_declines(self, classifier, context):
        """An unknown zone falls through to the filter."""
        assert classifier.classify("10:00 AM in Atlantis", context).kind is QueryKind.FILTER


class TestCommaZone:
    """Queries like "<date>, <zone>"."""

    def test_comma_zone(self, classifier, context):
        """"<date>, <zone>" names the source zone."""
        query = classifier.classify("10:00 AM, London", context)
        assert query.kind is QueryKind.COMMA_ZONE
        assert query.source.zone_id == "Europe/London"
        assert query.instant.value == datetime(2025, 1, 15, 10, 0)

    def test_unparseable_date_declines(self, classifier, context):
        """Text that is not a date falls through to the filter."""
        assert classifier.classify("whenever, London", context).kind is QueryKind.FILTER


class TestFilter:
    """Anything else filters the zone list."""

    @pytest.mark.parametrize("text", ["asdkfj", "London", "tokyo"])
    def test_filter(self, classifier, context, text):
        """Plain text becomes filter text at the current instant."""
        query = classifier.classify(text, context)
        assert query.kind is QueryKind.FILTER
        assert query.filter_text == text
        assert query.instant.to_utc() == context.now

    def test_text_is_trimmed(self, classifier, context):
        """Query text is trimmed."""
        assert classifier.classify("  asdkfj  ", context).text == "asdkfj"
