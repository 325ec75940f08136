"""Query interpretation: date/time parsing and query classification."""

from tzconvert.query.classifier import Query, QueryClassifier, QueryKind, split_source
from tzconvert.query.parser import DateTimeParser, ParseResult, field_order

__all__ = [
    "DateTimeParser",
    "ParseResult",
    "Query",
    "QueryClassifier",
    "QueryKind",
    "field_order",
    "split_source",
]
