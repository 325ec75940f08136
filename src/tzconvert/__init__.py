"""tzconvert - free-form time zone query interpreter and converter.

Example:
    from tzconvert import create_service, load_config

    service = create_service(load_config())
    for item in service.query("2025-04-22 12:30pm in Arizona to London"):
        print(item.title, item.subtitle)
"""

from tzconvert.config import TimezoneConverterConfig, load_config
from tzconvert.exceptions import (
    ConfigurationError,
    ErrorCategory,
    ParseFailure,
    ProviderFault,
    TimezoneConverterError,
    ZoneResolutionFailure,
)
from tzconvert.models import (
    EmptyStateDescriptor,
    Instant,
    InterpretationMode,
    QueryState,
    ResultItem,
    SessionContext,
    ZoneRecord,
)
from tzconvert.pipeline import QueryPipeline
from tzconvert.service import TimezoneQueryService, create_service

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EmptyStateDescriptor",
    "ErrorCategory",
    "Instant",
    "InterpretationMode",
    "ParseFailure",
    "ProviderFault",
    "QueryPipeline",
    "QueryState",
    "ResultItem",
    "SessionContext",
    "TimezoneConverterConfig",
    "TimezoneConverterError",
    "TimezoneQueryService",
    "ZoneRecord",
    "ZoneResolutionFailure",
    "create_service",
    "load_config",
]
