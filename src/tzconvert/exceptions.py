"""Exception Hierarchy for the Time Zone Converter.

Categorized exceptions for every failure mode of the query pipeline. The
category decides how far an error travels:

Error Categories:
    - PARSE: Date/time text not recognized by any grammar - silently handled
    - ZONE_RESOLUTION: Zone text matched nothing in the catalog - silently handled
    - PROVIDER: Catalog or geo lookup raised or returned invalid data - surfaced
    - CONFIGURATION: Invalid configuration file or values
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categorization of errors for recovery decisions."""

    PARSE = "parse"  # Fall back to the next interpretation
    ZONE_RESOLUTION = "zone_resolution"  # Fall back to the next interpretation
    PROVIDER = "provider"  # Surfaces as the error flag for one query
    CONFIGURATION = "configuration"  # Raised at startup


class TimezoneConverterError(Exception):
    """Base exception for all time zone converter errors.

    :param message: Human-readable error description
    :param category: Error category for recovery strategy
    :param technical_details: Additional technical information for debugging
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.PROVIDER,
        technical_details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.technical_details = technical_details or {}

    def is_recoverable(self) -> bool:
        """Check if the pipeline should fall back instead of reporting an error."""
        return self.category in (ErrorCategory.PARSE, ErrorCategory.ZONE_RESOLUTION)


class ParseFailure(TimezoneConverterError):
    """Date/time text was not recognized by the primary or fallback grammar.

    :param message: Error description
    :param text: The text that failed to parse
    :param cultures: Cultures whose grammars were attempted
    """

    def __init__(
        self,
        message: str,
        text: str = "",
        cultures: list[str] | None = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.PARSE, **kwargs)
        self.text = text
        self.cultures = cultures or []


class ZoneResolutionFailure(TimezoneConverterError):
    """Zone text did not match any catalog id or display name.

    :param message: Error description
    :param zone_text: The zone text that was looked up
    """

    def __init__(self, message: str, zone_text: str = "", **kwargs):
        super().__init__(message, category=ErrorCategory.ZONE_RESOLUTION, **kwargs)
        self.zone_text = zone_text


class ProviderFault(TimezoneConverterError):
    """The catalog or geo-lookup provider failed.

    :param message: Error description
    :param provider: Name of the failing provider
    :param operation: Accessor operation that was running
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        operation: str | None = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.PROVIDER, **kwargs)
        self.provider = provider
        self.operation = operation


class ConfigurationError(TimezoneConverterError):
    """Invalid configuration.

    :param message: Error description
    :param config_key: The configuration key that caused the error
    """

    def __init__(self, message: str, config_key: str | None = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.config_key = config_key


__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "ParseFailure",
    "ProviderFault",
    "TimezoneConverterError",
    "ZoneResolutionFailure",
]
