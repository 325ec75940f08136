"""Time Zone Query Service.

Wires the catalog accessor, parser, classifier, engine and formatter together
behind one ``query()`` call.

Usage:
    config = load_config()
    service = create_service(config)
    items = service.query("10:00 AM, London")
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from tzconvert.catalog import create_accessor
from tzconvert.engine import ConversionEngine
from tzconvert.formatting import InstantFormatter
from tzconvert.host import HostEnvironment, SystemHostEnvironment, session_context
from tzconvert.query import DateTimeParser, QueryClassifier
from tzconvert.utils.logger import get_logger

if TYPE_CHECKING:
    from tzconvert.catalog.accessor import ZoneCatalogAccessor
    from tzconvert.config import TimezoneConverterConfig
    from tzconvert.models import ResultItem, SessionContext

logger = get_logger("engine")


class TimezoneQueryService:
    """Synchronous text -> result list mapping.

    Args:
        accessor: Zone catalog accessor
        host: Host collaborator supplying local zone, now and culture
        comma_layout: Layout for "<time>, <zone>" queries
        fallback_culture: Invariant culture for the parser's second attempt
        local_zone: Local zone override (None = ask the host)
        culture: Culture override (None = ask the host)
    """

    def __init__(
        self,
        accessor: ZoneCatalogAccessor,
        host: HostEnvironment | None = None,
        *,
        comma_layout: str = "minimal",
        fallback_culture: str = "en-US",
        local_zone: str | None = None,
        culture: str | None = None,
    ) -> None:
        self.accessor = accessor
        self.host = host or SystemHostEnvironment()
        self.classifier = QueryClassifier(accessor, DateTimeParser(fallback_culture))
        self.engine = ConversionEngine(accessor, InstantFormatter(accessor), comma_layout=comma_layout)
        self._local_zone = local_zone
        self._culture = culture

    def session(self) -> SessionContext:
        """Snapshot the host for one query."""
        return session_context(self.host, local_zone=self._local_zone, culture=self._culture)

    def query(self, text: str, context: SessionContext | None = None) -> list[ResultItem]:
        """Classify and convert ``text``.

        Args:
            text: Raw query text
            context: Session snapshot (taken from the host if omitted)

        Returns:
            Ordered result items

        Raises:
            ProviderFault: If the catalog or geo lookup fails
        """
        context = context or self.session()
        start = time.perf_counter()
        query = self.classifier.classify(text, context)
        items = self.engine.run(query, context)
        logger.timing(
            f"'{text}' -> {query.kind.value}, {len(items)} rows in {(time.perf_counter() - start) * 1000:.1f}ms"
        )
        return items


def create_service(
    config: TimezoneConverterConfig,
    host: HostEnvironment | None = None,
) -> TimezoneQueryService:
    """Build a service from configuration."""
    service = TimezoneQueryService(
        create_accessor(config.catalog),
        host,
        comma_layout=config.engine.comma_layout,
        fallback_culture=config.parsing.fallback_culture,
        local_zone=config.session.local_zone,
        culture=config.parsing.culture,
    )
    logger.key_info(
        f"Service ready: comma layout {config.engine.comma_layout}, fallback culture {config.parsing.fallback_culture}"
    )
    return service


__all__ = ["TimezoneQueryService", "create_service"]
