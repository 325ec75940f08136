"""Command-palette style host adapter.

Presents the query pipeline the way a list-page host consumes it: the host
forwards search-text changes, reads the current items and shows the empty-state
placeholder when there are none.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tzconvert.pipeline import QueryPipeline

if TYPE_CHECKING:
    from tzconvert.models import EmptyStateDescriptor, QueryState, ResultItem
    from tzconvert.service import TimezoneQueryService

CLOCK_ICON = "\uec92"


class TimezoneConverterPage:
    """Dynamic list page backed by a :class:`QueryPipeline`."""

    title = "Time zone Convertor for Command Palette"
    name = "Open"
    icon = CLOCK_ICON

    def __init__(self, service: TimezoneQueryService) -> None:
        self.pipeline = QueryPipeline(service)
        self._items_changed: list = []
        self.pipeline.add_listener(self._on_state)

    async def start(self) -> None:
        """Start the pipeline and load the initial (empty query) list."""
        self.pipeline.start()
        self.pipeline.post("")

    def update_search_text(self, old_search: str, new_search: str) -> None:
        if new_search == old_search:
            return
        self.pipeline.post(new_search)

    @property
    def is_loading(self) -> bool:
        return self.pipeline.is_loading()

    def get_items(self) -> list[ResultItem]:
        return self.pipeline.current_results()

    @property
    def empty_content(self) -> EmptyStateDescriptor:
        return self.pipeline.empty_state_descriptor()

    def on_items_changed(self, callback) -> None:
        """Register ``callback(count)``, called after each committed result set."""
        self._items_changed.append(callback)

    def _on_state(self, state: QueryState) -> None:
        if state.is_loading:
            return
        for callback in self._items_changed:
            callback(len(state.results))

    async def dispose(self) -> None:
        await self.pipeline.stop()


@dataclass(frozen=True)
class CommandItem:
    """Top-level entry the host lists for this extension."""

    title: str
    icon: str
    page: TimezoneConverterPage


class TimezoneConverterCommandsProvider:
    """Exposes the converter page as the extension's single top-level command."""

    display_name = "Time zone Convertor"
    icon = CLOCK_ICON

    def __init__(self, service: TimezoneQueryService) -> None:
        self.page = TimezoneConverterPage(service)
        self._commands = [CommandItem(title=self.display_name, icon=self.icon, page=self.page)]

    def top_level_commands(self) -> list[CommandItem]:
        return list(self._commands)


__all__ = ["CommandItem", "TimezoneConverterCommandsProvider", "TimezoneConverterPage"]
