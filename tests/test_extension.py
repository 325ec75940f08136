"""Tests for the command-palette page and commands provider."""

import pytest

from tzconvert.extension import TimezoneConverterCommandsProvider, TimezoneConverterPage
from tzconvert.pipeline import NO_RESULTS_EMPTY_STATE


class TestTimezoneConverterPage:
    """The list page over the query pipeline."""

    def test_page_metadata(self, service):
        """The page exposes its title, name and icon."""
        page = TimezoneConverterPage(service)
        assert page.title == "Time zone Convertor for Command Palette"
        assert page.name == "Open"
        assert page.icon == "\uec92"

    @pytest.mark.asyncio
    async def test_initial_list_shows_every_zone(self, service):
        """Starting the page lists every zone."""
        page = TimezoneConverterPage(service)
        await page.start()
        await page.pipeline.drain()
        try:
            items = page.get_items()
            assert len(items) == 5
            assert items[0].title == "10:00 AM EST"
            assert not page.is_loading
        finally:
            await page.dispose()

    @pytest.mark.asyncio
    async def test_search_text_updates_items(self, service):
        """New search text replaces the items and notifies listeners."""
        page = TimezoneConverterPage(service)
        counts = []
        page.on_items_changed(counts.append)
        await page.start()
        try:
            page.update_search_text("", "10:00 AM, London")
            await page.pipeline.drain()
            assert [i.title for i in page.get_items()] == ["10:00 AM GMT", "05:00 AM EST"]
            assert counts == [5, 2]
        finally:
            await page.dispose()

    @pytest.mark.asyncio
    async def test_unchanged_search_text_is_ignored(self, service):
        """Unchanged search text posts nothing."""
        page = TimezoneConverterPage(service)
        counts = []
        page.on_items_changed(counts.append)
        await page.start()
        try:
            page.update_search_text("tokyo", "tokyo")
            await page.pipeline.drain()
            assert counts == [5]
        finally:
            await page.dispose()

    @pytest.mark.asyncio
    async def test_empty_content(self, service):
        """A finished query shows the no-results placeholder."""
        page = TimezoneConverterPage(service)
        await page.start()
        try:
            await page.pipeline.drain()
            assert page.empty_content == NO_RESULTS_EMPTY_STATE
        finally:
            await page.dispose()

    @pytest.mark.asyncio
    async def test_dispose_stops_pipeline(self, service):
        """Disposing the page stops its pipeline."""
        page = TimezoneConverterPage(service)
        await page.start()
        await page.pipeline.drain()
        await page.dispose()
        assert not page.pipeline.running


class TestCommandsProvider:
    """The extension's top-level command list."""

    def test_single_top_level_command(self, service):
        """The provider exposes one command opening the page."""
        provider = TimezoneConverterCommandsProvider(service)
        commands = provider.top_level_commands()
        assert len(commands) == 1
        assert commands[0].title == "Time zone Convertor"
        assert commands[0].page is provider.page

    def test_commands_list_is_a_copy(self, service):
        """Callers cannot change the provider's command list."""
        provider = TimezoneConverterCommandsProvider(service)
        provider.top_level_commands().clear()
        assert len(provider.top_level_commands()) == 1
