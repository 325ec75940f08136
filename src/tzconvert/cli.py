"""tzconvert CLI commands.

Examples:
    tzconvert query "10:00 AM, London"
    tzconvert query "2025-04-22 12:30pm in Arizona to London" --local-zone America/New_York
    tzconvert zones --filter europe
    tzconvert interactive
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from datetime import UTC, datetime

import click

from tzconvert.config import load_config
from tzconvert.exceptions import ConfigurationError, TimezoneConverterError
from tzconvert.host import FixedHostEnvironment, SystemHostEnvironment
from tzconvert.service import create_service
from tzconvert.utils.logger import configure_logging


def _build_service(ctx: click.Context, local_zone: str | None, now: str | None, culture: str | None):
    config = ctx.obj["config"]
    host = SystemHostEnvironment()
    if now:
        try:
            instant = datetime.fromisoformat(now)
        except ValueError as e:
            raise click.BadParameter(f"not an ISO datetime: {now}", param_hint="--now") from e
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        host = FixedHostEnvironment(
            local_zone or host.current_local_zone_id(),
            instant,
            culture or host.current_culture_name(),
        )
    if local_zone:
        config.session.local_zone = local_zone
    if culture:
        config.parsing.culture = culture
    return create_service(config, host)


def _echo_items(items, output_json: bool) -> None:
    if output_json:
        click.echo(
            json.dumps(
                [{"title": i.title, "subtitle": i.subtitle, "copy_value": i.copy_value} for i in items],
                indent=2,
            )
        )
        return
    for item in items:
        click.echo(item.title)
        click.echo(f"  {item.subtitle}")


@click.group("tzconvert")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file (YAML)")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: int) -> None:
    """Time zone converter.

    Converts free-form time queries between named time zones.
    """
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        raise click.ClickException(e.message) from e
    level = logging.DEBUG if verbose > 1 else logging.INFO if verbose == 1 else config.log_level
    configure_logging(level)
    ctx.obj = {"config": config}


@cli.command("query")
@click.argument("text", nargs=-1)
@click.option("--local-zone", help="Zone id to treat as local (e.g. America/New_York)")
@click.option("--now", help="ISO datetime to use as the current instant")
@click.option("--culture", help="Culture for date parsing (e.g. en-GB)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def query_command(
    ctx: click.Context,
    text: tuple[str, ...],
    local_zone: str | None,
    now: str | None,
    culture: str | None,
    output_json: bool,
) -> None:
    """Convert a time query, e.g. "10:00 AM, London"."""
    service = _build_service(ctx, local_zone, now, culture)
    try:
        items = service.query(" ".join(text))
    except TimezoneConverterError as e:
        raise click.ClickException(e.message) from e
    _echo_items(items, output_json)


@cli.command("zones")
@click.option("--filter", "filter_text", default="", help="Only zones whose id or name contains this text")
@click.pass_context
def zones_command(ctx: click.Context, filter_text: str) -> None:
    """List the zone catalog."""
    service = _build_service(ctx, None, None, None)
    needle = filter_text.lower()
    for record in service.accessor.catalog.values():
        if needle and needle not in record.zone_id.lower() and needle not in record.display_name.lower():
            continue
        abbreviations = "/".join(a for a in (record.standard_abbreviation, record.daylight_abbreviation) if a)
        click.echo(f"{record.zone_id:<32} {record.display_name}  {abbreviations}".rstrip())


@cli.command("countries")
@click.argument("zone")
@click.pass_context
def countries_command(ctx: click.Context, zone: str) -> None:
    """List countries sharing ZONE's current UTC offset."""
    service = _build_service(ctx, None, None, None)
    context = service.session()
    try:
        record = service.accessor.resolve(zone)
        instant = context.now_instant()
        offset = service.accessor.utc_offset(record, instant)
        countries = service.accessor.countries_for_offset(offset, instant)
    except TimezoneConverterError as e:
        raise click.ClickException(e.message) from e
    click.echo(f"{record.zone_id}: {', '.join(countries) or 'no country data'}")


@cli.command("interactive")
@click.option("--local-zone", help="Zone id to treat as local")
@click.pass_context
def interactive_command(ctx: click.Context, local_zone: str | None) -> None:
    """Read queries from stdin, one per line, through the query pipeline."""
    from tzconvert.extension import TimezoneConverterPage

    service = _build_service(ctx, local_zone, None, None)

    async def _run() -> None:
        page = TimezoneConverterPage(service)
        await page.start()
        try:
            previous = ""
            loop = asyncio.get_running_loop()
            while True:
                line = await loop.run_in_executor(None, sys.stdin.readline)
                if not line:
                    break
                text = line.rstrip("\n")
                page.update_search_text(previous, text)
                previous = text
                await page.pipeline.drain()
                items = page.get_items()
                if items:
                    _echo_items(items, output_json=False)
                else:
                    empty = page.empty_content
                    click.echo(f"{empty.title}: {empty.subtitle}")
        finally:
            await page.dispose()

    asyncio.run(_run())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
