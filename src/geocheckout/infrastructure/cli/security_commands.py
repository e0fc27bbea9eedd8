"""CLI commands for the tamper countermeasure monitor."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import click

from geocheckout.application.alert_broker import AlertBroker
from geocheckout.domain.exceptions import DomainException
from geocheckout.domain.model.security import AlertEvent, SecurityConfig
from geocheckout.infrastructure import bootstrap
from geocheckout.infrastructure.config import load_settings


async def _guard(config: SecurityConfig, seconds: float, chrome: tuple[int, int]) -> int:
    alerts: list[AlertEvent] = []

    def show(event: AlertEvent) -> None:
        alerts.append(event)
        click.echo(f"[{event.timestamp:%H:%M:%S}] ALERT ({event.source}): {event.message}")

    async with AlertBroker() as broker:
        broker.subscribe(show)
        monitor = bootstrap.tamper_monitor(broker, *chrome)
        monitor.configure(config)
        try:
            await asyncio.sleep(seconds)
        finally:
            monitor.teardown()
            await broker.drain()
    return len(alerts)


@click.command("guard")
@click.option("--seconds", default=10.0, show_default=True, type=float, help="How long to watch.")
@click.option("--anti-right-click", is_flag=True, default=False)
@click.option("--anti-copy", is_flag=True, default=False)
@click.option("--anti-devtools", is_flag=True, default=False)
@click.option("--anti-debug", is_flag=True, default=False)
@click.option("--chrome-width", default=0, type=int, help="Window chrome around the terminal, px.")
@click.option("--chrome-height", default=0, type=int, help="Window chrome around the terminal, px.")
@click.option("--language", default="en", show_default=True, help="Alert message language.")
def guard(
    seconds: float,
    anti_right_click: bool,
    anti_copy: bool,
    anti_devtools: bool,
    anti_debug: bool,
    chrome_width: int,
    chrome_height: int,
    language: str,
) -> None:
    """Run the tamper monitor for a while and print its alerts."""
    try:
        defaults = load_settings().security_for(language)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    config = replace(
        defaults,
        anti_right_click=anti_right_click or defaults.anti_right_click,
        anti_copy=anti_copy or defaults.anti_copy,
        anti_devtools=anti_devtools or defaults.anti_devtools,
        anti_debug=anti_debug or defaults.anti_debug,
    )
    if not config.any_enabled:
        click.echo("All countermeasures are off; nothing to watch.")
        return

    count = asyncio.run(_guard(config, seconds, (chrome_width, chrome_height)))
    click.echo(f"{count} alert(s) raised.")
