"""CLI commands for localization and pricing."""

from __future__ import annotations

import asyncio

import click

from geocheckout.application.i18n import get_translation
from geocheckout.domain.exceptions import DomainException
from geocheckout.domain.model.localization import LocalizationContext
from geocheckout.infrastructure import bootstrap
from geocheckout.infrastructure.config import Settings, load_settings

_LANGUAGE_HELP = "Platform language tag used when IP lookup fails (e.g. pt-BR)."


async def _resolve(settings: Settings, language: str | None) -> LocalizationContext:
    async with bootstrap.http_client(settings) as client:
        resolver = bootstrap.localization_resolver(settings, client, language)
        return await resolver.resolve()


@click.command("locate")
@click.option("--language", default=None, help=_LANGUAGE_HELP)
def locate(language: str | None) -> None:
    """Resolve the visitor's country, currency and language."""
    try:
        settings = load_settings()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    ctx = asyncio.run(_resolve(settings, language))

    click.echo(f"Country:   {ctx.country_code}")
    click.echo(f"Currency:  {ctx.currency_code}")
    click.echo(f"Language:  {ctx.language_code}{'  (rtl)' if ctx.is_rtl else ''}")
    click.echo(f"Rate:      1 {ctx.base_currency} = {ctx.exchange_rate} {ctx.currency_code}")


@click.command("quote")
@click.option("--language", default=None, help=_LANGUAGE_HELP)
def quote(language: str | None) -> None:
    """Show the localized product price."""
    try:
        settings = load_settings()
        ctx = asyncio.run(_resolve(settings, language))
        dto = bootstrap.price_quote_handler(settings).handle(ctx)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(settings.product.name)
    click.echo(f"  {'Was':<10} {dto.original_display:>16}")
    click.echo(f"  {'Now':<10} {dto.sale_display:>16}   -{dto.discount_percentage}%")
    click.echo(f"  {'-'*30}")
    click.echo(f"  {get_translation(dto.language, 'total'):<10} {dto.sale_display:>16}")
    click.echo(
        f"  {get_translation(dto.language, 'currency')}: {dto.currency}  "
        f"(charge {dto.charge_amount_minor_units} minor units)"
    )
