"""CLI commands for the checkout flow."""

from __future__ import annotations

import asyncio

import click

from geocheckout.application.dto import CheckoutStatusDTO
from geocheckout.application.i18n import get_translation
from geocheckout.domain.exceptions import DomainException
from geocheckout.domain.model.value_objects import CardDetails
from geocheckout.infrastructure import bootstrap
from geocheckout.infrastructure.config import Settings, load_settings


async def _checkout(
    settings: Settings,
    customer: dict[str, str],
    card: CardDetails,
    language: str | None,
) -> tuple[CheckoutStatusDTO, str]:
    async with bootstrap.http_client(settings) as client:
        ctx = await bootstrap.localization_resolver(settings, client, language).resolve()
        amount = bootstrap.price_quote_handler(settings).charge_amount(ctx)

        orchestrator = bootstrap.checkout_orchestrator(settings, client, ctx.language_code)
        for field_name, value in customer.items():
            orchestrator.update_customer(field_name, value)
        orchestrator.submit_customer_info(amount)

        status = await orchestrator.submit_payment(card)
        await orchestrator.flush_notifications()
        return status, ctx.language_code


@click.command("pay")
@click.option("--name", required=True, help="Customer full name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--card-number", required=True, help="Card number.")
@click.option("--exp-month", required=True, type=int, help="Card expiry month.")
@click.option("--exp-year", required=True, type=int, help="Card expiry year.")
@click.option("--cvc", required=True, help="Card security code.")
@click.option("--language", default=None, help="Platform language tag (e.g. pt-BR).")
def pay(
    name: str,
    email: str,
    phone: str,
    card_number: str,
    exp_month: int,
    exp_year: int,
    cvc: str,
    language: str | None,
) -> None:
    """Pay for the product with a card."""
    try:
        settings = load_settings()
        card = CardDetails(card_number, exp_month, exp_year, cvc)
        status, lang = asyncio.run(
            _checkout(settings, {"name": name, "email": email, "phone": phone}, card, language)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if status.failure_reason is not None:
        raise click.ClickException(status.failure_reason)

    click.echo(get_translation(lang, "paymentSuccess"))
    click.echo(f"  Amount:          {status.amount_minor_units} ({status.currency})")
    click.echo(f"  Payment method:  {status.payment_method_id}")
    click.echo(get_translation(lang, "thankYou"))
