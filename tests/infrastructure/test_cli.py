"""End-to-end CLI tests with every outbound collaborator mocked."""

import json

import httpx
import pytest
from click.testing import CliRunner

from geocheckout.infrastructure import bootstrap
from geocheckout.infrastructure.cli.main import cli
from tests.fakes import FakeStripeApi


def _fake_services(intent_status=200, fx_up=True):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        path = request.url.path
        if path == "/json/":
            return httpx.Response(200, json={"country_code": "BR"})
        if path.startswith("/v4/latest/"):
            if not fx_up:
                return httpx.Response(503)
            return httpx.Response(200, json={"rates": {"BRL": 5.0}})
        if path == "/api/create-payment-intent":
            body = json.loads(request.content)
            assert body["amount"] == 48500
            if intent_status != 200:
                return httpx.Response(intent_status, json={"error": "boom"})
            return httpx.Response(200, json={"client_secret": "pi_1_secret_abc"})
        if path == "/api/send-notification":
            return httpx.Response(204)
        return httpx.Response(404)

    return handler, calls


@pytest.fixture
def services(monkeypatch):
    def install(**kwargs):
        handler, calls = _fake_services(**kwargs)
        monkeypatch.setattr(
            bootstrap,
            "http_client",
            lambda settings: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        return calls, FakeStripeApi().install(monkeypatch)

    return install


PAY_ARGS = [
    "pay", "--name", "Ana Souza", "--email", "ana@example.com",
    "--phone", "+55 11 99999-0000", "--card-number", "4242424242424242",
    "--exp-month", "12", "--exp-year", "2030", "--cvc", "123",
]


class TestLocalizationCommands:

    def test_locate(self, services):
        services()
        result = CliRunner().invoke(cli, ["locate"])

        assert result.exit_code == 0, result.output
        assert "BR" in result.output
        assert "BRL" in result.output

    def test_quote_with_fallback_rate(self, services):
        services(fx_up=False)
        result = CliRunner().invoke(cli, ["quote"])

        assert result.exit_code == 0, result.output
        assert "R$504.40" in result.output
        assert "-67%" in result.output


class TestPayCommand:

    def test_successful_payment(self, services):
        calls, stripe_api = services()
        result = CliRunner().invoke(cli, PAY_ARGS)

        assert result.exit_code == 0, result.output
        assert "Pagamento Aprovado!" in result.output
        assert ("POST", "/api/send-notification") in calls
        assert [name for name, _ in stripe_api.calls] == [
            "payment_methods",
            "payment_intents/pi_1/confirm",
        ]

    def test_intent_failure_exits_with_fixed_message(self, services):
        _, stripe_api = services(intent_status=500)
        result = CliRunner().invoke(cli, PAY_ARGS)

        assert result.exit_code == 1
        assert "Failed to create payment intent" in result.output
        assert [name for name, _ in stripe_api.calls] == ["payment_methods"]

    def test_invalid_card_rejected_before_network(self, services):
        calls, stripe_api = services()
        result = CliRunner().invoke(cli, PAY_ARGS[:-1] + ["12"])

        assert result.exit_code == 1
        assert "CVC" in result.output
        assert calls == []
        assert stripe_api.calls == []


class TestGuardCommand:

    def test_nothing_enabled(self, monkeypatch):
        for name in ("ANTI_RIGHT_CLICK", "ANTI_COPY", "ANTI_DEVTOOLS", "ANTI_DEBUG"):
            monkeypatch.delenv(f"CHECKOUT_SECURITY_{name}", raising=False)
        result = CliRunner().invoke(cli, ["guard"])

        assert result.exit_code == 0
        assert "nothing to watch" in result.output

    def test_short_watch(self):
        result = CliRunner().invoke(cli, ["guard", "--seconds", "0.05", "--anti-copy"])

        assert result.exit_code == 0, result.output
        assert "0 alert(s) raised." in result.output
