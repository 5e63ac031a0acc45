"""
HTTP surface tests: routers wired to in-memory oracles through create_app.
"""

import json

import pytest
from fastapi.testclient import TestClient

from arcredit.core.config import Settings
from arcredit.core.errors import (
    PaymentAmountTooLarge,
    PaymentAmountTooSmall,
    payment_out_of_range_handler,
)
from arcredit.main import create_app
from arcredit.models.constants import SUPPORTED_PAYMENT_CURRENCIES
from arcredit.services.oracles import ReadThroughArweaveToFiatOracle
from arcredit.services.pricing import PricingConfig, TurboPricingService

from .conftest import FakeBytesOracle, FakeFiatOracle


def make_client(fiat_oracle, bytes_oracle, **config) -> TestClient:
    settings = Settings(fiat_oracle_kind="static", bytes_oracle_kind="static")
    svc = TurboPricingService(
        bytes_to_winston_oracle=bytes_oracle,
        arweave_to_fiat_oracle=fiat_oracle,
        config=PricingConfig(**config),
    )
    return TestClient(create_app(settings_override=settings, pricing_service=svc))


@pytest.fixture
def client(fiat_oracle, bytes_oracle) -> TestClient:
    return make_client(fiat_oracle, bytes_oracle, fee_percentage=0)


class TestHealth:
    def test_health(self, client) -> None:
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}
        assert r.headers["X-Request-Id"]

    def test_unknown_route(self, client) -> None:
        r = client.get("/nope")
        assert r.status_code == 404
        assert r.json()["error"] == "not_found"


class TestPriceForBytes:
    def test_price(self, fiat_oracle) -> None:
        client = make_client(
            fiat_oracle, FakeBytesOracle(winston=1000), subsidized_winc_percentage=10
        )
        r = client.get("/v1/price/bytes/1024")
        assert r.status_code == 200
        body = r.json()
        assert body["winc"] == "900"
        assert body["adjustments"][0]["adjustment_amount"] == "-100"

    def test_too_large(self, client) -> None:
        r = client.get("/v1/price/bytes/1024000000000000000000000000000000000000000000")
        assert r.status_code == 400
        assert "Byte count too large" in r.json()["detail"]

    def test_invalid(self, client) -> None:
        r = client.get("/v1/price/bytes/-54.2")
        assert r.status_code == 400
        assert "Invalid byte count" in r.json()["detail"]

    def test_oracle_unavailable(self, fiat_oracle) -> None:
        client = make_client(fiat_oracle, FakeBytesOracle(fail=True))
        r = client.get("/v1/price/bytes/1321321")
        assert r.status_code == 502
        assert r.json()["detail"] == "Pricing Oracle Unavailable"


class TestPriceForPayment:
    def test_price(self, client) -> None:
        r = client.get("/v1/price/USD/1000")
        assert r.status_code == 200
        assert r.json()["winc"] == str(10**12)

    def test_invalid_currency(self, client) -> None:
        r = client.get("/v1/price/RandomCurrency/100")
        assert r.status_code == 400
        assert r.json()["detail"] == (
            "The currency type 'randomcurrency' is currently not supported by this API!"
        )

    def test_invalid_amount(self, client) -> None:
        r = client.get("/v1/price/usd/200.5")
        assert r.status_code == 400
        assert r.json()["detail"] == (
            "The provided payment amount (200.5) is invalid; it must be a positive non-decimal integer!"
        )

    def test_amount_below_payment_minimum_is_quoted(self, client, fiat_oracle) -> None:
        r = client.get("/v1/price/USD/100")
        assert r.status_code == 200
        assert r.json() == {"winc": str(10**11), "adjustments": []}
        assert fiat_oracle.calls == ["usd"]

    def test_amount_above_payment_maximum_is_quoted(self, client) -> None:
        r = client.get("/v1/price/usd/1000001")
        assert r.status_code == 200
        assert r.json()["winc"] == str(1_000_001 * 10**9)

    def test_other_currency_outage_does_not_fail_quote(self, stable_prices, bytes_oracle) -> None:
        upstream = FakeFiatOracle(stable_prices, failing={"brl"})
        client = make_client(upstream, bytes_oracle, fee_percentage=0)
        assert client.get("/v1/price/usd/1000").status_code == 200
        assert client.get("/v1/price/brl/1000").status_code == 502

    def test_fiat_oracle_unavailable(self, stable_prices, bytes_oracle) -> None:
        client = make_client(FakeFiatOracle(stable_prices, fail=True), bytes_oracle)
        r = client.get("/v1/price/usd/5000")
        assert r.status_code == 502
        assert r.json()["detail"] == "Fiat Oracle Unavailable"

    def test_repeated_quotes_fetch_the_rate_once(self, stable_prices, bytes_oracle) -> None:
        upstream = FakeFiatOracle(stable_prices)
        client = make_client(ReadThroughArweaveToFiatOracle(upstream), bytes_oracle)
        for amount in (1000, 10000, 100000, 1000000, 500000):
            assert client.get(f"/v1/price/USD/{amount}").status_code == 200
        assert upstream.calls == ["usd"]


class TestRates:
    def test_rates(self, fiat_oracle) -> None:
        client = make_client(fiat_oracle, FakeBytesOracle(winston=10**12), fee_percentage=20)
        r = client.get("/v1/rates")
        assert r.status_code == 200
        body = r.json()
        assert body["winc"] == str(10**12)
        assert body["fiat"]["usd"] == pytest.approx(12.5)
        assert len(body["adjustments"]) == 1

    def test_rates_unavailable(self, stable_prices, bytes_oracle) -> None:
        client = make_client(FakeFiatOracle(stable_prices, fail=True), bytes_oracle)
        assert client.get("/v1/rates").status_code == 502

    def test_rate_for_currency(self, client) -> None:
        r = client.get("/v1/rates/usd")
        assert r.status_code == 200
        assert r.json() == {"currency": "usd", "rate": 10.0}

    def test_rate_for_unsupported_currency(self, client) -> None:
        r = client.get("/v1/rates/abc")
        assert r.status_code == 404
        assert r.json()["detail"] == "Invalid currency."


class TestOutOfRangeHandler:
    def test_too_small_maps_to_400_with_bound(self) -> None:
        response = payment_out_of_range_handler(None, PaymentAmountTooSmall(100, "usd", 500))
        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["error"] == "payment_amount_too_small"
        assert body["amount"] == 100
        assert body["bound"] == 500

    def test_too_large_maps_to_400(self) -> None:
        response = payment_out_of_range_handler(
            None, PaymentAmountTooLarge(1_000_001, "usd", 1_000_000)
        )
        assert response.status_code == 400
        assert json.loads(response.body)["error"] == "payment_amount_too_large"


class TestCurrencies:
    def test_currencies(self, client) -> None:
        r = client.get("/v1/currencies")
        assert r.status_code == 200
        body = r.json()
        assert body["supported_currencies"] == list(SUPPORTED_PAYMENT_CURRENCIES)
        assert body["limits"]["usd"] == {
            "minimum_payment_amount": 500,
            "maximum_payment_amount": 1_000_000,
            "suggested_payment_amounts": [2_500, 5_000, 10_000],
        }
