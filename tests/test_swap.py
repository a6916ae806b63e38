from unittest.mock import MagicMock

import pytest
import requests

from crud_api.app.core.errors import NotFoundError, PriceFeedError, ValidationError
from crud_api.app.services import swap_service
from crud_api.app.services.swap_service import PriceFeed, latest_prices


@pytest.fixture
def prices(price_records):
    return latest_prices(price_records)


def test_latest_dated_price_wins(prices):
    assert prices["ETH"].price == 1650.00
    assert prices["ETH"].date == "2023-08-29T07:10:52.000Z"


def test_unusable_prices_are_skipped(prices):
    assert "BAD" not in prices
    assert set(prices) == {"ETH", "USDC", "ATOM"}


def test_same_currency_is_one_to_one_regardless_of_prices():
    assert swap_service.exchange_rate({}, "ETH", "ETH") == 1.0
    result = swap_service.quote({}, "ETH", "ETH", 2.5)
    assert result.rate == 1.0
    assert result.output_amount == 2.5
    assert result.info == "1:1 exchange rate"


def test_forward_quote(prices):
    result = swap_service.quote(prices, "ETH", "USDC", 2)
    assert result.rate == pytest.approx(1650.0)
    assert result.output_amount == pytest.approx(3300.0)
    assert result.info == "1 ETH = 1650.000000 USDC"


def test_reverse_quote_inverts_forward(prices):
    forward = swap_service.quote(prices, "ATOM", "ETH", 10)
    reverse = swap_service.quote(prices, "ATOM", "ETH", forward.output_amount, reverse=True)
    assert reverse.input_amount == pytest.approx(10)
    assert reverse.output_amount == pytest.approx(forward.output_amount)


def test_unknown_currency(prices):
    with pytest.raises(NotFoundError):
        swap_service.exchange_rate(prices, "ETH", "DOGE")


@pytest.mark.parametrize("amount", [0, -1, float("nan"), float("inf"), float("-inf")])
def test_invalid_amount_is_rejected(prices, amount):
    with pytest.raises(ValidationError):
        swap_service.quote(prices, "ETH", "USDC", amount)


def test_price_feed_fetches_records(price_records):
    resp = MagicMock()
    resp.json.return_value = price_records
    session = MagicMock()
    session.get.return_value = resp

    feed = PriceFeed("https://prices.example/prices.json", timeout=3, session=session)
    assert set(feed.latest_prices()) == {"ETH", "USDC", "ATOM"}
    session.get.assert_called_once_with("https://prices.example/prices.json", timeout=3)


def test_price_feed_network_error():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("boom")
    with pytest.raises(PriceFeedError):
        PriceFeed("https://prices.example/prices.json", session=session).fetch_records()


def test_price_feed_rejects_non_list_payload():
    resp = MagicMock()
    resp.json.return_value = {"prices": []}
    session = MagicMock()
    session.get.return_value = resp
    with pytest.raises(PriceFeedError):
        PriceFeed("https://prices.example/prices.json", session=session).fetch_records()


def test_prices_endpoint(client):
    r = client.get("/swap/prices")
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    assert [p["currency"] for p in body["prices"]] == ["ATOM", "ETH", "USDC"]


def test_quote_endpoint(client):
    r = client.get("/swap/quote", params={"from": "ETH", "to": "USDC", "amount": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["rate"] == pytest.approx(1650.0)
    assert body["reverse"] is False


def test_quote_endpoint_errors(client):
    assert client.get("/swap/quote", params={"from": "ETH", "to": "DOGE", "amount": 1}).status_code == 404
    assert client.get("/swap/quote", params={"from": "ETH", "to": "USDC", "amount": 0}).status_code == 400
    assert client.get("/swap/quote", params={"from": "ETH", "to": "USDC", "amount": "nan"}).status_code == 400
    assert client.get("/swap/quote", params={"from": "ETH", "to": "USDC", "amount": "inf"}).status_code == 400
    r = client.get("/swap/quote", params={"from": "ETH", "amount": 1})
    assert r.status_code == 400
    assert "error" in r.json()


def test_quote_endpoint_feed_failure(client, price_feed):
    def broken():
        raise PriceFeedError("Failed to load token prices: timeout")

    price_feed.latest_prices = broken
    r = client.get("/swap/quote", params={"from": "ETH", "to": "USDC", "amount": 1})
    assert r.status_code == 502
    assert r.json() == {"error": "Failed to load token prices: timeout"}
