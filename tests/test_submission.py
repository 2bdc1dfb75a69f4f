from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from cafe_order.api import CafeApiClient
from cafe_order.cart import add_to_cart
from cafe_order.errors import NetworkFailure, ValidationFailure
from cafe_order.models import Cart, CategoryMenu, CustomerInfo, SingleSelection
from cafe_order.submission import extract_order_id, submit_order

SOUP = CategoryMenu(key="soup", category="soup", base_price=4.5)


class RecordingTransport:
    """Answers every request with one canned response and keeps the requests."""

    def __init__(self, status_code=200, body=None, error=None, content=None):
        self.status_code = status_code
        self.body = {"orderId": "A1"} if body is None else body
        self.error = error
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)


def _client(transport: RecordingTransport) -> CafeApiClient:
    return CafeApiClient(base_url="http://cafe.test/", timeout=1.0, transport=httpx.MockTransport(transport))


def _filled_cart() -> Cart:
    cart = Cart()
    add_to_cart(cart, SOUP, {"Broth": SingleSelection("chicken")})
    return cart


def _submit(transport, cart, customer):
    async def scenario():
        async with _client(transport) as client:
            return await submit_order(client, cart, customer)

    return asyncio.run(scenario())


def test_success_clears_cart_and_reports_order_id():
    transport = RecordingTransport(body={"orderId": "A1"})
    cart = _filled_cart()
    customer = CustomerInfo(name=" Ada ", phone="555-0100")

    result = _submit(transport, cart, customer)

    assert result.order_id == "A1"
    assert result.item_count == 1
    assert len(cart) == 0
    assert customer == CustomerInfo()

    (request,) = transport.requests
    assert request.method == "POST"
    assert str(request.url) == "http://cafe.test/orders"
    assert json.loads(request.content) == {
        "customer": {"name": "Ada", "phone": "555-0100"},
        "items": [{"category": "soup", "basePrice": 4.5, "selections": {"Broth": "chicken"}}],
        "subtotal": 0,
        "tax": 0,
        "total": 0,
    }


def test_blank_name_fails_validation_without_network_call():
    transport = RecordingTransport()
    cart = _filled_cart()
    before = cart.items

    with pytest.raises(ValidationFailure):
        _submit(transport, cart, CustomerInfo(name="   ", phone="555-0100"))

    assert transport.requests == []
    assert cart.items == before


def test_empty_cart_fails_validation_without_network_call():
    transport = RecordingTransport()

    with pytest.raises(ValidationFailure):
        _submit(transport, Cart(), CustomerInfo(name="Ada", phone="555-0100"))

    assert transport.requests == []


def test_server_error_keeps_cart_and_customer():
    transport = RecordingTransport(status_code=500, body={"error": "boom"})
    cart = _filled_cart()
    customer = CustomerInfo(name="Ada", phone="555-0100")

    with pytest.raises(NetworkFailure) as exc_info:
        _submit(transport, cart, customer)

    assert exc_info.value.status_code == 500
    assert len(cart) == 1
    assert customer == CustomerInfo(name="Ada", phone="555-0100")
    assert len(transport.requests) == 1


def test_transport_error_is_a_network_failure():
    transport = RecordingTransport(error=httpx.ConnectError("refused"))
    cart = _filled_cart()

    with pytest.raises(NetworkFailure) as exc_info:
        _submit(transport, cart, CustomerInfo(name="Ada", phone="555-0100"))

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.status_code is None
    assert len(cart) == 1


@pytest.mark.parametrize(
    "transport",
    [
        RecordingTransport(content=b"oops"),
        RecordingTransport(body=[1]),
    ],
    ids=["non-json-body", "non-object-body"],
)
def test_unusable_order_response_keeps_cart_and_customer(transport):
    cart = _filled_cart()
    customer = CustomerInfo(name="Ada", phone="555-0100")

    with pytest.raises(NetworkFailure):
        _submit(transport, cart, customer)

    assert len(cart) == 1
    assert customer == CustomerInfo(name="Ada", phone="555-0100")
    assert len(transport.requests) == 1


@pytest.mark.parametrize(
    "response,expected",
    [
        ({"id": "X9", "orderId": "A1"}, "X9"),
        ({"orderId": "A1"}, "A1"),
        ({"orderId": 42}, "42"),
        ({"status": "ok"}, "unknown"),
        ({"id": ""}, "unknown"),
    ],
)
def test_extract_order_id(response, expected):
    assert extract_order_id(response) == expected


def test_fetch_menu_returns_records():
    records = [{"PK": "ITEM#soup", "SK": "META#", "basePrice": 4.5}]
    transport = RecordingTransport(body=records)

    async def scenario():
        async with _client(transport) as client:
            return await client.fetch_menu()

    assert asyncio.run(scenario()) == records
    assert str(transport.requests[0].url) == "http://cafe.test/menu"


def test_fetch_menu_rejects_non_list_body():
    transport = RecordingTransport(body={"items": []})

    async def scenario():
        async with _client(transport) as client:
            return await client.fetch_menu()

    with pytest.raises(NetworkFailure):
        asyncio.run(scenario())
