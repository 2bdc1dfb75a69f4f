from __future__ import annotations

import pytest

from cafe_order.errors import NetworkFailure

SANDWICH_RECORDS = [
    {"PK": "ITEM#sandwich", "SK": "META#", "category": "sandwich", "basePrice": 8.5},
    {"PK": "ITEM#sandwich", "SK": "GROUP#Bread", "type": "single"},
    {"PK": "ITEM#sandwich", "SK": "GROUP#Veggies", "type": "multi"},
    {"PK": "ITEM#sandwich", "SK": "OPTION#Bread#wheat", "id": "wheat", "label": "Wheat"},
    {"PK": "ITEM#sandwich", "SK": "OPTION#Bread#rye", "id": "rye", "label": "Rye"},
    {"PK": "ITEM#sandwich", "SK": "OPTION#Veggies#onion", "id": "onion", "label": "Onion"},
    {"PK": "ITEM#sandwich", "SK": "OPTION#Veggies#tomato", "id": "tomato", "label": "Tomato"},
]


class FakeBackend:
    """In-memory stand-in for the café API client."""

    def __init__(self, records=None, order_response=None, fail=False):
        self.records = SANDWICH_RECORDS if records is None else records
        self.order_response = {"id": "B7"} if order_response is None else order_response
        self.fail = fail
        self.posted: list[dict] = []

    async def fetch_menu(self):
        if self.fail:
            raise NetworkFailure("Server responded with 503", status_code=503)
        return list(self.records)

    async def post_order(self, payload):
        self.posted.append(payload)
        if self.fail:
            raise NetworkFailure("Server responded with 503", status_code=503)
        return self.order_response

    async def aclose(self):
        return None


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def sandwich_records():
    return list(SANDWICH_RECORDS)
