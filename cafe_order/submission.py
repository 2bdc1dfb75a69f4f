"""Order submission: validation, dispatch and post-submit cleanup."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from cafe_order.cart import order_payload
from cafe_order.config import PLACEHOLDER_ORDER_ID
from cafe_order.errors import ValidationFailure
from cafe_order.models import Cart, CustomerInfo, SubmissionResult

logger = logging.getLogger(__name__)


class OrderPoster(Protocol):
    async def post_order(self, payload: dict[str, Any]) -> dict[str, Any]: ...


def validate_order(cart: Cart, customer: CustomerInfo) -> None:
    """Raise ValidationFailure unless the order can be sent."""
    if not len(cart):
        raise ValidationFailure("Cart is empty.")
    if not customer.name.strip() or not customer.phone.strip():
        raise ValidationFailure("Please enter your name and phone before placing an order.")


def extract_order_id(response: Mapping[str, Any]) -> str:
    for field_name in ("id", "orderId"):
        value = response.get(field_name)
        if value not in (None, ""):
            return str(value)
    return PLACEHOLDER_ORDER_ID


async def submit_order(client: OrderPoster, cart: Cart, customer: CustomerInfo) -> SubmissionResult:
    """
    Send the cart to the backend.

    Validation failures raise before any request is made. Cart and customer
    are cleared only after the backend accepts the order; a NetworkFailure
    leaves both untouched for another attempt.
    """
    validate_order(cart, customer)

    payload = order_payload(cart, customer)
    item_count = len(payload["items"])
    response = await client.post_order(payload)

    order_id = extract_order_id(response)
    cart.clear()
    customer.clear()
    logger.info("order submitted order_id=%s items=%d", order_id, item_count)
    return SubmissionResult(order_id=order_id, item_count=item_count)
