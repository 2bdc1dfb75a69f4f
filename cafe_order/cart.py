"""Cart assembly and order payload serialization."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from cafe_order.models import Cart, CartLineItem, CategoryMenu, CustomerInfo, SelectionState, SingleSelection
from cafe_order.selection import selected_ids


def add_to_cart(cart: Cart, menu: CategoryMenu, state: SelectionState) -> CartLineItem:
    """Snapshot the current selections as a line item and append it to the cart."""
    # Selection values are frozen, so copying the mapping is a full snapshot.
    labels = {
        option.id: option.label
        for group_name, selection in state.items()
        if group_name in menu.groups
        for option in menu.groups[group_name].options
        if option.id in selected_ids(selection)
    }
    item = CartLineItem(
        category=menu.category,
        base_price=menu.base_price,
        selections=MappingProxyType(dict(state)),
        key=menu.key,
        option_labels=MappingProxyType(labels),
    )
    cart.append(item)
    return item


def selections_payload(selections: SelectionState) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for group_name, selection in selections.items():
        if isinstance(selection, SingleSelection):
            payload[group_name] = selection.option_id
        else:
            payload[group_name] = sorted(selection.option_ids)
    return payload


def line_item_payload(item: CartLineItem) -> dict[str, Any]:
    return {
        "category": item.category,
        "basePrice": item.base_price,
        "selections": selections_payload(item.selections),
    }


def order_payload(cart: Cart, customer: CustomerInfo) -> dict[str, Any]:
    """Serialize an order; pricing fields are computed by the backend."""
    return {
        "customer": {
            "name": customer.name.strip(),
            "phone": customer.phone.strip(),
        },
        "items": [line_item_payload(item) for item in cart],
        "subtotal": 0,
        "tax": 0,
        "total": 0,
    }
