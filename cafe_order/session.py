"""Session state shared by the menu builder and the cart."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from cafe_order.cart import add_to_cart
from cafe_order.menu import normalize_menu
from cafe_order.models import (
    Cardinality,
    Cart,
    CartLineItem,
    CategoryMenu,
    CustomerInfo,
    MultiSelection,
    Selection,
    SingleSelection,
    SubmissionResult,
)
from cafe_order.selection import empty_selection_state, selected_ids, toggle_option
from cafe_order.submission import OrderPoster, submit_order

logger = logging.getLogger(__name__)


class MenuSource(Protocol):
    async def fetch_menu(self) -> list[Any]: ...


class OrderSession:
    """Owns the menu model, the cart, customer info and per-category selections."""

    def __init__(self, cart: Cart | None = None, customer: CustomerInfo | None = None) -> None:
        self.menu: dict[str, CategoryMenu] = {}
        self.cart = cart if cart is not None else Cart()
        self.customer = customer if customer is not None else CustomerInfo()
        self._selections: dict[str, dict[str, Selection]] = {}

    def set_menu(self, records: Iterable[Any]) -> dict[str, CategoryMenu]:
        """Replace the menu model and drop selections the new menu no longer offers."""
        self.menu = normalize_menu(records)
        self._selections = {
            key: _surviving_selections(self.menu[key], state)
            for key, state in self._selections.items()
            if key in self.menu
        }
        logger.info("menu loaded categories=%s", ",".join(self.menu) or "-")
        return self.menu

    async def load_menu(self, source: MenuSource) -> dict[str, CategoryMenu]:
        # The load that finishes last replaces the menu.
        records = await source.fetch_menu()
        return self.set_menu(records)

    def category(self, key: str) -> CategoryMenu:
        menu = self.menu.get(key)
        if menu is None:
            raise KeyError(f"unknown menu category {key!r}")
        return menu

    def selection_state(self, key: str) -> dict[str, Selection]:
        return dict(self._selections.get(key, {}))

    def toggle(self, key: str, group_name: str, option_id: str) -> dict[str, Selection]:
        """Toggle one option using the group's cardinality from the menu."""
        group = self.category(key).groups.get(group_name)
        if group is None:
            raise KeyError(f"unknown group {group_name!r} in {key!r}")
        if not any(option.id == option_id for option in group.options):
            raise KeyError(f"unknown option {option_id!r} in {group_name!r}")
        state = toggle_option(self._selections.get(key, {}), group_name, option_id, group.cardinality)
        self._selections[key] = state
        return dict(state)

    def add_to_cart(self, key: str) -> CartLineItem:
        """Append the category's current selections; they stay selected afterwards."""
        item = add_to_cart(self.cart, self.category(key), self._selections.get(key, {}))
        logger.info("added %s to cart lines=%d", item.category, len(self.cart))
        return item

    def reset_builder(self, key: str) -> None:
        self._selections[key] = empty_selection_state()

    def set_customer(self, name: str, phone: str) -> None:
        self.customer.name = name
        self.customer.phone = phone

    async def submit(self, client: OrderPoster) -> SubmissionResult:
        return await submit_order(client, self.cart, self.customer)


def _surviving_selections(menu: CategoryMenu, state: dict[str, Selection]) -> dict[str, Selection]:
    kept: dict[str, Selection] = {}
    for group_name, selection in state.items():
        group = menu.groups.get(group_name)
        if group is None:
            continue
        offered = {option.id for option in group.options}
        ids = selected_ids(selection) & offered
        if not ids:
            continue
        if group.cardinality is Cardinality.MULTI:
            kept[group_name] = MultiSelection(ids)
        elif len(ids) == 1:
            kept[group_name] = SingleSelection(next(iter(ids)))
        else:
            logger.debug("dropping %s selection that no longer fits a single group", group_name)
    return kept
