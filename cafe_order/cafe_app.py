"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from cafe_order.api import CafeApiClient
from cafe_order.builder_modal import BuilderModal
from cafe_order.customer_modal import CustomerModal
from cafe_order.errors import CafeOrderError, NetworkFailure, ValidationFailure
from cafe_order.layout import category_display_order, section_title
from cafe_order.models import CategoryMenu, CustomerInfo
from cafe_order.rendering import format_category_label, format_line_item, format_selection_tags
from cafe_order.session import OrderSession
from cafe_order.submission import validate_order

logger = logging.getLogger(__name__)


class CafeOrderApp(App):
    """A Textual app for building café items and submitting the order."""

    TITLE = "Café Tuscaney"
    SUB_TITLE = "Always Made With Love. Always Made Your Way"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #cart-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #menu-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: auto;
    }

    #categories {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_categories(1)", "Next item"),
        ("up", "cycle_categories(-1)", "Previous item"),
        ("down", "cycle_categories(1)", "Next item"),
        ("enter", "open_builder", "Build item"),
        Binding("ctrl+s", "submit_order", "Place order", priority=True),
        Binding("ctrl+r", "reload_menu", "Reload menu", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: OrderSession | None = None, client: CafeApiClient | None = None) -> None:
        super().__init__()
        self.session = session if session is not None else OrderSession()
        self._owns_client = client is None
        self.client = client if client is not None else CafeApiClient()
        self.system_status = "Loading menu…"
        self.last_order_message = ""
        self.menu_loaded = False
        self.submitting = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title", id="cart-title")
                yield Static("(cart is empty)", id="cart-list")
            with Vertical(id="menu-pane"):
                yield Static(id="status-bar")
                yield Static(id="categories")

    def on_mount(self) -> None:
        self._refresh_all()
        self.action_reload_menu()

    async def on_unmount(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    def on_key(self, event: Key) -> None:
        if self._modal_active():
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        if key == "j":
            self._move_cart_selection(1)
        elif key == "k":
            self._move_cart_selection(-1)
        elif key == "d":
            self._delete_selected_line()
        elif key == "c":
            self.push_screen(CustomerModal(self.session.customer), self._apply_customer)
        else:
            return
        event.stop()

    def action_cycle_categories(self, delta: int) -> None:
        if self._modal_active():
            return
        categories = self._categories()
        if not categories:
            self.selected_index = 0
            return
        self.selected_index = (self.selected_index + delta) % len(categories)
        self._refresh_categories()

    def action_open_builder(self) -> None:
        if self._modal_active():
            return
        categories = self._categories()
        if not categories:
            return
        menu = categories[min(self.selected_index, len(categories) - 1)]
        self.push_screen(
            BuilderModal(self.session, menu.key, on_change=self._on_item_added),
            self._on_builder_closed,
        )

    def action_reload_menu(self) -> None:
        if self._modal_active():
            self.system_status = "Close the open dialog before reloading the menu."
            self._refresh_status()
            return
        self.system_status = "Loading menu…"
        self._refresh_status()
        self.run_worker(self._load_menu(), group="menu")

    def action_submit_order(self) -> None:
        if self._modal_active():
            return
        if self.submitting:
            self.system_status = "An order is already being placed."
            self._refresh_status()
            return
        try:
            self._validate_before_submit()
        except ValidationFailure as exc:
            self.system_status = str(exc)
            self._refresh_status()
            logger.info("submit blocked: %s", exc)
            return

        self.submitting = True
        self.system_status = "Placing order…"
        self._refresh_status()
        self.run_worker(self._submit_order(), group="submit")

    async def _load_menu(self) -> None:
        try:
            menu = await self.session.load_menu(self.client)
        except NetworkFailure as exc:
            self.system_status = f"Menu failed to load: {exc}"
            logger.warning("menu load failed: %s", exc)
        else:
            self.menu_loaded = True
            self.system_status = f"Menu ready ({len(menu)} items)"
        self._refresh_all()

    async def _submit_order(self) -> None:
        try:
            result = await self.session.submit(self.client)
        except CafeOrderError as exc:
            self.last_order_message = "There was a problem placing your order."
            self.system_status = f"Order failed. Please try again. ({exc})"
            logger.warning("submit failed: %s", exc)
        else:
            self.last_order_message = f"Last order ID: {result.order_id}"
            self.system_status = "Order placed successfully!"
            self.cart_selected_index = None
        finally:
            self.submitting = False
        self._refresh_all()

    def _validate_before_submit(self) -> None:
        validate_order(self.session.cart, self.session.customer)

    def _apply_customer(self, customer: CustomerInfo | None) -> None:
        if customer is None:
            return
        self.session.set_customer(customer.name, customer.phone)
        self._refresh_status()

    def _on_item_added(self, message: str) -> None:
        self.system_status = message
        self.cart_selected_index = len(self.session.cart) - 1
        self._refresh_all()

    def _on_builder_closed(self, _result: None) -> None:
        self._refresh_all()

    def _modal_active(self) -> bool:
        return isinstance(self.screen, (BuilderModal, CustomerModal))

    def _categories(self) -> list[CategoryMenu]:
        return category_display_order(self.session.menu.values())

    def _move_cart_selection(self, delta: int) -> None:
        count = len(self.session.cart)
        if not count:
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else count - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % count
        self._refresh_cart()

    def _delete_selected_line(self) -> None:
        idx = self.cart_selected_index
        if idx is None or not (0 <= idx < len(self.session.cart)):
            return

        self.session.cart.remove(idx)
        if not len(self.session.cart):
            self.cart_selected_index = None
        else:
            self.cart_selected_index = min(idx, len(self.session.cart) - 1)
        self._refresh_cart()

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_status()
        self._refresh_categories()

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
            title_widget = self.query_one("#cart-title", Static)
        except NoMatches:
            return

        items = self.session.cart.items
        title_widget.update(f"Cart: {len(items)} item(s)")
        if not items:
            self.cart_selected_index = None
            cart_widget.update("(cart is empty)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(items):
            self.cart_selected_index = len(items) - 1

        lines = Text()
        for idx, item in enumerate(items):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            lines.append(pointer)
            lines.append(f"{idx + 1}. ")
            lines.append_text(format_line_item(item))
            if item.selections:
                lines.append("\n      ")
                lines.append_text(format_selection_tags(item))

        cart_widget.update(lines)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return

        customer = self.session.customer
        text = Text()
        text.append("Enter build, C customer, Ctrl+S place order, Ctrl+R reload\n", style="dim")
        if customer.name or customer.phone:
            text.append(f"Customer: {customer.name or '-'} / {customer.phone or '-'}\n")
        else:
            text.append("Customer: (press C to enter)\n", style="dim")
        if self.last_order_message:
            text.append(f"{self.last_order_message}\n")
        text.append(self.system_status or "Ready")
        bar.update(text)

    def _refresh_categories(self) -> None:
        try:
            widget = self.query_one("#categories", Static)
        except NoMatches:
            return

        categories = self._categories()
        if not categories:
            widget.update("No menu items" if self.menu_loaded else "")
            return

        if self.selected_index >= len(categories):
            self.selected_index = 0

        lines = Text()
        for idx, menu in enumerate(categories):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_category_label(menu, section_title(menu)))
        widget.update(lines)
