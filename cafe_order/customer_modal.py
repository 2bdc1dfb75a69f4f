"""Customer info entry modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from cafe_order.models import CustomerInfo

_MAX_FIELD_LENGTH = 40


class CustomerModal(ModalScreen[CustomerInfo | None]):
    """Prompt for the customer's name and phone before submit."""

    CSS = """
    CustomerModal {
        align: center middle;
        background: $background 60%;
    }

    #customer-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #customer-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    .customer-field {
        border: heavy $surface;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    .customer-field.active {
        border: heavy $secondary;
    }

    #customer-help {
        color: #dddddd;
    }
    """

    FIELDS = ("name", "phone")

    def __init__(self, customer: CustomerInfo) -> None:
        super().__init__()
        self.values = {"name": customer.name, "phone": customer.phone}
        self.active_field = "name"

    def compose(self) -> ComposeResult:
        with Container(id="customer-dialog"):
            yield Static("Customer", id="customer-title")
            yield Static(id="customer-name", classes="customer-field")
            yield Static(id="customer-phone", classes="customer-field")
            yield Static("Tab switch field. Enter confirm. Backspace delete. Esc cancel.", id="customer-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key in {"tab", "shift+tab", "up", "down"}:
            idx = self.FIELDS.index(self.active_field)
            self.active_field = self.FIELDS[(idx + 1) % len(self.FIELDS)]
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self.dismiss(CustomerInfo(name=self.values["name"], phone=self.values["phone"]))
            event.stop()
            return

        if event.key == "backspace":
            value = self.values[self.active_field]
            if value:
                self.values[self.active_field] = value[:-1]
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if len(self.values[self.active_field]) < _MAX_FIELD_LENGTH:
                self.values[self.active_field] += event.character
            self._refresh_content()
            event.stop()

    def _refresh_content(self) -> None:
        for field_name in self.FIELDS:
            widget = self.query_one(f"#customer-{field_name}", Static)
            cursor = "|" if field_name == self.active_field else ""
            widget.update(f"{field_name.title()}: {self.values[field_name]}{cursor}")
            widget.set_class(field_name == self.active_field, "active")
