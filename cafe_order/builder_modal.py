"""Build-your-own item modal screen."""

from __future__ import annotations

import logging
from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from cafe_order.layout import bucket_options, ordered_groups, section_title
from cafe_order.models import Cardinality, Option, OptionGroup
from cafe_order.rendering import format_price, format_price_delta
from cafe_order.selection import is_selected
from cafe_order.session import OrderSession

logger = logging.getLogger(__name__)


class BuilderModal(ModalScreen[None]):
    """Centered modal to toggle options for one category and add it to the cart."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        ("space", "toggle_current", "Toggle"),
        ("a", "add_to_cart", "Add to cart"),
        ("r", "reset", "Reset"),
    ]

    CSS = """
    BuilderModal {
        align: center middle;
        background: $background 60%;
    }

    #builder-dialog {
        width: 72;
        height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #builder-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #builder-scroll {
        height: 1fr;
        overflow-y: auto;
    }

    #builder-body {
        color: white;
    }

    #builder-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    _GROUP_KIND = "group"
    _BUCKET_KIND = "bucket"
    _OPTION_KIND = "option"

    def __init__(self, session: OrderSession, category_key: str, on_change: Callable[[str], None]) -> None:
        super().__init__()
        self.session = session
        self.category_key = category_key
        self.on_change = on_change
        self.menu = session.category(category_key)
        self.lines = self._layout_lines()

    def compose(self) -> ComposeResult:
        with Container(id="builder-dialog"):
            yield Static(id="builder-title")
            with Container(id="builder-scroll"):
                yield Static(id="builder-body")
            yield Static(
                "J/K/↑/↓ move, Enter/Space toggle, A add to cart, R reset, Esc/q close",
                id="builder-help",
            )

    def on_mount(self) -> None:
        title = Text(style="bold white")
        title.append(section_title(self.menu))
        title.append(f"  base {format_price(self.menu.base_price)}", style="dim")
        self.query_one("#builder-title", Static).update(title)
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()

    def action_move_cursor(self, delta: int) -> None:
        rows = self._option_rows()
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        rows = self._option_rows()
        if not rows:
            return
        group, option = rows[self.cursor_index]
        try:
            self.session.toggle(self.category_key, group.name, option.id)
        except KeyError:
            self._close_stale()
            return
        self._refresh_content()

    def action_add_to_cart(self) -> None:
        try:
            item = self.session.add_to_cart(self.category_key)
        except KeyError:
            self._close_stale()
            return
        self.on_change(f"Added {item.category} to cart.")

    def action_reset(self) -> None:
        self.session.reset_builder(self.category_key)
        self._refresh_content()

    def _close_stale(self) -> None:
        # The menu changed under this builder.
        logger.info("closing builder for %s after a menu reload", self.category_key)
        self.dismiss()

    def _layout_lines(self) -> list[tuple[str, object]]:
        lines: list[tuple[str, object]] = []
        for _, group in ordered_groups(self.menu):
            lines.append((self._GROUP_KIND, group))
            buckets = bucket_options(self.menu.key, group)
            if buckets is None:
                lines.extend((self._OPTION_KIND, (group, option)) for option in group.options)
                continue
            for bucket in buckets:
                lines.append((self._BUCKET_KIND, bucket.name))
                lines.extend((self._OPTION_KIND, (group, option)) for option in bucket.options)
        return lines

    def _option_rows(self) -> list[tuple[OptionGroup, Option]]:
        return [value for kind, value in self.lines if kind == self._OPTION_KIND]  # type: ignore[misc]

    def _refresh_content(self) -> None:
        body = self.query_one("#builder-body", Static)
        state = self.session.selection_state(self.category_key)
        rows = self._option_rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = max(0, len(rows) - 1)

        content = Text(style="white")
        if not self.lines:
            content.append("(no options for this item)", style="dim")

        option_idx = 0
        for idx, (kind, value) in enumerate(self.lines):
            if idx > 0:
                content.append("\n")
            if kind == self._GROUP_KIND:
                group = value
                hint = "pick any" if group.cardinality is Cardinality.MULTI else "pick one"
                content.append(f"{group.name}", style="bold white")
                content.append(f" ({hint})", style="dim")
                continue
            if kind == self._BUCKET_KIND:
                content.append(f"  {value}", style="italic #dddddd")
                continue

            group, option = value
            pointer = "➤ " if option_idx == self.cursor_index else "  "
            checked = is_selected(state, group.name, option.id)
            if group.cardinality is Cardinality.MULTI:
                marker = "[x]" if checked else "[ ]"
            else:
                marker = "(•)" if checked else "( )"
            style = "bold white" if checked else "white"
            content.append(f"  {pointer}{marker} {option.label}{format_price_delta(option)}", style=style)
            option_idx += 1

        body.update(content)
