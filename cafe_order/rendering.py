"""Rendering helpers for categories, prices and cart lines."""

from __future__ import annotations

from rich.text import Text

from cafe_order.models import CartLineItem, CategoryMenu, Option
from cafe_order.selection import selected_ids

_BADGE_STYLES: dict[str, str] = {
    "sandwich": "bold #0b1f0f on #5fbf72",
    "soup": "bold #ffffff on #b23a48",
    "salad": "bold #0b1f0f on #9fd356",
    "drink": "bold #ffffff on #2f6db5",
    "sweet": "bold #ffffff on #9b4dca",
}
_DEFAULT_BADGE_STYLE = "bold #0b1f0f on #d9d9d9"


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    return _BADGE_STYLES.get(category.lower(), _DEFAULT_BADGE_STYLE)


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def format_price_delta(option: Option) -> str:
    if not option.price_delta:
        return ""
    sign = "+" if option.price_delta > 0 else "-"
    return f" {sign}{format_price(abs(option.price_delta))}"


def format_category_label(menu: CategoryMenu, title: str) -> Text:
    text = Text()
    text.append(f" {menu.key[:1].upper()} ", style=badge_style(menu.key))
    text.append(f" {title}")
    text.append(f"  {format_price(menu.base_price)}", style="dim")
    text.append(f"  ({len(menu.groups)} groups)", style="dim")
    return text


def format_selection_tags(item: CartLineItem) -> Text:
    """Render selected options as compact tags, grouped by option group."""
    text = Text()
    for idx, (group_name, selection) in enumerate(item.selections.items()):
        if idx > 0:
            text.append(" ")
        labels = sorted(item.option_labels.get(option_id, option_id) for option_id in selected_ids(selection))
        readable = ", ".join(labels)
        text.append(f"[{group_name}: {readable}]", style="white")
    return text


def format_line_item(item: CartLineItem) -> Text:
    """Render a cart line with a colored category tag."""
    text = Text()
    label = item.category[:1].upper() + item.category[1:] if item.category else "Item"
    text.append(f" {label[:1]} ", style=badge_style(item.key or item.category))
    text.append(f" {label}")
    text.append(f"  {format_price(item.base_price)}", style="dim")
    return text
