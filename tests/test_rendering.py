from __future__ import annotations

from cafe_order.cart import add_to_cart
from cafe_order.menu import normalize_menu
from cafe_order.models import Cart, CartLineItem, MultiSelection, SingleSelection
from cafe_order.rendering import badge_style, format_line_item, format_selection_tags

SANDWICHES = normalize_menu(
    [
        {"PK": "ITEM#sandwich", "SK": "META#", "category": "Sandwiches", "basePrice": 8.5},
        {"PK": "ITEM#sandwich", "SK": "GROUP#Bread", "type": "single"},
        {"PK": "ITEM#sandwich", "SK": "GROUP#Veggies", "type": "multi"},
        {"PK": "ITEM#sandwich", "SK": "OPTION#Bread#wheat", "id": "wheat", "label": "Wheat"},
        {"PK": "ITEM#sandwich", "SK": "OPTION#Veggies#onion", "id": "onion", "label": "Red Onion"},
        {"PK": "ITEM#sandwich", "SK": "OPTION#Veggies#tomato", "id": "tomato", "label": "Tomato"},
    ]
)["sandwich"]


def _line():
    state = {
        "Bread": SingleSelection("wheat"),
        "Veggies": MultiSelection(frozenset({"onion", "tomato"})),
    }
    return add_to_cart(Cart(), SANDWICHES, state)


def test_line_badge_uses_category_key_not_label():
    line = format_line_item(_line())

    assert line.plain.startswith(" S  Sandwiches")
    assert line.spans[0].style == badge_style("sandwich")
    assert badge_style("sandwich") != badge_style("Sandwiches")


def test_selection_tags_show_option_labels():
    tags = format_selection_tags(_line())

    assert tags.plain == "[Bread: Wheat] [Veggies: Red Onion, Tomato]"


def test_selection_tags_fall_back_to_ids_without_labels():
    item = CartLineItem(category="soup", base_price=4.5, selections={"Broth": SingleSelection("chicken")})

    assert format_selection_tags(item).plain == "[Broth: chicken]"
    assert format_line_item(item).spans[0].style == badge_style("soup")
