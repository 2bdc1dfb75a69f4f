"""Editable static menu layout configuration."""

from __future__ import annotations

# Builder sections in display order, with their titles.
CATEGORY_SECTIONS: dict[str, str] = {
    "sandwich": "Sandwich",
    "soup": "Soup",
    "salad": "Salad",
    "drink": "Drink",
    "sweet": "Sweet Treat",
}

GROUP_ORDER_BY_CATEGORY: dict[str, list[str]] = {
    "sandwich": ["Bread", "Meat", "Cheese", "Veggies", "Spreads", "Extras"],
    "soup": ["Size", "Broth", "Protein", "Veggies", "Toppings"],
    "salad": ["Greens", "Protein", "Cheeses", "Toppings", "Dressing"],
    "drink": ["Base", "Size", "Milk", "Flavors", "Sweetener", "Extras"],
    "sweet": ["Treats", "Extras"],
}

# Each rule is (bucket name, predicate kind, predicate value).
# "prefix" matches option ids starting with the value, "ids" matches membership.
BUCKET_RULES: dict[tuple[str, str], list[tuple[str, str, object]]] = {
    ("sweet", "Treats"): [
        ("Cookies", "prefix", "cookie-"),
        ("Cakes", "prefix", "cake-"),
        ("Cinnamon Rolls", "prefix", "cinnamonroll"),
        ("Cheesecake", "prefix", "cheesecake"),
        ("Tarts", "prefix", "tart-"),
        ("Muffins", "prefix", "muffin-"),
    ],
    ("drink", "Flavors"): [
        (
            "Fruit",
            "ids",
            {
                "strawberry",
                "raspberry",
                "blueberry",
                "blackberry",
                "cherry",
                "peach",
                "mango",
                "pineapple",
                "passionfruit",
                "coconut",
                "watermelon",
                "pomegranate",
                "lemon",
                "lime",
                "orange",
            },
        ),
        (
            "Herb & Flower",
            "ids",
            {"lavender", "rose", "hibiscus", "mint", "basil", "elderflower", "jasmine"},
        ),
        ("Other", "ids", {"vanilla", "caramel", "hazelnut", "honey", "ginger"}),
    ],
    ("salad", "Cheeses"): [
        ("Crumbled/Soft", "ids", {"feta", "goat", "bleu", "burrata"}),
        ("Shredded/Hard", "ids", {"parmesan", "cheddar", "mozzarella"}),
    ],
}

# Group "type" values that mean the customer may pick several options.
MULTI_CARDINALITY_TYPES: set[str] = {"multi", "multiple", "many", "checkbox"}
