"""Domain models for cafe-order."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Mapping


class Cardinality(str, Enum):
    """How many options of one group may be selected."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class Option:
    """One choosable option inside a group."""

    id: str
    label: str
    price_delta: float = 0.0


@dataclass(frozen=True)
class OptionGroup:
    """A named option group with its cardinality and options in arrival order."""

    name: str
    key: str
    cardinality: Cardinality = Cardinality.SINGLE
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class CategoryMenu:
    """The build-your-own menu for one category."""

    key: str
    category: str
    base_price: float = 0.0
    groups: Mapping[str, OptionGroup] = field(default_factory=dict)


@dataclass(frozen=True)
class SingleSelection:
    """The chosen option of a single-cardinality group."""

    option_id: str


@dataclass(frozen=True)
class MultiSelection:
    """The chosen options of a multi-cardinality group."""

    option_ids: frozenset[str] = frozenset()


Selection = SingleSelection | MultiSelection
SelectionState = Mapping[str, Selection]


@dataclass(frozen=True)
class CartLineItem:
    """One finalized builder selection."""

    category: str
    base_price: float
    selections: Mapping[str, Selection]
    key: str = ""
    option_labels: Mapping[str, str] = field(default_factory=dict)


class Cart:
    """Ordered line items of the order in progress."""

    def __init__(self, items: list[CartLineItem] | None = None) -> None:
        self._items: list[CartLineItem] = list(items or [])

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items)

    def append(self, item: CartLineItem) -> None:
        self._items.append(item)

    def remove(self, index: int) -> CartLineItem:
        """Remove and return the line at ``index``."""
        if not (0 <= index < len(self._items)):
            raise IndexError(f"cart has no line {index}")
        return self._items.pop(index)

    def clear(self) -> None:
        self._items = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartLineItem]:
        return iter(tuple(self._items))


@dataclass
class CustomerInfo:
    """Customer contact details entered before submit."""

    name: str = ""
    phone: str = ""

    def clear(self) -> None:
        self.name = ""
        self.phone = ""


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of an accepted order submission."""

    order_id: str
    item_count: int
