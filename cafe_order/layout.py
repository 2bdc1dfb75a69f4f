"""Display ordering and bucketing of menu groups and options."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from cafe_order.constant import BUCKET_RULES, CATEGORY_SECTIONS, GROUP_ORDER_BY_CATEGORY
from cafe_order.models import CategoryMenu, Option, OptionGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BucketRule:
    """A named predicate over option ids."""

    name: str
    prefix: str | None = None
    ids: frozenset[str] = frozenset()

    def matches(self, option_id: str) -> bool:
        if self.prefix is not None:
            return option_id.startswith(self.prefix)
        return option_id in self.ids


@dataclass(frozen=True)
class OptionBucket:
    """A display sub-partition of one group's options."""

    name: str
    options: tuple[Option, ...]


def _build_rules(raw_rules: list[tuple[str, str, object]]) -> tuple[BucketRule, ...]:
    rules: list[BucketRule] = []
    for name, kind, value in raw_rules:
        if kind == "prefix":
            rules.append(BucketRule(name=name, prefix=str(value)))
        elif kind == "ids":
            rules.append(BucketRule(name=name, ids=frozenset(value)))  # type: ignore[arg-type]
        else:
            raise ValueError(f"unknown bucket predicate kind {kind!r} for {name!r}")
    return tuple(rules)


RULES_BY_GROUP: dict[tuple[str, str], tuple[BucketRule, ...]] = {
    key: _build_rules(raw_rules) for key, raw_rules in BUCKET_RULES.items()
}


def _group_rank(category_type: str, name: str) -> tuple[int, int, str]:
    preferred = GROUP_ORDER_BY_CATEGORY.get(category_type, [])
    if name in preferred:
        return (0, preferred.index(name), "")
    return (1, 0, name)


def ordered_groups(menu: CategoryMenu, category_type: str | None = None) -> list[tuple[str, OptionGroup]]:
    """Return groups in the category's preferred order, the rest alphabetically."""
    category_type = category_type or menu.key
    names = sorted(menu.groups, key=lambda name: _group_rank(category_type, name))
    return [(name, menu.groups[name]) for name in names]


def is_bucketed(category_type: str, group_name: str) -> bool:
    return (category_type, group_name) in RULES_BY_GROUP


def bucket_options(category_type: str, group: OptionGroup) -> list[OptionBucket] | None:
    """
    Partition a group's options into named buckets.

    Returns ``None`` when the (category, group) pair is not bucketed, in which
    case callers show the flat option list. Options matching no bucket are left
    out and empty buckets are omitted.
    """
    rules = RULES_BY_GROUP.get((category_type, group.name))
    if rules is None:
        return None

    members: dict[str, list[Option]] = {rule.name: [] for rule in rules}
    unmatched: list[str] = []
    for option in group.options:
        rule = next((rule for rule in rules if rule.matches(option.id)), None)
        if rule is None:
            unmatched.append(option.id)
            continue
        members[rule.name].append(option)

    if unmatched:
        logger.warning(
            "options outside every bucket of %s/%s are hidden: %s",
            category_type,
            group.name,
            ", ".join(unmatched),
        )

    return [OptionBucket(name=rule.name, options=tuple(members[rule.name])) for rule in rules if members[rule.name]]


def _section_rank(key: str) -> tuple[int, int, str]:
    sections = list(CATEGORY_SECTIONS)
    if key in sections:
        return (0, sections.index(key), "")
    return (1, 0, key)


def category_display_order(menus: Iterable[CategoryMenu]) -> list[CategoryMenu]:
    """Order category menus by builder section, unknown categories last."""
    return sorted(menus, key=lambda menu: _section_rank(menu.key))


def section_title(menu: CategoryMenu) -> str:
    return CATEGORY_SECTIONS.get(menu.key, menu.category.title())
