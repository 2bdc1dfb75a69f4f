"""Normalize flat menu records into per-category menu models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from cafe_order.constant import MULTI_CARDINALITY_TYPES
from cafe_order.errors import MalformedRecord
from cafe_order.models import Cardinality, CategoryMenu, Option, OptionGroup

logger = logging.getLogger(__name__)

_PARTITION_PREFIX = "ITEM#"
_META_ROLE = "META"
_GROUP_ROLE = "GROUP"
_OPTION_ROLE = "OPTION"


@dataclass(frozen=True)
class MenuRecord:
    """A parsed record: its category, role and sort-key identifiers."""

    category: str
    role: str
    group_key: str | None
    option_id: str | None
    fields: Mapping[str, Any]


@dataclass
class _GroupDraft:
    key: str
    name: str | None = None
    cardinality: Cardinality | None = None
    options: dict[str, Option] = field(default_factory=dict)

    def build(self) -> OptionGroup:
        return OptionGroup(
            name=self.name or self.key,
            key=self.key,
            cardinality=self.cardinality or Cardinality.SINGLE,
            options=tuple(self.options.values()),
        )


@dataclass
class _CategoryDraft:
    key: str
    label: str | None = None
    base_price: float = 0.0
    groups: dict[str, _GroupDraft] = field(default_factory=dict)

    def group(self, group_key: str) -> _GroupDraft:
        draft = self.groups.get(group_key)
        if draft is None:
            draft = _GroupDraft(key=group_key)
            self.groups[group_key] = draft
        return draft

    def build(self) -> CategoryMenu:
        groups: dict[str, OptionGroup] = {}
        for group_key in sorted(self.groups):
            group = self.groups[group_key].build()
            existing = groups.get(group.name)
            if existing is not None:
                # Two keys share one display name; a repeated option id keeps its first position.
                logger.debug("merging group keys %r and %r under name %r", existing.key, group_key, group.name)
                options = {option.id: option for option in existing.options}
                options.update((option.id, option) for option in group.options)
                multi = Cardinality.MULTI in (existing.cardinality, group.cardinality)
                group = OptionGroup(
                    name=group.name,
                    key=existing.key,
                    cardinality=Cardinality.MULTI if multi else Cardinality.SINGLE,
                    options=tuple(options.values()),
                )
            groups[group.name] = group
        return CategoryMenu(
            key=self.key,
            category=self.label or self.key,
            base_price=self.base_price,
            groups=MappingProxyType(groups),
        )


def to_price(value: Any) -> float:
    """Coerce a loosely typed price field to a float, defaulting to 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(Decimal(value.strip()))
        except InvalidOperation:
            return 0.0
    return 0.0


def parse_cardinality(fields: Mapping[str, Any]) -> Cardinality:
    raw = fields.get("type", fields.get("cardinality"))
    if isinstance(raw, str) and raw.strip().lower() in MULTI_CARDINALITY_TYPES:
        return Cardinality.MULTI
    return Cardinality.SINGLE


def parse_record(row: Any) -> MenuRecord:
    """Split a raw record into category, role and identifiers."""
    if not isinstance(row, Mapping):
        raise MalformedRecord(f"record is not a mapping: {type(row).__name__}")

    pk = row.get("PK")
    sk = row.get("SK")
    if not pk or not sk:
        raise MalformedRecord("record is missing PK or SK")

    pk = str(pk)
    sk = str(sk)
    if not pk.startswith(_PARTITION_PREFIX):
        raise MalformedRecord(f"unexpected partition key {pk!r}")
    category = pk[len(_PARTITION_PREFIX) :].split("#", 1)[0]
    if not category:
        raise MalformedRecord(f"partition key {pk!r} names no category")

    parts = sk.split("#")
    role = parts[0]
    if role == _META_ROLE:
        return MenuRecord(category=category, role=role, group_key=None, option_id=None, fields=row)

    if role == _GROUP_ROLE:
        if len(parts) < 2 or not parts[1]:
            raise MalformedRecord(f"group sort key {sk!r} names no group")
        return MenuRecord(category=category, role=role, group_key=parts[1], option_id=None, fields=row)

    if role == _OPTION_ROLE:
        if len(parts) < 2 or not parts[1]:
            raise MalformedRecord(f"option sort key {sk!r} names no group")
        option_id = row.get("id") or "#".join(parts[2:])
        if not option_id:
            raise MalformedRecord(f"option record {sk!r} has no id")
        return MenuRecord(category=category, role=role, group_key=parts[1], option_id=str(option_id), fields=row)

    raise MalformedRecord(f"unknown sort key role {role!r}")


def _apply_record(draft: _CategoryDraft, record: MenuRecord) -> None:
    fields = record.fields
    if record.role == _META_ROLE:
        draft.base_price = to_price(fields.get("basePrice"))
        label = fields.get("category")
        draft.label = str(label) if label else None
        return

    assert record.group_key is not None
    group = draft.group(record.group_key)

    if record.role == _GROUP_ROLE:
        name = fields.get("group")
        if name:
            group.name = str(name)
        if "type" in fields or "cardinality" in fields:
            # Once any row marks the group multi it stays multi.
            if group.cardinality is not Cardinality.MULTI:
                group.cardinality = parse_cardinality(fields)
        return

    assert record.option_id is not None
    price = fields.get("priceDelta")
    if price is None:
        price = fields.get("price")
    label = fields.get("label")
    group.options[record.option_id] = Option(
        id=record.option_id,
        label=str(label) if label else record.option_id,
        price_delta=to_price(price),
    )


def normalize_menu(records: Iterable[Any]) -> dict[str, CategoryMenu]:
    """
    Build category menus from an unordered stream of attribute records.

    Groups are created on first reference by either a GROUP or an OPTION row,
    so the outcome does not depend on which of the two arrives first. Options
    whose group never gets a GROUP row land in a single-cardinality group
    named by its key. Malformed records are skipped.
    """
    drafts: dict[str, _CategoryDraft] = {}
    skipped = 0

    for row in records:
        try:
            record = parse_record(row)
        except MalformedRecord as exc:
            skipped += 1
            logger.debug("skipping menu record: %s", exc)
            continue

        draft = drafts.get(record.category)
        if draft is None:
            draft = _CategoryDraft(key=record.category)
            drafts[record.category] = draft
        _apply_record(draft, record)

    if skipped:
        logger.info("skipped %d malformed menu record(s)", skipped)

    return {key: drafts[key].build() for key in sorted(drafts)}
