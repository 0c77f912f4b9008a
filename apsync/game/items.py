"""
Item identities and equip param rows.

An item ID packs its category into the top nibble and its param row ID into
the rest. Placeholder items ("Archipelago items") have a row in the equip
params that records which location they stand for and, for items that belong
to this world, what they should turn into.

Rows are a closed set of variants sharing one set of accessors, so callers
never need to know which param table a row came from unless they care about a
category-specific field (e.g. GoodsRow.icon_id).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class ItemCategory(IntEnum):
    WEAPON = 0x0
    PROTECTOR = 0x1
    ACCESSORY = 0x2
    GOODS = 0x4


@dataclass(frozen=True, order=True)
class ItemId:
    category: ItemCategory
    param_id: int

    @classmethod
    def from_int(cls, value: int) -> ItemId:
        try:
            category = ItemCategory(value >> 28 & 0xF)
        except ValueError:
            raise ValueError(f"{value:#x} isn't a valid item ID")
        return cls(category, value & 0x0FFFFFFF)

    @classmethod
    def goods(cls, param_id: int) -> ItemId:
        return cls(ItemCategory.GOODS, param_id)

    def __int__(self) -> int:
        return (self.category << 28) | self.param_id

    def __str__(self) -> str:
        return f"{self.category.name.title()}({self.param_id})"


@dataclass(frozen=True)
class Reward:
    """A real item a placeholder converts into."""
    item: ItemId
    quantity: int = 1


@dataclass(frozen=True)
class _ParamRow:
    location_id: int
    mapped_reward: Reward | None = None
    basic_price: int = 0
    sell_value: int = 0


@dataclass(frozen=True)
class WeaponRow(_ParamRow):
    pass


@dataclass(frozen=True)
class ProtectorRow(_ParamRow):
    pass


@dataclass(frozen=True)
class AccessoryRow(_ParamRow):
    pass


@dataclass(frozen=True)
class GoodsRow(_ParamRow):
    icon_id: int = 0


ParamRow = Union[WeaponRow, ProtectorRow, AccessoryRow, GoodsRow]


def describe_row(row: ParamRow) -> str:
    """Diagnostic detail for a row with no local reward."""
    detail = f"Basic price: {row.basic_price}, sell value: {row.sell_value}"
    if isinstance(row, GoodsRow):
        detail += f", icon id: {row.icon_id}"
    return detail
