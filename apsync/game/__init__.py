"""
Game Module - The client core's window into the running game.

Architecture:
    Game memory -> GameStateProvider -> trackers

Reading and writing memory is the host's job. The core sees items, params,
the player and event flags only through the provider interface.
"""

from .items import (
    ItemCategory,
    ItemId,
    Reward,
    ParamRow,
    WeaponRow,
    ProtectorRow,
    AccessoryRow,
    GoodsRow,
    describe_row,
)
from .provider import GameStateProvider, InventoryEntry
from .memory import InMemoryGame

__all__ = [
    "ItemCategory",
    "ItemId",
    "Reward",
    "ParamRow",
    "WeaponRow",
    "ProtectorRow",
    "AccessoryRow",
    "GoodsRow",
    "describe_row",
    "GameStateProvider",
    "InventoryEntry",
    "InMemoryGame",
]
