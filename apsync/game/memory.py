"""
In-memory game used for tests and for running the client without a game.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from ..errors import GameNotReady
from .items import ItemId, ParamRow
from .provider import GameStateProvider, InventoryEntry


@dataclass
class InMemoryGame(GameStateProvider):
    """
    A GameStateProvider backed by plain Python containers.

    Set loaded=False to simulate the main menu: every call then raises
    GameNotReady, as the real game does before its managers exist.
    """
    loaded: bool = True
    inventory: Counter = field(default_factory=Counter)
    params: dict[ItemId, ParamRow] = field(default_factory=dict)
    placeholder_ids: set[ItemId] = field(default_factory=set)
    health: int = 100
    bloodstain: bool = False
    event_flags: dict[int, bool] = field(default_factory=dict)
    shop: list[ItemId] | None = None
    gestures: set[int] = field(default_factory=set)
    dlc: tuple[bool, bool] = (True, True)

    # Record of what the client did
    granted: list[tuple[ItemId, int]] = field(default_factory=list)
    given_directly: list[tuple[ItemId, int]] = field(default_factory=list)
    deaths: int = 0

    def add_placeholder(self, item: ItemId, row: ParamRow | None, count: int = 1):
        """Register a placeholder (with its row, if any) and put it in the inventory."""
        self.placeholder_ids.add(item)
        if row is not None:
            self.params[item] = row
        if count:
            self.inventory[item] += count

    def _require_loaded(self):
        if not self.loaded:
            raise GameNotReady("game not loaded")

    def read_inventory(self) -> Sequence[InventoryEntry]:
        self._require_loaded()
        return [
            InventoryEntry(slot=i, item=item, quantity=quantity)
            for i, (item, quantity) in enumerate(sorted(self.inventory.items()))
            if quantity > 0
        ]

    def grant_item(self, item: ItemId, quantity: int):
        self._require_loaded()
        self.inventory[item] += quantity
        self.granted.append((item, quantity))

    def give_item_directly(self, item: ItemId, quantity: int):
        self._require_loaded()
        self.inventory[item] += quantity
        self.given_directly.append((item, quantity))

    def remove_item(self, item: ItemId, quantity: int):
        self._require_loaded()
        self.inventory[item] = max(0, self.inventory[item] - quantity)
        if not self.inventory[item]:
            del self.inventory[item]

    def grant_gesture(self, gesture_id: int, item: ItemId):
        self._require_loaded()
        self.gestures.add(gesture_id)

    def set_gesture_acquired(self, gesture_id: int):
        self._require_loaded()
        self.gestures.add(gesture_id)

    def is_placeholder(self, item: ItemId) -> bool:
        return item in self.placeholder_ids

    def equip_param(self, item: ItemId) -> ParamRow | None:
        self._require_loaded()
        return self.params.get(item)

    def read_player_health(self) -> int:
        self._require_loaded()
        return self.health

    def kill_player(self):
        self._require_loaded()
        self.health = 0
        self.deaths += 1

    def has_unrecovered_death_marker(self) -> bool:
        self._require_loaded()
        return self.bloodstain

    def read_event_flag(self, flag: int) -> bool:
        self._require_loaded()
        _check_flag(flag)
        return self.event_flags.get(flag, False)

    def write_event_flag(self, flag: int, value: bool):
        self._require_loaded()
        _check_flag(flag)
        self.event_flags[flag] = value

    def read_open_shop_contents(self) -> Sequence[ItemId] | None:
        self._require_loaded()
        return None if self.shop is None else list(self.shop)

    def is_in_game(self) -> bool:
        return self.loaded

    def dlc_installed(self) -> tuple[bool, bool]:
        return self.dlc


def _check_flag(flag: int):
    if not 0 <= flag <= 0xFFFFFFFF:
        raise ValueError(f"Invalid event flag: {flag}")
