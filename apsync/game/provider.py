"""
Game State Provider - Capability interface over the running game.

The client core never touches game memory directly. Everything it reads or
writes goes through a provider handed to it by the host.

Any method may raise GameNotReady when the subsystem it needs isn't loaded
(e.g. on the main menu, or mid-load). Callers treat that as "try again next
tick", never as an error.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from .items import ItemId, ParamRow


@dataclass(frozen=True)
class InventoryEntry:
    slot: int
    item: ItemId
    quantity: int = 1


class GameStateProvider(ABC):
    """Abstract access to one running game."""

    # --- Inventory ---------------------------------------------------------

    @abstractmethod
    def read_inventory(self) -> Sequence[InventoryEntry]:
        pass

    @abstractmethod
    def grant_item(self, item: ItemId, quantity: int):
        """Give an item with the usual pickup pop-up."""
        pass

    @abstractmethod
    def give_item_directly(self, item: ItemId, quantity: int):
        """Give an item without a pop-up (the player already saw one)."""
        pass

    @abstractmethod
    def remove_item(self, item: ItemId, quantity: int):
        pass

    @abstractmethod
    def grant_gesture(self, gesture_id: int, item: ItemId):
        """Unlock a gesture, showing the pop-up for the given item."""
        pass

    @abstractmethod
    def set_gesture_acquired(self, gesture_id: int):
        """Unlock a gesture silently."""
        pass

    # --- Params ------------------------------------------------------------

    @abstractmethod
    def is_placeholder(self, item: ItemId) -> bool:
        """Whether an item stands in for an Archipelago location."""
        pass

    @abstractmethod
    def equip_param(self, item: ItemId) -> ParamRow | None:
        pass

    # --- Player ------------------------------------------------------------

    @abstractmethod
    def read_player_health(self) -> int:
        pass

    @abstractmethod
    def kill_player(self):
        pass

    @abstractmethod
    def has_unrecovered_death_marker(self) -> bool:
        """Whether the marker (bloodstain) from the previous death was never recovered."""
        pass

    # --- World -------------------------------------------------------------

    @abstractmethod
    def read_event_flag(self, flag: int) -> bool:
        pass

    @abstractmethod
    def write_event_flag(self, flag: int, value: bool):
        pass

    @abstractmethod
    def read_open_shop_contents(self) -> Sequence[ItemId] | None:
        """Items listed in the open shop menu, or None if no shop is open."""
        pass

    def is_in_game(self) -> bool:
        """Whether a save is loaded and the world exists."""
        return True

    def dlc_installed(self) -> tuple[bool, bool]:
        """Whether each DLC is installed, in release order."""
        return (True, True)
