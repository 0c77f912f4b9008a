"""
Location Checks - Turns placeholder items into real items and reports them.

Picking up a randomized location gives the player a placeholder item. Each
tick the tracker:
1. Finds placeholders in the inventory
2. Records their locations in the save
3. Swaps in the real item (if it belongs to this world)
4. Removes the placeholder
5. Reports the save's locations to the server if any are new

The count of reported locations is NOT saved. It starts at 0 on every boot so
the whole set is re-reported, in case a report was lost before the restart.
The server treats repeated checks as no-ops.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..errors import DataIntegrityError, GameNotReady
from ..game import GameStateProvider, GoodsRow, ItemId, ParamRow, describe_row
from ..persistence import PersistenceProvider, SaveData
from ..session import SessionState

logger = logging.getLogger(__name__)


def lookup_row(game: GameStateProvider, item: ItemId) -> ParamRow:
    """Find the param row for a placeholder. A missing row is a data error."""
    row = game.equip_param(item)
    if row is None:
        raise DataIntegrityError(f"No param row defined for Archipelago item {item}")
    return row


@dataclass
class LocationCheckTracker:
    game: GameStateProvider
    saves: PersistenceProvider

    # Goods icon -> gesture for placeholders that unlock a gesture
    cosmetic_icons: dict[int, int] = field(default_factory=dict)

    # Locations reported in this process
    reported: int = 0

    def process(self, session: SessionState):
        save = self.saves.load()
        if save is None:
            return

        try:
            self._convert_placeholders(save)
        except GameNotReady:
            return

        self.report(session, save)

    def _convert_placeholders(self, save: SaveData):
        before = len(save.locations)
        try:
            # Snapshot first; removing items reshuffles the inventory.
            entries = list(self.game.read_inventory())
            for entry in entries:
                if not self.game.is_placeholder(entry.item):
                    continue

                logger.info("Inventory contains Archipelago item %s", entry.item)
                row = lookup_row(self.game, entry.item)
                logger.info("  Archipelago location: %d", row.location_id)
                save.locations.add(row.location_id)

                gesture = (
                    self.cosmetic_icons.get(row.icon_id)
                    if isinstance(row, GoodsRow) else None
                )
                if gesture is not None:
                    # The player already saw a pop-up for the placeholder.
                    logger.info("  Placeholder unlocks gesture %d", gesture)
                    self.game.set_gesture_acquired(gesture)
                elif row.mapped_reward is not None:
                    reward = row.mapped_reward
                    logger.info("  Converting to %dx %s", reward.quantity, reward.item)
                    self.game.give_item_directly(reward.item, reward.quantity)
                else:
                    # Presumably a foreign item, but log enough to chase a bug.
                    logger.info("  Item has no local item data. %s", describe_row(row))

                logger.info("  Removing from inventory")
                self.game.remove_item(entry.item, 1)
        finally:
            if len(save.locations) != before:
                self.saves.save(save)

    def report(self, session: SessionState, save: SaveData):
        """Send the full location set if it grew since the last report."""
        if len(save.locations) <= self.reported:
            return

        session.connection.report_checked(set(save.locations))
        self.reported = len(save.locations)
