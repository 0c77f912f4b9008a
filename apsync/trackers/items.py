"""
Item Delivery - Hands received items to the player, one at a time.

Every item the server sends has a fixed sequence index. The save remembers how
many items have been granted (the delivery cursor), so after a restart the
client resumes exactly where it left off and never grants an index twice.

Grants are spaced at least a second apart so the pickup pop-ups stay readable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..connection import ReceivedItem
from ..errors import DataIntegrityError, GameNotReady
from ..game import GameStateProvider, ItemId
from ..persistence import PersistenceProvider
from ..session import Clock, SessionState

logger = logging.getLogger(__name__)

# Minimum seconds between two grants
GRANT_INTERVAL = 1.0


@dataclass
class ItemDeliveryTracker:
    game: GameStateProvider
    saves: PersistenceProvider
    clock: Clock

    # Items that are granted as gestures instead of inventory items
    cosmetic_redirects: dict[ItemId, int] = field(default_factory=dict)
    interval: float = GRANT_INTERVAL

    last_grant: float = field(init=False)

    def __post_init__(self):
        self.last_grant = self.clock.monotonic()

    def deliver(self, session: SessionState) -> ReceivedItem | None:
        """
        Grant the next undelivered item, if one is due.

        Returns the item that was granted, or None.
        Raises DataIntegrityError if the slot data can't map the item.
        """
        connection = session.connection
        slot_data = connection.slot_data()
        save = self.saves.load()
        if slot_data is None or save is None:
            return None

        now = self.clock.monotonic()
        if now - self.last_grant < self.interval:
            return None

        pending = [
            item for item in connection.received_items()
            if item.index >= save.items_granted
        ]
        if not pending:
            return None
        item = min(pending, key=lambda i: i.index)

        local_id = slot_data.local_item(item.item_id)
        if local_id is None:
            raise DataIntegrityError(
                f"Archipelago item {item.item_name or item.item_id} (AP ID "
                f"{item.item_id}) has no local item ID in slot data. Make sure this "
                f"client matches the randomizer that generated the seed."
            )
        try:
            local_item = ItemId.from_int(local_id)
        except ValueError as e:
            raise DataIntegrityError(f"Slot data maps AP ID {item.item_id} to {e}")
        quantity = slot_data.quantity(item.item_id)

        logger.info(
            "Granting %s (AP ID %d, local ID %s from %s)",
            item.item_name, item.item_id, local_item, item.location_name,
        )

        try:
            if local_item in self.cosmetic_redirects:
                self.game.grant_gesture(self.cosmetic_redirects[local_item], local_item)
            else:
                self.game.grant_item(local_item, quantity)
        except GameNotReady:
            return None

        save.items_granted += 1
        self.saves.save(save)
        self.last_grant = now
        return item
