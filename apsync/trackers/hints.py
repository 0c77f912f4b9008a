"""
Shop Hints - Hints every placeholder a shop shows the player.

Hinted items are remembered for this connection only. Restarting or
reconnecting forgets them, so hints lost in transit get another chance.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..errors import GameNotReady
from ..game import GameStateProvider, ItemId
from ..session import SessionState
from .locations import lookup_row

logger = logging.getLogger(__name__)


@dataclass
class HintTracker:
    game: GameStateProvider
    hinted: set[ItemId] = field(default_factory=set)

    def process(self, session: SessionState) -> list[int]:
        """Request hints for newly visible shop placeholders. Returns their locations."""
        added: set[ItemId] = set()
        locations: list[int] = []
        try:
            shop = self.game.read_open_shop_contents()
            if shop is None:
                return []

            for item in shop:
                if not self.game.is_placeholder(item) or item in self.hinted:
                    continue
                self.hinted.add(item)
                added.add(item)
                locations.append(lookup_row(self.game, item).location_id)
        except GameNotReady:
            # Nothing was sent, so these may be hinted again next tick
            self.hinted -= added
            return []

        if locations:
            logger.info("Hinting location IDs: %s", locations)
            session.connection.request_hints(locations)
        return locations

    def reset(self):
        self.hinted.clear()
