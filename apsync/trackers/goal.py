"""
Goal - Tells the server when the player has won.

The sent flag lives in memory only, so the goal is re-sent on every boot in
case a previous report was lost.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..errors import GameNotReady
from ..game import GameStateProvider
from ..session import SessionState

logger = logging.getLogger(__name__)


@dataclass
class GoalTracker:
    game: GameStateProvider
    sent: bool = False

    def check(self, session: SessionState) -> bool:
        """Report completion if every goal flag is set. Returns whether it was sent now."""
        if self.sent:
            return False

        slot_data = session.connection.slot_data()
        if slot_data is None:
            return False

        try:
            complete = all(self.game.read_event_flag(flag) for flag in slot_data.goal)
        except GameNotReady:
            return False
        if not complete:
            return False

        session.connection.set_completion_status()
        self.sent = True
        logger.info("Goal complete, notified server")
        return True
