"""
Sekiro - Live routine for the Sekiro client.

Sekiro support is early: it grants received items and reports picked-up
locations. No death link, hints or goal yet.
"""

from __future__ import annotations

from ..game import GameStateProvider
from ..persistence import PersistenceProvider
from ..session import Clock, LiveRoutine, SessionState
from ..trackers import ItemDeliveryTracker, LocationCheckTracker, adopt_seed, check_seed_conflict


class SekiroRoutine(LiveRoutine):

    def __init__(self, game: GameStateProvider, saves: PersistenceProvider, clock: Clock):
        self.saves = saves
        self.items = ItemDeliveryTracker(game, saves, clock)
        self.locations = LocationCheckTracker(game, saves)

    def run(self, session: SessionState):
        # Sekiro has no use for domain events yet
        session.take_events()

        save = self.saves.load()
        check_seed_conflict(
            session.connection.seed_name(),
            session.config.seed,
            save.seed if save is not None else None,
        )
        if save is None:
            return
        if adopt_seed(save, session.config.seed):
            self.saves.save(save)

        self.items.deliver(session)
        self.locations.process(session)
