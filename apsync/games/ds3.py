"""
Dark Souls III - Live routine for the Dark Souls III client.

Each live tick, in order:
1. Check the seed against the room and the save (and stamp new saves)
2. Check that the seed's DLC is installed
3. Apply queued death links from other players
4. Send a death link if the player just died
5. Grant the next received item
6. Convert picked-up placeholders and report their locations
7. Hint the contents of an open shop
8. Report the goal once it's reached
"""

from __future__ import annotations
import logging

from ..commands import EventFlagCommands
from ..connection import PeerDeathLink
from ..errors import DlcMissingError, GameNotReady
from ..game import GameStateProvider, ItemId
from ..persistence import PersistenceProvider
from ..session import Clock, LiveRoutine, SessionState
from ..trackers import (
    DeathLinkCoordinator,
    GoalTracker,
    HintTracker,
    ItemDeliveryTracker,
    LocationCheckTracker,
    adopt_seed,
    check_seed_conflict,
)

logger = logging.getLogger(__name__)

# Path of the Dragon is a gesture, not an inventory item
PATH_OF_THE_DRAGON = ItemId.goods(9030)
PATH_OF_THE_DRAGON_GESTURE = 29
PATH_OF_THE_DRAGON_ICON = 7039


class DarkSouls3Routine(LiveRoutine):

    def __init__(
        self,
        game: GameStateProvider,
        saves: PersistenceProvider,
        clock: Clock,
        debug_commands: bool = False,
    ):
        self.game = game
        self.saves = saves
        self.items = ItemDeliveryTracker(
            game, saves, clock,
            cosmetic_redirects={PATH_OF_THE_DRAGON: PATH_OF_THE_DRAGON_GESTURE},
        )
        self.locations = LocationCheckTracker(
            game, saves,
            cosmetic_icons={PATH_OF_THE_DRAGON_ICON: PATH_OF_THE_DRAGON_GESTURE},
        )
        self.hints = HintTracker(game)
        self.death_link = DeathLinkCoordinator(game, saves, clock)
        self.goal = GoalTracker(game)
        self.commands = EventFlagCommands(game, allow_writes=debug_commands)
        self._epoch: int | None = None

    def run(self, session: SessionState):
        save = self.saves.load()
        check_seed_conflict(
            session.connection.seed_name(),
            session.config.seed,
            save.seed if save is not None else None,
        )
        if save is not None and adopt_seed(save, session.config.seed):
            self.saves.save(save)

        self._check_dlc(session)

        if session.connection_epoch != self._epoch:
            # Hints may not have survived the old connection
            self.hints.reset()
            self._epoch = session.connection_epoch

        events = session.take_events()
        if save is None:
            return

        for event in events:
            if isinstance(event, PeerDeathLink):
                self.death_link.receive(session, event)

        self.death_link.send(session)
        self.items.deliver(session)
        self.locations.process(session)
        self.hints.process(session)
        self.goal.check(session)

    def handle_command(self, session: SessionState, command: str, arg: str | None) -> bool:
        return self.commands.handle(session, command, arg)

    def _check_dlc(self, session: SessionState):
        """
        Fail if the seed expects DLC that isn't installed.

        DLC always reads as missing until the player is past the title screen,
        so this only checks once they're in game.
        """
        slot_data = session.connection.slot_data()
        if slot_data is None or not slot_data.options.enable_dlc:
            return
        try:
            if not self.game.is_in_game():
                return
            ashes, ringed_city = self.game.dlc_installed()
        except GameNotReady:
            return

        if ashes and ringed_city:
            return
        if ashes:
            missing = "the Ringed City DLC"
        elif ringed_city:
            missing = "the Ashes of Ariandel DLC"
        else:
            missing = "both DLCs"
        raise DlcMissingError(f"DLC is enabled for this seed but your game is missing {missing}.")
