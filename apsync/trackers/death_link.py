"""
Death Link - Dies together with the rest of the multiworld.

Sending: when the local player's health hits zero, the death counts toward
amnesty. Once the count reaches the slot's amnesty threshold a death link goes
out and the count resets. In Lost Souls mode only deaths with an unrecovered
bloodstain count.

Receiving: a peer's death kills the local player, unless it's our own echo or
too close to the last transition.

Both directions share one grace window. Every send attempt, every accepted
death link and the session start open a new window; nothing is sent or
received until it closes. This also keeps a death we just caused from being
sent straight back out.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..connection import DeathLinkOption, DeathLinkPayload, PeerDeathLink, SlotData
from ..errors import GameNotReady
from ..game import GameStateProvider
from ..persistence import PersistenceProvider
from ..session import Clock, SessionState

logger = logging.getLogger(__name__)

DEATH_LINK_GRACE_PERIOD = 30.0


@dataclass
class DeathLinkCoordinator:
    game: GameStateProvider
    saves: PersistenceProvider
    clock: Clock
    grace_period: float = DEATH_LINK_GRACE_PERIOD

    # Monotonic time of the last send, receive, or session start
    last_transition: float = field(init=False)

    def __post_init__(self):
        self.last_transition = self.clock.monotonic()

    def allowed(self, slot_data: SlotData | None) -> bool:
        """Whether death links may be sent or received right now."""
        if slot_data is None or slot_data.options.death_link == DeathLinkOption.OFF:
            return False
        return self.clock.monotonic() - self.last_transition >= self.grace_period

    def receive(self, session: SessionState, event: PeerDeathLink) -> bool:
        """Kill the player for a peer's death. Returns whether the player was killed."""
        connection = session.connection
        if not self.allowed(connection.slot_data()):
            return False

        player = connection.player_name()
        if player is None or player == event.source:
            return False

        # Anything stamped before the last transition, or inside its window,
        # is stale or an echo of something already handled.
        since_last = event.timestamp - self.clock.wall_time_of(self.last_transition)
        if since_last < self.grace_period:
            return False

        try:
            self.game.kill_player()
        except GameNotReady:
            return False

        logger.info("Killed by death link from %s", event.source)
        self.last_transition = self.clock.monotonic()
        return True

    def send(self, session: SessionState) -> bool:
        """Count a local death and send a death link if amnesty ran out."""
        connection = session.connection
        slot_data = connection.slot_data()
        if not self.allowed(slot_data):
            return False

        save = self.saves.load()
        if save is None:
            return False
        try:
            if self.game.read_player_health() != 0:
                return False
            counts = (
                slot_data.options.death_link != DeathLinkOption.LOST_SOULS
                or self.game.has_unrecovered_death_marker()
            )
        except GameNotReady:
            return False

        sent = False
        try:
            if counts:
                save.deaths += 1
                self.saves.save(save)

                amnesty = slot_data.options.death_link_amnesty
                if save.deaths >= amnesty:
                    connection.send_death_link(DeathLinkPayload(
                        source=connection.player_name() or "",
                        timestamp=self.clock.time(),
                    ))
                    save.deaths = 0
                    self.saves.save(save)
                    sent = True
                    session.log("You have sent a death link to your teammates.")
                else:
                    remaining = amnesty - save.deaths
                    session.log(
                        "You have been granted death link amnesty. "
                        + ("1 death remains." if remaining == 1 else f"{remaining} deaths remain.")
                    )
        finally:
            # Even without a send, so a dying player isn't counted every tick
            # and isn't killed again right after respawning.
            self.last_transition = self.clock.monotonic()

        return sent
