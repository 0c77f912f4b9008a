"""
Trackers - The sub-protocols run by the live phase.

Each tracker owns one kind of reconciliation between the game and the server
and is safe to run every tick: repeating a tick with the same inputs never
repeats a side effect.
"""

from .items import ItemDeliveryTracker, GRANT_INTERVAL
from .locations import LocationCheckTracker, lookup_row
from .hints import HintTracker
from .death_link import DeathLinkCoordinator, DEATH_LINK_GRACE_PERIOD
from .goal import GoalTracker
from .identity import check_seed_conflict, adopt_seed

__all__ = [
    "ItemDeliveryTracker",
    "GRANT_INTERVAL",
    "LocationCheckTracker",
    "lookup_row",
    "HintTracker",
    "DeathLinkCoordinator",
    "DEATH_LINK_GRACE_PERIOD",
    "GoalTracker",
    "check_seed_conflict",
    "adopt_seed",
]
