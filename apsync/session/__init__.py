"""
Session Module - The long-lived client session.

A session lives as long as the game process:
- Created when the host boots the client
- Updated once per game tick
- Holds the connection, the overlay log and the fatal error slot

Sessions are EPHEMERAL. Anything that must survive a restart belongs in the
save data instead.
"""

from .clock import Clock, SystemClock, FakeClock
from .state import SessionState, LOG_BUFFER_LIMIT
from .update_cycle import UpdateCycle, LiveRoutine, LOAD_GRACE_PERIOD

__all__ = [
    "Clock",
    "SystemClock",
    "FakeClock",
    "SessionState",
    "LOG_BUFFER_LIMIT",
    "UpdateCycle",
    "LiveRoutine",
    "LOAD_GRACE_PERIOD",
]
