"""
Session State - Everything the update cycle carries between ticks.

LIFECYCLE:
1. Host boots -> session created from config, connection starts
2. Every tick the update cycle drains the connection into the session
3. A fatal error parks in the error slot and stays there
4. Process exits -> session is gone; only SaveData outlives it

The session holds:
- The configuration (not guaranteed to be accurate)
- The Archipelago connection
- The log shown in the overlay (bounded, oldest dropped first)
- Domain events waiting for a loaded save
- When the current save finished loading (for the load grace period)
- The sticky fatal error slot
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
import logging

from ..config import Config
from ..connection import ConnectionFacade, InboundEvent, LogMessage, TextSpan
from ..errors import ClientError, ErrorReportedElsewhere

logger = logging.getLogger(__name__)

# Overlays re-render the whole log every frame, so keep this small.
LOG_BUFFER_LIMIT = 200


@dataclass
class SessionState:
    config: Config
    connection: ConnectionFacade

    log_buffer: deque[LogMessage] = field(
        default_factory=lambda: deque(maxlen=LOG_BUFFER_LIMIT)
    )

    # Always empty unless the connection is connected
    event_queue: list[InboundEvent] = field(default_factory=list)

    # Monotonic time the current save was noticed loading. None on the main menu.
    load_time: float | None = None

    # Bumped every time the connection finishes a handshake
    connection_epoch: int = 0

    # Once set, the live phase never runs again in this process
    error: ClientError | None = None

    def log(self, *parts: str | TextSpan):
        """Write a client message to the overlay log and the logger."""
        message = LogMessage.of(*parts)
        logger.info("[APC] %s", message)
        self.log_buffer.append(message)

    def record_print(self, message: LogMessage):
        """Write a server print to the overlay log and the logger."""
        logger.info("[APS] %s", message)
        self.log_buffer.append(message)

    def take_events(self) -> list[InboundEvent]:
        """Consume all events waiting for the live phase."""
        events, self.event_queue = self.event_queue, []
        return events

    def take_error(self) -> ClientError | None:
        """
        Hand the fatal error to the caller, once.

        The slot is re-armed with a placeholder so the live phase stays
        disabled even though the original error has left the session.
        """
        error = self.error
        if error is None or isinstance(error, ErrorReportedElsewhere):
            return None
        self.error = ErrorReportedElsewhere()
        return error

    @property
    def has_fatal_error(self) -> bool:
        return self.error is not None
