"""
Inbound Events - What the connection hands to the update cycle.

Events are classified into two groups:
- Immediate: connection bookkeeping (established, errors, log text). These are
  handled every tick, even on the main menu or after a fatal error.
- Deferred: domain events (items, death links, room updates). These are only
  queued while connected and are processed by the live phase.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ConnectionState(Enum):
    """State of the Archipelago connection."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class TextColor(Enum):
    """Colors used for log text in the overlay."""
    DEFAULT = "default"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    MAGENTA = "magenta"
    CYAN = "cyan"


@dataclass(frozen=True)
class TextSpan:
    """A run of log text with a single color."""
    text: str
    color: TextColor = TextColor.DEFAULT

    def __str__(self) -> str:
        return self.text


class ErrorKind(Enum):
    """Coarse cause of a connection error."""
    REFUSED = "refused"
    TIMED_OUT = "timed_out"
    PROTOCOL = "protocol"
    OTHER = "other"


@dataclass(frozen=True)
class ReceivedItem:
    """
    An item the server says this slot has received.

    index is the server-assigned sequence number; it never changes for a given
    item, so it's safe to persist as a delivery cursor.
    """
    index: int
    item_id: int
    item_name: str = ""
    location_name: str = ""


# =============================================================================
# Immediate events
# =============================================================================

@dataclass(frozen=True)
class ConnectionEstablished:
    """The connection finished its handshake."""


@dataclass(frozen=True)
class ConnectionFailure:
    """The connection reported an error."""
    message: str
    fatal: bool = False
    kind: ErrorKind = ErrorKind.OTHER


@dataclass(frozen=True)
class LogMessage:
    """A print from the server (chat, item sends, hints...)."""
    parts: tuple[TextSpan, ...] = ()

    @classmethod
    def of(cls, *parts: str | TextSpan) -> LogMessage:
        return cls(tuple(p if isinstance(p, TextSpan) else TextSpan(p) for p in parts))

    @property
    def text(self) -> str:
        return "".join(p.text for p in self.parts)

    def __str__(self) -> str:
        return self.text


# =============================================================================
# Deferred events
# =============================================================================

@dataclass(frozen=True)
class ItemReceived:
    """A new item was added to the received list."""
    item: ReceivedItem


@dataclass(frozen=True)
class PeerDeathLink:
    """Another player in the multiworld died."""
    source: str
    timestamp: float  # Seconds since the epoch, as sent by the peer
    cause: str | None = None


@dataclass(frozen=True)
class RoomUpdate:
    """Room state changed (hint points, checked locations, ...)."""
    data: dict[str, Any] = field(default_factory=dict)


InboundEvent = Union[
    ConnectionEstablished,
    ConnectionFailure,
    LogMessage,
    ItemReceived,
    PeerDeathLink,
    RoomUpdate,
]

IMMEDIATE_EVENTS = (ConnectionEstablished, ConnectionFailure, LogMessage)


def is_immediate(event: InboundEvent) -> bool:
    """Whether an event is handled even when no save is loaded."""
    return isinstance(event, IMMEDIATE_EVENTS)


@dataclass(frozen=True)
class DeathLinkPayload:
    """What we send when the local player dies."""
    source: str = ""
    timestamp: float = 0.0
    cause: str | None = None
