"""
Connection Module - The Archipelago side of the client.

The transport itself lives outside this package. What lives here:
- The facade interface the core talks to
- The event types the facade produces
- Slot data models
"""

from .events import (
    ConnectionState,
    ConnectionEstablished,
    ConnectionFailure,
    DeathLinkPayload,
    ErrorKind,
    InboundEvent,
    ItemReceived,
    LogMessage,
    PeerDeathLink,
    ReceivedItem,
    RoomUpdate,
    TextColor,
    TextSpan,
    is_immediate,
)
from .facade import ConnectionFacade, ScriptedConnection
from .slot_data import DeathLinkOption, SlotData, SlotOptions

__all__ = [
    "ConnectionState",
    "ConnectionEstablished",
    "ConnectionFailure",
    "DeathLinkPayload",
    "ErrorKind",
    "InboundEvent",
    "ItemReceived",
    "LogMessage",
    "PeerDeathLink",
    "ReceivedItem",
    "RoomUpdate",
    "TextColor",
    "TextSpan",
    "is_immediate",
    "ConnectionFacade",
    "ScriptedConnection",
    "DeathLinkOption",
    "SlotData",
    "SlotOptions",
]
