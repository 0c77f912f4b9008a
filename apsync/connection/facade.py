"""
Connection Facade - The client core's view of the Archipelago connection.

The facade owns the websocket, its retry/backoff and the protocol encoding.
The core only ever:
- drains already-arrived events with poll() (never blocks)
- reads connection-scoped data (seed, player name, slot data, received items)
- issues fire-and-forget requests, which raise TransportError on failure

Implementations:
- ScriptedConnection: in-memory facade for tests and offline development
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..errors import TransportError
from .events import (
    ConnectionEstablished,
    ConnectionFailure,
    ConnectionState,
    DeathLinkPayload,
    ErrorKind,
    InboundEvent,
    ItemReceived,
    LogMessage,
    PeerDeathLink,
    ReceivedItem,
)
from .slot_data import SlotData


class ConnectionFacade(ABC):
    """Abstract interface to an Archipelago connection."""

    @abstractmethod
    def poll(self) -> list[InboundEvent]:
        """Return every event that arrived since the last poll, in order."""
        pass

    @abstractmethod
    def state(self) -> ConnectionState:
        pass

    @abstractmethod
    def error(self) -> str | None:
        """The most recent connection error, if any."""
        pass

    @abstractmethod
    def seed_name(self) -> str | None:
        """The room's seed name. None unless connected."""
        pass

    @abstractmethod
    def player_name(self) -> str | None:
        """This slot's player name. None unless connected."""
        pass

    @abstractmethod
    def slot_data(self) -> SlotData | None:
        pass

    @abstractmethod
    def received_items(self) -> Sequence[ReceivedItem]:
        """Every item this slot has received, in arrival order."""
        pass

    @abstractmethod
    def report_checked(self, location_ids: Iterable[int]):
        pass

    @abstractmethod
    def request_hints(self, location_ids: Sequence[int]):
        pass

    @abstractmethod
    def send_death_link(self, payload: DeathLinkPayload):
        pass

    @abstractmethod
    def set_completion_status(self):
        pass

    def is_connected(self) -> bool:
        return self.state() == ConnectionState.CONNECTED

    def is_disconnected(self) -> bool:
        return self.state() == ConnectionState.DISCONNECTED


@dataclass
class ScriptedConnection(ConnectionFacade):
    """
    In-memory connection driven by the test or tool that owns it.

    State transitions requested with connect()/drop() take effect when the
    next poll() hands out the matching event, the same order a real socket
    would observe them in. Every request is recorded for inspection.
    """
    seed: str = "seed"
    player: str = "Player"
    slot: SlotData = field(default_factory=SlotData)

    _state: ConnectionState = ConnectionState.CONNECTING
    _events: list[InboundEvent] = field(default_factory=list)
    _next_state: ConnectionState | None = None
    _error: str | None = None
    _items: list[ReceivedItem] = field(default_factory=list)
    _failures: dict[str, TransportError] = field(default_factory=dict)

    # Requests made by the client
    checked: list[set[int]] = field(default_factory=list)
    hints: list[list[int]] = field(default_factory=list)
    death_links: list[DeathLinkPayload] = field(default_factory=list)
    completions: int = 0

    # -------------------------------------------------------------------------
    # Scripting
    # -------------------------------------------------------------------------

    def connect(self):
        """Finish the handshake on the next poll."""
        self._events.append(ConnectionEstablished())
        self._next_state = ConnectionState.CONNECTED

    def drop(self, message: str = "connection closed", kind: ErrorKind = ErrorKind.OTHER):
        """Lose the connection on the next poll."""
        self._events.append(ConnectionFailure(message=message, fatal=True, kind=kind))
        self._next_state = ConnectionState.DISCONNECTED
        self._error = message

    def push(self, *events: InboundEvent):
        self._events.extend(events)

    def say(self, *parts):
        self.push(LogMessage.of(*parts))

    def give(self, item_id: int, item_name: str = "", location_name: str = "") -> ReceivedItem:
        """Receive a new item with the next sequence index."""
        item = ReceivedItem(
            index=len(self._items),
            item_id=item_id,
            item_name=item_name,
            location_name=location_name,
        )
        self._items.append(item)
        self.push(ItemReceived(item))
        return item

    def peer_died(self, source: str, timestamp: float, cause: str | None = None):
        self.push(PeerDeathLink(source=source, timestamp=timestamp, cause=cause))

    def fail_next(self, request: str, message: str = "send failed", fatal: bool = False):
        """Make the next call to the named request method raise."""
        self._failures[request] = TransportError(message, fatal=fatal)

    # -------------------------------------------------------------------------
    # ConnectionFacade
    # -------------------------------------------------------------------------

    def poll(self) -> list[InboundEvent]:
        events, self._events = self._events, []
        if self._next_state is not None:
            self._state, self._next_state = self._next_state, None
        return events

    def state(self) -> ConnectionState:
        return self._state

    def error(self) -> str | None:
        return self._error

    def seed_name(self) -> str | None:
        return self.seed if self.is_connected() else None

    def player_name(self) -> str | None:
        return self.player if self.is_connected() else None

    def slot_data(self) -> SlotData | None:
        return self.slot if self.is_connected() else None

    def received_items(self) -> Sequence[ReceivedItem]:
        return tuple(self._items)

    def report_checked(self, location_ids: Iterable[int]):
        self._maybe_fail("report_checked")
        self.checked.append(set(location_ids))

    def request_hints(self, location_ids: Sequence[int]):
        self._maybe_fail("request_hints")
        self.hints.append(list(location_ids))

    def send_death_link(self, payload: DeathLinkPayload):
        self._maybe_fail("send_death_link")
        self.death_links.append(payload)

    def set_completion_status(self):
        self._maybe_fail("set_completion_status")
        self.completions += 1

    def _maybe_fail(self, request: str):
        failure = self._failures.pop(request, None)
        if failure is not None:
            raise failure
