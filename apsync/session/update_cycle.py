"""
Update Cycle - The per-tick driver of the client.

The cycle, once per host tick:
1. Always: drain the connection, keep the log, queue domain events
2. Gate: stop if disconnected or a fatal error is parked
3. Load grace: stop until the save has been loaded for a while
4. Version check: stop for good if the randomizer and client disagree
5. Live: run the game routine (items, locations, death link, goal...)

Nothing here blocks. Work that can't happen this tick is simply re-checked on
the next one.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import contextmanager
import logging
import threading
from typing import Callable, Iterator

from .. import __version__
from ..config import Config
from ..connection import (
    ConnectionEstablished,
    ConnectionFacade,
    ConnectionFailure,
    ConnectionState,
    ErrorKind,
    InboundEvent,
    LogMessage,
    TextColor,
    TextSpan,
    is_immediate,
)
from ..errors import ClientError, TransportError, VersionConflictError
from .clock import Clock, SystemClock
from .state import SessionState

logger = logging.getLogger(__name__)

# Time between a save finishing its load and the client acting on it
LOAD_GRACE_PERIOD = 10.0

ConnectionFactory = Callable[[Config], ConnectionFacade]


class LiveRoutine(ABC):
    """
    Game-specific work for the live phase.

    Only run while connected, with a save loaded past the grace period and no
    fatal error. Raise a ClientError to stop the live phase for good.
    """

    @abstractmethod
    def run(self, session: SessionState):
        pass

    def handle_command(self, session: SessionState, command: str, arg: str | None) -> bool:
        """Handle a console command. Returns whether it was recognized."""
        return False


class UpdateCycle:
    """
    The host-facing core of the client.

    Usage:
        cycle = UpdateCycle(config, connect, DarkSouls3Routine(game, saves))

        # Every frame, from the game's main thread
        cycle.update(is_main_menu=game_is_on_main_menu())

        # From the overlay
        if error := cycle.take_error():
            show_fatal_error(error)
    """

    def __init__(
        self,
        config: Config,
        connection_factory: ConnectionFactory,
        routine: LiveRoutine,
        clock: Clock | None = None,
        load_grace_period: float = LOAD_GRACE_PERIOD,
    ):
        # Ticks come from one thread in practice, but the host can't promise it
        self._lock = threading.RLock()
        self.clock = clock or SystemClock()
        self.connection_factory = connection_factory
        self.routine = routine
        self.load_grace_period = load_grace_period
        self.session = SessionState(config=config, connection=connection_factory(config))

    # =========================================================================
    # Tick
    # =========================================================================

    def update(self, is_main_menu: bool):
        """Run one tick. Fatal errors are parked in the session, never raised."""
        with self._lock:
            self._update_always()

            session = self.session
            if not session.connection.is_connected() or session.has_fatal_error:
                return

            now = self.clock.monotonic()
            if is_main_menu:
                session.load_time = None
            elif session.load_time is None:
                session.load_time = now

            if (
                session.load_time is not None
                and now - session.load_time < self.load_grace_period
            ):
                return

            try:
                self._check_version_conflict()
                self.routine.run(session)
            except TransportError as e:
                if e.fatal:
                    session.error = e
                else:
                    logger.warning("Request to server failed: %s", e)
                    session.log(TextSpan("Server request failed: ", TextColor.RED), str(e))
            except ClientError as e:
                logger.error("Fatal error: %s", e)
                session.error = e

    def _update_always(self):
        """
        Drain the connection and keep the session's bookkeeping current.

        This runs regardless of connection state or fatal errors.
        """
        session = self.session
        state = session.connection.state()
        deferred: list[InboundEvent] = []

        for event in session.connection.poll():
            if not is_immediate(event):
                deferred.append(event)
            elif isinstance(event, ConnectionEstablished):
                state = ConnectionState.CONNECTED
                session.connection_epoch += 1
            elif isinstance(event, ConnectionFailure):
                if event.fatal:
                    session.log(*self._describe_failure(event, state))
                    session.event_queue.clear()
                    deferred.clear()
                    state = ConnectionState.DISCONNECTED
                else:
                    session.log(event.message)
            elif isinstance(event, LogMessage):
                session.record_print(event)

        if session.has_fatal_error:
            # Nothing will consume them again
            session.event_queue.clear()
        elif state == ConnectionState.CONNECTED:
            session.event_queue.extend(deferred)
        else:
            assert not session.event_queue, "events queued while disconnected"

    def _describe_failure(
        self, event: ConnectionFailure, state: ConnectionState
    ) -> list[TextSpan]:
        message = self.session.connection.error() or event.message
        if event.kind in (ErrorKind.REFUSED, ErrorKind.TIMED_OUT):
            return [
                TextSpan("Connection refused. ", TextColor.RED),
                TextSpan(
                    "Make sure the server session is running and the URL is up-to-date."
                ),
            ]
        elif state == ConnectionState.CONNECTED:
            return [TextSpan("Connection failed: ", TextColor.RED), TextSpan(message)]
        else:
            return [TextSpan("Disconnected: ", TextColor.RED), TextSpan(message)]

    def _check_version_conflict(self):
        client_version = self.session.config.client_version
        if client_version is not None and client_version != __version__:
            raise VersionConflictError(
                f"Your apconfig.json was generated using static randomizer "
                f"v{client_version}, but this client is v{__version__}. Re-run the "
                f"static randomizer with the current version."
            )

    # =========================================================================
    # Host and overlay operations
    # =========================================================================

    @contextmanager
    def locked(self) -> Iterator[SessionState]:
        """
        Hold the tick lock while reading the session.

        Usage:
            with cycle.locked() as session:
                pending = len(session.event_queue)
        """
        with self._lock:
            yield self.session

    def in_load_grace(self) -> bool:
        """Whether a loaded save is still inside its grace period."""
        with self._lock:
            load_time = self.session.load_time
            return (
                load_time is not None
                and self.clock.monotonic() - load_time < self.load_grace_period
            )

    def take_error(self) -> ClientError | None:
        with self._lock:
            return self.session.take_error()

    def logs(self) -> list[LogMessage]:
        with self._lock:
            return list(self.session.log_buffer)

    def connection_state(self) -> ConnectionState:
        with self._lock:
            return self.session.connection.state()

    def handle_command(self, command: str, arg: str | None = None) -> bool:
        with self._lock:
            return self.routine.handle_command(self.session, command, arg)

    def reconnect(self):
        """Start a fresh connection with the same settings."""
        with self._lock:
            if self.session.connection.is_disconnected():
                self.session.log("Reconnecting...")
            self._replace_connection()

    def update_url(self, url: str):
        """Point the client at a new server URL, save it, and reconnect."""
        with self._lock:
            if self.session.connection.is_disconnected():
                self.session.log("Reconnecting...")
            self.session.config.set_url(url)
            self.session.config.save()
            self._replace_connection()

    def _replace_connection(self):
        # Events from the old connection are meaningless to the new one
        self.session.event_queue.clear()
        self.session.connection = self.connection_factory(self.session.config)
