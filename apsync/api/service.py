"""
Status Service - Business logic layer between the API and the client.

The service:
1. Reads session state for the overlay
2. Hands out the fatal error once
3. Runs console commands
4. Reconnects or moves the client to a new URL

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .. import __version__
from ..connection import LogMessage
from ..errors import DataIntegrityError
from ..persistence import PersistenceProvider
from ..session import LiveRoutine, UpdateCycle
from .schemas import (
    CommandResponse,
    ConnectionStatus,
    FatalErrorResponse,
    LogEntry,
    LogsResponse,
    ReconnectResponse,
    StatusResponse,
    TextSpanInfo,
)

logger = logging.getLogger(__name__)


def to_log_entry(message: LogMessage) -> LogEntry:
    return LogEntry(
        text=message.text,
        parts=[TextSpanInfo(text=p.text, color=p.color.value) for p in message.parts],
    )


@dataclass
class StatusService:
    """
    Read and control a running client.

    Usage:
        service = StatusService(cycle=cycle, saves=saves)

        status = service.get_status()
        error = service.take_error()
        result = service.run_command("!getevent", "14000000")
    """
    cycle: UpdateCycle
    saves: PersistenceProvider

    @property
    def routine(self) -> LiveRoutine:
        return self.cycle.routine

    def get_status(self) -> StatusResponse:
        with self.cycle.locked() as session:
            connection = session.connection
            config = session.config

            try:
                save = self.saves.load()
            except DataIntegrityError:
                # The live phase reports this as the fatal error
                save = None
            locations = getattr(self.routine, "locations", None)
            goal = getattr(self.routine, "goal", None)

            return StatusResponse(
                version=__version__,
                connection=ConnectionStatus(connection.state().value),
                url=config.url,
                slot=config.slot,
                seed=config.seed,
                room_seed=connection.seed_name(),
                player_name=connection.player_name(),
                has_fatal_error=session.has_fatal_error,
                in_load_grace=self.cycle.in_load_grace(),
                pending_events=len(session.event_queue),
                items_granted=save.items_granted if save else None,
                locations_checked=len(save.locations) if save else None,
                deaths=save.deaths if save else None,
                locations_reported=locations.reported if locations else None,
                goal_sent=goal.sent if goal else None,
            )

    def get_logs(self, limit: int | None = None) -> LogsResponse:
        entries = [to_log_entry(m) for m in self.cycle.logs()]
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return LogsResponse(entries=entries, count=len(entries))

    def take_error(self) -> FatalErrorResponse:
        error = self.cycle.take_error()
        if error is None:
            return FatalErrorResponse(has_error=False)
        return FatalErrorResponse(
            has_error=True,
            error_type=type(error).__name__,
            message=str(error),
        )

    def run_command(self, command: str, arg: str | None = None) -> CommandResponse:
        with self.cycle.locked() as session:
            before = len(session.log_buffer)
            handled = self.cycle.handle_command(command, arg)
            # The buffer is bounded; new entries are always at the end
            produced = list(session.log_buffer)[before:]

        logger.info("Command %s %s: handled=%s", command, arg or "", handled)
        return CommandResponse(
            handled=handled,
            output=[to_log_entry(m) for m in produced],
        )

    def reconnect(self) -> ReconnectResponse:
        self.cycle.reconnect()
        return self._reconnect_response()

    def update_url(self, url: str) -> ReconnectResponse:
        self.cycle.update_url(url)
        return self._reconnect_response()

    def _reconnect_response(self) -> ReconnectResponse:
        return ReconnectResponse(
            success=True,
            connection=ConnectionStatus(self.cycle.connection_state().value),
            url=self.cycle.session.config.url,
        )
