"""
Pydantic Schemas for the status API.

These models define the contract between the client and an overlay process.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- UNKNOWN_COMMAND: The console command isn't recognized
- CONFIG_ERROR: The config file couldn't be written
- VALIDATION_ERROR: Request body or query is invalid
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ConnectionStatus(str, Enum):
    """Archipelago connection states."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ErrorCode(str, Enum):
    """Structured error codes."""
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
    CONFIG_ERROR = "CONFIG_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Log
# =============================================================================

class TextSpanInfo(BaseModel):
    """A run of log text with one color."""
    text: str
    color: str = Field(default="default", description="Overlay color name")


class LogEntry(BaseModel):
    """One line of the overlay log."""
    text: str = Field(description="Plain text of the entry")
    parts: list[TextSpanInfo] = Field(default_factory=list)


class LogsResponse(BaseModel):
    entries: list[LogEntry]
    count: int


# =============================================================================
# Status
# =============================================================================

class StatusResponse(BaseModel):
    """Snapshot of the client session."""
    version: str
    connection: ConnectionStatus
    url: str
    slot: str
    seed: str

    # Only known while connected
    room_seed: Optional[str] = None
    player_name: Optional[str] = None

    has_fatal_error: bool = False
    in_load_grace: bool = Field(
        default=False,
        description="A save is loading and the client is waiting before acting",
    )
    pending_events: int = 0

    # Only known while a save is open
    items_granted: Optional[int] = None
    locations_checked: Optional[int] = None
    deaths: Optional[int] = None

    locations_reported: Optional[int] = None
    goal_sent: Optional[bool] = None


class FatalErrorResponse(BaseModel):
    """The fatal error, handed out once."""
    has_error: bool
    error_type: Optional[str] = None
    message: Optional[str] = None


# =============================================================================
# Commands and connection
# =============================================================================

class CommandRequest(BaseModel):
    """A console command, as typed by the player."""
    command: str = Field(pattern=r"^!\S+$", description="Command name, e.g. !getevent")
    arg: Optional[str] = Field(default=None, description="Everything after the name")


class CommandResponse(BaseModel):
    handled: bool
    output: list[LogEntry] = Field(
        default_factory=list,
        description="Log entries the command produced",
    )


class UpdateUrlRequest(BaseModel):
    url: str = Field(min_length=1, description="Archipelago server address")


class ReconnectResponse(BaseModel):
    success: bool
    connection: ConnectionStatus
    url: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
