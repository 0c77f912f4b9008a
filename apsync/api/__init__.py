"""
API Module - Overlay interface.

Exposes a running client over a local REST API.
The overlay:
1. Polls the session status and log
2. Takes the fatal error to display it
3. Runs console commands
4. Reconnects or changes the server URL
"""

from .schemas import (
    # Requests
    CommandRequest,
    UpdateUrlRequest,
    # Responses
    StatusResponse,
    LogsResponse,
    FatalErrorResponse,
    CommandResponse,
    ReconnectResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    ConnectionStatus,
    ErrorCode,
    LogEntry,
    TextSpanInfo,
)
from .service import StatusService
from .app import create_app

__all__ = [
    # Requests
    "CommandRequest",
    "UpdateUrlRequest",
    # Responses
    "StatusResponse",
    "LogsResponse",
    "FatalErrorResponse",
    "CommandResponse",
    "ReconnectResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "ConnectionStatus",
    "ErrorCode",
    "LogEntry",
    "TextSpanInfo",
    # Service
    "StatusService",
    "create_app",
]
