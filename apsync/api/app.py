"""
FastAPI Application - Status API for the in-game overlay.

Endpoints:
    GET    /api/v1/status       Session snapshot
    GET    /api/v1/logs         Overlay log, oldest first
    POST   /api/v1/error/take   Take the fatal error (once)
    POST   /api/v1/commands     Run a console command
    POST   /api/v1/reconnect    Reconnect with the same settings
    PUT    /api/v1/url          Save a new server URL and reconnect
    GET    /api/v1/health       Health check

The overlay polls /status and /logs every frame or so. It's a local API: the
client process serves it on localhost for an overlay running beside the game.
"""

from typing import Annotated, Optional, Union
import logging
import os

# Environment configuration
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service):
    """
    Create the FastAPI application.

    Args:
        service: StatusService wrapping a running UpdateCycle

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.encoders import jsonable_encoder
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .schemas import (
        # Request models
        CommandRequest,
        UpdateUrlRequest,
        # Response models
        StatusResponse,
        LogsResponse,
        FatalErrorResponse,
        CommandResponse,
        ReconnectResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Archipelago Client Status API",
        description="""
Read and control a running Archipelago client from an overlay.

## Error Codes

| Code | Description |
|------|-------------|
| `UNKNOWN_COMMAND` | The console command isn't recognized |
| `CONFIG_ERROR` | The new URL couldn't be saved to the config file |
| `VALIDATION_ERROR` | Request body or query is invalid |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/status",
        response_model=StatusResponse,
        tags=["Session"],
        summary="Get a snapshot of the client session",
    )
    async def get_status() -> StatusResponse:
        return service.get_status()

    @app.get(
        "/api/v1/logs",
        response_model=LogsResponse,
        tags=["Session"],
        summary="Get the overlay log",
    )
    async def get_logs(
        limit: Annotated[Optional[int], Query(description="Only the newest N entries", ge=0)] = None,
    ) -> LogsResponse:
        return service.get_logs(limit)

    @app.post(
        "/api/v1/error/take",
        response_model=FatalErrorResponse,
        tags=["Session"],
        summary="Take the fatal error",
    )
    async def take_error() -> FatalErrorResponse:
        """
        Take the fatal error, if there is one.

        A fatal error is only handed out once. Later calls report
        `has_error=false` even though the session stays stopped.
        """
        return service.take_error()

    # =========================================================================
    # Control Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/commands",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse, "description": "Unknown command"}},
        tags=["Control"],
        summary="Run a console command",
    )
    async def run_command(body: CommandRequest) -> Union[CommandResponse, JSONResponse]:
        """
        Run a console command such as `!getevent 14000000`.

        The command's output is returned and also kept in the overlay log.
        """
        response = service.run_command(body.command, body.arg)
        if not response.handled:
            return make_error_response(
                ErrorCode.UNKNOWN_COMMAND,
                f"Unknown command: {body.command}",
                status_code=404,
                details={"command": body.command},
            )
        return response

    @app.post(
        "/api/v1/reconnect",
        response_model=ReconnectResponse,
        tags=["Control"],
        summary="Reconnect to the server",
    )
    async def reconnect() -> ReconnectResponse:
        return service.reconnect()

    @app.put(
        "/api/v1/url",
        response_model=ReconnectResponse,
        responses={500: {"model": ErrorResponse, "description": "Config not saved"}},
        tags=["Control"],
        summary="Change the server URL",
    )
    async def update_url(body: UpdateUrlRequest) -> Union[ReconnectResponse, JSONResponse]:
        """Save a new server URL to the config file and reconnect to it."""
        try:
            return service.update_url(body.url)
        except OSError as e:
            logger.error("Couldn't save config: %s", e)
            return make_error_response(
                ErrorCode.CONFIG_ERROR,
                f"Couldn't save config: {e}",
                status_code=500,
            )

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Archipelago Client Status API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/api/v1/health",
        }

    return app
