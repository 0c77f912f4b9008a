"""
Error taxonomy for the client core.

- TransportError: connection trouble. Logged, and only fatal when the
  connection itself says so.
- IdentityConflictError / VersionConflictError: the client, save and config
  disagree. Fatal and sticky.
- DataIntegrityError: slot data, params or saved client data don't match
  this client build. Fatal and sticky.
- GameNotReady: the game hasn't finished initializing. Never surfaced; the
  operation is retried on the next tick.
"""

from __future__ import annotations


class ClientError(Exception):
    """Base class for errors raised by the client core."""

    #: Whether this error disables the live phase once it's recorded.
    fatal: bool = True


class TransportError(ClientError):
    """A request to the Archipelago server failed."""

    def __init__(self, message: str, fatal: bool = False):
        super().__init__(message)
        self.fatal = fatal


class IdentityConflictError(ClientError):
    """The seed reported by two sources doesn't match."""

    def __init__(self, message: str, first: str, second: str):
        super().__init__(message)
        self.sources = (first, second)


class VersionConflictError(ClientError):
    """The configured client version doesn't match this build."""


class DataIntegrityError(ClientError):
    """An identifier from the server has no local counterpart."""


class DlcMissingError(ClientError):
    """The seed expects DLC that isn't installed."""


class ErrorReportedElsewhere(ClientError):
    """Stand-in for a fatal error that has already been handed to the display."""

    def __init__(self):
        super().__init__("A fatal error was already reported.")


class GameNotReady(Exception):
    """A game subsystem the operation needs isn't loaded yet."""


class ConfigError(Exception):
    """The client configuration file is missing or invalid."""
