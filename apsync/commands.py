"""
Console Commands - Debug commands typed into the in-game chat.

    !getevent EVENT_FLAG         Show whether an event flag is set
    !setevent EVENT_FLAG BOOL    Set an event flag (debug_commands only)

Bad arguments are reported in the overlay log; they're never fatal.
"""

from __future__ import annotations
from dataclasses import dataclass
import re

from .connection import TextColor, TextSpan
from .errors import GameNotReady
from .game import GameStateProvider
from .session import SessionState

_FLAG = re.compile(r"\d+")
_BOOLS = {"true": True, "false": False}


@dataclass
class EventFlagCommands:
    game: GameStateProvider
    allow_writes: bool = False

    def handle(self, session: SessionState, command: str, arg: str | None) -> bool:
        """Run a command. Returns whether the command name was recognized."""
        if command == "!getevent":
            self._get_event(session, arg)
            return True
        if command == "!setevent" and self.allow_writes:
            self._set_event(session, arg)
            return True
        return False

    def _get_event(self, session: SessionState, arg: str | None):
        if arg is None or not _FLAG.fullmatch(arg.strip()):
            self._usage(session, "!getevent", "!getevent EVENT_FLAG")
            return

        flag = int(arg)
        try:
            value = self.game.read_event_flag(flag)
        except ValueError:
            session.log(TextSpan(f"Invalid event ID: {flag}", TextColor.RED))
            return
        except GameNotReady:
            session.log(TextSpan("Event flags not loaded", TextColor.RED))
            return

        session.log(
            "Event ",
            TextSpan(str(flag), TextColor.BLUE),
            ": ",
            _bool_span(value),
        )

    def _set_event(self, session: SessionState, arg: str | None):
        args = re.split(r" +", arg.strip()) if arg else []
        if len(args) != 2 or not _FLAG.fullmatch(args[0]) or args[1] not in _BOOLS:
            self._usage(session, "!setevent", "!setevent EVENT_FLAG BOOL")
            return

        flag, value = int(args[0]), _BOOLS[args[1]]
        try:
            self.game.write_event_flag(flag, value)
        except ValueError:
            session.log(TextSpan(f"Invalid event ID: {flag}", TextColor.RED))
            return
        except GameNotReady:
            session.log(TextSpan("Event flags not loaded", TextColor.RED))
            return

        session.log(
            "Set event ",
            TextSpan(str(flag), TextColor.BLUE),
            " to ",
            _bool_span(value),
        )

    def _usage(self, session: SessionState, command: str, usage: str):
        session.log(
            TextSpan(f"Invalid {command}.", TextColor.RED),
            " Usage:\n",
            usage,
        )


def _bool_span(value: bool) -> TextSpan:
    return TextSpan(str(value).lower(), TextColor.GREEN if value else TextColor.RED)
