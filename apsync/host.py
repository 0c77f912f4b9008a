"""
Host Bindings - How a game host plugs into the client.

The host owns the game process: it knows how to tell whether the main menu
is up, how to block input while the overlay has focus, and how to run a task
every frame. It hands those abilities to the client as plain callables
rather than subclassing anything.

    bindings = HostBindings(is_main_menu=lambda: not game.is_in_game())
    runner = ClientRunner(cycle, bindings)

    # Every frame, on the game's main thread
    runner.tick()

    # Every overlay frame
    error = runner.render(want_mouse=io.want_capture_mouse,
                          want_keyboard=io.want_capture_keyboard)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Flag, auto
import logging
from typing import Callable

from .errors import ClientError
from .session import UpdateCycle

logger = logging.getLogger(__name__)


class InputFlags(Flag):
    """A set of input methods to block."""
    NONE = 0
    GAMEPAD = auto()
    KEYBOARD = auto()
    MOUSE = auto()


def input_flags_for(want_mouse: bool, want_keyboard: bool) -> InputFlags:
    """Which inputs to keep from the game while the overlay wants them."""
    flags = InputFlags.NONE
    if want_mouse:
        flags |= InputFlags.MOUSE
    if want_keyboard:
        flags |= InputFlags.KEYBOARD
    if want_mouse and want_keyboard:
        # Only a modal dialog wants both; block the pad then too
        flags |= InputFlags.GAMEPAD
    return flags


def _ignore(*args):
    pass


@dataclass
class HostBindings:
    """Game-specific hooks supplied by the host."""
    is_main_menu: Callable[[], bool]
    block_input: Callable[[InputFlags], None] = _ignore
    force_cursor_visible: Callable[[], None] = _ignore


@dataclass
class FatalErrorLatch:
    """
    Holds the first fatal error the display sees.

    Once latched it never changes, even if the session reports more.
    """
    error: ClientError | None = None

    def poll(self, cycle: UpdateCycle) -> ClientError | None:
        if self.error is None:
            self.error = cycle.take_error()
            if self.error is not None:
                logger.error("Displaying fatal error: %s", self.error)
        return self.error


@dataclass
class ClientRunner:
    cycle: UpdateCycle
    bindings: HostBindings
    latch: FatalErrorLatch = field(default_factory=FatalErrorLatch)

    def tick(self):
        """Run one update. Call once per game frame."""
        self.cycle.update(self.bindings.is_main_menu())

    def render(self, want_mouse: bool = False, want_keyboard: bool = False) -> ClientError | None:
        """
        Per-frame overlay bookkeeping.

        Returns the fatal error to show, if any.
        """
        self.bindings.block_input(input_flags_for(want_mouse, want_keyboard))

        error = self.latch.poll(self.cycle)
        if error is not None:
            # The player needs a cursor to read and dismiss the error
            self.bindings.force_cursor_visible()
        return error
