"""
Clocks used by the session.

Grace periods are measured on a monotonic clock. Death links carry wall-clock
timestamps from other machines, so the session also needs the wall time.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import time


class Clock(ABC):

    @abstractmethod
    def monotonic(self) -> float:
        pass

    @abstractmethod
    def time(self) -> float:
        """Seconds since the epoch."""
        pass

    def wall_time_of(self, monotonic: float) -> float:
        """Convert a monotonic reading into the wall time it corresponds to."""
        return self.time() - (self.monotonic() - monotonic)


class SystemClock(Clock):

    def monotonic(self) -> float:
        return time.monotonic()

    def time(self) -> float:
        return time.time()


@dataclass
class FakeClock(Clock):
    """A clock that only moves when told to."""
    mono: float = 1000.0
    wall: float = 1_700_000_000.0

    def monotonic(self) -> float:
        return self.mono

    def time(self) -> float:
        return self.wall

    def advance(self, seconds: float):
        self.mono += seconds
        self.wall += seconds
