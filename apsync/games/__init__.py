"""
Games module - Per-game live routines.

Each routine composes the shared trackers with whatever that game needs on
top (cosmetic item redirects, DLC checks, debug commands).
"""

from .ds3 import DarkSouls3Routine
from .sekiro import SekiroRoutine

__all__ = ["DarkSouls3Routine", "SekiroRoutine"]
