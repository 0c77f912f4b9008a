"""
Seed Identity - Makes sure the server, the save and the config agree.

Three sources know which multiworld the player means:
- the connected room (absent while disconnected)
- the save (absent until the save first connects)
- apconfig.json, written by the static randomizer

Any two present sources that disagree are a fatal error; playing on would
send one world's checks to another.
"""

from __future__ import annotations

from ..errors import IdentityConflictError
from ..persistence import SaveData


def check_seed_conflict(
    client_seed: str | None,
    config_seed: str,
    save_seed: str | None,
):
    """Raise IdentityConflictError if any two present seeds differ."""
    if client_seed is not None and client_seed != config_seed:
        raise IdentityConflictError(
            "You've connected to a different Archipelago multiworld than the one "
            "that the static randomizer used!\n\n"
            f"Connected room seed: {client_seed}\n"
            f"Randomizer seed: {config_seed}",
            "connection", "config",
        )
    if client_seed is not None and save_seed is not None and client_seed != save_seed:
        raise IdentityConflictError(
            "You've connected to a different Archipelago multiworld than the one "
            "that you used before with this save!\n\n"
            f"Connected room seed: {client_seed}\n"
            f"Save file seed: {save_seed}",
            "connection", "save",
        )
    if save_seed is not None and config_seed != save_seed:
        raise IdentityConflictError(
            "Your most recent static randomizer run used a different Archipelago "
            "multiworld than the one that you used before with this save!\n\n"
            f"Randomizer seed: {config_seed}\n"
            f"Save file seed: {save_seed}",
            "config", "save",
        )


def adopt_seed(save: SaveData, config_seed: str) -> bool:
    """Record the config's seed in a save that has none. Returns whether it changed."""
    if save.seed is not None:
        return False
    save.seed = config_seed
    return True
