"""
Client Configuration - Connection settings written by the static randomizer.

The config is loaded from apconfig.json next to the mod. It is NOT guaranteed
to be complete or accurate; the client checks it against the server and the
save before acting on it.

Environment overrides:
    APSYNC_CONFIG     Path to the config file
    APSYNC_URL        Server URL
    APSYNC_PASSWORD   Room password
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "apconfig.json"


class Config(BaseModel):
    """Connection information for one Archipelago slot."""

    url: str = "archipelago.gg:38281"
    slot: str
    seed: str
    password: Optional[str] = None

    # Version of the static randomizer that wrote this file
    client_version: Optional[str] = None

    # Enables commands that write game state
    debug_commands: bool = False

    _path: Optional[Path] = PrivateAttr(default=None)

    @classmethod
    def default_path(cls) -> Path:
        return Path(os.getenv("APSYNC_CONFIG", DEFAULT_CONFIG_NAME))

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """
        Load the config from disk and apply environment overrides.

        Raises ConfigError if the file is missing or malformed.
        """
        path = Path(path) if path is not None else cls.default_path()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ConfigError(
                f"Couldn't find {path}. Run the static randomizer to generate it."
            )
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path} isn't valid JSON: {e}")
        if not isinstance(raw, dict):
            raise ConfigError(f"{path} must contain a JSON object")

        if url := os.getenv("APSYNC_URL"):
            raw["url"] = url
        if password := os.getenv("APSYNC_PASSWORD"):
            raw["password"] = password

        try:
            config = cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"{path} is invalid: {e}")

        config._path = path
        logger.info("Loaded config from %s", path)
        return config

    @property
    def path(self) -> Path | None:
        return self._path

    def set_url(self, url: str):
        self.url = url.strip()

    def save(self, path: str | Path | None = None):
        """Write the config back to the file it was loaded from."""
        target = Path(path) if path is not None else self._path
        if target is None:
            target = self.default_path()
        target.write_text(
            json.dumps(self.model_dump(exclude_none=True), indent=2),
            encoding="utf-8",
        )
        self._path = target
