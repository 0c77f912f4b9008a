"""
Save Data - Client state that lives alongside one game save.

Everything here must survive a restart:
- items_granted: the delivery cursor. Only ever increases.
- locations: every location confirmed in this save.
- deaths: deaths counted toward death link amnesty.
- seed: the multiworld this save belongs to. Written once.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass
class SaveData:
    items_granted: int = 0
    locations: set[int] = field(default_factory=set)
    deaths: int = 0
    seed: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "items_granted": self.items_granted,
            "locations": sorted(self.locations),
            "deaths": self.deaths,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SaveData:
        """
        Build save data from its JSON form.

        Raises TypeError or ValueError if the data doesn't have that form.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        if not isinstance(data.get("locations", []), list):
            raise TypeError("locations must be a list")
        if not isinstance(data.get("seed"), (str, type(None))):
            raise TypeError("seed must be a string")

        return cls(
            items_granted=int(data.get("items_granted", 0)),
            locations={int(loc) for loc in data.get("locations", [])},
            deaths=int(data.get("deaths", 0)),
            seed=data.get("seed"),
        )
