"""
Slot Data - Per-slot settings supplied by the Archipelago server.

The server sends slot data as JSON when the connection is established. Object
keys are always strings on the wire, so item-id maps are declared with int
keys and coerced on validation.
"""

from __future__ import annotations
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class DeathLinkOption(IntEnum):
    """Possible options for death link."""
    OFF = 0  # Death link is disabled
    ANY_DEATH = 1  # Every death counts
    LOST_SOULS = 2  # Only deaths without recovering the previous bloodstain count


class SlotOptions(BaseModel):
    """The options chosen by this player."""
    model_config = ConfigDict(extra="ignore")

    death_link: DeathLinkOption = DeathLinkOption.OFF

    # How many deaths it takes to send a death link
    death_link_amnesty: int = Field(default=1, ge=1)

    enable_dlc: bool = False


class SlotData(BaseModel):
    """Slot data for one player."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Archipelago item ID -> local item ID
    ap_ids_to_item_ids: dict[int, int] = Field(
        default_factory=dict, alias="apIdsToItemIds"
    )

    # Archipelago item ID -> number of copies to grant (1 if absent)
    item_counts: dict[int, int] = Field(default_factory=dict, alias="itemCounts")

    # Event flags that must all be set for the goal to be complete
    goal: list[int] = Field(default_factory=list)

    options: SlotOptions = Field(default_factory=SlotOptions)

    def local_item(self, ap_id: int) -> int | None:
        return self.ap_ids_to_item_ids.get(ap_id)

    def quantity(self, ap_id: int) -> int:
        return self.item_counts.get(ap_id, 1)
