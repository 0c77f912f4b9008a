"""
Pytest fixtures for apsync tests.
"""

import pytest

from ..config import Config
from ..connection import DeathLinkOption, ScriptedConnection, SlotData, SlotOptions
from ..game import GoodsRow, InMemoryGame, ItemCategory, ItemId, Reward, WeaponRow
from ..persistence import MemorySaveStore, SaveData
from ..session import FakeClock, SessionState

SEED = "seed-1"
PLAYER = "Alice"

# Local items
LONGSWORD = ItemId(ItemCategory.WEAPON, 2010000)
ESTUS_SHARD = ItemId.goods(2141)
EMBER = ItemId.goods(500)

# Placeholders ("Archipelago items") and the locations they stand for
SWORD_PLACEHOLDER = ItemId(ItemCategory.WEAPON, 3780000)
SWORD_LOCATION = 5001
FOREIGN_PLACEHOLDER = ItemId.goods(3780100)
FOREIGN_LOCATION = 5002

# Archipelago IDs
AP_LONGSWORD = 1001
AP_EMBER = 1002
GOAL_FLAG = 14100800


def connected(connection: ScriptedConnection) -> ScriptedConnection:
    """Finish the handshake right away."""
    connection.connect()
    connection.poll()
    return connection


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def slot_data() -> SlotData:
    """Slot data with two mapped items, a goal and death link on."""
    return SlotData(
        ap_ids_to_item_ids={AP_LONGSWORD: int(LONGSWORD), AP_EMBER: int(EMBER)},
        item_counts={AP_EMBER: 3},
        goal=[GOAL_FLAG],
        options=SlotOptions(death_link=DeathLinkOption.ANY_DEATH),
    )


@pytest.fixture
def connection(slot_data: SlotData) -> ScriptedConnection:
    """A connection that finished its handshake."""
    return connected(ScriptedConnection(seed=SEED, player=PLAYER, slot=slot_data))


@pytest.fixture
def config(tmp_path) -> Config:
    config = Config(slot=PLAYER, seed=SEED)
    config.save(tmp_path / "apconfig.json")
    return config


@pytest.fixture
def game() -> InMemoryGame:
    """A loaded game with two placeholder rows defined but not picked up."""
    game = InMemoryGame()
    game.params[SWORD_PLACEHOLDER] = WeaponRow(
        location_id=SWORD_LOCATION,
        mapped_reward=Reward(LONGSWORD, 1),
    )
    game.params[FOREIGN_PLACEHOLDER] = GoodsRow(
        location_id=FOREIGN_LOCATION,
        basic_price=1000,
        sell_value=100,
        icon_id=2040,
    )
    game.placeholder_ids |= {SWORD_PLACEHOLDER, FOREIGN_PLACEHOLDER}
    return game


@pytest.fixture
def saves() -> MemorySaveStore:
    return MemorySaveStore(SaveData())


@pytest.fixture
def session(config: Config, connection: ScriptedConnection) -> SessionState:
    return SessionState(config=config, connection=connection)
