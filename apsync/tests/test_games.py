"""
Tests for the per-game live routines.

Tests:
- Dark Souls III: seed checks, DLC check, hint reset, full live tick
- Sekiro: items and locations only
- End-to-end through the update cycle
"""

import pytest

from ..connection import PeerDeathLink
from ..errors import DataIntegrityError, DlcMissingError, IdentityConflictError
from ..games import DarkSouls3Routine, SekiroRoutine
from ..games.ds3 import PATH_OF_THE_DRAGON, PATH_OF_THE_DRAGON_GESTURE
from ..persistence import JsonSaveStore
from ..session import UpdateCycle
from .conftest import (
    AP_LONGSWORD,
    GOAL_FLAG,
    LONGSWORD,
    SEED,
    SWORD_LOCATION,
    SWORD_PLACEHOLDER,
)


@pytest.fixture
def ds3(game, saves, clock):
    return DarkSouls3Routine(game, saves, clock)


class TestDarkSouls3:

    def test_new_save_adopts_seed(self, ds3, session, saves):
        """A fresh save is stamped with the room's seed."""
        ds3.run(session)

        assert saves.data.seed == SEED
        assert saves.writes >= 1

    def test_save_from_other_seed(self, ds3, session, saves):
        """A save from another multiworld stops the client."""
        saves.data.seed = "another-seed"

        with pytest.raises(IdentityConflictError):
            ds3.run(session)

    def test_events_drained_without_save(self, ds3, session, saves, game, clock):
        """Events are dropped while no save is open."""
        saves.data = None
        clock.advance(40.0)
        session.event_queue.append(PeerDeathLink(source="Bob", timestamp=clock.time()))

        ds3.run(session)

        assert session.event_queue == []
        assert game.deaths == 0

    def test_peer_death_applied(self, ds3, session, game, clock):
        """A death link from another player kills the player."""
        clock.advance(40.0)
        session.event_queue.append(PeerDeathLink(source="Bob", timestamp=clock.time()))

        ds3.run(session)

        assert game.deaths == 1

    def test_full_tick(self, ds3, session, connection, game, saves, clock):
        """One tick grants items, sends locations and reports the goal."""
        connection.give(AP_LONGSWORD, "Longsword")
        game.inventory[SWORD_PLACEHOLDER] = 1
        game.event_flags[GOAL_FLAG] = True
        clock.advance(1.0)

        ds3.run(session)

        assert game.granted == [(LONGSWORD, 1)]
        assert saves.data.items_granted == 1
        assert connection.checked == [{SWORD_LOCATION}]
        assert connection.completions == 1

    def test_path_of_the_dragon_is_a_gesture(self, ds3, session, connection, slot_data, game, clock):
        """Path of the Dragon unlocks a gesture instead of an item."""
        slot_data.ap_ids_to_item_ids[2000] = int(PATH_OF_THE_DRAGON)
        connection.give(2000, "Path of the Dragon")
        clock.advance(1.0)

        ds3.run(session)

        assert game.gestures == {PATH_OF_THE_DRAGON_GESTURE}
        assert game.granted == []

    def test_hints_reset_on_new_connection(self, ds3, session, connection, game):
        """Shop hints are sent again after reconnecting."""
        game.shop = [SWORD_PLACEHOLDER]

        ds3.run(session)
        ds3.run(session)
        assert connection.hints == [[SWORD_LOCATION]]

        session.connection_epoch += 1
        ds3.run(session)
        assert connection.hints == [[SWORD_LOCATION], [SWORD_LOCATION]]

    @pytest.mark.parametrize("dlc, missing", [
        ((True, False), "the Ringed City DLC"),
        ((False, True), "the Ashes of Ariandel DLC"),
        ((False, False), "both DLCs"),
    ])
    def test_missing_dlc(self, ds3, session, slot_data, game, dlc, missing):
        """A seed that needs DLC stops the client when it's missing."""
        slot_data.options.enable_dlc = True
        game.dlc = dlc

        with pytest.raises(DlcMissingError, match=missing):
            ds3.run(session)

    def test_dlc_not_checked_outside_game(self, ds3, session, slot_data, game):
        """DLC isn't checked before the game loads."""
        slot_data.options.enable_dlc = True
        game.dlc = (False, False)
        game.loaded = False

        ds3.run(session)

    def test_dlc_not_required(self, ds3, session, game):
        """Missing DLC is fine when the seed doesn't use it."""
        game.dlc = (False, False)
        ds3.run(session)

    def test_debug_commands(self, game, saves, clock, session):
        """Debug commands can set and read event flags."""
        routine = DarkSouls3Routine(game, saves, clock, debug_commands=True)

        assert routine.handle_command(session, "!setevent", "14000000 true")
        assert game.event_flags[14000000] is True
        assert routine.handle_command(session, "!getevent", "14000000")

    def test_setevent_needs_debug_commands(self, ds3, session):
        """Setting flags is off by default."""
        assert not ds3.handle_command(session, "!setevent", "14000000 true")


class TestSekiro:

    def test_items_and_locations(self, game, saves, clock, session, connection):
        """Sekiro grants items and sends locations but no goal."""
        routine = SekiroRoutine(game, saves, clock)
        connection.give(AP_LONGSWORD)
        game.inventory[SWORD_PLACEHOLDER] = 1
        game.event_flags[GOAL_FLAG] = True
        clock.advance(1.0)

        routine.run(session)

        assert game.granted == [(LONGSWORD, 1)]
        assert connection.checked == [{SWORD_LOCATION}]
        assert saves.data.seed == SEED
        # No goal reporting for Sekiro
        assert connection.completions == 0

    def test_drains_events(self, game, saves, clock, session):
        """Sekiro drops death links."""
        session.event_queue.append(PeerDeathLink(source="Bob", timestamp=clock.time()))

        SekiroRoutine(game, saves, clock).run(session)

        assert session.event_queue == []
        assert game.deaths == 0


class TestEndToEnd:

    def test_unmapped_item_stops_the_client(self, config, connection, game, saves, clock):
        """An item with no local counterpart stops the client."""
        routine = DarkSouls3Routine(game, saves, clock)
        cycle = UpdateCycle(config, lambda c: connection, routine, clock=clock)

        connection.give(424242, "Mystery Item")
        clock.advance(1.0)
        cycle.update(is_main_menu=True)

        error = cycle.take_error()
        assert isinstance(error, DataIntegrityError)
        assert saves.data.items_granted == 0

        connection.give(AP_LONGSWORD)
        clock.advance(1.0)
        cycle.update(is_main_menu=True)
        assert game.granted == []

    def test_corrupt_save_stops_the_client(self, config, connection, game, clock, tmp_path):
        """Unreadable client data stops the client."""
        (tmp_path / "DS30000.apsave.json").write_text("[]", encoding="utf-8")
        saves = JsonSaveStore(save_dir=tmp_path)
        saves.open("DS30000.sl2")
        routine = DarkSouls3Routine(game, saves, clock)
        cycle = UpdateCycle(config, lambda c: connection, routine, clock=clock)

        connection.give(AP_LONGSWORD)
        clock.advance(1.0)
        cycle.update(is_main_menu=True)

        assert isinstance(cycle.take_error(), DataIntegrityError)
        assert game.granted == []

    def test_items_granted_across_ticks(self, config, connection, game, saves, clock):
        """Items wait for the load grace period, then arrive."""
        routine = DarkSouls3Routine(game, saves, clock)
        cycle = UpdateCycle(config, lambda c: connection, routine, clock=clock)
        connection.give(AP_LONGSWORD)
        connection.give(AP_LONGSWORD)

        for _ in range(5):
            clock.advance(0.5)
            cycle.update(is_main_menu=False)

        # Load grace holds everything back for the first ten seconds
        assert game.granted == []

        for _ in range(30):
            clock.advance(0.5)
            cycle.update(is_main_menu=False)

        assert game.granted == [(LONGSWORD, 1), (LONGSWORD, 1)]
        assert saves.data.items_granted == 2
