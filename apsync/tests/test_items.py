"""
Tests for item delivery.

Tests:
- Items are granted once each, in index order
- The persisted cursor survives restarts
- Grants are rate limited
- Unmapped items are a data error
"""

import pytest

from ..connection import ReceivedItem
from ..errors import DataIntegrityError
from ..trackers import ItemDeliveryTracker
from .conftest import AP_EMBER, AP_LONGSWORD, EMBER, LONGSWORD


@pytest.fixture
def tracker(game, saves, clock):
    return ItemDeliveryTracker(game, saves, clock)


class TestDelivery:

    def test_grants_in_index_order(self, tracker, session, connection, game, saves, clock):
        """Items are granted one at a time in index order."""
        connection.give(AP_LONGSWORD, "Longsword", "Firelink Shrine")
        connection.give(AP_EMBER, "Ember")

        clock.advance(1.0)
        first = tracker.deliver(session)
        assert first.index == 0
        assert game.granted == [(LONGSWORD, 1)]
        assert saves.data.items_granted == 1

        clock.advance(1.0)
        second = tracker.deliver(session)
        assert second.index == 1
        assert game.granted == [(LONGSWORD, 1), (EMBER, 3)]
        assert saves.data.items_granted == 2

        clock.advance(1.0)
        assert tracker.deliver(session) is None
        assert saves.writes == 2

    def test_resumes_from_saved_cursor(self, tracker, session, connection, game, saves, clock):
        """Delivery picks up from the saved cursor."""
        saves.data.items_granted = 1
        connection.give(AP_LONGSWORD)
        connection.give(AP_EMBER)

        clock.advance(1.0)
        item = tracker.deliver(session)

        assert item.index == 1
        assert game.granted == [(EMBER, 3)]

    def test_lowest_index_first(self, tracker, session, connection, game, clock):
        """The lowest pending index is granted first."""
        connection._items.extend([
            ReceivedItem(index=1, item_id=AP_EMBER),
            ReceivedItem(index=0, item_id=AP_LONGSWORD),
        ])

        clock.advance(1.0)
        assert tracker.deliver(session).index == 0
        assert game.granted == [(LONGSWORD, 1)]

    def test_rate_limited(self, tracker, session, connection, game, clock):
        """At most one item is granted per second."""
        connection.give(AP_LONGSWORD)
        connection.give(AP_EMBER)

        # Nothing within a second of the session start
        assert tracker.deliver(session) is None

        clock.advance(1.0)
        assert tracker.deliver(session) is not None

        clock.advance(0.5)
        assert tracker.deliver(session) is None
        assert len(game.granted) == 1

        clock.advance(0.5)
        assert tracker.deliver(session) is not None
        assert len(game.granted) == 2

    def test_nothing_without_open_save(self, tracker, session, connection, game, saves, clock):
        """Nothing is granted without a save."""
        saves.data = None
        connection.give(AP_LONGSWORD)
        clock.advance(1.0)

        assert tracker.deliver(session) is None
        assert game.granted == []

    def test_game_not_ready_retries(self, tracker, session, connection, game, saves, clock):
        """An item is retried once the game loads."""
        connection.give(AP_LONGSWORD)
        clock.advance(1.0)

        game.loaded = False
        assert tracker.deliver(session) is None
        assert saves.data.items_granted == 0

        game.loaded = True
        assert tracker.deliver(session) is not None
        assert saves.data.items_granted == 1


class TestDataErrors:

    def test_unmapped_item_raises(self, tracker, session, connection, saves, clock):
        """An item with no local counterpart stops the client."""
        connection.give(424242, "Mystery Item")
        clock.advance(1.0)

        with pytest.raises(DataIntegrityError, match="Mystery Item"):
            tracker.deliver(session)
        assert saves.data.items_granted == 0

    def test_invalid_local_id_raises(self, tracker, session, connection, slot_data, clock):
        """An invalid local item id stops the client."""
        slot_data.ap_ids_to_item_ids[AP_LONGSWORD] = 0x30000000
        connection.give(AP_LONGSWORD)
        clock.advance(1.0)

        with pytest.raises(DataIntegrityError):
            tracker.deliver(session)


class TestCosmeticRedirects:

    def test_redirected_item_becomes_gesture(self, game, saves, clock, session, connection):
        """A redirected item unlocks a gesture instead."""
        tracker = ItemDeliveryTracker(game, saves, clock, cosmetic_redirects={EMBER: 29})
        connection.give(AP_EMBER)
        clock.advance(1.0)

        tracker.deliver(session)

        assert game.gestures == {29}
        assert game.granted == []
        assert saves.data.items_granted == 1
