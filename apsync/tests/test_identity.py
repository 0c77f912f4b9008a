"""
Tests for seed identity checks.
"""

import pytest

from ..errors import IdentityConflictError
from ..persistence import SaveData
from ..trackers import adopt_seed, check_seed_conflict


class TestSeedConflict:

    def test_all_agree(self):
        """No conflict when every seed matches."""
        check_seed_conflict("abc", "abc", "abc")

    def test_only_config_known(self):
        """Unknown seeds don't conflict."""
        check_seed_conflict(None, "abc", None)

    def test_connection_vs_config(self):
        """The room and the config disagree."""
        with pytest.raises(IdentityConflictError) as info:
            check_seed_conflict("abc", "xyz", None)

        assert info.value.sources == ("connection", "config")
        assert "Connected room seed: abc" in str(info.value)
        assert "Randomizer seed: xyz" in str(info.value)

    def test_connection_vs_save(self):
        """The room and the save disagree."""
        with pytest.raises(IdentityConflictError) as info:
            check_seed_conflict("abc", "abc", "old")

        assert info.value.sources == ("connection", "save")
        assert "Save file seed: old" in str(info.value)

    def test_config_vs_save_while_disconnected(self):
        """The config and the save disagree before connecting."""
        with pytest.raises(IdentityConflictError) as info:
            check_seed_conflict(None, "new", "old")

        assert info.value.sources == ("config", "save")

    def test_error_is_fatal(self):
        """Seed conflicts are fatal."""
        assert IdentityConflictError("", "a", "b").fatal


class TestAdoptSeed:

    def test_new_save_adopts_config_seed(self):
        """A new save takes the config's seed."""
        save = SaveData()
        assert adopt_seed(save, "abc")
        assert save.seed == "abc"

    def test_existing_seed_kept(self):
        """A save's seed is never replaced."""
        save = SaveData(seed="old")
        assert not adopt_seed(save, "abc")
        assert save.seed == "old"
