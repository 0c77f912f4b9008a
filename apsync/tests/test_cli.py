"""
Tests for the command-line tools.
"""

import json

import pytest

from ..cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("APSYNC_CONFIG", "APSYNC_URL", "APSYNC_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


class TestCheckConfig:

    def test_valid(self, tmp_path, capsys):
        """A readable config is summarized."""
        path = tmp_path / "apconfig.json"
        path.write_text(json.dumps({"slot": "Alice", "seed": "abc"}), encoding="utf-8")

        assert main(["check-config", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Slot: Alice" in out
        assert "Seed: abc" in out

    def test_missing(self, tmp_path, capsys):
        """A missing config is an error."""
        assert main(["check-config", str(tmp_path / "apconfig.json")]) == 1
        assert capsys.readouterr().out.startswith("Error:")


class TestCheckSlotData:

    def test_valid(self, tmp_path, capsys):
        """Readable slot data is summarized."""
        path = tmp_path / "slot.json"
        path.write_text(json.dumps({
            "apIdsToItemIds": {"1": 2},
            "goal": [14100800],
            "options": {"death_link": 1, "death_link_amnesty": 2},
        }), encoding="utf-8")

        assert main(["check-slot-data", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Items mapped: 1" in out
        assert "Death link: any_death (amnesty 2)" in out
        assert "Warnings" not in out

    def test_warns_without_goal(self, tmp_path, capsys):
        """Slot data with no goal flags gets a warning."""
        path = tmp_path / "slot.json"
        path.write_text("{}", encoding="utf-8")

        assert main(["check-slot-data", str(path)]) == 0
        assert "No goal flags; the goal is reported as soon" in capsys.readouterr().out

    def test_invalid(self, tmp_path):
        """Slot data with bad options is an error."""
        path = tmp_path / "slot.json"
        path.write_text(json.dumps({"options": {"death_link_amnesty": 0}}), encoding="utf-8")

        assert main(["check-slot-data", str(path)]) == 1

    def test_not_json(self, tmp_path):
        """A file that isn't JSON is an error."""
        path = tmp_path / "slot.json"
        path.write_text("nope", encoding="utf-8")

        assert main(["check-slot-data", str(path)]) == 1


def test_no_command(capsys):
    """Running with no command fails."""
    assert main([]) == 1
