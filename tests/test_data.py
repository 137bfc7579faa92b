"""Tests for the JSON data snapshot."""

import json

import pytest

from worship_planner.data import PlannerData
from worship_planner.models import GeneratedSetlist


class TestPlannerDataLoad:
    """Tests for loading and saving snapshots."""

    def test_load(self, data_file):
        """Test loading every record type."""
        data = PlannerData.load(data_file)

        assert len(data.users) == 3
        assert len(data.songs) == 4
        assert len(data.recurring_services) == 2
        assert len(data.setlist_templates) == 2
        assert data.setlists == []
        assert data.notifications == []

    def test_load_missing_file(self, tmp_path):
        """Test that a missing snapshot raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            PlannerData.load(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path):
        """Test that invalid JSON raises ValueError."""
        path = tmp_path / "data.json"
        path.write_text("{not json")

        with pytest.raises(ValueError):
            PlannerData.load(path)

    def test_load_empty_object(self, tmp_path):
        """Test that missing collections load as empty."""
        path = tmp_path / "data.json"
        path.write_text("{}")

        data = PlannerData.load(path)

        assert data.songs == []
        assert data.users == []

    def test_save_round_trip(self, data_file, tmp_path):
        """Test saving keeps the database record format."""
        data = PlannerData.load(data_file)
        out = tmp_path / "out" / "data.json"

        data.save(out)

        raw = json.loads(out.read_text())
        assert raw["recurringServices"][0]["dayOfWeek"] == 0
        assert raw["setlistTemplates"][0]["structure"]["Opening"]["count"] == 1
        assert PlannerData.load(out).songs == data.songs


class TestPlannerDataLookups:
    """Tests for lookup helpers."""

    @pytest.fixture
    def data(self, data_file):
        """Loaded sample snapshot."""
        return PlannerData.load(data_file)

    def test_get_by_id(self, data):
        """Test ID lookups."""
        assert data.get_song("song_3").title == "Shout Aloud"
        assert data.get_user("user_md").name == "Morgan"
        assert data.get_service("svc_wed").active is False
        assert data.get_template("tmpl_sunday").name == "Sunday Morning"
        assert data.get_song("missing") is None
        assert data.get_setlist("missing") is None

    def test_upsert_setlist(self, data):
        """Test insert and replace by ID."""
        first = GeneratedSetlist(id="s1", title="One", date="2024-01-07", service_id="svc_sunday")
        data.upsert_setlist(first)
        data.upsert_setlist(GeneratedSetlist(id="s1", title="Two", date="2024-01-07", service_id="svc_sunday"))

        assert len(data.setlists) == 1
        assert data.get_setlist("s1").title == "Two"

    def test_team_preferences(self, data):
        """Test per-song preferences win over defaults."""
        assert data.team_preferences("song_1") == {
            "user_praise": "A",
            "user_worship": "E",
            "user_md": "A",
        }
        assert data.team_preferences("song_2")["user_md"] == "D"

    def test_first_musical_director(self, data):
        """Test musical director lookup."""
        assert data.first_musical_director().id == "user_md"

    def test_no_musical_director(self):
        """Test empty team."""
        assert PlannerData().first_musical_director() is None
