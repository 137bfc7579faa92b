"""Shared fixtures for worship-planner tests."""

import json

import pytest

from worship_planner.models import (
    RecurringService,
    SectionSpec,
    SetlistTemplate,
    Song,
    User,
    UserSongPreference,
)


@pytest.fixture
def worship_songs():
    """Five slow worship songs."""
    keys = ["C", "D", "E", "G", "A"]
    return [
        Song(id=f"song_w{i}", title=f"Worship Song {i}", original_key=key, tags=["worship", "slow"])
        for i, key in enumerate(keys, 1)
    ]


@pytest.fixture
def praise_songs():
    """Three fast praise songs."""
    return [
        Song(id="song_p1", title="Shout Your Name", original_key="G", tags=["praise", "fast"]),
        Song(id="song_p2", title="Alive Again", original_key="A", tags=["upbeat", "fast"]),
        Song(id="song_p3", title="Rise Up", original_key="D", tags=["Praise", "Fast"]),
    ]


@pytest.fixture
def team():
    """Team with one user per leader role, plus a plain leader."""
    return [
        User(id="user_lead", name="Lee", roles=["leader"]),
        User(id="user_praise", name="Pat", roles=["praise"], default_preferred_note="A"),
        User(id="user_worship", name="Wren", roles=["worship", "praise"]),
        User(
            id="user_md",
            name="Morgan",
            roles=["musical-director"],
            default_preferred_note="D",
            song_preferences=[UserSongPreference(song_id="song_w1", preferred_note="E")],
        ),
    ]


@pytest.fixture
def sunday_template():
    """Two-section Sunday template."""
    return SetlistTemplate(
        id="tmpl_sunday",
        name="Sunday Morning",
        service_type="sunday",
        structure={
            "Opening": SectionSpec(count=2, type="praise", tempo="fast"),
            "Worship Set": SectionSpec(count=3, type="worship", tempo="slow"),
        },
        total_songs=5,
        estimated_duration=75,
    )


@pytest.fixture
def sunday_service():
    """Sunday 10:00 service with a 3-day setlist deadline."""
    return RecurringService(
        id="svc_sunday",
        title="Sunday Worship",
        day_of_week=0,
        time="10:00",
        active=True,
        setlist_reminder_days=3,
        team_reminder_days=5,
        default_duration=90,
    )


@pytest.fixture
def sample_data_dict():
    """Data snapshot in the database export format."""
    return {
        "users": [
            {"id": "user_praise", "name": "Pat", "roles": ["praise"], "defaultPreferredNote": "A"},
            {"id": "user_worship", "name": "Wren", "roles": ["worship"], "defaultPreferredNote": "E"},
            {
                "id": "user_md",
                "name": "Morgan",
                "roles": ["musical-director"],
                "defaultPreferredNote": "D",
                "userSongPreferences": [{"songId": "song_1", "preferredNote": "A"}],
            },
        ],
        "songs": [
            {"id": "song_1", "title": "Holy Ground", "originalKey": "G", "tags": ["worship", "slow"]},
            {"id": "song_2", "title": "Still Waters", "originalKey": "C", "tags": ["worship", "slow"]},
            {"id": "song_3", "title": "Shout Aloud", "originalKey": "A", "tags": ["praise", "fast"]},
            {"id": "song_4", "title": "Victory Song", "originalKey": "E", "tags": ["upbeat", "fast"]},
        ],
        "setlists": [],
        "recurringServices": [
            {
                "id": "svc_sunday",
                "title": "Sunday Worship",
                "dayOfWeek": 0,
                "time": "10:00",
                "active": True,
                "setlistReminderDays": 3,
                "teamReminderDays": 5,
                "defaultDuration": 90,
            },
            {
                "id": "svc_wed",
                "title": "Midweek Prayer",
                "dayOfWeek": 3,
                "time": "19:30",
                "active": False,
                "setlistReminderDays": 1,
                "teamReminderDays": 2,
                "defaultDuration": 60,
            },
        ],
        "notifications": [],
        "setlistTemplates": [
            {
                "id": "tmpl_sunday",
                "name": "Sunday Morning",
                "serviceType": "sunday",
                "structure": {
                    "Opening": {"count": 1, "type": "praise", "tempo": "fast"},
                    "Worship Set": {"count": 2, "type": "worship", "tempo": "slow"},
                },
                "totalSongs": 3,
                "estimatedDuration": 75,
            },
            {
                "id": "tmpl_broken",
                "name": "Broken",
                "structure": {"Opening": {"count": 0, "type": "praise", "tempo": "fast"}},
            },
        ],
    }


@pytest.fixture
def data_file(tmp_path, sample_data_dict):
    """Data snapshot written to disk."""
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_data_dict), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path, data_file):
    """Config file pointing at the temporary data snapshot."""
    path = tmp_path / "config.toml"
    path.write_text(
        f'[data]\npath = "{data_file}"\n\n'
        f'[scheduler]\nweeks_ahead = 2\n\n'
        f'[setlist]\nrandom_seed = 7\n\n'
        f'[logging]\ndir = "{tmp_path / "logs"}"\nlevel = "DEBUG"\n'
    )
    return path
