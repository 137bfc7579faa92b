"""JSON data snapshot exchanged with the church database.

The database exports flat lists of users, songs, setlists, services,
notifications and templates into one JSON file. This module loads that
snapshot into models and writes generated records back into it.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from worship_planner.models import (
    GeneratedSetlist,
    RecurringService,
    SetlistNotification,
    SetlistTemplate,
    Song,
    User,
)


@dataclass
class PlannerData:
    """All records the planner reads from the database."""

    users: list[User] = field(default_factory=list)
    songs: list[Song] = field(default_factory=list)
    setlists: list[GeneratedSetlist] = field(default_factory=list)
    recurring_services: list[RecurringService] = field(default_factory=list)
    notifications: list[SetlistNotification] = field(default_factory=list)
    setlist_templates: list[SetlistTemplate] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "PlannerData":
        """Load a snapshot from a JSON file.

        Args:
            path: Path to the snapshot file

        Returns:
            PlannerData instance

        Raises:
            FileNotFoundError: If the snapshot file doesn't exist
            ValueError: If the file is not valid JSON
            KeyError: If a record lacks a required field
        """
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        return cls(
            users=[User.from_dict(u) for u in data.get("users", [])],
            songs=[Song.from_dict(s) for s in data.get("songs", [])],
            setlists=[GeneratedSetlist.from_dict(s) for s in data.get("setlists", [])],
            recurring_services=[
                RecurringService.from_dict(s) for s in data.get("recurringServices", [])
            ],
            notifications=[
                SetlistNotification.from_dict(n) for n in data.get("notifications", [])
            ],
            setlist_templates=[
                SetlistTemplate.from_dict(t) for t in data.get("setlistTemplates", [])
            ],
        )

    def save(self, path: Path) -> None:
        """Save the snapshot to a JSON file.

        Args:
            path: Path to write
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "users": [u.to_dict() for u in self.users],
            "songs": [s.to_dict() for s in self.songs],
            "setlists": [s.to_dict() for s in self.setlists],
            "recurringServices": [s.to_dict() for s in self.recurring_services],
            "notifications": [n.to_dict() for n in self.notifications],
            "setlistTemplates": [t.to_dict() for t in self.setlist_templates],
        }

        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get_song(self, song_id: str) -> Optional[Song]:
        """Get a song by ID."""
        return next((s for s in self.songs if s.id == song_id), None)

    def get_user(self, user_id: str) -> Optional[User]:
        """Get a user by ID."""
        return next((u for u in self.users if u.id == user_id), None)

    def get_service(self, service_id: str) -> Optional[RecurringService]:
        """Get a recurring service by ID."""
        return next((s for s in self.recurring_services if s.id == service_id), None)

    def get_template(self, template_id: str) -> Optional[SetlistTemplate]:
        """Get a setlist template by ID."""
        return next((t for t in self.setlist_templates if t.id == template_id), None)

    def get_setlist(self, setlist_id: str) -> Optional[GeneratedSetlist]:
        """Get a setlist by ID."""
        return next((s for s in self.setlists if s.id == setlist_id), None)

    def upsert_setlist(self, setlist: GeneratedSetlist) -> None:
        """Insert a setlist, replacing any existing one with the same ID.

        Args:
            setlist: Setlist to store
        """
        for i, existing in enumerate(self.setlists):
            if existing.id == setlist.id:
                self.setlists[i] = setlist
                return
        self.setlists.append(setlist)

    def team_preferences(self, song_id: str) -> dict[str, str]:
        """Get each user's preferred key for a song.

        Per-song preferences win over a user's default key; users with
        neither are left out.

        Args:
            song_id: The song ID

        Returns:
            User ID to preferred key
        """
        preferences = {}
        for user in self.users:
            key = user.preferred_note_for(song_id) or user.default_preferred_note
            if key:
                preferences[user.id] = key
        return preferences

    def first_musical_director(self) -> Optional[User]:
        """Get the first user with the musical-director role."""
        return next((u for u in self.users if u.has_role("musical-director")), None)
