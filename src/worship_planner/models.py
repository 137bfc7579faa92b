"""Data models for worship planner entities.

Provides dataclasses for songs, users, templates, generated setlists,
recurring services and notifications, with serialization to/from the
camelCase JSON records exchanged with the persistence layer.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

SECTION_TYPES = ("praise", "worship")
SECTION_TEMPOS = ("slow", "medium", "fast", "mixed")
USER_ROLES = ("leader", "worship", "praise", "musical-director")
NOTIFICATION_TYPES = ("setlist-reminder", "team-reminder", "service-reminder")
NOTIFICATION_STATUSES = ("pending", "acknowledged", "completed")


@dataclass
class Song:
    """Song in the team's library.

    Attributes:
        id: Unique song ID
        title: Song title
        original_key: Key the song is written in (e.g., "G", "A#/Bb")
        tags: Free-text tags used for type/tempo classification
        artist: Artist name
        tempo: Optional tempo category
        category: Optional category (worship, praise, hymn, contemporary)
        duration: Duration in minutes
        last_used: ISO date the song was last used
        usage_count: Number of times the song was used
    """

    id: str
    title: str
    original_key: str
    tags: list[str] = field(default_factory=list)
    artist: Optional[str] = None
    tempo: Optional[str] = None
    category: Optional[str] = None
    duration: Optional[float] = None
    last_used: Optional[str] = None
    usage_count: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Song":
        """Create a Song from a JSON record.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            Song instance
        """
        return cls(
            id=data["id"],
            title=data["title"],
            original_key=data["originalKey"],
            tags=list(data.get("tags") or []),
            artist=data.get("artist"),
            tempo=data.get("tempo"),
            category=data.get("category"),
            duration=data.get("duration"),
            last_used=data.get("lastUsed"),
            usage_count=data.get("usageCount") or 0,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert Song to a JSON record.

        Returns:
            Dictionary representation of the song
        """
        return {
            "id": self.id,
            "title": self.title,
            "originalKey": self.original_key,
            "tags": list(self.tags),
            "artist": self.artist,
            "tempo": self.tempo,
            "category": self.category,
            "duration": self.duration,
            "lastUsed": self.last_used,
            "usageCount": self.usage_count,
        }


@dataclass
class UserSongPreference:
    """A user's preferred key for one specific song."""

    song_id: str
    preferred_note: str
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserSongPreference":
        return cls(
            song_id=data["songId"],
            preferred_note=data["preferredNote"],
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "songId": self.song_id,
            "preferredNote": self.preferred_note,
            "notes": self.notes,
        }


@dataclass
class User:
    """Team member who can lead or direct a service.

    Attributes:
        id: Unique user ID
        name: Display name
        roles: Roles held (leader, worship, praise, musical-director)
        default_preferred_note: Key the user prefers by default
        song_preferences: Per-song key overrides
        email: Contact email
        instruments: Instruments the user plays
    """

    id: str
    name: str
    roles: list[str] = field(default_factory=list)
    default_preferred_note: Optional[str] = None
    song_preferences: list[UserSongPreference] = field(default_factory=list)
    email: Optional[str] = None
    instruments: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Create a User from a JSON record.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            User instance
        """
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            roles=list(data.get("roles") or []),
            default_preferred_note=data.get("defaultPreferredNote") or None,
            song_preferences=[
                UserSongPreference.from_dict(p) for p in data.get("userSongPreferences") or []
            ],
            email=data.get("email"),
            instruments=list(data.get("instruments") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert User to a JSON record.

        Returns:
            Dictionary representation of the user
        """
        return {
            "id": self.id,
            "name": self.name,
            "roles": list(self.roles),
            "defaultPreferredNote": self.default_preferred_note,
            "userSongPreferences": [p.to_dict() for p in self.song_preferences],
            "email": self.email,
            "instruments": list(self.instruments),
        }

    def has_role(self, role: str) -> bool:
        """Check whether the user holds a role."""
        return role in self.roles

    def preferred_note_for(self, song_id: str) -> Optional[str]:
        """Get the user's per-song key override, if any.

        Args:
            song_id: The song ID

        Returns:
            Preferred key for the song, or None
        """
        for preference in self.song_preferences:
            if preference.song_id == song_id:
                return preference.preferred_note
        return None


@dataclass
class SectionSpec:
    """Target shape of one template section."""

    count: int
    type: str
    tempo: str = "mixed"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SectionSpec":
        return cls(count=data["count"], type=data["type"], tempo=data.get("tempo", "mixed"))

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "type": self.type, "tempo": self.tempo}


@dataclass
class SetlistTemplate:
    """Reusable setlist shape.

    Attributes:
        id: Unique template ID
        name: Display name (e.g., "Sunday Morning")
        service_type: Service type the template is meant for
        structure: Section name to SectionSpec, in service order
        total_songs: Nominal song total (informational)
        estimated_duration: Estimated service length in minutes
    """

    id: str
    name: str
    service_type: str = ""
    structure: dict[str, SectionSpec] = field(default_factory=dict)
    total_songs: int = 0
    estimated_duration: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SetlistTemplate":
        """Create a SetlistTemplate from a JSON record.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            SetlistTemplate instance
        """
        return cls(
            id=data["id"],
            name=data["name"],
            service_type=data.get("serviceType", ""),
            structure={
                name: SectionSpec.from_dict(section)
                for name, section in (data.get("structure") or {}).items()
            },
            total_songs=data.get("totalSongs", 0),
            estimated_duration=data.get("estimatedDuration", 0),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert SetlistTemplate to a JSON record.

        Returns:
            Dictionary representation of the template
        """
        return {
            "id": self.id,
            "name": self.name,
            "serviceType": self.service_type,
            "structure": {name: section.to_dict() for name, section in self.structure.items()},
            "totalSongs": self.total_songs,
            "estimatedDuration": self.estimated_duration,
        }


@dataclass(frozen=True)
class SetlistSongEntry:
    """One song slot in a generated setlist.

    Attributes:
        song_id: Reference to Song.id
        section: Name of the template section the song belongs to
        order: 1-based position across the whole setlist
        preferred_key: Key the song will be played in
        notes: Free-text note for the slot
    """

    song_id: str
    section: str
    order: int
    preferred_key: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SetlistSongEntry":
        return cls(
            song_id=data["songId"],
            section=data["section"],
            order=data["order"],
            preferred_key=data.get("preferredKey"),
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "songId": self.song_id,
            "section": self.section,
            "order": self.order,
            "preferredKey": self.preferred_key,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class GeneratedSetlist:
    """Concrete setlist for one service occurrence.

    Instances are never modified in place. Transform steps return a new
    instance with `notes` extended by one entry.

    Attributes:
        id: Deterministic ID derived from service ID and date
        title: Display title
        date: Service date (YYYY-MM-DD)
        service_id: Reference to RecurringService.id
        songs: Ordered song entries
        praise_leader: User ID of the praise leader
        worship_leader: User ID of the worship leader
        musical_director: User ID of the musical director
        estimated_duration: Estimated length in minutes
        notes: Append-only log of generation notes
    """

    id: str
    title: str
    date: str
    service_id: str
    songs: tuple[SetlistSongEntry, ...] = ()
    praise_leader: Optional[str] = None
    worship_leader: Optional[str] = None
    musical_director: Optional[str] = None
    estimated_duration: int = 0
    notes: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratedSetlist":
        """Create a GeneratedSetlist from a JSON record.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            GeneratedSetlist instance
        """
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            date=data["date"],
            service_id=data.get("serviceId", ""),
            songs=tuple(SetlistSongEntry.from_dict(s) for s in data.get("songs") or []),
            praise_leader=data.get("praiseLeader"),
            worship_leader=data.get("worshipLeader"),
            musical_director=data.get("musicalDirector"),
            estimated_duration=data.get("estimatedDuration") or 0,
            notes=tuple(data.get("notes") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert GeneratedSetlist to a JSON record.

        Returns:
            Dictionary representation of the setlist
        """
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "serviceId": self.service_id,
            "songs": [entry.to_dict() for entry in self.songs],
            "praiseLeader": self.praise_leader,
            "worshipLeader": self.worship_leader,
            "musicalDirector": self.musical_director,
            "estimatedDuration": self.estimated_duration,
            "notes": list(self.notes),
        }


@dataclass
class RecurringService:
    """Weekly service definition.

    Attributes:
        id: Unique service ID
        title: Display title (e.g., "Sunday Worship")
        day_of_week: 0 = Sunday ... 6 = Saturday
        time: Start time in 24-hour "HH:MM" format
        active: Whether reminders should be generated
        setlist_reminder_days: Days before the service the setlist is due
        team_reminder_days: Days before the service the team is notified
        default_duration: Service length in minutes
        location: Where the service is held
        type: Service type label
        required_roles: Roles that must be filled
    """

    id: str
    title: str
    day_of_week: int
    time: str
    active: bool = True
    setlist_reminder_days: int = 0
    team_reminder_days: int = 0
    default_duration: int = 0
    location: str = ""
    type: str = ""
    required_roles: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecurringService":
        """Create a RecurringService from a JSON record.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            RecurringService instance
        """
        return cls(
            id=data["id"],
            title=data["title"],
            day_of_week=data["dayOfWeek"],
            time=data["time"],
            active=bool(data.get("active", True)),
            setlist_reminder_days=data.get("setlistReminderDays", 0),
            team_reminder_days=data.get("teamReminderDays", 0),
            default_duration=data.get("defaultDuration", 0),
            location=data.get("location", ""),
            type=data.get("type", ""),
            required_roles=list(data.get("requiredRoles") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert RecurringService to a JSON record.

        Returns:
            Dictionary representation of the service
        """
        return {
            "id": self.id,
            "title": self.title,
            "dayOfWeek": self.day_of_week,
            "time": self.time,
            "active": self.active,
            "setlistReminderDays": self.setlist_reminder_days,
            "teamReminderDays": self.team_reminder_days,
            "defaultDuration": self.default_duration,
            "location": self.location,
            "type": self.type,
            "requiredRoles": list(self.required_roles),
        }


@dataclass
class SetlistNotification:
    """Reminder record for an upcoming service.

    Attributes:
        id: Unique notification ID
        type: setlist-reminder, team-reminder or service-reminder
        service_id: Reference to RecurringService.id
        target_date: Occurrence date (YYYY-MM-DD)
        status: pending, acknowledged or completed
        assigned_to: User ID responsible for acting on the reminder
        message: Human-readable reminder text
        created_at: ISO timestamp when created
    """

    id: str
    type: str
    service_id: str
    target_date: str
    status: str = "pending"
    assigned_to: str = ""
    message: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SetlistNotification":
        """Create a SetlistNotification from a JSON record.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            SetlistNotification instance
        """
        return cls(
            id=data["id"],
            type=data["type"],
            service_id=data["serviceId"],
            target_date=data["targetDate"],
            status=data.get("status", "pending"),
            assigned_to=data.get("assignedTo", ""),
            message=data.get("message", ""),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert SetlistNotification to a JSON record.

        Returns:
            Dictionary representation of the notification
        """
        return {
            "id": self.id,
            "type": self.type,
            "serviceId": self.service_id,
            "targetDate": self.target_date,
            "status": self.status,
            "assignedTo": self.assigned_to,
            "message": self.message,
            "createdAt": self.created_at,
        }

    @property
    def is_pending(self) -> bool:
        """Check if the notification still needs action."""
        return self.status == "pending"
