"""Automatic setlist generation and key adjustment.

Composes a GeneratedSetlist from a SetlistTemplate and a song pool, assigns
service leaders, and provides follow-up transforms (key adjustment for the
musical director, section regrouping) that each return a new setlist.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, Iterable, Optional

from worship_planner.models import (
    SECTION_TEMPOS,
    SECTION_TYPES,
    GeneratedSetlist,
    SetlistSongEntry,
    SetlistTemplate,
    Song,
    User,
)

logger = logging.getLogger(__name__)

# (tags, section type, tempo or None) -> whether the song fits the section
TagMatcher = Callable[[Iterable[str], str, Optional[str]], bool]

WORSHIP_INDICATORS = ("slow", "intimate")
PRAISE_INDICATORS = ("fast", "upbeat")

UNASSIGNED = "Unassigned"


class InvalidTemplateError(ValueError):
    """Template cannot be used to generate a setlist."""

    def __init__(self, message: str, template_id: Optional[str] = None):
        super().__init__(message)
        self.template_id = template_id


@dataclass
class Leaders:
    """Users picked to lead a service."""

    praise_leader: Optional[User] = None
    worship_leader: Optional[User] = None
    musical_director: Optional[User] = None


@dataclass
class SummarySong:
    """Song line in a setlist summary."""

    title: str
    original_key: str
    preferred_key: str
    order: int


@dataclass
class SetlistSummary:
    """Read-only presentation view of a setlist.

    Attributes:
        title: Setlist title
        date: Service date
        estimated_duration: Estimated length in minutes
        total_songs: Number of entries in the setlist
        leaders: Role label to leader display name
        songs_by_section: Section name to its songs, in setlist order
        notes: Generation notes
        shortfalls: Section name to number of songs missing versus the
            template (only filled when a template is supplied)
    """

    title: str
    date: str
    estimated_duration: int
    total_songs: int
    leaders: dict[str, str]
    songs_by_section: dict[str, list[SummarySong]] = field(default_factory=dict)
    notes: list[str] = field(default_factory=list)
    shortfalls: dict[str, int] = field(default_factory=dict)


def generate_auto_setlist_id(service_id: str, service_date: str) -> str:
    """Build the setlist ID for a service occurrence.

    Args:
        service_id: The service ID
        service_date: Service date (YYYY-MM-DD)

    Returns:
        ID like "setlist_auto_svc1_20240107"
    """
    return f"setlist_auto_{service_id}_{service_date.replace('-', '')}"


def validate_template(template: SetlistTemplate) -> None:
    """Check a template before generating from it.

    Args:
        template: Template to check

    Raises:
        InvalidTemplateError: If a section has a non-positive count or an
            unknown type or tempo
    """
    if not template.structure:
        logger.debug(f"Template {template.id} has no sections")

    for name, section in template.structure.items():
        if isinstance(section.count, bool) or not isinstance(section.count, int) or section.count <= 0:
            raise InvalidTemplateError(
                f"Section '{name}' must have a positive song count, got {section.count!r}",
                template.id,
            )
        if section.type not in SECTION_TYPES:
            raise InvalidTemplateError(
                f"Section '{name}' has unknown type {section.type!r}", template.id
            )
        if section.tempo not in SECTION_TEMPOS:
            raise InvalidTemplateError(
                f"Section '{name}' has unknown tempo {section.tempo!r}", template.id
            )


def default_tag_matcher(tags: Iterable[str], section_type: str, tempo: Optional[str]) -> bool:
    """Classify a song by substring matches on its tags.

    A song fits a section type if any tag contains the type word, or for
    worship "slow"/"intimate", or for praise "fast"/"upbeat". When a tempo is
    given, some tag must also contain the tempo word.
    """
    lowered = [tag.lower() for tag in tags]
    if section_type == "worship":
        indicators = (section_type,) + WORSHIP_INDICATORS
    elif section_type == "praise":
        indicators = (section_type,) + PRAISE_INDICATORS
    else:
        indicators = (section_type,)

    matches_type = any(word in tag for tag in lowered for word in indicators)
    if not matches_type:
        return False
    if tempo:
        return any(tempo in tag for tag in lowered)
    return True


def get_songs_by_filter(
    songs: Iterable[Song],
    section_type: str,
    tempo: Optional[str] = None,
    matcher: TagMatcher = default_tag_matcher,
) -> list[Song]:
    """Filter songs that fit a section type and tempo.

    Args:
        songs: Candidate songs
        section_type: "praise" or "worship"
        tempo: Tempo word, or None to accept any tempo
        matcher: Classification rule

    Returns:
        Matching songs in input order
    """
    return [song for song in songs if matcher(song.tags, section_type, tempo)]


def assign_leaders(users: Iterable[User]) -> Leaders:
    """Pick the first user holding each leader role.

    Availability is not considered.

    Args:
        users: Candidate users, in priority order

    Returns:
        Leaders with unfilled roles left as None
    """
    users = list(users)

    def first_with(role: str) -> Optional[User]:
        return next((u for u in users if u.has_role(role)), None)

    return Leaders(
        praise_leader=first_with("praise"),
        worship_leader=first_with("worship"),
        musical_director=first_with("musical-director"),
    )


def _display_date(service_date: str) -> str:
    d = date.fromisoformat(service_date)
    return f"{d.month}/{d.day}/{d.year}"


def generate_auto_setlist(
    template: SetlistTemplate,
    available_songs: list[Song],
    available_users: list[User],
    service_date: str,
    service_id: str,
    rng: Optional[random.Random] = None,
    matcher: TagMatcher = default_tag_matcher,
) -> GeneratedSetlist:
    """Generate a setlist for one service occurrence.

    Sections are filled in template order. Each section draws up to `count`
    random songs from the matching candidates; a section with too few
    candidates is left short.

    Args:
        template: Section layout to fill
        available_songs: Song pool
        available_users: Users eligible to lead
        service_date: Service date (YYYY-MM-DD)
        service_id: The service ID
        rng: Random source for song selection
        matcher: Tag classification rule

    Returns:
        New GeneratedSetlist

    Raises:
        InvalidTemplateError: If the template is malformed
        ValueError: If service_date is not an ISO date
    """
    validate_template(template)
    title = f"{template.name} - {_display_date(service_date)}"

    if rng is None:
        rng = random.Random()

    entries: list[SetlistSongEntry] = []
    notes: list[str] = []
    order = 1

    for section_name, section in template.structure.items():
        tempo = None if section.tempo == "mixed" else section.tempo
        candidates = get_songs_by_filter(available_songs, section.type, tempo, matcher)
        picked = rng.sample(candidates, k=min(section.count, len(candidates)))

        if len(picked) < section.count:
            logger.debug(
                f"Section {section_name}: wanted {section.count}, only {len(candidates)} candidates"
            )

        for song in picked:
            entries.append(
                SetlistSongEntry(
                    song_id=song.id,
                    section=section_name,
                    order=order,
                    preferred_key=song.original_key,
                    notes=f"Auto-generated for {section_name} section",
                )
            )
            order += 1

        notes.append(
            f"{section_name}: {section.count} {section.type} song(s) ({section.tempo} tempo)"
        )

    leaders = assign_leaders(available_users)

    logger.info(f"Generated setlist for {service_id} on {service_date} with {len(entries)} songs")

    return GeneratedSetlist(
        id=generate_auto_setlist_id(service_id, service_date),
        title=title,
        date=service_date,
        service_id=service_id,
        songs=tuple(entries),
        praise_leader=leaders.praise_leader.id if leaders.praise_leader else None,
        worship_leader=leaders.worship_leader.id if leaders.worship_leader else None,
        musical_director=leaders.musical_director.id if leaders.musical_director else None,
        estimated_duration=template.estimated_duration,
        notes=tuple(notes),
    )


def adjust_setlist_keys(
    setlist: GeneratedSetlist,
    musical_director: Optional[User],
    songs: Iterable[Song],
) -> GeneratedSetlist:
    """Set each entry's key to the musical director's preference.

    A per-song preference wins over the director's default key. Entries
    whose song is not in `songs` are left unchanged.

    Args:
        setlist: Setlist to adjust
        musical_director: Director whose preferences apply
        songs: Songs referenced by the setlist

    Returns:
        New setlist, or `setlist` itself if the director has no default key
    """
    if musical_director is None or not musical_director.default_preferred_note:
        return setlist

    song_lookup = {song.id: song for song in songs}
    adjusted = []
    for entry in setlist.songs:
        song = song_lookup.get(entry.song_id)
        if song is None:
            adjusted.append(entry)
            continue
        preferred_key = (
            musical_director.preferred_note_for(song.id)
            or musical_director.default_preferred_note
            or song.original_key
        )
        adjusted.append(replace(entry, preferred_key=preferred_key))

    return replace(
        setlist,
        songs=tuple(adjusted),
        notes=setlist.notes + (f"Keys adjusted for musical director: {musical_director.name}",),
    )


def optimize_key_flow(setlist: GeneratedSetlist, songs: Iterable[Song]) -> GeneratedSetlist:
    """Group entries by section and renumber them.

    Sections keep the order in which they first appear and songs keep their
    relative order inside a section, so a second pass changes nothing.

    Args:
        setlist: Setlist to reorder
        songs: Songs referenced by the setlist

    Returns:
        New setlist with sequential `order` values
    """
    by_section: dict[str, list[SetlistSongEntry]] = {}
    for entry in setlist.songs:
        by_section.setdefault(entry.section, []).append(entry)

    # TODO: order songs inside a section by key distance using calculate_transposition
    reordered = []
    order = 1
    for section_entries in by_section.values():
        for entry in section_entries:
            reordered.append(replace(entry, order=order))
            order += 1

    return replace(
        setlist,
        songs=tuple(reordered),
        notes=setlist.notes + ("Song order optimized for key flow",),
    )


def generate_setlist_summary(
    setlist: GeneratedSetlist,
    songs: Iterable[Song],
    users: Iterable[User],
    template: Optional[SetlistTemplate] = None,
) -> SetlistSummary:
    """Project a setlist into a display-ready summary.

    Args:
        setlist: Setlist to summarize
        songs: Songs referenced by the setlist
        users: Users referenced as leaders
        template: Template the setlist was generated from, to report shortfalls

    Returns:
        SetlistSummary
    """
    song_lookup = {song.id: song for song in songs}
    user_lookup = {user.id: user for user in users}

    def leader_name(user_id: Optional[str]) -> str:
        user = user_lookup.get(user_id) if user_id else None
        return user.name if user else UNASSIGNED

    songs_by_section: dict[str, list[SummarySong]] = {}
    for entry in setlist.songs:
        song = song_lookup.get(entry.song_id)
        if song is None:
            continue
        songs_by_section.setdefault(entry.section, []).append(
            SummarySong(
                title=song.title,
                original_key=song.original_key,
                preferred_key=entry.preferred_key or song.original_key,
                order=entry.order,
            )
        )

    shortfalls = {}
    if template is not None:
        for name, section in template.structure.items():
            placed = sum(1 for entry in setlist.songs if entry.section == name)
            if placed < section.count:
                shortfalls[name] = section.count - placed

    return SetlistSummary(
        title=setlist.title,
        date=setlist.date,
        estimated_duration=setlist.estimated_duration,
        total_songs=len(setlist.songs),
        leaders={
            "praise": leader_name(setlist.praise_leader),
            "worship": leader_name(setlist.worship_leader),
            "musicalDirector": leader_name(setlist.musical_director),
        },
        songs_by_section=songs_by_section,
        notes=list(setlist.notes),
        shortfalls=shortfalls,
    )
