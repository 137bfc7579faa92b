"""Bulk song import with validation and tag suggestions."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from worship_planner.models import Song
from worship_planner.services.music import validate_song_data

logger = logging.getLogger(__name__)

COMMON_WORSHIP_TAGS: dict[str, list[str]] = {
    "style": ["contemporary", "traditional", "hymn", "modern"],
    "tempo": ["fast", "slow", "medium", "ballad", "upbeat"],
    "theme": ["worship", "praise", "salvation", "grace", "love", "faith", "hope", "peace", "joy"],
    "season": ["christmas", "easter", "thanksgiving"],
    "usage": ["opening", "closing", "communion", "baptism", "altar-call", "offertory"],
}

# Title keyword -> tags it suggests
_KEYWORD_TAGS: list[tuple[tuple[str, ...], tuple[str, ...]]] = [
    (("praise", "hallelujah"), ("praise",)),
    (("worship", "holy"), ("worship",)),
    (("love", "heart"), ("love",)),
    (("grace", "mercy"), ("grace",)),
    (("cross", "blood"), ("salvation",)),
    (("joy", "celebrate"), ("joy", "fast")),
    (("peace", "still"), ("peace", "slow")),
    (("alive", "shout", "dance", "celebrate", "rise", "victory"), ("fast", "upbeat")),
    (("still", "quiet", "gentle", "peace", "rest", "whisper"), ("slow", "ballad")),
]


@dataclass
class RowError:
    """Validation failure for one input row."""

    row: dict[str, Any]
    errors: list[str]


@dataclass
class ImportResult:
    """Outcome of a bulk import.

    Attributes:
        success: True if no row failed validation
        imported: Songs that passed validation
        errors: Rows that failed validation, with messages
        duplicates: Titles skipped because they already exist
    """

    success: bool
    imported: list[Song] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)


def _slugify(title: str) -> str:
    slug = "".join(ch if ch.isalnum() else "_" for ch in title.lower()).strip("_")
    return "_".join(part for part in slug.split("_") if part)


def _unique_id(base: str, taken: set[str]) -> str:
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    return candidate


def process_bulk_import(
    rows: Iterable[dict[str, Any]], existing_songs: Iterable[Song] = ()
) -> ImportResult:
    """Validate and convert bulk song input.

    Titles are compared case-insensitively against existing songs and
    earlier rows of the same import. IDs that are already taken get a
    numeric suffix ("_2", "_3", ...).

    Args:
        rows: Input rows with title, originalKey, tags, artist, lyricsUrl
        existing_songs: Songs already in the library

    Returns:
        ImportResult
    """
    existing_songs = list(existing_songs)
    existing_titles = {song.title.lower() for song in existing_songs}
    taken_ids = {song.id for song in existing_songs}
    result = ImportResult(success=True)

    for row in rows:
        title = str(row.get("title") or "").strip()
        if title and title.lower() in existing_titles:
            result.duplicates.append(title)
            continue

        validation = validate_song_data({**row, "title": title})
        if not validation.is_valid:
            result.errors.append(RowError(row=row, errors=validation.errors))
            continue

        song = Song(
            id=_unique_id(row.get("id") or f"song_{_slugify(title)}", taken_ids),
            title=title,
            original_key=row["originalKey"],
            tags=list(row.get("tags") or []),
            artist=row.get("artist"),
        )
        result.imported.append(song)
        taken_ids.add(song.id)
        existing_titles.add(title.lower())

    result.success = not result.errors
    logger.info(
        f"Bulk import: {len(result.imported)} imported, {len(result.errors)} invalid, "
        f"{len(result.duplicates)} duplicates"
    )
    return result


def suggest_tags(title: str) -> list[str]:
    """Suggest tags from keywords in a song title.

    Args:
        title: Song title

    Returns:
        Suggested tags, without duplicates, in first-seen order
    """
    title_lower = title.lower()
    suggestions: list[str] = []
    for keywords, tags in _KEYWORD_TAGS:
        if any(word in title_lower for word in keywords):
            suggestions.extend(tags)
    return list(dict.fromkeys(suggestions))


def generate_song_template() -> str:
    """Get an example input row for bulk import, as JSON."""
    return json.dumps(
        {
            "title": "Song Title Here",
            "originalKey": "C",
            "tags": ["worship", "slow"],
            "artist": "Artist Name (optional)",
            "lyricsUrl": "https://... (optional)",
            "ccliNumber": "1234567 (optional)",
            "notes": "Any notes about the song (optional)",
        },
        indent=2,
    )
