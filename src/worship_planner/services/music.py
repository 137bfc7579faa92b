"""Music theory and transposition utilities.

Keys are positions on the 12-tone chromatic scale. Each scale entry may
carry a sharp and a flat spelling ("C#/Db"); either spelling resolves to
the same index.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

CHROMATIC_SCALE: list[str] = [
    "C", "C#/Db", "D", "D#/Eb", "E", "F",
    "F#/Gb", "G", "G#/Ab", "A", "A#/Bb", "B",
]

WORSHIP_TAGS: list[str] = [
    "worship", "praise", "fast", "slow", "contemporary", "traditional",
    "hymn", "scripture", "salvation", "grace", "love", "faith", "hope",
    "peace", "joy", "glory", "holy", "cross", "resurrection", "christmas",
    "easter", "communion", "baptism", "prayer", "thanksgiving",
]


class InvalidKeyError(ValueError):
    """Key string does not match any chromatic scale entry."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


@dataclass
class TranspositionInfo:
    """Distance between two keys.

    Attributes:
        semitones: Upward distance from original to target (0-11)
        direction: "up", "down" or "same"
        capo_suggestion: Capo fret to reach the target, when going up
        description: Human-readable summary (e.g., "2 semitones up")
    """

    semitones: int
    direction: str
    capo_suggestion: Optional[int]
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "semitones": self.semitones,
            "direction": self.direction,
            "capoSuggestion": self.capo_suggestion,
            "description": self.description,
        }


@dataclass
class KeySuggestion:
    """Transposition needed for one team member's preferred key."""

    user_id: str
    preferred_key: str
    transposition: TranspositionInfo


@dataclass
class TranspositionChart:
    """Transpositions for a whole team, for a musical director's chart.

    Attributes:
        original_key: Key the song is written in
        most_common_key: Most requested target key (None if no requests)
        suggestions: One entry per team member
        key_frequency: Number of requests per target key
    """

    original_key: str
    most_common_key: Optional[str]
    suggestions: list[KeySuggestion] = field(default_factory=list)
    key_frequency: dict[str, int] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Outcome of validating user-entered song data."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


def _normalize_key(key: str) -> str:
    name = key.strip().split("/")[0].strip()
    return name[:1].upper() + name[1:]


def get_key_index(key: str) -> int:
    """Resolve a key name to its chromatic scale index.

    Only the part before "/" is considered; it may be either spelling of a
    scale entry, so "A#", "Bb" and "A#/Bb" all resolve to 10.

    Args:
        key: Key name

    Returns:
        Index 0-11

    Raises:
        InvalidKeyError: If the key matches no scale entry
    """
    name = _normalize_key(key or "")
    if name:
        for index, entry in enumerate(CHROMATIC_SCALE):
            if name in entry.split("/"):
                return index
    raise InvalidKeyError(f"Invalid key: {key!r}", key=key)


def is_valid_key(key: Optional[str]) -> bool:
    """Check whether a key name resolves to a scale entry."""
    if not key:
        return False
    try:
        get_key_index(key)
    except InvalidKeyError:
        return False
    return True


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def calculate_transposition(original_key: str, target_key: str) -> TranspositionInfo:
    """Calculate the semitone distance between two keys.

    Moves of up to a tritone are described as going up and come with a capo
    suggestion; larger moves are described by the shorter downward path.

    Args:
        original_key: Key the song is written in
        target_key: Key the song should be played in

    Returns:
        TranspositionInfo for the move

    Raises:
        InvalidKeyError: If either key cannot be resolved
    """
    try:
        original_index = get_key_index(original_key)
        target_index = get_key_index(target_key)
    except InvalidKeyError as e:
        raise InvalidKeyError(f"Invalid key: {original_key} or {target_key}", key=e.key) from e

    semitones = (target_index - original_index + 12) % 12

    if semitones == 0:
        return TranspositionInfo(0, "same", None, "Same key")

    if semitones <= 6:
        return TranspositionInfo(
            semitones, "up", semitones, f"{semitones} semitone{_plural(semitones)} up"
        )

    down = 12 - semitones
    return TranspositionInfo(semitones, "down", None, f"{down} semitone{_plural(down)} down")


def get_capo_key(original_key: str, capo_fret: int) -> str:
    """Get the sounding key when playing with a capo.

    Args:
        original_key: Key of the chord shapes being played
        capo_fret: Capo position

    Returns:
        Scale entry capo_fret semitones above the original key, or the
        original key unchanged if it cannot be resolved
    """
    try:
        original_index = get_key_index(original_key)
    except InvalidKeyError:
        return original_key
    return CHROMATIC_SCALE[(original_index + capo_fret) % 12]


def generate_transposition_chart(
    original_key: str, team_preferences: dict[str, str]
) -> TranspositionChart:
    """Build transposition suggestions for each team member.

    Ties for the most requested key go to the key requested first in
    `team_preferences` order.

    Args:
        original_key: Key the song is written in
        team_preferences: User ID to preferred key

    Returns:
        TranspositionChart for the song

    Raises:
        InvalidKeyError: If any key cannot be resolved
    """
    suggestions = [
        KeySuggestion(
            user_id=user_id,
            preferred_key=preferred_key,
            transposition=calculate_transposition(original_key, preferred_key),
        )
        for user_id, preferred_key in team_preferences.items()
    ]

    key_frequency = dict(Counter(s.preferred_key for s in suggestions))
    most_common_key = None
    if key_frequency:
        most_common_key = max(key_frequency, key=key_frequency.__getitem__)

    logger.debug(f"Chart for {original_key}: {len(suggestions)} suggestions, top={most_common_key}")

    return TranspositionChart(
        original_key=original_key,
        most_common_key=most_common_key,
        suggestions=suggestions,
        key_frequency=key_frequency,
    )


def _is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_song_data(data: dict[str, Any]) -> ValidationResult:
    """Validate user-entered song fields.

    Args:
        data: Song fields (title, originalKey, lyricsUrl)

    Returns:
        ValidationResult with one message per problem
    """
    errors = []

    title = data.get("title")
    if not title or not str(title).strip():
        errors.append("Song title is required")

    if not is_valid_key(data.get("originalKey")):
        errors.append("Valid original key is required")

    lyrics_url = data.get("lyricsUrl")
    if lyrics_url and not _is_valid_url(lyrics_url):
        errors.append("Lyrics URL must be a valid URL")

    return ValidationResult(is_valid=not errors, errors=errors)
