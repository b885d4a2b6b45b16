"""
Deezer response models.

These mirror the JSON bodies of the Deezer public API closely and only live
for the duration of a lookup. Numeric-looking fields (ids, durations, BPM,
track counts) are normalized to strings while decoding and stay strings: they
are compared and displayed, never computed with.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..core.exceptions import DecodeError


def string_from_number(value: Any, field: str = "value") -> str:
    """
    Normalize a JSON number or string to a string.

    Integral floats lose their fractional part (``128.0`` becomes ``"128"``),
    other floats use their shortest representation.

    Args:
        value: Decoded JSON value
        field: Field name used in the error message

    Returns:
        String form of the value

    Raises:
        DecodeError: If the value is neither a number nor a string
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        raise DecodeError(f"Field '{field}' must be a number or a string, got a boolean")
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    raise DecodeError(f"Field '{field}' must be a number or a string, got {type(value).__name__}")


def _require(data: Dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object for {context}, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"Missing field '{key}' in {context}")
    return data[key]


def _require_str(data: Dict[str, Any], key: str, context: str) -> str:
    value = _require(data, key, context)
    if not isinstance(value, str):
        raise DecodeError(f"Field '{key}' in {context} must be a string")
    return value


def _require_number_or_str(data: Dict[str, Any], key: str, context: str) -> str:
    return string_from_number(_require(data, key, context), f"{context}.{key}")


def _require_list(data: Dict[str, Any], key: str, context: str) -> List[Any]:
    value = _require(data, key, context)
    if not isinstance(value, list):
        raise DecodeError(f"Field '{key}' in {context} must be a list")
    return value


@dataclass(frozen=True)
class RawArtist:
    """Artist as credited by Deezer (track contributors, primary artist)."""
    name: str
    role: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawArtist":
        role = data.get("role") if isinstance(data, dict) else None
        if role is not None and not isinstance(role, str):
            raise DecodeError("Field 'role' in artist must be a string")
        return cls(name=_require_str(data, "name", "artist"), role=role)


@dataclass(frozen=True)
class RawAlbumRef:
    """Album reference embedded in a track."""
    id: str
    title: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawAlbumRef":
        return cls(
            id=_require_number_or_str(data, "id", "track album"),
            title=_require_str(data, "title", "track album"),
        )


@dataclass(frozen=True)
class RawTrack:
    """Full track object from /track/{id} and /track/isrc:{isrc}."""
    id: str
    title: str
    isrc: str
    track_position: str
    duration: str
    bpm: str
    release_date: str
    album: RawAlbumRef
    contributors: Tuple[RawArtist, ...]
    artist: RawArtist

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawTrack":
        context = "track"
        return cls(
            id=_require_number_or_str(data, "id", context),
            title=_require_str(data, "title", context),
            isrc=_require_str(data, "isrc", context),
            track_position=_require_number_or_str(data, "track_position", context),
            duration=_require_number_or_str(data, "duration", context),
            bpm=_require_number_or_str(data, "bpm", context),
            release_date=_require_str(data, "release_date", context),
            album=RawAlbumRef.from_dict(_require(data, "album", context)),
            contributors=tuple(
                RawArtist.from_dict(item) for item in _require_list(data, "contributors", context)
            ),
            artist=RawArtist.from_dict(_require(data, "artist", context)),
        )


@dataclass(frozen=True)
class RawSearchCandidate:
    """Lightweight track returned by /search. Never trusted without a refetch."""
    id: str
    title: str
    duration: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawSearchCandidate":
        context = "search result"
        return cls(
            id=_require_number_or_str(data, "id", context),
            title=_require_str(data, "title", context),
            duration=_require_number_or_str(data, "duration", context),
        )


def parse_search_results(data: Dict[str, Any]) -> List[RawSearchCandidate]:
    """Decode the body of a /search response."""
    return [RawSearchCandidate.from_dict(item) for item in _require_list(data, "data", "search response")]


@dataclass(frozen=True)
class RawAlbum:
    """Full album object from /album/{id}."""
    upc: str
    genres: Tuple[str, ...]
    label: str
    nb_tracks: str
    cover_xl: str
    contributors: Tuple[RawArtist, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawAlbum":
        context = "album"
        genres = _require_list(_require(data, "genres", context), "data", "album genres")
        return cls(
            upc=_require_str(data, "upc", context),
            genres=tuple(_require_str(genre, "name", "album genre") for genre in genres),
            label=_require_str(data, "label", context),
            nb_tracks=_require_number_or_str(data, "nb_tracks", context),
            cover_xl=_require_str(data, "cover_xl", context),
            contributors=tuple(
                RawArtist.from_dict(item) for item in _require_list(data, "contributors", context)
            ),
        )
