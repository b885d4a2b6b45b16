"""
Canonical metadata models handed to the tag writer and renamer.

Everything is a string here because audio tag containers only store text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ArtistRole(Enum):
    """Role of an artist on a track or album."""
    MAIN = "Main"
    FEATURED = "Featured"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Artist:
    """A credited artist."""
    name: str
    role: ArtistRole = ArtistRole.UNKNOWN


def main_artist_names(artists: Tuple[Artist, ...]) -> Tuple[str, ...]:
    """Names of the main artists, in credit order."""
    return tuple(artist.name for artist in artists if artist.role is ArtistRole.MAIN)


@dataclass(frozen=True)
class Album:
    """Album a resolved track belongs to."""
    title: str
    artists: Tuple[Artist, ...] = ()
    genres: Tuple[str, ...] = ()
    number_of_tracks: str = ""
    upc: str = ""
    cover_url: str = ""
    label: str = ""

    @property
    def main_artists(self) -> Tuple[str, ...]:
        return main_artist_names(self.artists)


@dataclass(frozen=True)
class Metadata:
    """Resolved metadata for one recording."""
    title: str
    artists: Tuple[Artist, ...]
    album: Album
    bpm: Optional[str]
    date: str
    isrc: str
    track_position: str

    def __post_init__(self):
        if len(self.date) < 4:
            raise ValueError(f"Release date must start with a 4-digit year, got {self.date!r}")

    @property
    def main_artists(self) -> Tuple[str, ...]:
        return main_artist_names(self.artists)

    @property
    def year(self) -> str:
        return self.date[:4]
