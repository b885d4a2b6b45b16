"""
Maps Deezer track and album records to the canonical metadata models.
"""

from typing import Iterable, Optional, Tuple

from ..core.exceptions import DecodeError
from ..models.deezer import RawAlbum, RawArtist, RawTrack
from ..models.metadata import Album, Artist, ArtistRole, Metadata

# Deezer reports an unknown BPM as 0
UNKNOWN_BPM = "0"

# Exact, case-sensitive role strings Deezer uses
ROLE_MAP = {
    "Main": ArtistRole.MAIN,
    "Featured": ArtistRole.FEATURED,
}


def map_role(role: Optional[str]) -> ArtistRole:
    """Map a Deezer contributor role; anything unrecognized is UNKNOWN."""
    if role is None:
        return ArtistRole.UNKNOWN
    return ROLE_MAP.get(role, ArtistRole.UNKNOWN)


def map_bpm(bpm: str) -> Optional[str]:
    """Drop Deezer's "0" placeholder; every other value passes through as is."""
    if bpm == UNKNOWN_BPM:
        return None
    return bpm


def map_artist(artist: RawArtist) -> Artist:
    return Artist(name=artist.name, role=map_role(artist.role))


def map_artists(artists: Iterable[RawArtist]) -> Tuple[Artist, ...]:
    return tuple(map_artist(artist) for artist in artists)


def map_metadata(track: RawTrack, album: RawAlbum, isrc: str) -> Metadata:
    """
    Build the canonical metadata of a resolved track.

    Args:
        track: Resolved full track
        album: Full album of ``track``
        isrc: Queried recording code, recorded as the track's ISRC

    Returns:
        Canonical metadata

    Raises:
        DecodeError: If the release date has no 4-digit year prefix
    """
    if len(track.release_date) < 4:
        raise DecodeError(f"Track {track.id} has an unusable release date: {track.release_date!r}")

    return Metadata(
        title=track.title,
        artists=map_artists(track.contributors),
        album=Album(
            title=track.album.title,
            artists=map_artists(album.contributors),
            genres=tuple(album.genres),
            number_of_tracks=album.nb_tracks,
            upc=album.upc,
            cover_url=album.cover_xl,
            label=album.label,
        ),
        bpm=map_bpm(track.bpm),
        date=track.release_date,
        isrc=isrc,
        track_position=track.track_position,
    )
