"""
Data models for isrctag.
"""

from .metadata import Artist, ArtistRole, Album, Metadata
from .deezer import RawArtist, RawAlbumRef, RawTrack, RawSearchCandidate, RawAlbum
from .qobuz import QobuzTrack

__all__ = [
    'Artist',
    'ArtistRole',
    'Album',
    'Metadata',
    'RawArtist',
    'RawAlbumRef',
    'RawTrack',
    'RawSearchCandidate',
    'RawAlbum',
    'QobuzTrack'
]
