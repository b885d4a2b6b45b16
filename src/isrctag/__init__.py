"""
isrctag - look up track metadata on Deezer by ISRC and write it to audio files.
"""

from .core.config import PROJECT_VERSION as __version__
from .models.metadata import Album, Artist, ArtistRole, Metadata
from .services.metadata_service import MetadataService

__all__ = [
    '__version__',
    'Album',
    'Artist',
    'ArtistRole',
    'Metadata',
    'MetadataService'
]
