"""
Core services for isrctag.
"""

from .candidate_resolver import CandidateResolver
from .metadata_service import MetadataService
from .cover_art_fetcher import CoverArtFetcher, Artwork
from .tag_writer import TagWriter, read_isrc
from .file_renamer import build_filename, rename_file
from .qobuz_lookup import find_isrc

__all__ = [
    'CandidateResolver',
    'MetadataService',
    'CoverArtFetcher',
    'Artwork',
    'TagWriter',
    'read_isrc',
    'build_filename',
    'rename_file',
    'find_isrc'
]
