"""
Metadata service: resolves an ISRC to canonical metadata.
"""

from typing import Optional

from ..clients.deezer import DeezerClient
from ..core.exceptions import IsrcTagError
from ..core.logger import get_logger
from ..models.metadata import Metadata
from ..ui.selector import InteractiveSelector, Selector
from .candidate_resolver import CandidateResolver
from .metadata_mapper import map_metadata

logger = get_logger(__name__)


class MetadataService:
    """Service for looking up track metadata on Deezer."""

    def __init__(self, client: Optional[DeezerClient] = None, selector: Optional[Selector] = None):
        self.client = client or DeezerClient()
        self.selector = selector or InteractiveSelector()
        self.resolver = CandidateResolver(self.client, self.selector)

    def get_metadata(self, isrc: str) -> Metadata:
        """
        Resolve an ISRC to metadata.

        If Deezer holds several tracks for the ISRC the selector is asked which
        one to use.

        Args:
            isrc: Recording code

        Returns:
            Canonical metadata of the resolved track

        Raises:
            IsrcTagError: Any fatal failure, with ``stage`` set to the failed step
        """
        track = self.resolver.resolve(isrc)
        logger.debug(f"Resolved {isrc} to track {track.id} on album {track.album.id}")

        try:
            album = self.client.fetch_album_by_id(track.album.id)
        except IsrcTagError as e:
            raise e.with_stage("album")

        try:
            return map_metadata(track, album, isrc)
        except IsrcTagError as e:
            raise e.with_stage("album")
