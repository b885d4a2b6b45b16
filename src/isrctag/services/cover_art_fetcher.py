"""
Cover art fetching service.
"""

import requests
from dataclasses import dataclass
from typing import Optional

from ..core.config import ARTWORK_CONFIG, ERROR_MESSAGES
from ..core.exceptions import DecodeError, NetworkError
from ..core.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Artwork:
    """Downloaded cover image."""
    data: bytes
    mime: str = "image/jpeg"


def detect_mime_type(data: bytes) -> str:
    """Determine the image MIME type from its magic bytes, defaulting to JPEG."""
    if data.startswith(b'\x89PNG'):
        return "image/png"
    if data.startswith(b'GIF'):
        return "image/gif"
    if data.startswith(b'RIFF') and data[8:12] == b'WEBP':
        return "image/webp"
    return "image/jpeg"


class CoverArtFetcher:
    """Service for fetching cover art from a URL."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.timeout = ARTWORK_CONFIG["TIMEOUT"]
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': ARTWORK_CONFIG["USER_AGENT"]})

    def fetch(self, url: str) -> Artwork:
        """
        Download cover art.

        Args:
            url: Image URL

        Returns:
            Image bytes and MIME type
        """
        if not url:
            raise DecodeError("Album has no cover URL")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{ERROR_MESSAGES['NETWORK_ERROR']}: {e}") from e

        if not response.content:
            raise DecodeError(f"Empty cover art body from {url}")

        logger.debug(f"Fetched cover art from {url} ({len(response.content)} bytes)")
        return Artwork(data=response.content, mime=detect_mime_type(response.content))
