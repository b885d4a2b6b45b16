"""
Qobuz Client Module
Reads album track listings from the Qobuz API to recover ISRCs.
"""

import requests
from typing import List, Optional

from ..core.config import QOBUZ_CONFIG, ERROR_MESSAGES
from ..core.exceptions import DecodeError, NetworkError
from ..core.logger import get_logger
from ..models.qobuz import QobuzTrack, parse_album_tracks

logger = get_logger(__name__)


class QobuzClient:
    """Qobuz album client."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.base_url = QOBUZ_CONFIG["BASE_URL"].rstrip("/")
        self.timeout = QOBUZ_CONFIG["TIMEOUT"]

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': QOBUZ_CONFIG["USER_AGENT"],
            'Accept': 'application/json'
        })

    def fetch_album_tracks(self, app_id: str, album_id: str) -> List[QobuzTrack]:
        """
        Fetch the tracks of a Qobuz album.

        Args:
            app_id: Qobuz application id
            album_id: Qobuz album id

        Returns:
            Album tracks in album order
        """
        url = f"{self.base_url}/album/get"
        params = {'app_id': app_id, 'album_id': album_id}
        logger.debug(f"GET {url} album_id={album_id}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{ERROR_MESSAGES['NETWORK_ERROR']}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"{ERROR_MESSAGES['DECODE_ERROR']}: Qobuz album body is not JSON") from e

        return parse_album_tracks(data)
