"""
Deezer Client Module
A client for the Deezer public API: tracks by ISRC or id, exact search, albums.
"""

import requests
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..core.config import DEEZER_CONFIG, ERROR_MESSAGES
from ..core.exceptions import DecodeError, NetworkError, NotFoundError
from ..core.logger import get_logger
from ..models.deezer import (
    RawAlbum,
    RawSearchCandidate,
    RawTrack,
    parse_search_results,
)

logger = get_logger(__name__)


def build_search_query(artist_name: str, title: str) -> str:
    """Build the advanced search query matching one artist and one track title."""
    return f'artist:"{artist_name}" track:"{title}"'


class DeezerClient:
    """Deezer catalog client.

    Every method issues a single blocking GET. There is no retry and no rate
    limiting; the only bound on a request is ``DEEZER_CONFIG["TIMEOUT"]``.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.base_url = DEEZER_CONFIG["BASE_URL"].rstrip("/")
        self.user_agent = DEEZER_CONFIG["USER_AGENT"]
        self.timeout = DEEZER_CONFIG["TIMEOUT"]
        self.not_found_code = DEEZER_CONFIG["NOT_FOUND_CODE"]

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.user_agent,
            'Accept': 'application/json'
        })

    def _make_request(self, url: str) -> Dict[str, Any]:
        """
        GET a Deezer endpoint and return the decoded JSON object.

        Args:
            url: Fully built request URL

        Returns:
            Decoded JSON object

        Raises:
            NetworkError: Transport failure, non-2xx status or a Deezer error body
            NotFoundError: Deezer reports that the object does not exist
            DecodeError: The body is not a JSON object
        """
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{ERROR_MESSAGES['NETWORK_ERROR']}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"{ERROR_MESSAGES['DECODE_ERROR']}: body of {url} is not JSON") from e

        if not isinstance(data, dict):
            raise DecodeError(f"{ERROR_MESSAGES['DECODE_ERROR']}: body of {url} is not a JSON object")

        error = data.get("error")
        if error:
            self._raise_for_error_body(url, error)

        return data

    def _raise_for_error_body(self, url: str, error: Any) -> None:
        # Deezer reports API errors with HTTP 200 and an "error" object
        if isinstance(error, dict):
            message = error.get("message") or error.get("type") or "unknown error"
            code = error.get("code")
        else:
            message, code = str(error), None

        if code == self.not_found_code:
            raise NotFoundError(f"{ERROR_MESSAGES['NOT_FOUND']}: {url} ({message})")
        raise NetworkError(f"Deezer error for {url}: {message} (code {code})")

    def fetch_track_by_isrc(self, isrc: str) -> RawTrack:
        """
        Look up the track Deezer associates with an ISRC.

        Args:
            isrc: Recording code

        Returns:
            The track Deezer returns for the code
        """
        url = f"{self.base_url}/track/isrc:{quote(isrc, safe='')}"
        return RawTrack.from_dict(self._make_request(url))

    def search_tracks(self, artist_name: str, title: str) -> List[RawSearchCandidate]:
        """
        Search tracks by exact artist name and title.

        The whole query value is percent-encoded and strict mode is enabled, so
        Deezer does not widen the search with fuzzy matches.

        Args:
            artist_name: Artist name to match
            title: Track title to match

        Returns:
            Search candidates in Deezer's ranking order (possibly empty)
        """
        query = quote(build_search_query(artist_name, title), safe="")
        url = f"{self.base_url}/search?q={query}&strict=on"
        return parse_search_results(self._make_request(url))

    def fetch_track_by_id(self, track_id: str) -> RawTrack:
        """Fetch a full track by Deezer id."""
        url = f"{self.base_url}/track/{quote(track_id, safe='')}"
        return RawTrack.from_dict(self._make_request(url))

    def fetch_album_by_id(self, album_id: str) -> RawAlbum:
        """Fetch a full album by Deezer id."""
        url = f"{self.base_url}/album/{quote(album_id, safe='')}"
        return RawAlbum.from_dict(self._make_request(url))
