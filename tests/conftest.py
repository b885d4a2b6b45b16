"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock
from typing import Any, Dict, Generator, List, Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from isrctag.core.exceptions import NotFoundError
from isrctag.models.deezer import RawAlbum, RawSearchCandidate, RawTrack


def make_track_payload(
    track_id: Any = 3135556,
    title: str = "Song",
    isrc: str = "USABC1234567",
    duration: Any = 200,
    album_id: Any = 1,
    album_title: str = "Alb",
    bpm: Any = 0,
    release_date: str = "2001-03-07",
    track_position: Any = 1,
    artist_name: str = "Artist",
    contributors: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Deezer /track body with the fields the client reads."""
    if contributors is None:
        contributors = [
            {"id": 27, "name": artist_name, "role": "Main"},
            {"id": 28, "name": "Guest", "role": "Featured"},
        ]
    return {
        "id": track_id,
        "readable": True,
        "title": title,
        "isrc": isrc,
        "link": f"https://www.deezer.com/track/{track_id}",
        "duration": duration,
        "track_position": track_position,
        "disk_number": 1,
        "rank": 872315,
        "release_date": release_date,
        "bpm": bpm,
        "gain": -10.6,
        "contributors": contributors,
        "artist": {"id": 27, "name": artist_name},
        "album": {"id": album_id, "title": album_title, "cover_xl": "https://cdn/cover.jpg"},
        "type": "track",
    }


def make_album_payload(
    upc: str = "724384960650",
    nb_tracks: Any = 12,
    label: str = "Label",
    genres: Optional[List[str]] = None,
    contributors: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Deezer /album body with the fields the client reads."""
    if genres is None:
        genres = ["Pop", "Dance"]
    if contributors is None:
        contributors = [{"id": 27, "name": "Artist", "role": "Main"}]
    return {
        "id": 302127,
        "title": "Alb",
        "upc": upc,
        "cover_xl": "https://cdn/cover_xl.jpg",
        "genres": {"data": [{"id": 132, "name": name} for name in genres]},
        "label": label,
        "nb_tracks": nb_tracks,
        "release_date": "2001-03-07",
        "contributors": contributors,
    }


def make_track(**kwargs) -> RawTrack:
    return RawTrack.from_dict(make_track_payload(**kwargs))


def make_album(**kwargs) -> RawAlbum:
    return RawAlbum.from_dict(make_album_payload(**kwargs))


def make_candidate(track_id: Any, title: str = "Song", duration: Any = 200) -> RawSearchCandidate:
    return RawSearchCandidate.from_dict({"id": track_id, "title": title, "duration": duration})


class FakeDeezerClient:
    """In-memory stand-in for DeezerClient that records every call."""

    def __init__(
        self,
        primary: Optional[RawTrack] = None,
        candidates: Optional[List[RawSearchCandidate]] = None,
        tracks: Optional[Dict[str, Any]] = None,
        albums: Optional[Dict[str, Any]] = None,
    ):
        self.primary = primary
        self.candidates = candidates or []
        self.tracks = tracks or {}
        self.albums = albums or {}
        self.calls: List[tuple] = []

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    def fetch_track_by_isrc(self, isrc):
        self.calls.append(("fetch_track_by_isrc", isrc))
        return self._answer(self.primary)

    def search_tracks(self, artist_name, title):
        self.calls.append(("search_tracks", artist_name, title))
        return self._answer(self.candidates)

    def fetch_track_by_id(self, track_id):
        self.calls.append(("fetch_track_by_id", track_id))
        if track_id not in self.tracks:
            raise NotFoundError(f"No track {track_id}")
        return self._answer(self.tracks[track_id])

    def fetch_album_by_id(self, album_id):
        self.calls.append(("fetch_album_by_id", album_id))
        if album_id not in self.albums:
            raise NotFoundError(f"No album {album_id}")
        return self._answer(self.albums[album_id])

    def calls_to(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]


def mock_response(json_data: Any = None, status_code: int = 200, content: bytes = b"", json_error: bool = False) -> Mock:
    """Build a requests.Response stand-in."""
    import requests

    response = Mock()
    response.status_code = status_code
    response.content = content
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_session():
    """requests.Session stand-in with a mockable get."""
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def sample_metadata():
    """Resolved metadata for tag writing and renaming tests."""
    from isrctag.models.metadata import Album, Artist, ArtistRole, Metadata
    return Metadata(
        title="Song: Part 1/2?",
        artists=(
            Artist("Artist", ArtistRole.MAIN),
            Artist("Second", ArtistRole.MAIN),
            Artist("Guest", ArtistRole.FEATURED),
        ),
        album=Album(
            title="Alb",
            artists=(Artist("Artist", ArtistRole.MAIN), Artist("Producer", ArtistRole.UNKNOWN)),
            genres=("Pop", "Dance"),
            number_of_tracks="12",
            upc="724384960650",
            cover_url="https://cdn/cover_xl.jpg",
            label="Label",
        ),
        bpm="128",
        date="2001-03-07",
        isrc="USABC1234567",
        track_position="3",
    )
