"""
Qobuz response models, used only to find an ISRC from a Qobuz album.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..core.exceptions import DecodeError


@dataclass(frozen=True)
class QobuzTrack:
    """Track item of a Qobuz album."""
    title: str
    isrc: str
    performer: str
    version: Optional[str] = None

    @property
    def display_title(self) -> str:
        if self.version:
            return f"{self.title} ({self.version})"
        return self.title

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QobuzTrack":
        try:
            title = data["title"]
            isrc = data["isrc"]
            performer = data["performer"]["name"]
        except (KeyError, TypeError) as e:
            raise DecodeError(f"Malformed Qobuz track: missing {e}") from e

        version = data.get("version")
        for name, value in (("title", title), ("isrc", isrc), ("performer.name", performer)):
            if not isinstance(value, str):
                raise DecodeError(f"Field '{name}' in Qobuz track must be a string")
        if version is not None and not isinstance(version, str):
            raise DecodeError("Field 'version' in Qobuz track must be a string or null")

        return cls(title=title, isrc=isrc, performer=performer, version=version)


def parse_album_tracks(data: Dict[str, Any]) -> List[QobuzTrack]:
    """Decode the track list of an /album/get response."""
    try:
        items = data["tracks"]["items"]
    except (KeyError, TypeError) as e:
        raise DecodeError(f"Malformed Qobuz album: missing {e}") from e
    if not isinstance(items, list):
        raise DecodeError("Field 'tracks.items' in Qobuz album must be a list")
    return [QobuzTrack.from_dict(item) for item in items]
