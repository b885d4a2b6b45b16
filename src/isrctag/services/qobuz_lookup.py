"""
Finds the ISRC of a track on a Qobuz album.
"""

from ..clients.qobuz import QobuzClient
from ..core.config import ERROR_MESSAGES, PROMPTS
from ..core.exceptions import InputError, IsrcTagError, NotFoundError
from ..models.qobuz import QobuzTrack
from ..ui.selector import Selector


def track_label(track: QobuzTrack) -> str:
    return f"{track.performer} - {track.display_title}, ISRC: {track.isrc}"


def find_isrc(client: QobuzClient, selector: Selector, app_id: str, album_id: str) -> str:
    """
    Return the ISRC of a track on a Qobuz album.

    Single-track albums answer directly; otherwise the selector picks the track.

    Args:
        client: Qobuz client
        selector: Chooses among the album's tracks
        app_id: Qobuz application id
        album_id: Qobuz album id

    Returns:
        ISRC of the chosen track
    """
    try:
        tracks = client.fetch_album_tracks(app_id, album_id)
    except IsrcTagError as e:
        raise e.with_stage("lookup")

    if not tracks:
        raise NotFoundError(ERROR_MESSAGES["EMPTY_QOBUZ_ALBUM"], stage="lookup")
    if len(tracks) == 1:
        return tracks[0].isrc

    labels = [track_label(track) for track in tracks]
    try:
        index = selector.choose(PROMPTS["QOBUZ_TRACKS"], labels)
    except IsrcTagError as e:
        raise e.with_stage("selection")

    if not 0 <= index < len(tracks):
        raise InputError(f"Selection {index!r} is out of range 0-{len(tracks) - 1}", stage="selection")

    return tracks[index].isrc
