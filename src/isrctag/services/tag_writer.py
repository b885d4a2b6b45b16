"""
Tag writing service built on mutagen.

Supports ID3 (MP3), Vorbis comments (FLAC, Ogg Vorbis, Opus) and MP4 atoms
(M4A). Each container gets a small backend that knows its field names; the
TagWriter facade picks one from the file extension.
"""

import base64
from pathlib import Path
from typing import Dict, List, Optional, Union

from mutagen import File as MutagenFile, MutagenError
from mutagen.flac import FLAC, Picture
from mutagen.id3 import (
    APIC, ID3, ID3NoHeaderError, TALB, TBPM, TCON, TDOR, TDRC, TIT2, TPE1,
    TPE2, TPUB, TRCK, TSRC, TXXX,
)
from mutagen.mp4 import MP4, MP4Cover, MP4FreeForm

from ..core.config import ENCODING_TAG_KEYS, ERROR_MESSAGES, FILE_EXTENSIONS
from ..core.exceptions import TaggingError
from ..core.logger import get_logger
from ..models.metadata import Metadata
from .cover_art_fetcher import Artwork

logger = get_logger(__name__)

FRONT_COVER = 3  # ID3/FLAC picture type "Cover (front)"
MP4_FREEFORM = "----:com.apple.iTunes:"


def container_kind(path: Path) -> str:
    """Return the tag container family ("ID3", "VORBIS", "MP4") for a file."""
    suffix = path.suffix.lower()
    for kind, extensions in FILE_EXTENSIONS.items():
        if suffix in extensions:
            return kind
    raise TaggingError(f"{ERROR_MESSAGES['UNSUPPORTED_FORMAT']}: {path.name}", stage="tagging")


def tag_values(metadata: Metadata) -> Dict[str, str]:
    """Text values written to every container, keyed by a neutral field name."""
    values = {
        "album_artist": ", ".join(metadata.album.main_artists),
        "album": metadata.album.title,
        "barcode": metadata.album.upc,
        "title": metadata.title,
        "artist": ", ".join(metadata.main_artists),
        "track_number": metadata.track_position,
        "track_total": metadata.album.number_of_tracks,
        "year": metadata.year,
        "recording_date": metadata.date,
        "original_date": metadata.date,
        "isrc": metadata.isrc,
        "label": metadata.album.label,
        "genre": ", ".join(metadata.album.genres),
    }
    if metadata.bpm is not None:
        values["bpm"] = metadata.bpm
    return values


class _TagBackend:
    """Container-specific tag access."""

    kind = ""

    def __init__(self, path: Path):
        self.path = path

    def read_isrc(self) -> Optional[str]:
        raise NotImplementedError

    def clear(self, keep_encoding: bool = True) -> None:
        raise NotImplementedError

    def write(self, values: Dict[str, str]) -> None:
        raise NotImplementedError

    def set_cover(self, artwork: Artwork) -> None:
        raise NotImplementedError

    def save(self) -> None:
        raise NotImplementedError

    def _kept_keys(self, keep_encoding: bool) -> List[str]:
        return ENCODING_TAG_KEYS[self.kind] if keep_encoding else []


class ID3Backend(_TagBackend):
    """ID3v2.4 tags of MP3 files."""

    kind = "ID3"

    def __init__(self, path: Path):
        super().__init__(path)
        try:
            self.tags = ID3(str(path))
        except ID3NoHeaderError:
            self.tags = ID3()

    def read_isrc(self) -> Optional[str]:
        frames = self.tags.getall("TSRC")
        if frames and frames[0].text:
            return str(frames[0].text[0])
        return None

    def clear(self, keep_encoding: bool = True) -> None:
        kept = self._kept_keys(keep_encoding)
        for key in list(self.tags.keys()):
            if key.split(":")[0] not in kept:
                del self.tags[key]

    def write(self, values: Dict[str, str]) -> None:
        text_frames = {
            "album_artist": TPE2,
            "album": TALB,
            "title": TIT2,
            "artist": TPE1,
            "recording_date": TDRC,
            "original_date": TDOR,
            "isrc": TSRC,
            "label": TPUB,
            "genre": TCON,
            "bpm": TBPM,
        }
        for field, frame_class in text_frames.items():
            if field in values:
                self.tags.setall(frame_class.__name__, [frame_class(encoding=3, text=[values[field]])])

        track = values["track_number"]
        if values["track_total"]:
            track = f"{track}/{values['track_total']}"
        self.tags.setall("TRCK", [TRCK(encoding=3, text=[track])])
        self.tags.setall("TXXX:BARCODE", [TXXX(encoding=3, desc="BARCODE", text=[values["barcode"]])])

    def set_cover(self, artwork: Artwork) -> None:
        for key in [key for key in self.tags.keys() if key.startswith("APIC")]:
            if self.tags[key].type == FRONT_COVER:
                del self.tags[key]
        self.tags.add(APIC(encoding=3, mime=artwork.mime, type=FRONT_COVER, desc="Cover", data=artwork.data))

    def save(self) -> None:
        self.tags.save(str(self.path), v2_version=4)


class VorbisBackend(_TagBackend):
    """Vorbis comments of FLAC, Ogg Vorbis and Opus files."""

    kind = "VORBIS"

    FIELDS = {
        "album_artist": "ALBUMARTIST",
        "album": "ALBUM",
        "barcode": "BARCODE",
        "bpm": "BPM",
        "title": "TITLE",
        "artist": "ARTIST",
        "track_number": "TRACKNUMBER",
        "track_total": "TRACKTOTAL",
        "year": "YEAR",
        "recording_date": "DATE",
        "original_date": "ORIGINALDATE",
        "isrc": "ISRC",
        "label": "LABEL",
        "genre": "GENRE",
    }

    def __init__(self, path: Path):
        super().__init__(path)
        self.audio = MutagenFile(str(path))
        if self.audio is None:
            raise TaggingError(f"Could not load audio file: {path}", stage="tagging")
        if self.audio.tags is None:
            self.audio.add_tags()

    @property
    def is_flac(self) -> bool:
        return isinstance(self.audio, FLAC)

    def read_isrc(self) -> Optional[str]:
        values = self.audio.tags.get("ISRC")
        return values[0] if values else None

    def clear(self, keep_encoding: bool = True) -> None:
        saved = {
            key: self.audio.tags[key]
            for key in self._kept_keys(keep_encoding)
            if key in self.audio.tags
        }
        self.audio.tags.clear()
        for key, value in saved.items():
            self.audio.tags[key] = value
        if self.is_flac:
            self.audio.clear_pictures()

    def write(self, values: Dict[str, str]) -> None:
        for field, key in self.FIELDS.items():
            if field in values:
                self.audio.tags[key] = [values[field]]

    def set_cover(self, artwork: Artwork) -> None:
        picture = Picture()
        picture.data = artwork.data
        picture.type = FRONT_COVER
        picture.mime = artwork.mime
        picture.desc = "Cover"

        if self.is_flac:
            others = [p for p in self.audio.pictures if p.type != FRONT_COVER]
            self.audio.clear_pictures()
            for other in others:
                self.audio.add_picture(other)
            self.audio.add_picture(picture)
            return

        # Ogg streams carry pictures as base64 FLAC picture blocks
        kept = []
        for encoded in self.audio.tags.get("METADATA_BLOCK_PICTURE", []):
            try:
                existing = Picture(base64.b64decode(encoded))
            except (MutagenError, ValueError):
                logger.debug(f"Dropping unreadable embedded picture in {self.path.name}")
                continue
            if existing.type != FRONT_COVER:
                kept.append(encoded)
        kept.append(base64.b64encode(picture.write()).decode("ascii"))
        self.audio.tags["METADATA_BLOCK_PICTURE"] = kept

    def save(self) -> None:
        self.audio.save()


class MP4Backend(_TagBackend):
    """iTunes-style atoms of M4A files."""

    kind = "MP4"

    ATOMS = {
        "title": "\xa9nam",
        "artist": "\xa9ART",
        "album": "\xa9alb",
        "album_artist": "aART",
        "genre": "\xa9gen",
        "recording_date": "\xa9day",
    }
    FREEFORM = {
        "barcode": "BARCODE",
        "isrc": "ISRC",
        "label": "LABEL",
        "original_date": "ORIGINALDATE",
    }

    def __init__(self, path: Path):
        super().__init__(path)
        self.audio = MP4(str(path))
        if self.audio.tags is None:
            self.audio.add_tags()

    def read_isrc(self) -> Optional[str]:
        values = self.audio.tags.get(f"{MP4_FREEFORM}ISRC")
        if not values:
            return None
        return bytes(values[0]).decode("utf-8")

    def clear(self, keep_encoding: bool = True) -> None:
        kept = self._kept_keys(keep_encoding)
        for key in list(self.audio.tags.keys()):
            if key not in kept:
                del self.audio.tags[key]

    def _freeform(self, name: str, value: str) -> None:
        self.audio.tags[f"{MP4_FREEFORM}{name}"] = [MP4FreeForm(value.encode("utf-8"))]

    def write(self, values: Dict[str, str]) -> None:
        for field, atom in self.ATOMS.items():
            self.audio.tags[atom] = [values[field]]
        for field, name in self.FREEFORM.items():
            self._freeform(name, values[field])

        # trkn and tmpo are integer atoms; values that are not plain digits go elsewhere
        number, total = values["track_number"], values["track_total"]
        if number.isdigit():
            self.audio.tags["trkn"] = [(int(number), int(total) if total.isdigit() else 0)]
        bpm = values.get("bpm")
        if bpm is not None:
            if bpm.isdigit():
                self.audio.tags["tmpo"] = [int(bpm)]
            else:
                self._freeform("BPM", bpm)

    def set_cover(self, artwork: Artwork) -> None:
        image_format = MP4Cover.FORMAT_PNG if artwork.mime == "image/png" else MP4Cover.FORMAT_JPEG
        self.audio.tags["covr"] = [MP4Cover(artwork.data, imageformat=image_format)]

    def save(self) -> None:
        self.audio.save()


BACKENDS = {
    "ID3": ID3Backend,
    "VORBIS": VorbisBackend,
    "MP4": MP4Backend,
}


class TagWriter:
    """Writes resolved metadata into one audio file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        backend_class = BACKENDS[container_kind(self.path)]
        try:
            self.backend = backend_class(self.path)
        except (MutagenError, OSError) as e:
            raise TaggingError(f"Could not read tags of {self.path.name}: {e}", stage="tagging") from e

    def read_isrc(self) -> Optional[str]:
        """ISRC stored in the file, if any."""
        return self.backend.read_isrc()

    def clear(self, keep_encoding: bool = True) -> None:
        """Remove all tags, keeping encoder information unless told otherwise."""
        self.backend.clear(keep_encoding)

    def write(self, metadata: Metadata, artwork: Optional[Artwork] = None) -> None:
        """
        Write metadata and, when given, the front cover.

        Args:
            metadata: Resolved metadata
            artwork: Front cover image
        """
        self.backend.write(tag_values(metadata))
        if artwork is not None:
            self.backend.set_cover(artwork)

    def save(self) -> None:
        try:
            self.backend.save()
        except (MutagenError, OSError) as e:
            raise TaggingError(f"Could not save tags of {self.path.name}: {e}", stage="tagging") from e
        logger.info(f"Saved tags to {self.path}")


def read_isrc(path: Union[str, Path]) -> Optional[str]:
    """Read the ISRC tag of an audio file."""
    return TagWriter(path).read_isrc()
