"""
Tests for the mutagen-based tag writer.
"""

import base64
import pytest
import struct
import sys
from dataclasses import replace
from pathlib import Path
from types import SimpleNamespace

from mutagen.flac import FLAC, Picture
from mutagen.id3 import ID3, TENC, TIT2, TSRC, TSSE, TXXX
from mutagen.mp4 import MP4Cover

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from isrctag.core.exceptions import TaggingError
from isrctag.services.cover_art_fetcher import Artwork
from isrctag.services.tag_writer import (
    MP4Backend,
    TagWriter,
    VorbisBackend,
    container_kind,
    read_isrc,
    tag_values,
)

JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def write_minimal_flac(path: Path) -> Path:
    """Write a FLAC file holding only a STREAMINFO block."""
    sample_rate, channels, bits_per_sample, total_samples = 44100, 2, 16, 0
    packed = (sample_rate << 44) | ((channels - 1) << 41) | ((bits_per_sample - 1) << 36) | total_samples
    streaminfo = (
        struct.pack(">HH", 4096, 4096)
        + b"\x00\x00\x00" + b"\x00\x00\x00"
        + packed.to_bytes(8, "big")
        + b"\x00" * 16
    )
    header = bytes([0x80]) + len(streaminfo).to_bytes(3, "big")
    path.write_bytes(b"fLaC" + header + streaminfo)
    return path


@pytest.fixture
def mp3_file(temp_dir):
    path = temp_dir / "track.mp3"
    path.write_bytes(b"\xff\xfb\x90\x00" + b"\x00" * 256)
    return path


@pytest.fixture
def flac_file(temp_dir):
    return write_minimal_flac(temp_dir / "track.flac")


class TestContainerKind:
    """Tests for container_kind."""

    @pytest.mark.parametrize("name,kind", [
        ("a.mp3", "ID3"),
        ("a.MP3", "ID3"),
        ("a.flac", "VORBIS"),
        ("a.ogg", "VORBIS"),
        ("a.opus", "VORBIS"),
        ("a.m4a", "MP4"),
    ])
    def test_known_extensions(self, name, kind):
        assert container_kind(Path(name)) == kind

    def test_unknown_extension(self):
        with pytest.raises(TaggingError) as exc_info:
            container_kind(Path("a.wav"))
        assert exc_info.value.stage == "tagging"


class TestTagValues:
    """Tests for the neutral field mapping."""

    def test_values(self, sample_metadata):
        values = tag_values(sample_metadata)

        assert values["artist"] == "Artist, Second"
        assert values["album_artist"] == "Artist"
        assert values["genre"] == "Pop, Dance"
        assert values["year"] == "2001"
        assert values["recording_date"] == "2001-03-07"
        assert values["original_date"] == "2001-03-07"
        assert values["track_number"] == "3"
        assert values["track_total"] == "12"
        assert values["barcode"] == "724384960650"
        assert values["bpm"] == "128"

    def test_missing_bpm_is_not_written(self, sample_metadata):
        values = tag_values(replace(sample_metadata, bpm=None))
        assert "bpm" not in values


class TestID3:
    """Tests for MP3 files."""

    def test_write_and_read_back(self, mp3_file, sample_metadata):
        """Test that all fields and the cover land in ID3 frames."""
        writer = TagWriter(mp3_file)
        writer.write(sample_metadata, Artwork(JPEG, "image/jpeg"))
        writer.save()

        tags = ID3(str(mp3_file))
        assert tags["TIT2"].text == ["Song: Part 1/2?"]
        assert tags["TPE1"].text == ["Artist, Second"]
        assert tags["TPE2"].text == ["Artist"]
        assert tags["TALB"].text == ["Alb"]
        assert tags["TRCK"].text == ["3/12"]
        assert tags["TSRC"].text == ["USABC1234567"]
        assert tags["TPUB"].text == ["Label"]
        assert tags["TBPM"].text == ["128"]
        assert tags["TCON"].text == ["Pop, Dance"]
        assert tags["TXXX:BARCODE"].text == ["724384960650"]
        assert str(tags["TDRC"].text[0]) == "2001-03-07"
        assert str(tags["TDOR"].text[0]) == "2001-03-07"
        pictures = tags.getall("APIC")
        assert len(pictures) == 1
        assert pictures[0].type == 3
        assert pictures[0].data == JPEG

        assert read_isrc(mp3_file) == "USABC1234567"

    def test_cover_is_replaced(self, mp3_file, sample_metadata):
        """Test that writing twice keeps a single front cover."""
        for _ in range(2):
            writer = TagWriter(mp3_file)
            writer.write(sample_metadata, Artwork(JPEG, "image/jpeg"))
            writer.save()

        assert len(ID3(str(mp3_file)).getall("APIC")) == 1

    def test_clear_keeps_encoding_frames(self, mp3_file, sample_metadata):
        """Test that --clear keeps encoder frames only."""
        tags = ID3()
        tags.add(TIT2(encoding=3, text=["Old"]))
        tags.add(TSRC(encoding=3, text=["USABC1234567"]))
        tags.add(TXXX(encoding=3, desc="COMMENT", text=["junk"]))
        tags.add(TENC(encoding=3, text=["Ripper"]))
        tags.add(TSSE(encoding=3, text=["LAME 3.100"]))
        tags.save(str(mp3_file))

        writer = TagWriter(mp3_file)
        assert writer.read_isrc() == "USABC1234567"
        writer.clear()
        writer.save()

        tags = ID3(str(mp3_file))
        assert sorted(tags.keys()) == ["TENC", "TSSE"]

    def test_file_without_isrc(self, mp3_file):
        assert read_isrc(mp3_file) is None


class TestVorbis:
    """Tests for FLAC files."""

    def test_write_and_read_back(self, flac_file, sample_metadata):
        """Test that Vorbis comments and the picture are written."""
        writer = TagWriter(flac_file)
        writer.write(sample_metadata, Artwork(JPEG, "image/jpeg"))
        writer.save()

        audio = FLAC(str(flac_file))
        assert audio["TITLE"] == ["Song: Part 1/2?"]
        assert audio["ARTIST"] == ["Artist, Second"]
        assert audio["ALBUMARTIST"] == ["Artist"]
        assert audio["TRACKNUMBER"] == ["3"]
        assert audio["TRACKTOTAL"] == ["12"]
        assert audio["YEAR"] == ["2001"]
        assert audio["DATE"] == ["2001-03-07"]
        assert audio["ISRC"] == ["USABC1234567"]
        assert audio["BARCODE"] == ["724384960650"]
        assert len(audio.pictures) == 1
        assert audio.pictures[0].type == 3

        assert read_isrc(flac_file) == "USABC1234567"

    def test_clear_keeps_encoding_comments(self, flac_file):
        audio = FLAC(str(flac_file))
        audio["TITLE"] = ["Old"]
        audio["ENCODER"] = ["flac 1.4.3"]
        audio.save()

        writer = TagWriter(flac_file)
        writer.clear()
        writer.save()

        audio = FLAC(str(flac_file))
        assert "TITLE" not in audio
        assert audio["ENCODER"] == ["flac 1.4.3"]

    def test_ogg_cover_keeps_other_pictures(self, sample_metadata):
        """Test that Ogg picture blocks other than the front cover survive."""
        back = Picture()
        back.type = 4
        back.mime = "image/jpeg"
        back.data = JPEG
        encoded_back = base64.b64encode(back.write()).decode("ascii")

        backend = VorbisBackend.__new__(VorbisBackend)
        backend.path = Path("track.ogg")
        backend.audio = SimpleNamespace(tags={"METADATA_BLOCK_PICTURE": [encoded_back]})

        backend.set_cover(Artwork(JPEG, "image/jpeg"))

        blocks = backend.audio.tags["METADATA_BLOCK_PICTURE"]
        assert blocks[0] == encoded_back
        assert Picture(base64.b64decode(blocks[1])).type == 3


class TestMP4:
    """Tests for the MP4 atom mapping."""

    def _backend(self):
        backend = MP4Backend.__new__(MP4Backend)
        backend.path = Path("track.m4a")
        backend.audio = SimpleNamespace(tags={})
        return backend

    def test_write_atoms(self, sample_metadata):
        backend = self._backend()
        backend.write(tag_values(sample_metadata))

        tags = backend.audio.tags
        assert tags["\xa9nam"] == ["Song: Part 1/2?"]
        assert tags["aART"] == ["Artist"]
        assert tags["trkn"] == [(3, 12)]
        assert tags["tmpo"] == [128]
        assert bytes(tags["----:com.apple.iTunes:ISRC"][0]) == b"USABC1234567"

    def test_fractional_bpm_goes_to_freeform(self, sample_metadata):
        backend = self._backend()
        backend.write(tag_values(replace(sample_metadata, bpm="125.8")))

        assert "tmpo" not in backend.audio.tags
        assert bytes(backend.audio.tags["----:com.apple.iTunes:BPM"][0]) == b"125.8"

    def test_cover(self):
        backend = self._backend()
        backend.set_cover(Artwork(b"\x89PNG" + b"\x00" * 8, "image/png"))

        cover = backend.audio.tags["covr"][0]
        assert cover.imageformat == MP4Cover.FORMAT_PNG

    def test_read_isrc(self, sample_metadata):
        backend = self._backend()
        assert backend.read_isrc() is None
        backend.write(tag_values(sample_metadata))
        assert backend.read_isrc() == "USABC1234567"


class TestTagWriterErrors:
    """Tests for unreadable files."""

    def test_unsupported_format(self, temp_dir):
        path = temp_dir / "track.wav"
        path.write_bytes(b"RIFF")

        with pytest.raises(TaggingError):
            TagWriter(path)

    def test_corrupt_flac(self, temp_dir):
        path = temp_dir / "track.flac"
        path.write_bytes(b"not a flac file at all")

        with pytest.raises(TaggingError):
            TagWriter(path)
