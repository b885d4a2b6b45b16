"""
Configuration for isrctag.
Contains all constants, settings, and global parameters.
"""

import os
from typing import Optional


def _env_timeout(name: str, default: Optional[float]) -> Optional[float]:
    """Read a timeout in seconds from the environment, empty meaning no timeout."""
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip()
    if not value or value.lower() == "none":
        return None
    try:
        return float(value)
    except ValueError:
        return default


# Project Information
PROJECT_NAME = "isrctag"
PROJECT_VERSION = "1.0.0"
PROJECT_DESCRIPTION = "Tag and rename audio files with Deezer metadata looked up by ISRC"

# Deezer Configuration
# No timeout by default: a hung request blocks until the host gives up.
DEEZER_CONFIG = {
    "BASE_URL": os.environ.get("ISRCTAG_DEEZER_URL", "https://api.deezer.com"),
    "USER_AGENT": f"{PROJECT_NAME}/{PROJECT_VERSION}",
    "TIMEOUT": _env_timeout("ISRCTAG_DEEZER_TIMEOUT", None),
    # Deezer answers missing objects with HTTP 200 and this error code
    "NOT_FOUND_CODE": 800,
}

# Qobuz Configuration
QOBUZ_CONFIG = {
    "BASE_URL": "https://www.qobuz.com/api.json/0.2",
    "APP_ID": os.environ.get("ISRCTAG_QOBUZ_APP_ID", ""),
    "USER_AGENT": f"{PROJECT_NAME}/{PROJECT_VERSION}",
    "TIMEOUT": _env_timeout("ISRCTAG_QOBUZ_TIMEOUT", None),
}

# Artwork Configuration
ARTWORK_CONFIG = {
    "USER_AGENT": f"{PROJECT_NAME}/{PROJECT_VERSION}",
    "TIMEOUT": _env_timeout("ISRCTAG_ARTWORK_TIMEOUT", None),
}

# Logging Configuration
LOGGING_CONFIG = {
    "LEVEL": os.environ.get("ISRCTAG_LOG_LEVEL", "WARNING").upper(),
    "FORMAT": "%(levelname)s - %(name)s - %(message)s",
}

# Disambiguation prompts
PROMPTS = {
    "DEEZER_DUPLICATES": "Multiple tracks with the same ISRC found. Choose which one to use",
    "QOBUZ_TRACKS": "Multiple tracks in the album found. Choose which one to use",
}

# Error Messages
ERROR_MESSAGES = {
    "NO_ISRC": "File tags do not have an ISRC, please pass it in with --isrc",
    "INVALID_ISRC": "Invalid ISRC",
    "NETWORK_ERROR": "Network error occurred",
    "DECODE_ERROR": "Unexpected response from catalog",
    "NOT_FOUND": "No track found in catalog",
    "SELECTION_CANCELLED": "Selection cancelled",
    "UNSUPPORTED_FORMAT": "Unsupported audio format",
    "EMPTY_QOBUZ_ALBUM": "Qobuz album has 0 songs",
}

# Audio containers the tag writer handles, by extension
FILE_EXTENSIONS = {
    "ID3": [".mp3"],
    "VORBIS": [".flac", ".ogg", ".oga", ".opus"],
    "MP4": [".m4a", ".mp4"],
}

# Windows-unsafe characters and the full-width look-alikes used in file names
FILENAME_REPLACEMENTS = {
    "*": "＊",
    "\\": "＼",
    ":": "：",
    '"': "＂",
    "<": "＜",
    ">": "＞",
    "|": "｜",
    "?": "？",
    "/": "／",
}

# Encoding fields kept when tags are cleared
ENCODING_TAG_KEYS = {
    "ID3": ["TENC", "TSSE", "TDEN"],
    "VORBIS": ["ENCODEDBY", "ENCODER", "ENCODERSETTINGS", "ENCODINGTIME"],
    "MP4": ["\xa9too", "----:com.apple.iTunes:ENCODEDBY", "----:com.apple.iTunes:ENCODINGTIME"],
}
