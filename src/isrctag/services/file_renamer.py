"""
Renames tagged files to "Main Artists - Title [Year]".
"""

from pathlib import Path
from typing import Union

from ..core.config import FILENAME_REPLACEMENTS
from ..core.exceptions import TaggingError
from ..core.logger import get_logger
from ..models.metadata import Metadata

logger = get_logger(__name__)


def sanitize_filename(name: str) -> str:
    """
    Replace characters Windows refuses in file names with full-width look-alikes.

    Same mapping as rclone's Asterisk, BackSlash, Colon, DoubleQuote, LtGt,
    Pipe, Question and Slash encodings.
    """
    return name.translate(str.maketrans(FILENAME_REPLACEMENTS))


def build_filename(metadata: Metadata) -> str:
    """File name stem for resolved metadata, without extension."""
    artists = ", ".join(metadata.main_artists)
    return sanitize_filename(f"{artists} - {metadata.title} [{metadata.year}]")


def rename_file(path: Union[str, Path], metadata: Metadata) -> Path:
    """
    Rename an audio file after its metadata, keeping directory and extension.

    Args:
        path: File to rename
        metadata: Resolved metadata

    Returns:
        The new path
    """
    path = Path(path)
    new_path = path.with_name(f"{build_filename(metadata)}{path.suffix}")
    if new_path == path:
        return path

    try:
        path.rename(new_path)
    except OSError as e:
        raise TaggingError(f"Could not rename {path.name} to {new_path.name}: {e}", stage="rename") from e

    logger.info(f"Renamed {path.name} -> {new_path.name}")
    return new_path
