"""
isrctag CLI Module
Tags an audio file with Deezer metadata found by ISRC and optionally renames it.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..clients.deezer import DeezerClient
from ..clients.qobuz import QobuzClient
from ..core.config import ERROR_MESSAGES, PROJECT_NAME, PROJECT_VERSION, QOBUZ_CONFIG
from ..core.exceptions import InputError, IsrcTagError
from ..core.logger import get_logger, setup_logging
from ..core.validation import validate_isrc
from ..models.metadata import Metadata
from ..services.cover_art_fetcher import CoverArtFetcher
from ..services.file_renamer import build_filename, rename_file
from ..services.metadata_service import MetadataService
from ..services.qobuz_lookup import find_isrc
from ..services.tag_writer import TagWriter
from .selector import InteractiveSelector, ScriptedSelector, Selector

logger = get_logger(__name__)


class IsrcTagCLI:
    """Command-line interface: resolve, tag, rename."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog=PROJECT_NAME,
            description=f"{PROJECT_NAME} v{PROJECT_VERSION} - tag audio files with Deezer metadata by ISRC",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  %(prog)s song.flac
  %(prog)s song.mp3 --isrc USABC1234567 --rename
  %(prog)s song.m4a --qobuz-album 0060254770421 --clear
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'{PROJECT_NAME} {PROJECT_VERSION}'
        )
        parser.add_argument(
            'filename',
            type=Path,
            help='Audio file to tag and optionally rename'
        )
        parser.add_argument(
            '--isrc',
            help='A custom ISRC to use instead of reading it from the file'
        )
        parser.add_argument(
            '--qobuz-album',
            metavar='ALBUM_ID',
            help='Take the ISRC from a track of this Qobuz album'
        )
        parser.add_argument(
            '--qobuz-app-id',
            default=QOBUZ_CONFIG["APP_ID"],
            help='Qobuz application id (default: $ISRCTAG_QOBUZ_APP_ID)'
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Remove all other tags except encoding information '
                 '(encoded by, encoder software, encoder settings, encoding time)'
        )
        parser.add_argument(
            '--rename',
            action='store_true',
            help='Rename the file to "$MAIN_ARTISTS - $TITLE [$YEAR]"; characters Windows '
                 'disallows are replaced with full-width look-alikes'
        )
        parser.add_argument(
            '--choice',
            type=int,
            metavar='N',
            help='Pick the N-th candidate (1-based) instead of asking when a choice is needed'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Resolve and show metadata without touching the file'
        )
        parser.add_argument(
            '--log-level',
            default=None,
            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
            help='Logging level (default: $ISRCTAG_LOG_LEVEL or WARNING)'
        )

        return parser

    def _create_selector(self, choice: Optional[int]) -> Selector:
        if choice is None:
            return InteractiveSelector(self.console)
        if choice < 1:
            raise InputError("--choice must be 1 or greater", stage="selection")
        return ScriptedSelector([choice - 1])

    def determine_isrc(self, args: argparse.Namespace, writer: Optional[TagWriter], selector: Selector) -> str:
        """Pick the ISRC from --isrc, a Qobuz album, or the file's own tag."""
        if args.isrc:
            raw = args.isrc
        elif args.qobuz_album:
            if not args.qobuz_app_id:
                raise InputError("--qobuz-album needs --qobuz-app-id or $ISRCTAG_QOBUZ_APP_ID", stage="lookup")
            raw = find_isrc(QobuzClient(), selector, args.qobuz_app_id, args.qobuz_album)
        else:
            raw = writer.read_isrc() if writer is not None else None
            if not raw:
                raise InputError(ERROR_MESSAGES["NO_ISRC"], stage="lookup")

        try:
            return validate_isrc(raw)
        except ValueError as e:
            raise InputError(str(e), stage="lookup") from e

    def display_metadata(self, metadata: Metadata) -> None:
        """Print a summary of resolved metadata."""
        table = Table(title=escape(metadata.title), show_header=False, box=box.ROUNDED)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Artists", escape(", ".join(metadata.main_artists)))
        table.add_row("Album", escape(metadata.album.title))
        table.add_row("Album artists", escape(", ".join(metadata.album.main_artists)))
        table.add_row("Track", f"{metadata.track_position}/{metadata.album.number_of_tracks}")
        table.add_row("Date", metadata.date)
        table.add_row("ISRC", metadata.isrc)
        table.add_row("UPC", metadata.album.upc)
        table.add_row("Label", escape(metadata.album.label))
        table.add_row("Genres", escape(", ".join(metadata.album.genres)))
        table.add_row("BPM", metadata.bpm or "-")
        self.console.print(table)

    def process(self, args: argparse.Namespace) -> None:
        """Resolve metadata for ``args.filename`` and apply it."""
        path: Path = args.filename
        if not path.is_file():
            raise InputError(f"File not found: {path}", stage="tagging")

        selector = self._create_selector(args.choice)
        # The file is read once: it answers the ISRC question and receives the tags
        writer = TagWriter(path)

        isrc = self.determine_isrc(args, writer, selector)
        self.console.print(f"[blue]ℹ[/blue] Looking up ISRC [cyan]{isrc}[/cyan]")

        metadata = MetadataService(DeezerClient(), selector).get_metadata(isrc)
        self.display_metadata(metadata)

        if args.dry_run:
            self.console.print(f"[blue]ℹ[/blue] Dry run, would rename to: {escape(build_filename(metadata) + path.suffix)}")
            return

        try:
            artwork = CoverArtFetcher().fetch(metadata.album.cover_url)
        except IsrcTagError as e:
            raise e.with_stage("artwork")

        if args.clear:
            writer.clear(keep_encoding=True)
        writer.write(metadata, artwork)
        writer.save()
        self.console.print(f"[bold green]✓[/bold green] Tagged {escape(path.name)}")

        if args.rename:
            new_path = rename_file(path, metadata)
            self.console.print(f"[bold green]✓[/bold green] Renamed to {escape(new_path.name)}")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Parse arguments and run.

        Returns:
            Process exit status
        """
        parser = self.create_parser()
        args = parser.parse_args(argv)

        if args.log_level:
            setup_logging(args.log_level)

        try:
            self.process(args)
        except IsrcTagError as e:
            logger.debug("Fatal error", exc_info=True)
            self.console.print(f"[bold red]✗[/bold red] {escape(str(e))}")
            return 1
        except KeyboardInterrupt:
            self.console.print("[yellow]⚠[/yellow] Interrupted")
            return 130

        return 0
