"""
isrctag - tag audio files with Deezer metadata found by ISRC.
Main entry point.
"""

import sys

from .core import setup_logging
from .core.validation import validate_and_raise
from .ui.cli import IsrcTagCLI

logger = setup_logging()


def main() -> int:
    """Main entry point."""
    logger.debug("Starting isrctag")
    try:
        validate_and_raise()
        logger.debug("Configuration validation passed")

        cli = IsrcTagCLI()
        return cli.run()
    except Exception:
        logger.exception("Unhandled exception occurred")
        raise
    finally:
        logger.debug("isrctag shutting down")


if __name__ == "__main__":
    sys.exit(main())
