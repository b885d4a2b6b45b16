"""
Configuration and input validation utilities.
"""

import importlib
import re
from typing import List, Optional, Tuple
from .config import (
    DEEZER_CONFIG,
    QOBUZ_CONFIG,
    ARTWORK_CONFIG,
    LOGGING_CONFIG,
    ERROR_MESSAGES,
)
from .exceptions import ConfigurationError

# Country code, registrant code, year of reference, designation code
ISRC_PATTERN = re.compile(r"^[A-Z]{2}[A-Z0-9]{3}[0-9]{2}[0-9]{5}$")


def check_dependencies() -> Tuple[bool, List[str]]:
    """
    Check if all required dependencies are installed.

    Returns:
        Tuple of (all_installed, list_of_missing_dependencies)
    """
    required_packages = {
        "requests": "requests",
        "mutagen": "mutagen",
        "rich": "rich",
    }

    missing = []
    for module_name, package_name in required_packages.items():
        try:
            importlib.import_module(module_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def _check_timeout(name: str, timeout: Optional[float], errors: List[str]) -> None:
    if timeout is not None and timeout <= 0:
        errors.append(f"{name} TIMEOUT must be > 0 or unset")


def validate_configuration() -> Tuple[bool, List[str]]:
    """
    Validate application configuration.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    deps_ok, missing_deps = check_dependencies()
    if not deps_ok:
        errors.append(
            f"Missing required dependencies: {', '.join(missing_deps)}. "
            f"Please install them with: pip install -e ."
        )

    for name, config in (("Deezer", DEEZER_CONFIG), ("Qobuz", QOBUZ_CONFIG)):
        if not str(config["BASE_URL"]).startswith(("http://", "https://")):
            errors.append(f"{name} BASE_URL must be an http(s) URL")
        _check_timeout(name, config["TIMEOUT"], errors)

    _check_timeout("Artwork", ARTWORK_CONFIG["TIMEOUT"], errors)

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if LOGGING_CONFIG["LEVEL"] not in valid_log_levels:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

    is_valid = len(errors) == 0
    return is_valid, errors


def validate_and_raise():
    """
    Validate configuration and raise ConfigurationError if invalid.
    """
    is_valid, errors = validate_configuration()
    if not is_valid:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)


def validate_isrc(value: str) -> str:
    """
    Validate and normalize an ISRC.

    Hyphens and surrounding whitespace are removed and letters upper-cased,
    so "us-abc-12-34567" becomes "USABC1234567".

    Args:
        value: ISRC as typed by the user or read from a tag

    Returns:
        Normalized 12 character ISRC

    Raises:
        ValueError: If the value is not a well-formed ISRC
    """
    if not isinstance(value, str):
        raise ValueError(f"{ERROR_MESSAGES['INVALID_ISRC']}: expected a string")

    normalized = value.strip().replace("-", "").upper()
    if not ISRC_PATTERN.match(normalized):
        raise ValueError(f"{ERROR_MESSAGES['INVALID_ISRC']}: {value!r}")

    return normalized
