"""Version management for the knee classifier server.

Reads the installed distribution version. When running from a source checkout
that was never installed, returns "dev".
"""

import re
from importlib import metadata

DISTRIBUTION_NAME = "knee-classifier"

# Regex for valid version format
VERSION_PATTERN = re.compile(r"^v?[0-9]+(\.[0-9]+)*(-[a-zA-Z0-9]+)?$")


def _normalize_version(content: str) -> str | None:
    """Normalize a version string, returning None if invalid.

    Args:
        content: Raw version string (e.g., "v0.1.0", "0.1.0", "main")

    Returns:
        Normalized version without "v" prefix, or None if invalid/dev.
    """
    if not content:
        return None

    if content.lower() in ("main", "dev"):
        return None

    if not VERSION_PATTERN.match(content):
        return None

    # Strip "v" prefix if present (e.g., "v0.0.18" -> "0.0.18")
    if content.startswith("v"):
        return content[1:]

    return content


def _read_installed_version() -> str:
    try:
        content = metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "dev"

    version = _normalize_version(content)
    return version if version else "dev"


# Read version at module import time
version = _read_installed_version()
