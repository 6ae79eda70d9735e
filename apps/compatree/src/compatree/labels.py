"""Display labels derived from raw file and segment names."""

import re
from pathlib import PurePosixPath

# Word boundaries inside compound names: "AbortController", "HTMLUListElement".
DEFAULT_LABEL_PATTERN = r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])"


def strip_extension(name: str) -> str:
    """Drop a trailing ``.json`` style extension, keeping dotted-less names as is."""
    return PurePosixPath(name).stem if "." in name.lstrip(".") else name


def derive_label(name: str, pattern: str | re.Pattern[str] = DEFAULT_LABEL_PATTERN) -> str:
    """
    Turn a raw name into a human-readable label.

    Examples:
        >>> derive_label("AbortController.json")
        'Abort Controller'
        >>> derive_label("HTMLUListElement")
        'HTMLU List Element'
        >>> derive_label("commands")
        'commands'
    """
    return re.sub(pattern, " ", strip_extension(name)).strip()
