"""Legal file and directory name fragments."""

import re
from typing import Any, Optional

from catalog_publish.common import to_posix_path

# Characters rejected by at least one of Windows, macOS and Linux file systems
_ILLEGAL_CHARACTERS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def sanitize_segment(name: Any, replacement: str = "_") -> str:
    """
    Make a single path component legal on common file systems.

    Each of ``\\ / : * ? " < > |`` and every ASCII control character is
    replaced by ``replacement``; all other characters are kept, so with a
    one-character replacement the length is unchanged. Sanitizing twice gives
    the same result.

    Args:
        name: Component to sanitize; None gives ''
        replacement: Substitute for every illegal character; must itself be legal

    Returns:
        Sanitized component
    """
    if name is None:
        return ""
    return _ILLEGAL_CHARACTERS.sub(replacement, str(name))


def normalize_path(path: Optional[str]) -> Optional[str]:
    """
    Normalize an already-joined path without touching its characters.

    Trims surrounding whitespace, converts backslashes to forward slashes
    (with NFC normalization) and strips trailing slashes. Components are
    expected to have been sanitized before joining, so separators inserted
    on purpose survive.

    Args:
        path: Path to normalize; None is passed through

    Returns:
        Normalized path, or None
    """
    if path is None:
        return None
    return to_posix_path(path.strip()).rstrip('/')
