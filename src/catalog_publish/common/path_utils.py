"""Path utilities for consistent path handling across packages."""

import unicodedata
from pathlib import PurePath


def to_posix_path(path: PurePath | str) -> str:
    """
    Convert a path into the forward-slash form used for album and remote paths.

    Applies:
    - Unicode NFC normalization (canonical composition), so names typed on
      different systems compare equal
    - Backslash to forward slash conversion

    Args:
        path: Path object or string to convert

    Returns:
        NFC-normalized string with forward slashes only

    Examples:
        >>> to_posix_path(r"Trips\\Paris")
        'Trips/Paris'
    """
    normalized = unicodedata.normalize('NFC', str(path))
    return normalized.replace('\\', '/')


def split_extension(path: str) -> tuple[str, str]:
    """
    Split a forward-slash path into (path without extension, extension).

    The extension is returned without its leading dot. Dots in directory
    names and leading dots of hidden files are not treated as extensions.

    Args:
        path: Forward-slash path

    Returns:
        Tuple of (stem path, extension); extension is '' when there is none
    """
    head, _, leaf = path.rpartition('/')
    dot = leaf.rfind('.')
    if dot <= 0:
        return path, ''
    stem = leaf[:dot]
    extension = leaf[dot + 1:]
    if head or path.startswith('/'):
        return f"{head}/{stem}", extension
    return stem, extension


def leaf_name(path: str) -> str:
    """Return the last component of a forward-slash path."""
    return path.rstrip('/').rpartition('/')[2]


def make_relative(path: str, root: str) -> str:
    """
    Express a forward-slash path relative to a root directory.

    Paths outside of the root are returned unchanged.

    Args:
        path: Forward-slash path
        root: Forward-slash root directory

    Returns:
        Relative path, or the original path if it is not under root
    """
    root = root.rstrip('/')
    if not root:
        return path
    prefix = root + '/'
    if path.startswith(prefix):
        return path[len(prefix):]
    return path
