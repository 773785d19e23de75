"""Media type helpers."""

from typing import Optional

from catalog_publish.common import split_extension, to_posix_path

VIDEO_EXTENSIONS = frozenset({
    '3gp', '3gpp', 'avchd', 'avi', 'm2t', 'm2ts', 'm4v', 'mov', 'mp4', 'mpe', 'mpg', 'mts',
})


def is_video(filename: str) -> bool:
    """
    Check whether a file is a video by its extension.

    Args:
        filename: File name or path

    Returns:
        True if the extension (case-insensitive) is a supported video type
    """
    _, extension = split_extension(to_posix_path(filename))
    return extension.lower() in VIDEO_EXTENSIONS


def is_dynamic_album_path(path: Optional[str]) -> bool:
    """Return True if the path contains placeholders to evaluate."""
    return bool(path) and "{" in path
