"""Error classes for album path resolution."""

from catalog_publish.common import CatalogPublishError


class AlbumPathError(CatalogPublishError):
    """Base error for album path operations."""
    pass


class MediaReadError(AlbumPathError):
    """Backing media file is missing or is not a regular file."""
    pass
