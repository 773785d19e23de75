"""Media items backed by image files on disk.

Timestamps and formatted metadata come from EXIF, read with Pillow.
Collection memberships and keywords are not stored in image files; callers
pass them in.
"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from PIL import Image

from .dates import parse_zone
from .errors import MediaReadError
from .models import (
    DATE_TIME_DIGITIZED,
    DATE_TIME_DIGITIZED_ISO8601,
    DATE_TIME_ORIGINAL,
    DATE_TIME_ORIGINAL_ISO8601,
    Container,
    Keyword,
    MetadataValue,
    Tag,
)

logger = logging.getLogger(__name__)

EXIF_IFD = 0x8769

# IFD0 tags
TAG_IMAGE_DESCRIPTION = 0x010E
TAG_MAKE = 0x010F
TAG_MODEL = 0x0110
TAG_ARTIST = 0x013B
TAG_COPYRIGHT = 0x8298

# Exif IFD tags
TAG_ISO_SPEED = 0x8827
TAG_DATETIME_ORIGINAL = 0x9003
TAG_DATETIME_DIGITIZED = 0x9004
TAG_OFFSET_TIME_ORIGINAL = 0x9011
TAG_OFFSET_TIME_DIGITIZED = 0x9012
TAG_LENS_MODEL = 0xA434

_TEXT_TAGS = {
    TAG_IMAGE_DESCRIPTION: "caption",
    TAG_MAKE: "cameraMake",
    TAG_MODEL: "cameraModel",
    TAG_ARTIST: "artist",
    TAG_COPYRIGHT: "copyright",
}


def _exif_text(value: Any) -> Optional[str]:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if value is None:
        return None
    text = str(value).strip("\x00 ")
    return text or None


def parse_exif_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an EXIF datetime ("2020:01:01 12:00:00").

    Args:
        value: EXIF datetime value

    Returns:
        Naive datetime, or None for empty or zeroed values
    """
    text = _exif_text(value)
    if not text:
        return None
    try:
        return datetime.strptime(text[:19], "%Y:%m:%d %H:%M:%S")
    except ValueError:
        return None


def _with_offset(naive: Optional[datetime], offset: Any) -> Optional[datetime]:
    if naive is None:
        return None
    tz = parse_zone(_exif_text(offset))
    return naive.replace(tzinfo=tz) if tz is not None else None


def read_exif(path: Path) -> Tuple[Dict[str, datetime], Dict[str, MetadataValue]]:
    """
    Read capture timestamps and descriptive metadata from an image file.

    The ISO 8601 timestamp variants are only set when EXIF records the
    time zone offset of the corresponding timestamp.

    Args:
        path: Image file

    Returns:
        Tuple of (timestamps by field name, formatted metadata by key); both
        empty when the file has no readable EXIF
    """
    timestamps: Dict[str, datetime] = {}
    metadata: Dict[str, MetadataValue] = {}

    try:
        with Image.open(path) as img:
            exif = img.getexif()
            exif_ifd = exif.get_ifd(EXIF_IFD)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to extract EXIF: {{'path': {str(path)!r}, 'error': {str(e)!r}}}")
        return timestamps, metadata

    for tag_id, key in _TEXT_TAGS.items():
        text = _exif_text(exif.get(tag_id))
        if text:
            metadata[key] = text

    def lookup(tag_id: int) -> Any:
        # Exif IFD tags are sometimes written to IFD0
        value = exif_ifd.get(tag_id)
        return value if value is not None else exif.get(tag_id)

    lens = _exif_text(lookup(TAG_LENS_MODEL))
    if lens:
        metadata["lens"] = lens

    iso = lookup(TAG_ISO_SPEED)
    if isinstance(iso, tuple):
        iso = iso[0] if iso else None
    if isinstance(iso, (int, float)):
        metadata["isoSpeedRating"] = int(iso)

    original = parse_exif_datetime(lookup(TAG_DATETIME_ORIGINAL))
    digitized = parse_exif_datetime(lookup(TAG_DATETIME_DIGITIZED))
    for field_name, value in (
        (DATE_TIME_ORIGINAL, original),
        (DATE_TIME_ORIGINAL_ISO8601, _with_offset(original, lookup(TAG_OFFSET_TIME_ORIGINAL))),
        (DATE_TIME_DIGITIZED, digitized),
        (DATE_TIME_DIGITIZED_ISO8601, _with_offset(digitized, lookup(TAG_OFFSET_TIME_DIGITIZED))),
    ):
        if value is not None:
            timestamps[field_name] = value

    if original is not None:
        metadata["dateTimeOriginal"] = original.isoformat()

    logger.debug(f"EXIF read: {{'path': {str(path)!r}, 'timestamps': {sorted(timestamps)}, 'keys': {sorted(metadata)}}}")
    return timestamps, metadata


class FileMediaItem:
    """A media item for an image file.

    Attributes:
        path: Image file
        identifier: Given identifier, else a UUID5 of the absolute file path
    """

    def __init__(
        self,
        path: Path | str,
        *,
        identifier: Optional[str] = None,
        collections: Iterable[Container] = (),
        keywords: Iterable[str] = (),
        virtual_copy: bool = False,
    ) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            raise MediaReadError(f"Media file not found: {self.path}", path=str(self.path))

        self.identifier = identifier or str(uuid.uuid5(uuid.NAMESPACE_URL, self.path.resolve().as_uri()))
        self.virtual_copy = virtual_copy
        self._collections: List[Container] = list(collections)
        self._keywords: List[Tag] = [Keyword(name) for name in keywords]

        self._timestamps, exif_metadata = read_exif(self.path)
        self._metadata: Dict[str, MetadataValue] = {
            "fileName": self.path.name,
            "folderName": self.path.parent.name,
            "fileType": self.path.suffix.lstrip(".").upper(),
        }
        self._metadata.update(exif_metadata)

    def get_identifier(self) -> str:
        return self.identifier

    def get_timestamp_field(self, name: str) -> Optional[datetime]:
        return self._timestamps.get(name)

    def get_formatted_metadata(self) -> Mapping[str, MetadataValue]:
        return self._metadata

    def get_backing_file_path(self) -> str:
        return str(self.path)

    def get_container_memberships(self) -> Sequence[Container]:
        return list(self._collections)

    def get_current_tags(self) -> Sequence[Tag]:
        return list(self._keywords)

    def is_virtual_copy(self) -> bool:
        return self.virtual_copy

    def add_tag(self, name: str) -> None:
        self._keywords.append(Keyword(name))

    def remove_tag(self, tag: Tag) -> None:
        self._keywords = [k for k in self._keywords if k is not tag]
