"""Capture date resolution.

The capture date of a photo is the first available of:

1. dateTimeOriginal                (original)
2. dateTimeOriginalISO8601         (original)
3. dateTimeDigitized
4. dateTimeDigitizedISO8601
5. formatted ``dateCreated`` text  (IPTC date created)
6. file creation time of the backing file
7. current time
"""

import logging
import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable, NamedTuple, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .events import EventCallback, emit
from .models import (
    DATE_CREATED,
    DATE_TIME_DIGITIZED,
    DATE_TIME_DIGITIZED_ISO8601,
    DATE_TIME_ORIGINAL,
    DATE_TIME_ORIGINAL_ISO8601,
    MediaItem,
)

FILE_CREATION_DATE = "fileCreationDate"
CURRENT_TIME = "currentTime"

_RAW_SOURCES = (
    (DATE_TIME_ORIGINAL, True),
    (DATE_TIME_ORIGINAL_ISO8601, True),
    (DATE_TIME_DIGITIZED, False),
    (DATE_TIME_DIGITIZED_ISO8601, False),
)

# Date is mandatory; time, its minutes/seconds and the zone are optional
_DATE_CREATED_PATTERN = re.compile(
    r"(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[T ](\d{1,2})(?::(\d{1,2}))?(?::(\d{1,2}))?)?"
    r"\s*(Z|[+-]\d{2}:?\d{2}|[A-Za-z][A-Za-z0-9_/+-]*)?"
)
_OFFSET_PATTERN = re.compile(r"([+-])(\d{2}):?(\d{2})")

CreationTimeSource = Callable[[str], Optional[datetime]]
Clock = Callable[[], datetime]


class CaptureInstant(NamedTuple):
    """Resolved capture date and whether it is a true original capture time."""
    instant: datetime
    is_original: bool


def _local_now() -> datetime:
    return datetime.now().astimezone()


def stat_creation_time(path: str) -> Optional[datetime]:
    """
    Read the creation time of a file.

    Uses ``st_birthtime`` where the platform records it, ``st_ctime`` on
    Windows, and the modification time elsewhere.

    Args:
        path: File path

    Returns:
        Aware local datetime, or None if the file cannot be stat'ed
    """
    if not path:
        return None
    try:
        stat = os.stat(path)
    except OSError:
        return None

    created = getattr(stat, "st_birthtime", None)
    if created is None:
        created = stat.st_ctime if os.name == "nt" else stat.st_mtime
    return datetime.fromtimestamp(created, tz=timezone.utc).astimezone()


def parse_zone(zone: Optional[str]) -> Optional[tzinfo]:
    """Map ``Z``/``UTC``/``GMT``, ``+HH:MM`` or an IANA zone name to a tzinfo."""
    if not zone:
        return None
    if zone.upper() in ("Z", "UTC", "GMT"):
        return timezone.utc
    offset = _OFFSET_PATTERN.fullmatch(zone)
    if offset:
        sign = -1 if offset.group(1) == "-" else 1
        return timezone(sign * timedelta(hours=int(offset.group(2)), minutes=int(offset.group(3))))
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def parse_date_created(text: str, on_event: Optional[EventCallback] = None) -> Optional[datetime]:
    """
    Parse a free-text creation date such as ``2021-06-15T14:30:00Z``.

    Missing time components are 0. A missing or unknown zone means local
    time. When the text holds several dates the last one wins.

    Args:
        text: Formatted date text
        on_event: Observability callback

    Returns:
        Aware datetime, or None if the text holds no valid date
    """
    match = None
    for match in _DATE_CREATED_PATTERN.finditer(text):
        pass
    if match is None:
        return None

    year, month, day, hour, minute, second, zone = match.groups()
    try:
        naive = datetime(
            int(year), int(month), int(day),
            int(hour or 0), int(minute or 0), int(second or 0),
        )
    except ValueError as e:
        emit(on_event, logging.WARNING, "Invalid dateCreated", value=text, error=str(e))
        return None

    tz = parse_zone(zone)
    if tz is None:
        if zone:
            emit(on_event, logging.DEBUG, "Unknown time zone, using local time", value=text, zone=zone)
        try:
            return naive.astimezone()
        except (OverflowError, OSError):
            # Local time is undefined for this instant on some platforms
            return naive
    return naive.replace(tzinfo=tz)


def _found(on_event: Optional[EventCallback], source: str, instant: datetime, is_original: bool) -> CaptureInstant:
    emit(on_event, logging.DEBUG, "Capture date", source=source, instant=instant.isoformat(), is_original=is_original)
    return CaptureInstant(instant, is_original)


def resolve_capture_instant(
    item: MediaItem,
    *,
    creation_time_source: CreationTimeSource = stat_creation_time,
    clock: Optional[Clock] = None,
    on_event: Optional[EventCallback] = None,
) -> CaptureInstant:
    """
    Determine the best available capture date of a media item.

    Never fails: when no metadata and no file time is available the current
    time is returned and a WARNING event is emitted.

    Args:
        item: Media item
        creation_time_source: Reads the creation time of the backing file
        clock: Returns the current time (default: local now)
        on_event: Observability callback

    Returns:
        CaptureInstant(instant, is_original); is_original is True only for
        the two original-capture fields
    """
    for field_name, is_original in _RAW_SOURCES:
        value = item.get_timestamp_field(field_name)
        if value is not None:
            return _found(on_event, field_name, value, is_original)

    date_created = item.get_formatted_metadata().get(DATE_CREATED)
    if date_created is not None and date_created != "":
        value = parse_date_created(str(date_created), on_event)
        if value is not None:
            return _found(on_event, DATE_CREATED, value, False)

    path = item.get_backing_file_path() or ""
    value = creation_time_source(path)
    if value is not None:
        return _found(on_event, FILE_CREATION_DATE, value, False)

    now = (clock or _local_now)()
    emit(
        on_event, logging.WARNING, "No capture date found, using current time",
        path=path, source=CURRENT_TIME, instant=now.isoformat(),
    )
    return CaptureInstant(now, False)
