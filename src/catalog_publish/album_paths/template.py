"""Album path templates.

A template is a destination path containing metadata placeholders::

    {Date <strftime format>[|<default>]}
    {LrFM:<formatted metadata key>[|<default>]}
    {LrCC:<name|path>[ <filter regex>][|<default>]}

Placeholders that do not have one of these shapes are kept verbatim: they
may be intended path components. A default of ``?`` marks the value as
mandatory; it is kept unsanitized so a missing value stays visible in the
resulting path.
"""

import logging
import re
from datetime import datetime
from typing import Callable, List, Optional

from .dates import CaptureInstant, resolve_capture_instant
from .events import EventCallback, emit
from .hierarchy import DEFAULT_MAX_DEPTH, collection_path
from .media import is_dynamic_album_path
from .models import MediaItem, MetadataValue
from .sanitizer import normalize_path, sanitize_segment

MANDATORY_MARKER = "?"

# The default is everything after the last '|'
_DATE_TOKEN = re.compile(r"\{Date (?P<format>[^}]*?)(?:\|(?P<default>[^|}]*))?\}")
_METADATA_TOKEN = re.compile(r"\{LrFM:(?P<key>[^}]*?)(?:\|(?P<default>[^|}]*))?\}")
_COLLECTION_TOKEN = re.compile(
    r"\{LrCC:(?P<type>\w*)(?: (?P<filter>[^}]*?))?(?:\|(?P<default>[^|}]*))?\}"
)
_COLLECTION_TYPES = ("name", "path")

DateResolver = Callable[[MediaItem], CaptureInstant]
DateFormatter = Callable[[datetime, str], str]


def strftime_formatter(instant: datetime, date_format: str) -> str:
    return instant.strftime(date_format)


def _metadata_text(value: Optional[MetadataValue]) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _leaf(path: str) -> str:
    segments = [s for s in path.split("/") if s]
    return segments[-1] if segments else path


class TemplateEngine:
    """Evaluates album path templates against media items.

    Placeholder categories are substituted in a fixed order (dates, formatted
    metadata, collections), each pass working on the output of the previous
    one. A pass only runs when the template mentions its category, so a
    photo's metadata is only read when it is needed.
    """

    def __init__(
        self,
        *,
        replacement: str = "_",
        max_depth: int = DEFAULT_MAX_DEPTH,
        date_resolver: Optional[DateResolver] = None,
        date_formatter: DateFormatter = strftime_formatter,
        on_event: Optional[EventCallback] = None,
    ) -> None:
        self.replacement = replacement
        self.max_depth = max_depth
        self.date_formatter = date_formatter
        self.on_event = on_event
        self.date_resolver = date_resolver or self._default_date_resolver

    def _default_date_resolver(self, item: MediaItem) -> CaptureInstant:
        return resolve_capture_instant(item, on_event=self.on_event)

    def _emit(self, level: int, message: str, **context) -> None:
        emit(self.on_event, level, message, **context)

    def resolve(self, template: Optional[str], item: MediaItem) -> Optional[str]:
        """
        Substitute all placeholders of a template and normalize the result.

        Args:
            template: Album path template; None or '' is just normalized
            item: Media item supplying the metadata

        Returns:
            Normalized path with recognized placeholders substituted
        """
        if not is_dynamic_album_path(template):
            return normalize_path(template)

        path = template
        if "{Date" in path:
            path = self._substitute_dates(path, item)
        if "{LrFM:" in path:
            path = self._substitute_metadata(path, item)
        if "{LrCC:" in path:
            path = self._substitute_collections(path, item)
        return normalize_path(path)

    def _substitute_dates(self, path: str, item: MediaItem) -> str:
        captured: List[datetime] = []

        def replace(match: re.Match) -> str:
            if not captured:
                captured.append(self.date_resolver(item).instant)
            date_format = match.group("format")
            default = match.group("default") or ""
            try:
                text = self.date_formatter(captured[0], date_format)
            except (ValueError, UnicodeError) as e:
                self._emit(logging.WARNING, "Date format failed", format=date_format, error=str(e))
                text = ""
            result = text or default
            self._emit(logging.DEBUG, "Date placeholder", token=match.group(0), result=result)
            return result

        return _DATE_TOKEN.sub(replace, path)

    def _substitute_metadata(self, path: str, item: MediaItem) -> str:
        metadata = item.get_formatted_metadata()

        def replace(match: re.Match) -> str:
            key = match.group("key")
            text = _metadata_text(metadata.get(key))
            if not text:
                text = match.group("default") or ""
            if text != MANDATORY_MARKER:
                text = sanitize_segment(text, self.replacement)
            self._emit(logging.DEBUG, "Metadata placeholder", token=match.group(0), key=key, result=text)
            return text

        return _METADATA_TOKEN.sub(replace, path)

    def _substitute_collections(self, path: str, item: MediaItem) -> str:
        collection_paths = [
            collection_path(c, replacement=self.replacement, max_depth=self.max_depth, on_event=self.on_event)
            for c in item.get_container_memberships()
        ]

        def replace(match: re.Match) -> str:
            token = match.group(0)
            data_type = match.group("type")
            if data_type not in _COLLECTION_TYPES:
                self._emit(logging.INFO, "Collection placeholder type not valid, left unchanged", token=token, type=data_type)
                return token

            default = match.group("default") or ""
            if not collection_paths:
                self._emit(logging.DEBUG, "Photo is in no collection", token=token, result=default)
                return default

            pattern = match.group("filter")
            regex = None
            if pattern:
                try:
                    regex = re.compile(pattern)
                except re.error as e:
                    self._emit(logging.WARNING, "Invalid collection filter", token=token, filter=pattern, error=str(e))
                    return default

            for candidate_path in collection_paths:
                candidate = _leaf(candidate_path) if data_type == "name" else candidate_path
                if regex is None or regex.search(candidate):
                    self._emit(logging.DEBUG, "Collection placeholder", token=token, result=candidate)
                    return candidate

            self._emit(logging.DEBUG, "No collection matches filter", token=token, filter=pattern, result=default)
            return default

        return _COLLECTION_TOKEN.sub(replace, path)


def evaluate_album_path(template: Optional[str], item: MediaItem, **options) -> Optional[str]:
    """Evaluate a template with a one-off :class:`TemplateEngine`.

    Keyword options are passed to the engine.
    """
    return TemplateEngine(**options).resolve(template, item)
