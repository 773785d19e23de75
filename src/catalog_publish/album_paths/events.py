"""Structured resolution events.

Resolution functions never write to a log sink themselves. They report what
they did through an ``on_event`` callback taking a :class:`ResolutionEvent`.
The default callback, :func:`log_event`, forwards events to the package
logger; tests pass an :class:`EventRecorder` instead.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("catalog_publish.album_paths")


@dataclass(frozen=True)
class ResolutionEvent:
    """One observable step of a resolution.

    Attributes:
        level: Standard ``logging`` level number
        message: Short human-readable description
        context: Structured values (token, key, source, result, ...)
    """
    level: int
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


EventCallback = Callable[[ResolutionEvent], None]


def log_event(event: ResolutionEvent) -> None:
    """Forward an event to the ``catalog_publish.album_paths`` logger."""
    if not logger.isEnabledFor(event.level):
        return
    logger.log(event.level, f"{event.message}: {event.context}", extra={"extra_fields": dict(event.context)})


def emit(on_event: Optional[EventCallback], level: int, message: str, **context: Any) -> None:
    (on_event or log_event)(ResolutionEvent(level, message, context))


class EventRecorder:
    """Callback that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: List[ResolutionEvent] = []

    def __call__(self, event: ResolutionEvent) -> None:
        self.events.append(event)

    def messages(self, level: Optional[int] = None) -> List[str]:
        return [e.message for e in self.events if level is None or e.level == level]

    def find(self, message: str) -> List[ResolutionEvent]:
        return [e for e in self.events if e.message == message]
