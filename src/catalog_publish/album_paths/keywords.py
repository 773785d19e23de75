"""Keyword reconciliation between a photo and a desired keyword list."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from .events import EventCallback, emit
from .models import MediaItem, Tag


@dataclass(frozen=True)
class KeywordDelta:
    """Changes needed to turn a photo's keywords into a desired list.

    Attributes:
        names_to_add: Desired names the photo does not have, in desired order
        names_to_remove: Names of the photo's keywords that are not desired
        objects_to_remove: The keyword objects behind names_to_remove, same order
    """
    names_to_add: Tuple[str, ...] = ()
    names_to_remove: Tuple[str, ...] = ()
    objects_to_remove: Tuple[Tag, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.names_to_add and not self.objects_to_remove


def keyword_delta(current_tags: Sequence[Tag], desired_names: Iterable[str]) -> KeywordDelta:
    """
    Compute keywords to add and remove.

    Every desired name without a keyword of that exact name is added. Every
    current keyword whose name is not desired is removed; duplicates of an
    undesired name are each removed. Order of both inputs is preserved.

    Args:
        current_tags: Keywords currently on the photo
        desired_names: Keyword names the photo should carry

    Returns:
        KeywordDelta
    """
    desired = list(desired_names)
    current_names = {tag.get_name() for tag in current_tags}
    desired_set = set(desired)

    to_add = tuple(name for name in desired if name not in current_names)
    to_remove = tuple(tag for tag in current_tags if tag.get_name() not in desired_set)
    return KeywordDelta(
        names_to_add=to_add,
        names_to_remove=tuple(tag.get_name() for tag in to_remove),
        objects_to_remove=to_remove,
    )


def get_modified_keywords(item: MediaItem, desired_names: Iterable[str]) -> KeywordDelta:
    """Compute the keyword delta of a photo against a desired name list."""
    return keyword_delta(item.get_current_tags(), desired_names)


def apply_keyword_delta(
    item: MediaItem,
    delta: KeywordDelta,
    on_event: Optional[EventCallback] = None,
) -> KeywordDelta:
    """
    Apply a keyword delta through the photo's mutation interface.

    Names are added before keywords are removed, each in delta order.

    Args:
        item: Photo to modify
        delta: Result of :func:`keyword_delta`
        on_event: Observability callback

    Returns:
        The applied delta
    """
    for name in delta.names_to_add:
        item.add_tag(name)
    for tag in delta.objects_to_remove:
        item.remove_tag(tag)

    if not delta.is_empty:
        emit(
            on_event, logging.INFO, "Keywords updated",
            photo=item.get_identifier(),
            added=list(delta.names_to_add), removed=list(delta.names_to_remove),
        )
    return delta
