"""Collection hierarchy paths.

Both walks follow ``get_parent()`` iteratively until a root is reached. The
host guarantees the parent chain is acyclic; ``max_depth`` only bounds the
walk should that ever be violated.
"""

import logging
from typing import List, Optional

from .events import EventCallback, emit
from .models import BASE_DIR_SETTING, DST_ROOT_SETTING, Container, ContainerKind
from .sanitizer import normalize_path, sanitize_segment

DEFAULT_MAX_DEPTH = 256


def _ancestors(container: Container, max_depth: int, on_event: Optional[EventCallback]) -> List[Container]:
    """Return the ancestors of container, nearest first."""
    ancestors: List[Container] = []
    parent = container.get_parent()
    while parent is not None:
        if len(ancestors) >= max_depth:
            emit(
                on_event, logging.WARNING, "Container hierarchy too deep, truncated",
                container=container.get_name(), max_depth=max_depth,
            )
            break
        ancestors.append(parent)
        parent = parent.get_parent()
    return ancestors


def collection_path(
    container: Optional[Container],
    *,
    replacement: str = "_",
    max_depth: int = DEFAULT_MAX_DEPTH,
    on_event: Optional[EventCallback] = None,
) -> str:
    """
    Build the ``Set/Subset/Collection`` path of a container.

    The container's own name is used as is; ancestor names are sanitized
    before they are joined.

    Args:
        container: Collection or collection set; None gives ''
        replacement: Substitute for illegal characters in ancestor names
        max_depth: Maximum number of ancestors to visit
        on_event: Observability callback

    Returns:
        Slash-separated hierarchy path
    """
    if container is None:
        return ""

    segments = [sanitize_segment(a.get_name(), replacement) for a in _ancestors(container, max_depth, on_event)]
    segments.reverse()
    segments.append(container.get_name())
    path = "/".join(segments)

    emit(on_event, logging.DEBUG, "Collection path", container=container.get_name(), path=path)
    return path


def collection_upload_path(
    container: Container,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    on_event: Optional[EventCallback] = None,
) -> Optional[str]:
    """
    Build the upload root of a published collection or collection set.

    A collection starts from its own ``dstRoot`` setting, a collection set
    from its own ``baseDir``. Every ancestor set whose normalized ``baseDir``
    is non-empty is prepended; ancestors without one contribute nothing.

    Args:
        container: Published collection or collection set
        max_depth: Maximum number of ancestors to visit
        on_event: Observability callback

    Returns:
        Composed upload path, or None when no level defines one (the caller
        then uses its default root)
    """
    if container.get_kind() == ContainerKind.COLLECTION:
        own = container.get_setting(DST_ROOT_SETTING)
    else:
        own = container.get_setting(BASE_DIR_SETTING)

    segments: List[str] = [] if own is None else [str(own)]
    for ancestor in _ancestors(container, max_depth, on_event):
        raw = ancestor.get_setting(BASE_DIR_SETTING)
        base_dir = normalize_path(str(raw)) if raw is not None else None
        if base_dir:
            segments.insert(0, base_dir)

    path = "/".join(segments) if segments else None
    emit(on_event, logging.DEBUG, "Collection upload path", container=container.get_name(), path=path)
    return path
