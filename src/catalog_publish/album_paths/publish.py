"""Local and remote paths of a rendered photo."""

import logging
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog_publish.common import leaf_name, make_relative, split_extension, to_posix_path
from .events import EventCallback, emit
from .media import is_video
from .models import MediaItem


class PublishOptions(BaseModel):
    """How rendered photos are laid out below the destination root."""

    model_config = ConfigDict(extra='forbid')

    copy_tree: bool = Field(
        default=False,
        description="Mirror the source directory tree below src_root instead of publishing flat"
    )
    src_root: str = Field(
        default="",
        description="Source root the tree is mirrored from (copy_tree only)"
    )
    raw_and_jpg: bool = Field(
        default=False,
        description="Keep the source extension in the name when the rendered extension differs (IMG_1_rw2.jpg)"
    )


class PublishPaths(NamedTuple):
    """Relative source path and destination path of a rendered photo."""
    local_path: str
    remote_path: str


def publish_paths(
    item: MediaItem,
    rendered_extension: str,
    options: PublishOptions,
    dst_root: Optional[str] = "",
    on_event: Optional[EventCallback] = None,
) -> PublishPaths:
    """
    Compute where a rendered photo goes.

    Virtual copies get the last three characters of their identifier
    appended to the file name, so they do not overwrite their master. With
    ``raw_and_jpg``, a photo rendered to a different extension keeps its
    source extension in the name; videos never do.

    Args:
        item: Source photo
        rendered_extension: Extension of the rendered file, with or without dot
        options: Layout options
        dst_root: Destination root; '' or None publishes relative to the root
        on_event: Observability callback

    Returns:
        PublishPaths(local_path, remote_path), both with forward slashes
    """
    source = to_posix_path(item.get_backing_file_path())
    stem, source_extension = split_extension(source)
    rendered_extension = rendered_extension.lstrip('.')

    if item.is_virtual_copy():
        stem = f"{stem}-{item.get_identifier()[-3:]}"

    if (
        options.raw_and_jpg
        and not is_video(source)
        and source_extension.lower() != rendered_extension.lower()
    ):
        stem = f"{stem}_{source_extension}"

    rendered = f"{stem}.{rendered_extension}" if rendered_extension else stem

    if options.copy_tree:
        local_path = make_relative(rendered, to_posix_path(options.src_root))
    else:
        local_path = leaf_name(rendered)

    remote_path = f"{dst_root}/{local_path}" if dst_root else local_path

    emit(
        on_event, logging.DEBUG, "Publish path",
        source=source, layout="tree" if options.copy_tree else "flat",
        dst_root=dst_root, local_path=local_path, remote_path=remote_path,
    )
    return PublishPaths(local_path, remote_path)
