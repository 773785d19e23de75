"""Catalog object model consumed by album path resolution.

The host catalog owns photos, collections and keywords. Resolution code only
talks to them through the protocols below; the dataclasses are in-memory
implementations used by the CLI and by tests.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

from .errors import AlbumPathError

MetadataValue = Union[str, int, float, bool]

# Raw timestamp fields, in the order the capture date is looked up
DATE_TIME_ORIGINAL = "dateTimeOriginal"
DATE_TIME_ORIGINAL_ISO8601 = "dateTimeOriginalISO8601"
DATE_TIME_DIGITIZED = "dateTimeDigitized"
DATE_TIME_DIGITIZED_ISO8601 = "dateTimeDigitizedISO8601"

# Formatted metadata key holding the free-text IPTC creation date
DATE_CREATED = "dateCreated"

# Per-container publish settings
DST_ROOT_SETTING = "dstRoot"
BASE_DIR_SETTING = "baseDir"


class ContainerKind(str, Enum):
    """Leaf collections hold photos, collection sets hold other containers."""
    COLLECTION = "collection"
    COLLECTION_SET = "collection_set"


class Tag(Protocol):
    def get_name(self) -> str: ...


class Container(Protocol):
    def get_name(self) -> str: ...

    def get_parent(self) -> Optional["Container"]: ...

    def get_kind(self) -> ContainerKind: ...

    def get_setting(self, key: str) -> Any: ...


class MediaItem(Protocol):
    def get_identifier(self) -> str: ...

    def get_timestamp_field(self, name: str) -> Optional[datetime]: ...

    def get_formatted_metadata(self) -> Mapping[str, MetadataValue]: ...

    def get_backing_file_path(self) -> str: ...

    def get_container_memberships(self) -> Sequence[Container]: ...

    def get_current_tags(self) -> Sequence[Tag]: ...

    def is_virtual_copy(self) -> bool: ...

    def add_tag(self, name: str) -> None: ...

    def remove_tag(self, tag: Tag) -> None: ...


@dataclass(eq=False)
class Keyword:
    """A keyword attached to a photo.

    Equality is identity: two keywords with the same name are still two
    distinct catalog objects.
    """
    name: str

    def get_name(self) -> str:
        return self.name


@dataclass(eq=False)
class CatalogContainer:
    """A collection or collection set.

    Attributes:
        name: Display name
        parent: Enclosing collection set, None for a root container
        kind: Collection or collection set
        settings: Publish settings (``dstRoot`` / ``baseDir``)
    """
    name: str
    parent: Optional["CatalogContainer"] = None
    kind: ContainerKind = ContainerKind.COLLECTION
    settings: Dict[str, Any] = field(default_factory=dict)

    def get_name(self) -> str:
        return self.name

    def get_parent(self) -> Optional["CatalogContainer"]:
        return self.parent

    def get_kind(self) -> ContainerKind:
        return self.kind

    def get_setting(self, key: str) -> Any:
        return self.settings.get(key)

    @classmethod
    def from_path(cls, path: str, kind: ContainerKind = ContainerKind.COLLECTION) -> "CatalogContainer":
        """Build a container chain from ``Set/Subset/Leaf``.

        Every component but the last becomes a collection set.

        Raises:
            AlbumPathError: If the path has no non-empty component
        """
        parts = [part for part in path.replace('\\', '/').split('/') if part]
        if not parts:
            raise AlbumPathError(f"Empty container path: {path!r}", path=path)
        parent: Optional[CatalogContainer] = None
        for part in parts[:-1]:
            parent = cls(part, parent, ContainerKind.COLLECTION_SET)
        return cls(parts[-1], parent, kind)


@dataclass(eq=False)
class CatalogPhoto:
    """An in-memory photo record.

    Attributes:
        identifier: Unique id (uuid) of the photo
        path: Path of the backing file
        timestamps: Raw timestamp fields, see ``DATE_TIME_*``
        formatted_metadata: Formatted metadata by key
        collections: Containers the photo belongs to, in catalog order
        keywords: Keywords currently attached
        virtual_copy: True for a virtual copy sharing the master's file
    """
    identifier: str
    path: str = ""
    timestamps: Dict[str, datetime] = field(default_factory=dict)
    formatted_metadata: Dict[str, MetadataValue] = field(default_factory=dict)
    collections: List[Container] = field(default_factory=list)
    keywords: List[Tag] = field(default_factory=list)
    virtual_copy: bool = False

    def get_identifier(self) -> str:
        return self.identifier

    def get_timestamp_field(self, name: str) -> Optional[datetime]:
        return self.timestamps.get(name)

    def get_formatted_metadata(self) -> Mapping[str, MetadataValue]:
        return self.formatted_metadata

    def get_backing_file_path(self) -> str:
        return self.path

    def get_container_memberships(self) -> Sequence[Container]:
        return list(self.collections)

    def get_current_tags(self) -> Sequence[Tag]:
        return list(self.keywords)

    def is_virtual_copy(self) -> bool:
        return self.virtual_copy

    def add_tag(self, name: str) -> None:
        self.keywords.append(Keyword(name))

    def remove_tag(self, tag: Tag) -> None:
        # Identity, not name: duplicates are removed one object at a time
        for index, current in enumerate(self.keywords):
            if current is tag:
                del self.keywords[index]
                return
