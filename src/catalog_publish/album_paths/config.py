"""Configuration models for album path resolution."""

from pydantic import BaseModel, Field, ConfigDict
from catalog_publish.common import LoggingConfig

from .hierarchy import DEFAULT_MAX_DEPTH
from .publish import PublishOptions


class PathSettings(BaseModel):
    """Template evaluation settings."""

    model_config = ConfigDict(extra='forbid')

    replacement_char: str = Field(
        default="_",
        description="Replacement for characters that are illegal in path segments"
    )
    max_hierarchy_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        gt=0,
        description="Maximum number of container levels walked when building collection paths"
    )


class PublishSettings(PublishOptions):
    """Publish layout settings."""

    model_config = ConfigDict(extra='forbid')

    dst_root: str = Field(
        default="",
        description="Destination root of published photos (empty: relative paths)"
    )


class AlbumPathsConfig(BaseModel):
    """Root configuration for album path resolution."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathSettings = Field(default_factory=PathSettings)
    publish: PublishSettings = Field(default_factory=PublishSettings)
