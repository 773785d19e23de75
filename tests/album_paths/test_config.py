"""Tests for album path configuration models."""

import pytest
from pydantic import ValidationError
from catalog_publish.common import LoggingConfig
from catalog_publish.album_paths.config import AlbumPathsConfig, PathSettings, PublishSettings
from catalog_publish.album_paths.publish import PublishOptions


class TestPathSettings:
    """Tests for PathSettings."""

    def test_default_values(self):
        """Test default path settings."""
        settings = PathSettings()
        assert settings.replacement_char == "_"
        assert settings.max_hierarchy_depth == 256

    def test_rejects_non_positive_depth(self):
        """Test that the depth cutoff must be positive."""
        with pytest.raises(ValidationError):
            PathSettings(max_hierarchy_depth=0)


class TestPublishSettings:
    """Tests for PublishSettings."""

    def test_default_values(self):
        """Test default publish settings."""
        settings = PublishSettings()
        assert settings.dst_root == ""
        assert settings.copy_tree is False
        assert settings.raw_and_jpg is False

    def test_is_publish_options(self):
        """Test that settings can be passed where options are expected."""
        assert isinstance(PublishSettings(copy_tree=True), PublishOptions)

    def test_rejects_unknown_fields(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            PublishSettings(dest_root="/x")


class TestAlbumPathsConfig:
    """Tests for AlbumPathsConfig."""

    def test_default_values(self):
        """Test default root configuration."""
        config = AlbumPathsConfig()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.paths, PathSettings)
        assert isinstance(config.publish, PublishSettings)

    def test_nested_dicts(self):
        """Test construction from merged TOML dictionaries."""
        config = AlbumPathsConfig(**{
            "logging": {"level": "DEBUG"},
            "paths": {"replacement_char": "-"},
            "publish": {"dst_root": "/remote", "copy_tree": True, "src_root": "/src"},
        })
        assert config.logging.level == "DEBUG"
        assert config.paths.replacement_char == "-"
        assert config.publish.dst_root == "/remote"
        assert config.publish.src_root == "/src"

    def test_rejects_unknown_section(self):
        """Test that unknown sections are rejected."""
        with pytest.raises(ValidationError):
            AlbumPathsConfig(scanner={})
