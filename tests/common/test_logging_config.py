"""Tests for shared LoggingConfig."""

import pytest
from pydantic import ValidationError
from catalog_publish.common import LoggingConfig


class TestLoggingConfig:
    """Test shared LoggingConfig validation."""

    def test_valid_config(self):
        """Test valid logging configuration."""
        config = LoggingConfig(level="INFO", format="json")
        assert config.level == "INFO"
        assert config.format == "json"
        assert config.file is None

    def test_default_values(self):
        """Test default values."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "simple"
        assert config.file is None
        assert config.max_file_size_mb == 10
        assert config.backup_count == 5

    def test_all_valid_log_levels(self):
        """Test that all valid log levels are accepted."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR"]:
            config = LoggingConfig(level=level)
            assert config.level == level

    def test_all_valid_formats(self):
        """Test that all valid formats are accepted."""
        for fmt in ["simple", "detailed", "json"]:
            config = LoggingConfig(format=fmt)
            assert config.format == fmt

    def test_rejects_invalid_log_level(self):
        """Test that invalid log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")

        with pytest.raises(ValidationError):
            LoggingConfig(level="CRITICAL")

    def test_rejects_invalid_format(self):
        """Test that invalid formats are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")

    def test_optional_file_parameter(self):
        """Test that file parameter is optional."""
        config = LoggingConfig(level="INFO")
        assert config.file is None

        config_with_file = LoggingConfig(level="INFO", file="/path/to/log.txt")
        assert config_with_file.file == "/path/to/log.txt"

    def test_rejects_unknown_fields(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            LoggingConfig(level="INFO", unknown_field="value")

        error_msg = str(exc_info.value).lower()
        assert "extra_forbidden" in error_msg or "extra fields not permitted" in error_msg

    def test_level_and_format_case_insensitive(self):
        """Test that level and format accept any case from env overrides."""
        config = LoggingConfig(level="debug", format="JSON")
        assert config.level == "DEBUG"
        assert config.format == "json"

    def test_rejects_non_positive_file_size(self):
        """Test that the rotation size must be positive."""
        with pytest.raises(ValidationError):
            LoggingConfig(max_file_size_mb=0)
