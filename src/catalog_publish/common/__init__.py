"""Common utilities for catalog_publish packages."""

from .config import ConfigLoader
from .errors import CatalogPublishError, ConfigurationError
from .logging import LogContext, get_logger, setup_logging
from .logging_config import LoggingConfig
from .path_utils import leaf_name, make_relative, split_extension, to_posix_path

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'get_logger',
    'LogContext',
    'CatalogPublishError',
    'ConfigurationError',
    'to_posix_path',
    'split_extension',
    'leaf_name',
    'make_relative',
]
