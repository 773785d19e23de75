"""Album path templating and metadata resolution for photo publishing."""

from .config import AlbumPathsConfig, PathSettings, PublishSettings
from .dates import CaptureInstant, parse_date_created, resolve_capture_instant, stat_creation_time
from .errors import AlbumPathError, MediaReadError
from .events import EventRecorder, ResolutionEvent, log_event
from .file_media import FileMediaItem
from .hierarchy import collection_path, collection_upload_path
from .keywords import KeywordDelta, apply_keyword_delta, get_modified_keywords, keyword_delta
from .media import is_dynamic_album_path, is_video
from .models import CatalogContainer, CatalogPhoto, ContainerKind, Keyword
from .publish import PublishOptions, PublishPaths, publish_paths
from .sanitizer import normalize_path, sanitize_segment
from .template import TemplateEngine, evaluate_album_path

__version__ = "0.1.0"

__all__ = [
    'AlbumPathsConfig',
    'PathSettings',
    'PublishSettings',
    'CaptureInstant',
    'parse_date_created',
    'resolve_capture_instant',
    'stat_creation_time',
    'AlbumPathError',
    'MediaReadError',
    'EventRecorder',
    'ResolutionEvent',
    'log_event',
    'FileMediaItem',
    'collection_path',
    'collection_upload_path',
    'KeywordDelta',
    'apply_keyword_delta',
    'get_modified_keywords',
    'keyword_delta',
    'is_dynamic_album_path',
    'is_video',
    'CatalogContainer',
    'CatalogPhoto',
    'ContainerKind',
    'Keyword',
    'PublishOptions',
    'PublishPaths',
    'publish_paths',
    'normalize_path',
    'sanitize_segment',
    'TemplateEngine',
    'evaluate_album_path',
]
