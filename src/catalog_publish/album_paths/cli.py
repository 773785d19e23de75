"""CLI commands for album path resolution."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from catalog_publish.common import (
    CatalogPublishError,
    ConfigLoader,
    ConfigurationError,
    LogContext,
    setup_logging,
)
from .config import AlbumPathsConfig
from .file_media import FileMediaItem
from .models import CatalogContainer
from .publish import PublishOptions, publish_paths
from .template import TemplateEngine

# Application name derived from package name
_package = __package__ or "catalog_publish.album_paths"
APP_NAME = _package.replace('_', '-').replace('.', '-')


def _engine(config: AlbumPathsConfig) -> TemplateEngine:
    return TemplateEngine(
        replacement=config.paths.replacement_char,
        max_depth=config.paths.max_hierarchy_depth,
    )


def resolve_command(
    config: AlbumPathsConfig,
    template: str,
    files: Sequence[Path],
    collections: Sequence[str] = (),
) -> int:
    """Resolve an album path template for image files.

    Prints ``<file>\\t<resolved path>`` per file.

    Args:
        config: Configuration object
        template: Album path template
        files: Image files
        collections: Collection paths (``Set/Collection``) every file belongs to

    Returns:
        Exit code (0 for success)
    """
    logger = logging.getLogger(__package__ or __name__)
    engine = _engine(config)
    logger.info(f"Resolving: {{'template': {template!r}, 'files': {len(files)}, 'collections': {list(collections)!r}}}")
    try:
        containers = [CatalogContainer.from_path(c) for c in collections]
        for file in files:
            with LogContext(logger, file=str(file)):
                item = FileMediaItem(file, collections=containers)
                resolved = engine.resolve(template, item)
                print(f"{file}\t{resolved or ''}")
    except CatalogPublishError as e:
        logger.error(f"Resolve failed: {{'error': {e.message!r}, 'context': {e.context!r}}}")
        return 1
    return 0


def publish_path_command(
    config: AlbumPathsConfig,
    files: Sequence[Path],
    rendered_extension: Optional[str] = None,
    dst_root_override: Optional[str] = None,
    copy_tree_override: Optional[bool] = None,
    src_root_override: Optional[str] = None,
    raw_and_jpg_override: Optional[bool] = None,
    album_template: Optional[str] = None,
    collections: Sequence[str] = (),
) -> int:
    """Compute local and remote publish paths for image files.

    Prints ``<file>\\t<local path>\\t<remote path>`` per file. With an album
    template, the template is resolved per file and used as destination root.

    Args:
        config: Configuration object
        files: Image files
        rendered_extension: Extension of the rendered files (default: source extension)
        dst_root_override: Optional override for the destination root
        copy_tree_override: Optional override for tree layout
        src_root_override: Optional override for the source root
        raw_and_jpg_override: Optional override for RAW+JPG naming
        album_template: Optional album path template for the destination root
        collections: Collection paths every file belongs to

    Returns:
        Exit code (0 for success)
    """
    logger = logging.getLogger(__package__ or __name__)
    settings = config.publish
    options = PublishOptions(
        copy_tree=copy_tree_override if copy_tree_override is not None else settings.copy_tree,
        src_root=src_root_override if src_root_override is not None else settings.src_root,
        raw_and_jpg=raw_and_jpg_override if raw_and_jpg_override is not None else settings.raw_and_jpg,
    )
    dst_root = dst_root_override if dst_root_override is not None else settings.dst_root
    engine = _engine(config)
    logger.info(f"Configuration: {{'dst_root': {dst_root!r}, 'copy_tree': {options.copy_tree}, 'src_root': {options.src_root!r}, 'raw_and_jpg': {options.raw_and_jpg}, 'album_template': {album_template!r}}}")
    try:
        containers = [CatalogContainer.from_path(c) for c in collections]
        for file in files:
            with LogContext(logger, file=str(file)):
                item = FileMediaItem(file, collections=containers)
                root = engine.resolve(album_template, item) if album_template else dst_root
                extension = rendered_extension if rendered_extension is not None else file.suffix
                paths = publish_paths(item, extension, options, root)
                print(f"{file}\t{paths.local_path}\t{paths.remote_path}")
    except CatalogPublishError as e:
        logger.error(f"Publish path failed: {{'error': {e.message!r}, 'context': {e.context!r}}}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Resolve album path templates and publish paths for photos"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve an album path template per file")
    resolve.add_argument("--template", required=True, help="Album path template, e.g. '{Date %%Y}/{LrCC:name}'")
    resolve.add_argument(
        "--collection",
        action="append",
        default=[],
        help="Collection path (Set/Collection) the files belong to; repeatable"
    )
    resolve.add_argument("files", type=Path, nargs="+", help="Image files")

    publish = subparsers.add_parser("publish-path", help="Compute local and remote publish paths per file")
    publish.add_argument("--rendered-extension", help="Extension of the rendered files (default: source extension)")
    publish.add_argument("--dst-root", help="Destination root (overrides config)")
    publish.add_argument("--copy-tree", action="store_true", help="Mirror the source tree below --src-root")
    publish.add_argument("--src-root", help="Source root for --copy-tree (overrides config)")
    publish.add_argument("--raw-and-jpg", action="store_true", help="Keep the source extension when it differs")
    publish.add_argument("--album-template", help="Album path template used as destination root")
    publish.add_argument(
        "--collection",
        action="append",
        default=[],
        help="Collection path (Set/Collection) the files belong to; repeatable"
    )
    publish.add_argument("files", type=Path, nargs="+", help="Image files")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for album path commands."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=AlbumPathsConfig
    )
    try:
        config = loader.load(defaults_path=args.config)
    except ConfigurationError as e:
        setup_logging()
        logging.getLogger(__package__ or __name__).error(f"Configuration error: {{'error': {e.message!r}, 'context': {e.context!r}}}")
        return 1

    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        log_file=Path(config.logging.file) if config.logging.file else None,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
    )

    if args.command == "resolve":
        return resolve_command(config, args.template, args.files, args.collection)

    return publish_path_command(
        config=config,
        files=args.files,
        rendered_extension=args.rendered_extension,
        dst_root_override=args.dst_root,
        copy_tree_override=True if args.copy_tree else None,
        src_root_override=args.src_root,
        raw_and_jpg_override=True if args.raw_and_jpg else None,
        album_template=args.album_template,
        collections=args.collection,
    )


if __name__ == "__main__":
    sys.exit(main())
