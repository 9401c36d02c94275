# ABOUTME: CLI entry point for storage-backup.
# ABOUTME: Downloads every file from every bucket of a project, then writes a manifest.

import argparse
import logging
import time
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path

from .config import load_config, ConfigError, DEFAULT_PAGE_SIZE
from .storage import StorageClient, list_all_files
from .backup import BackupStorage, create_manifest

DEFAULT_OUTPUT_PATH = Path("storage-backup")


def setup_logging(log_path: Path | None = None, verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        log_path: Optional path for log file. If provided, enables rotating file logging.
        verbose: Log per-page listing details.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Progress goes to stdout, failures to stderr
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(log_format, date_format))
    stdout_handler.addFilter(lambda record: record.levelno < logging.ERROR)
    root_logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(stderr_handler)

    # File handler with rotation (if log_path provided)
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def run_backup(
    client: StorageClient,
    storage: BackupStorage,
    project_url: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> dict:
    """Export every bucket of the project and write the manifest.

    Any listing, download, or filesystem error propagates immediately. Files
    already written stay on disk and no manifest is written in that case.

    Args:
        client: Authenticated storage client.
        storage: Output directory layout.
        project_url: Endpoint URL recorded in the manifest.
        page_size: Number of entries requested per listing call.

    Returns:
        Dict with export statistics and the manifest path.
    """
    logger = logging.getLogger(__name__)
    backup_start = time.monotonic()

    buckets = client.list_buckets()

    files_downloaded = 0
    total_size = 0
    for bucket in buckets:
        storage.create_bucket_directory(bucket)

        file_paths = list_all_files(client, bucket, "", page_size=page_size)
        logger.info(f"Found {len(file_paths)} file(s) in bucket '{bucket}'")

        for file_path in file_paths:
            data = client.download(bucket, file_path)
            storage.save_file(bucket, file_path, bytes(data))
            logger.info(f"Downloaded: {bucket}/{file_path}")
            files_downloaded += 1
            total_size += len(data)

    manifest = create_manifest(project_url)
    manifest_path = storage.save_manifest(manifest.to_dict())

    total_duration = time.monotonic() - backup_start
    size_mb = total_size / (1024 * 1024)
    logger.info(
        f"Backup complete: {len(buckets)} buckets, "
        f"{files_downloaded} files ({size_mb:.1f} MB) in {total_duration:.1f}s"
    )

    return {
        "buckets": len(buckets),
        "files": files_downloaded,
        "bytes": total_size,
        "generated_at": manifest.generated_at,
        "manifest_path": str(manifest_path),
    }


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="storage-backup",
        description="Download every file from every storage bucket of a Supabase project",
    )
    parser.add_argument(
        "output_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Directory to write the export to (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Optional YAML file overriding environment variable names and page size",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file (rotated at 10 MB)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every listing call",
    )

    args = parser.parse_args(argv)

    setup_logging(args.log_file, verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    try:
        storage = BackupStorage(args.output_dir)
        storage.create_directories()
        client = StorageClient(config.url, config.service_key)
        run_backup(client, storage, config.url, page_size=config.page_size)
    except Exception as e:
        logger.error(f"Backup failed: {type(e).__name__}: {e}", exc_info=args.verbose)
        sys.exit(1)


if __name__ == "__main__":
    main()
