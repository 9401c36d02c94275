# ABOUTME: Directory and file management for storage exports.
# ABOUTME: Mirrors bucket folder structure on disk and saves the manifest.

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


class BackupStorage:
    """Manages the export directory layout: <output>/<bucket>/<path>."""

    def __init__(self, output_path: Path):
        """Initialize storage for an export run.

        Args:
            output_path: Directory that receives one subdirectory per bucket.
        """
        self.output_path = output_path

    def create_directories(self) -> None:
        """Create the output directory."""
        self.output_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using output directory: {self.output_path}")

    def create_bucket_directory(self, bucket: str) -> Path:
        """Create the directory for a bucket, even if the bucket is empty.

        Args:
            bucket: Bucket name.

        Returns:
            Path to the bucket directory.
        """
        bucket_path = self.output_path / bucket
        bucket_path.mkdir(parents=True, exist_ok=True)
        return bucket_path

    def get_file_path(self, bucket: str, file_path: str) -> Path:
        """Get the local destination mirroring a bucket-relative path."""
        return self.output_path / bucket / Path(*file_path.split("/"))

    def save_file(self, bucket: str, file_path: str, data: bytes) -> Path:
        """Write downloaded file content, creating parent directories.

        Args:
            bucket: Bucket name.
            file_path: Bucket-relative path of the file.
            data: File content.

        Returns:
            Path to the saved file.
        """
        destination = self.get_file_path(bucket, file_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "wb") as f:
            f.write(data)
        return destination

    def save_manifest(self, manifest: dict) -> Path:
        """Save the export manifest, replacing any previous one.

        Args:
            manifest: Manifest data.

        Returns:
            Path to the saved file.
        """
        file_path = self.output_path / MANIFEST_FILENAME
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, ensure_ascii=False)
        return file_path
