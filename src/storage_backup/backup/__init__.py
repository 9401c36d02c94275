# ABOUTME: Export storage package.
# ABOUTME: Exports the on-disk layout and manifest functions.

from .storage import BackupStorage
from .manifest import create_manifest, BackupManifest

__all__ = ["BackupStorage", "create_manifest", "BackupManifest"]
