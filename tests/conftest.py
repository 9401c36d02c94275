"""Test configuration and fixtures for storage-backup."""

import logging

import pytest


class FakeStorageError(Exception):
    """Stands in for an SDK error raised by a failed remote call."""


class FakeStorageClient:
    """In-memory storage API that serves listings like the remote service.

    Buckets map bucket-relative file paths to their content. Folders are
    derived from the paths, and listing returns direct children only,
    sorted by name, sliced by limit/offset.
    """

    def __init__(self, buckets: dict[str, dict[str, bytes]], fail_downloads=(), fail_listing=False):
        self.url = "https://example.supabase.co"
        self.buckets = buckets
        self.fail_downloads = set(fail_downloads)
        self.fail_listing = fail_listing
        self.list_calls = []
        self.download_calls = []

    def list_buckets(self) -> list[str]:
        return list(self.buckets)

    def _children(self, bucket: str, prefix: str) -> list[dict]:
        entries = {}
        for path, data in self.buckets[bucket].items():
            if prefix:
                if not path.startswith(prefix + "/"):
                    continue
                rest = path[len(prefix) + 1:]
            else:
                rest = path
            head, sep, _ = rest.partition("/")
            if sep:
                entries.setdefault(head, {"name": head, "id": None, "metadata": None})
            else:
                entries[head] = {
                    "name": head,
                    "id": f"id-{bucket}-{path}",
                    "metadata": {"size": len(data)},
                }
        return [entries[name] for name in sorted(entries)]

    def list_entries(self, bucket: str, prefix: str, limit: int, offset: int) -> list[dict]:
        self.list_calls.append((bucket, prefix, limit, offset))
        if self.fail_listing:
            raise FakeStorageError(f"listing {bucket}/{prefix} failed")
        return self._children(bucket, prefix)[offset:offset + limit]

    def download(self, bucket: str, path: str) -> bytes:
        self.download_calls.append((bucket, path))
        if (bucket, path) in self.fail_downloads:
            raise FakeStorageError(f"download {bucket}/{path} failed")
        return self.buckets[bucket][path]


@pytest.fixture
def fake_client_factory():
    """Build FakeStorageClient instances."""
    return FakeStorageClient


@pytest.fixture
def assets_client():
    """One bucket with a root file and a file inside a folder."""
    return FakeStorageClient({
        "assets": {
            "a.png": b"root image",
            "img/b.png": b"nested image",
        },
    })


@pytest.fixture
def output_dir(tmp_path):
    """Directory receiving the export."""
    return tmp_path / "export"


@pytest.fixture
def restore_root_logger():
    """Remove handlers added to the root logger during a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
