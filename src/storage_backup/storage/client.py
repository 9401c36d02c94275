# ABOUTME: Wrapper around the official Supabase Python SDK storage API.
# ABOUTME: Provides an authenticated client for listing buckets, entries, and downloads.

import logging

from supabase import ClientOptions, create_client

logger = logging.getLogger(__name__)


class StorageClient:
    """Wrapper around the Supabase storage client.

    Every call is sent immediately and errors raised by the SDK propagate
    unchanged to the caller.
    """

    def __init__(self, url: str, service_key: str):
        """Initialize an authenticated client.

        Args:
            url: Project endpoint URL.
            service_key: Service role key with access to every bucket.
        """
        self.url = url
        self._client = create_client(
            url,
            service_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )

    def list_buckets(self) -> list[str]:
        """Return the names of all buckets in the project."""
        buckets = self._client.storage.list_buckets()
        names = [bucket.name for bucket in buckets]
        logger.info(f"Found {len(names)} bucket(s)")
        return names

    def list_entries(self, bucket: str, prefix: str, limit: int, offset: int) -> list[dict]:
        """List one page of entries directly under a prefix, sorted by name.

        Args:
            bucket: Bucket name.
            prefix: Folder path inside the bucket ("" for the root).
            limit: Maximum number of entries to return.
            offset: Number of entries to skip.
        """
        return self._client.storage.from_(bucket).list(
            prefix,
            {
                "limit": limit,
                "offset": offset,
                "sortBy": {"column": "name", "order": "asc"},
            },
        )

    def download(self, bucket: str, path: str) -> bytes:
        """Download the full content of a file into memory."""
        return self._client.storage.from_(bucket).download(path)
