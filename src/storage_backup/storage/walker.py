# ABOUTME: Recursive listing of every file in a storage bucket.
# ABOUTME: Walks folder prefixes depth-first with an explicit stack and paginated listing calls.

import logging
from typing import Protocol

from ..config import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)


class EntryLister(Protocol):
    """Anything that can list one page of entries under a bucket prefix."""

    def list_entries(self, bucket: str, prefix: str, limit: int, offset: int) -> list[dict]:
        ...


def is_file_entry(entry: dict) -> bool:
    """Check whether a listing entry is a file rather than a folder.

    Files carry an id or a metadata block; folders carry neither.
    """
    return bool(entry.get("id") or entry.get("metadata"))


def join_path(prefix: str, name: str) -> str:
    """Build a bucket-relative path from a folder prefix and an entry name."""
    return f"{prefix}/{name}" if prefix else name


def list_all_files(
    client: EntryLister,
    bucket: str,
    prefix: str = "",
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[str]:
    """List every file under a prefix of a bucket.

    Folders are pushed onto a stack and expanded last-in-first-out, so the
    result follows stack-pop order rather than lexical order. Entries within
    a single page arrive sorted by name.

    Args:
        client: Client used for the listing calls.
        bucket: Bucket name.
        prefix: Folder to start from ("" for the bucket root).
        page_size: Number of entries requested per listing call.

    Returns:
        Bucket-relative paths of all files found.
    """
    results: list[str] = []
    stack = [prefix]

    while stack:
        current = stack.pop()
        offset = 0

        while True:
            page = client.list_entries(bucket, current, limit=page_size, offset=offset)
            logger.debug(f"Listed {len(page)} entries in {bucket}/{current} (offset {offset})")

            for entry in page:
                path = join_path(current, entry["name"])
                if is_file_entry(entry):
                    results.append(path)
                else:
                    stack.append(path)

            if len(page) < page_size:
                break
            offset += page_size

    return results
