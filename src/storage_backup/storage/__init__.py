# ABOUTME: Supabase storage integration package.
# ABOUTME: Exports the client and the recursive bucket listing.

from .client import StorageClient
from .walker import list_all_files, is_file_entry, join_path

__all__ = ["StorageClient", "list_all_files", "is_file_entry", "join_path"]
