"""
Storage node backends.

Local content store and SQLite file metadata.
"""

from internet15.backends.local import ContentStore
from internet15.backends.metadata_db import FileMetadataDB, FileMetadata

__all__ = ["ContentStore", "FileMetadataDB", "FileMetadata"]
