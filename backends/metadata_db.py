"""
File metadata database for the storage node.

SQLite table recording what was uploaded: name, type, size, time and the
content hash it was stored under.
"""

import logging
import sqlite3
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class FileMetadata:
    """One uploaded file."""
    id: int
    filename: str
    file_type: str
    file_size: int
    uploaded_at: int
    content_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class FileMetadataDB:
    """
    SQLite-backed file metadata store.

    A short-lived connection is opened per operation.
    """

    def __init__(self, db_path: Path):
        """
        Initialize metadata database.

        Args:
            db_path: SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.initialize()

    def initialize(self):
        """Create the files table if it does not exist."""
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS files (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    filename TEXT NOT NULL,
                    file_type TEXT NOT NULL,
                    file_size INTEGER NOT NULL,
                    uploaded_at INTEGER NOT NULL,
                    content_hash TEXT NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_files_hash ON files(content_hash)"
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug(f"Initialized metadata database at {self.db_path}")

    def record_file(
        self,
        filename: str,
        file_type: str,
        file_size: int,
        content_hash: str,
    ) -> FileMetadata:
        """
        Record an uploaded file.

        Args:
            filename: Original file name
            file_type: MIME type
            file_size: Size in bytes
            content_hash: Hash the content is stored under

        Returns:
            The stored FileMetadata row
        """
        uploaded_at = int(time.time())

        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute(
                """
                INSERT INTO files (filename, file_type, file_size, uploaded_at, content_hash)
                VALUES (?, ?, ?, ?, ?)
                """,
                (filename, file_type, file_size, uploaded_at, content_hash),
            )
            conn.commit()
            row_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug(f"Recorded {filename} as {content_hash[:16]}... (id {row_id})")

        return FileMetadata(
            id=row_id,
            filename=filename,
            file_type=file_type,
            file_size=file_size,
            uploaded_at=uploaded_at,
            content_hash=content_hash,
        )

    def list_files(self) -> List[FileMetadata]:
        """List all recorded files, oldest first."""
        conn = sqlite3.connect(self.db_path)
        try:
            rows = conn.execute(
                "SELECT id, filename, file_type, file_size, uploaded_at, content_hash "
                "FROM files ORDER BY id"
            ).fetchall()
        finally:
            conn.close()

        return [FileMetadata(*row) for row in rows]

    def get_by_hash(self, content_hash: str) -> Optional[FileMetadata]:
        """Get the most recent record for a content hash."""
        conn = sqlite3.connect(self.db_path)
        try:
            row = conn.execute(
                "SELECT id, filename, file_type, file_size, uploaded_at, content_hash "
                "FROM files WHERE content_hash = ? ORDER BY id DESC LIMIT 1",
                (content_hash,),
            ).fetchone()
        finally:
            conn.close()

        return FileMetadata(*row) if row else None
