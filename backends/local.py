"""
Local filesystem content store.

Stores blobs on local disk under their content hash.
"""

from typing import Optional, List
from pathlib import Path
import logging

from internet15.core.content_addressing import calculate_hash, is_content_hash

logger = logging.getLogger(__name__)


class ContentStore:
    """
    Local filesystem content store.

    Directory structure:
    storage_path/
        <sha256 hex>.dat
        ...

    Identical data always lands in the same file, so storing it twice
    keeps a single copy.
    """

    def __init__(self, storage_path: Path):
        """
        Initialize content store.

        Args:
            storage_path: Directory holding the blobs
        """
        self.storage_path = Path(storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)

        logger.info(f"Initialized content store at {self.storage_path}")

    def store(self, data: bytes) -> str:
        """
        Store data and return its content hash.

        Args:
            data: Data to store

        Returns:
            Content hash (hex string)
        """
        content_hash = calculate_hash(data)
        file_path = self._get_file_path(content_hash)

        if file_path.exists():
            logger.debug(f"Content {content_hash[:16]}... already stored")
            return content_hash

        file_path.write_bytes(data)
        logger.info(f"Stored file at {file_path}")

        return content_hash

    def retrieve(self, content_hash: str) -> Optional[bytes]:
        """
        Retrieve data by content hash.

        Args:
            content_hash: Content hash (hex string)

        Returns:
            Data bytes, or None if not found
        """
        if not is_content_hash(content_hash):
            logger.warning(f"Rejected malformed content hash {content_hash[:16]!r}")
            return None

        file_path = self._get_file_path(content_hash)

        if not file_path.exists():
            logger.warning(f"Content {content_hash[:16]}... not found at {file_path}")
            return None

        return file_path.read_bytes()

    def exists(self, content_hash: str) -> bool:
        """Check if content exists."""
        return is_content_hash(content_hash) and self._get_file_path(content_hash).exists()

    def list_hashes(self) -> List[str]:
        """
        List all stored content hashes.

        Returns:
            Sorted list of content hash hex strings
        """
        return sorted(
            file_path.stem
            for file_path in self.storage_path.glob("*.dat")
            if is_content_hash(file_path.stem)
        )

    # Internal methods

    def _get_file_path(self, content_hash: str) -> Path:
        """Get file path for content hash."""
        return self.storage_path / f"{content_hash}.dat"
