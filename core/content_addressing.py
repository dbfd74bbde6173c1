"""
Content addressing for the storage node.

Every stored blob is identified by the SHA-256 hash of its bytes, so the
same content always maps to the same identifier.
"""

import hashlib
import re

HASH_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def calculate_hash(data: bytes) -> str:
    """
    Compute the content hash for data.

    Args:
        data: Raw data bytes

    Returns:
        Lowercase hex SHA-256 digest
    """
    return hashlib.sha256(data).hexdigest()


def is_content_hash(value: str) -> bool:
    """Check that value is a well-formed content hash."""
    return bool(HASH_PATTERN.match(value))


def verify_content(data: bytes, content_hash: str) -> bool:
    """Verify data matches its content hash."""
    return calculate_hash(data) == content_hash
