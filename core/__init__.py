"""
internet15 core module.

- Error taxonomy shared by the SDK and the storage node
- Content addressing (SHA-256)
"""

from internet15.core.errors import Internet15Error, CapabilityUnavailable, UploadFailed
from internet15.core.content_addressing import calculate_hash, is_content_hash, verify_content

__all__ = [
    "Internet15Error",
    "CapabilityUnavailable",
    "UploadFailed",
    "calculate_hash",
    "is_content_hash",
    "verify_content",
]
