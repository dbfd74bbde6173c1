"""
Client access to the content-addressed storage network.
"""

from internet15.storage.client import FileBlob, upload_file, resolve_file, storage_api_multiaddr

__all__ = ["FileBlob", "upload_file", "resolve_file", "storage_api_multiaddr"]
