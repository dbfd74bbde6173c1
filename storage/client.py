"""
Storage client for the content-addressed storage network.

Uploads go to the IPFS HTTP API at ``STORAGE_NODE_URL``; retrieval URLs
point at the gateway path ``<STORAGE_NODE_URL>/ipfs/<hash>``.
"""

import asyncio
import ipaddress
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import ipfshttpclient

from internet15.config.settings import SDKConfig, load_sdk_config
from internet15.core.errors import UploadFailed

logger = logging.getLogger(__name__)


@dataclass
class FileBlob:
    """Named binary blob to upload."""
    name: str
    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileBlob":
        """Read a local file into a blob, guessing its content type."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            data=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


def storage_api_multiaddr(url: str) -> str:
    """
    Convert an HTTP(S) base URL into the multiaddr the IPFS client expects.

    ``http://127.0.0.1:5001`` becomes ``/ip4/127.0.0.1/tcp/5001/http``;
    host names map to ``/dns/<host>``. Multiaddrs pass through unchanged.
    """
    if url.startswith("/"):
        return url

    parsed = urlparse(url)
    scheme = parsed.scheme or "http"
    host = parsed.hostname
    if not host:
        raise ValueError(f"Storage node URL has no host: {url!r}")
    port = parsed.port or (443 if scheme == "https" else 80)

    try:
        protocol = "ip4" if ipaddress.ip_address(host).version == 4 else "ip6"
    except ValueError:
        protocol = "dns"

    return f"/{protocol}/{host}/tcp/{port}/{scheme}"


def _add_bytes(addr: str, data: bytes, timeout: int) -> str:
    # A new client per upload; nothing is pooled between calls.
    client = ipfshttpclient.Client(addr, timeout=timeout)
    return client.add_bytes(data)


async def upload_file(file: FileBlob, config: Optional[SDKConfig] = None) -> str:
    """
    Upload a file to the storage network.

    Args:
        file: Blob to upload
        config: SDK configuration (defaults to environment)

    Returns:
        Content hash reported by the storage endpoint

    Raises:
        UploadFailed: On any endpoint or network error (no retry)
    """
    config = config or load_sdk_config()

    try:
        addr = storage_api_multiaddr(config.storage_node_url)
        content_hash = await asyncio.to_thread(
            _add_bytes, addr, file.data, config.storage_timeout
        )
    except (ipfshttpclient.exceptions.Error, ValueError) as e:
        logger.error(f"Failed to upload {file.name} to {config.storage_node_url}: {e}")
        raise UploadFailed(f"Upload of {file.name} failed: {e}") from e

    if not content_hash:
        raise UploadFailed(
            f"Storage endpoint {config.storage_node_url} returned no hash for {file.name}"
        )

    logger.info(f"Uploaded {file.name} ({file.size} bytes) as {content_hash}")
    return content_hash


def resolve_file(content_hash: str, config: Optional[SDKConfig] = None) -> str:
    """
    Build the retrieval URL for a content hash.

    Pure string construction: no request is made and the hash is not checked.

    Args:
        content_hash: Hash returned by ``upload_file``
        config: SDK configuration (defaults to environment)

    Returns:
        ``<storage_node_url>/ipfs/<content_hash>``
    """
    config = config or load_sdk_config()
    return f"{config.storage_node_url.rstrip('/')}/ipfs/{content_hash}"
