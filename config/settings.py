"""
Configuration models for the SDK and the storage node.

Values come from environment variables (see ``load_sdk_config`` and
``load_node_config``); keyword overrides win over the environment.
"""

import os
from pathlib import Path
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_STORAGE_NODE_URL = "http://127.0.0.1:5001"
DEFAULT_BLOCKCHAIN_RPC = "http://127.0.0.1:9933"
DEFAULT_NODE_ADDRESS = "127.0.0.1:4000"


class SDKConfig(BaseModel):
    """
    Client SDK configuration.

    The uppercase aliases match the names used by browser deployments,
    so ``SDKConfig(STORAGE_NODE_URL=..., BLOCKCHAIN_RPC=...)`` works as well
    as the field names.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    storage_node_url: str = Field(
        default=DEFAULT_STORAGE_NODE_URL,
        alias="STORAGE_NODE_URL",
        description="Base URL for uploads (IPFS HTTP API) and retrieval (/ipfs/<hash>)",
    )
    blockchain_rpc: str = Field(
        default=DEFAULT_BLOCKCHAIN_RPC,
        alias="BLOCKCHAIN_RPC",
        description="Ledger JSON-RPC endpoint",
    )
    storage_timeout: int = Field(
        default=60,
        alias="STORAGE_TIMEOUT",
        description="Timeout for storage endpoint requests (seconds)",
    )
    payment_currency: str = Field(
        default="DOT",
        alias="PAYMENT_CURRENCY",
        description="Currency symbol used in payment diagnostics",
    )


class NodeConfig(BaseModel):
    """Storage node configuration."""

    model_config = ConfigDict(populate_by_name=True)

    storage_path: Path = Field(
        default=Path("./data"),
        alias="STORAGE_PATH",
        description="Directory holding <hash>.dat blobs",
    )
    node_address: str = Field(
        default=DEFAULT_NODE_ADDRESS,
        alias="NODE_ADDRESS",
        description="host:port the HTTP API binds to",
    )
    blockchain_rpc: str = Field(
        default=DEFAULT_BLOCKCHAIN_RPC,
        alias="BLOCKCHAIN_RPC",
        description="Ledger JSON-RPC endpoint",
    )
    metadata_db: Path = Field(
        default=Path("./file_metadata.db"),
        alias="METADATA_DB",
        description="SQLite database for file metadata",
    )
    max_file_size: int = Field(
        default=100 * 1024 * 1024,  # 100MB
        alias="MAX_FILE_SIZE",
        description="Maximum upload size in bytes",
    )

    def _split_address(self) -> Tuple[str, int]:
        host, _, port = self.node_address.rpartition(":")
        if not host:
            raise ValueError(f"Invalid node address: {self.node_address!r}")
        return host, int(port)

    @property
    def host(self) -> str:
        return self._split_address()[0]

    @property
    def port(self) -> int:
        return self._split_address()[1]


def _from_env(names: Dict[str, str]) -> Dict[str, Any]:
    """Collect the environment variables that are set, keyed by field name."""
    values = {}
    for field_name, env_name in names.items():
        value = os.getenv(env_name)
        if value is not None:
            values[field_name] = value
    return values


def load_sdk_config(**overrides: Any) -> SDKConfig:
    """
    Build SDK configuration from the environment.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        SDKConfig instance
    """
    values = _from_env({
        "storage_node_url": "STORAGE_NODE_URL",
        "blockchain_rpc": "BLOCKCHAIN_RPC",
        "storage_timeout": "STORAGE_TIMEOUT",
        "payment_currency": "PAYMENT_CURRENCY",
    })
    values.update(overrides)
    return SDKConfig(**values)


def load_node_config(**overrides: Any) -> NodeConfig:
    """
    Build storage node configuration from the environment.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        NodeConfig instance
    """
    values = _from_env({
        "storage_path": "STORAGE_PATH",
        "node_address": "NODE_ADDRESS",
        "blockchain_rpc": "BLOCKCHAIN_RPC",
        "metadata_db": "METADATA_DB",
        "max_file_size": "MAX_FILE_SIZE",
    })
    values.update(overrides)
    return NodeConfig(**values)
