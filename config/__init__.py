"""
internet15 configuration.

SDK settings (storage endpoint, ledger RPC) and storage node settings,
loaded from environment variables.
"""

from internet15.config.settings import (
    SDKConfig,
    NodeConfig,
    load_sdk_config,
    load_node_config,
)

__all__ = [
    "SDKConfig",
    "NodeConfig",
    "load_sdk_config",
    "load_node_config",
]
