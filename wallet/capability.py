"""
Shape of the wallet capability injected by a browser extension.

The capability is passed to the connector explicitly instead of being read
from a global, so an absent wallet is just ``None``.
"""

from typing import Any, Protocol, runtime_checkable


class PublicKey(Protocol):
    """Public key handle; ``str()`` yields the account identifier."""

    def __str__(self) -> str: ...


class ConnectResponse(Protocol):
    """Result of a successful ``connect()``."""

    public_key: PublicKey


@runtime_checkable
class WalletCapability(Protocol):
    """
    Injected wallet capability.

    Implementations may also expose an ``is_phantom`` flag; it is optional
    and read through ``is_phantom_wallet``.
    """

    async def connect(self) -> ConnectResponse: ...

    async def disconnect(self) -> None: ...


def is_phantom_wallet(wallet: Any) -> bool:
    """Return the wallet's optional ``is_phantom`` flag (False when unset)."""
    return bool(getattr(wallet, "is_phantom", False))
