"""
Wallet connector.

Requests a connection from an injected wallet capability and returns the
public identifier as a string. Failures raised by the capability itself
(for example a user rejecting the prompt) propagate unchanged.
"""

import logging
from typing import Optional

from internet15.core.errors import CapabilityUnavailable
from internet15.wallet.capability import WalletCapability

logger = logging.getLogger(__name__)


async def connect_wallet(wallet: Optional[WalletCapability]) -> str:
    """
    Connect to the wallet and return its public identifier.

    Args:
        wallet: Injected wallet capability, or None when the environment has none

    Returns:
        String form of the wallet's public key

    Raises:
        CapabilityUnavailable: If no wallet capability is present
    """
    if wallet is None:
        raise CapabilityUnavailable("Wallet not found")

    response = await wallet.connect()
    identifier = str(response.public_key)

    logger.info(f"Connected wallet {identifier}")
    return identifier


async def disconnect_wallet(wallet: Optional[WalletCapability]) -> None:
    """Disconnect from the wallet."""
    if wallet is None:
        raise CapabilityUnavailable("Wallet not found")

    await wallet.disconnect()
    logger.info("Disconnected wallet")
