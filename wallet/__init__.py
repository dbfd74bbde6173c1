"""
Wallet authentication.

Connects to an injected wallet capability and returns the user's public
identifier.
"""

from internet15.wallet.capability import WalletCapability, ConnectResponse, is_phantom_wallet
from internet15.wallet.connector import connect_wallet, disconnect_wallet

__all__ = [
    "WalletCapability",
    "ConnectResponse",
    "is_phantom_wallet",
    "connect_wallet",
    "disconnect_wallet",
]
