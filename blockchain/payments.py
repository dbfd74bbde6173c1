"""
Storage payment stub.

Builds a payment intent for compensating a storage node. The intent is
never signed or submitted: only the ledger connection object is created
and the intended payment is logged.

Author: internet15 Team
License: MIT
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from loguru import logger
from substrateinterface import SubstrateInterface

from internet15.config.settings import SDKConfig, load_sdk_config


class PaymentStatus(str, Enum):
    """
    Payment lifecycle.

    ``build_payment`` only ever produces DRAFTED; signing and submission are
    not implemented.
    """
    DRAFTED = "drafted"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class PaymentIntent:
    """Unsigned, unsent payment to a storage node."""
    sender: str
    amount: float
    currency: str
    connection: Any
    instructions: List[Dict[str, Any]] = field(default_factory=list)
    status: PaymentStatus = PaymentStatus.DRAFTED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def connect_ledger(rpc_url: str) -> SubstrateInterface:
    """
    Create a ledger connection object for an HTTP JSON-RPC endpoint.

    No request is sent; type registry auto-discovery is disabled so that
    construction stays offline.
    """
    return SubstrateInterface(url=rpc_url, auto_discover=False)


async def build_payment(
    identifier: str,
    amount: float,
    config: Optional[SDKConfig] = None,
) -> PaymentIntent:
    """
    Build a storage payment intent.

    Neither ``identifier`` nor ``amount`` is validated. Errors raised while
    constructing the ledger connection propagate unchanged.

    Args:
        identifier: Payer's wallet identifier (from ``connect_wallet``)
        amount: Amount to pay
        config: SDK configuration (defaults to environment)

    Returns:
        PaymentIntent in the DRAFTED state with no instructions
    """
    config = config or load_sdk_config()
    connection = connect_ledger(config.blockchain_rpc)

    # Transfer instructions are not built yet (stub)
    intent = PaymentIntent(
        sender=identifier,
        amount=amount,
        currency=config.payment_currency,
        connection=connection,
    )

    logger.info("User {} pays {} {}", identifier, amount, config.payment_currency)
    return intent
