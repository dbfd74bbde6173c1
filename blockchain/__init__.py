"""
internet15 ledger integration.

Builds (unsigned, unsent) storage payment intents.
"""

from internet15.blockchain.payments import (
    PaymentIntent,
    PaymentStatus,
    build_payment,
    connect_ledger,
)

__all__ = [
    "PaymentIntent",
    "PaymentStatus",
    "build_payment",
    "connect_ledger",
]
