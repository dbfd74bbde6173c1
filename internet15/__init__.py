"""internet15 package namespace — redirects imports to the flat repo layout."""
import os as _os

# Point internet15's __path__ to the repo root so that
# `from internet15.storage import ...` resolves to `storage/...` at the project root.
__path__ = [_os.path.dirname(_os.path.dirname(_os.path.abspath(__file__)))]

from internet15.core.errors import CapabilityUnavailable, Internet15Error, UploadFailed  # noqa: E402
from internet15.wallet.connector import connect_wallet, disconnect_wallet  # noqa: E402
from internet15.storage.client import FileBlob, upload_file, resolve_file  # noqa: E402
from internet15.blockchain.payments import PaymentIntent, PaymentStatus, build_payment  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    "connect_wallet",
    "disconnect_wallet",
    "FileBlob",
    "upload_file",
    "resolve_file",
    "PaymentIntent",
    "PaymentStatus",
    "build_payment",
    "Internet15Error",
    "CapabilityUnavailable",
    "UploadFailed",
]
