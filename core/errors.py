"""
Error taxonomy for the internet15 SDK.

Only the failures the SDK detects itself get a dedicated type. Errors raised
by delegated libraries (wallet capability, ledger client) are never wrapped.
"""


class Internet15Error(Exception):
    """Base exception for internet15 errors."""
    pass


class CapabilityUnavailable(Internet15Error):
    """No wallet capability is available in the calling environment."""
    pass


class UploadFailed(Internet15Error):
    """Upload to the storage endpoint failed (original error on __cause__)."""
    pass
