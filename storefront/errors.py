"""
Cart Errors

Error message constants and the single failure type raised across the
remote cart boundary.
"""

# Remote errors
ERROR_NETWORK = "Network error while contacting cart service"
ERROR_TIMEOUT = "Cart service did not respond in time"
ERROR_INVALID_RESPONSE = "Cart service returned an invalid response"
ERROR_CART_ITEM_NOT_FOUND = "Cart item not found"
ERROR_UNKNOWN = "Cart operation failed"

# Configuration errors
ERROR_API_URL_MISSING = "STOREFRONT_API_URL must be set"


class RemoteOperationFailed(Exception):
    """A remote cart call failed.

    Network, validation, not-found and server errors are not distinguished;
    ``message`` is always human-readable and safe to show to a shopper.
    """

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or ERROR_UNKNOWN
        self.status_code = status_code
        super().__init__(self.message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "RemoteOperationFailed":
        """Wrap any exception raised by a cart service."""
        if isinstance(exc, cls):
            return exc
        return cls(str(exc) or ERROR_UNKNOWN)


__all__ = [
    "ERROR_NETWORK",
    "ERROR_TIMEOUT",
    "ERROR_INVALID_RESPONSE",
    "ERROR_CART_ITEM_NOT_FOUND",
    "ERROR_UNKNOWN",
    "ERROR_API_URL_MISSING",
    "RemoteOperationFailed",
]
