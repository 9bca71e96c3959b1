"""
Cart error messages and exception types.

Message constants are shared by the store and the HTTP adapter so the UI
always sees the same wording for the same failure.
"""

from typing import Any

# Precondition errors
ERROR_USER_NOT_LOGGED_IN = "User not logged in"

# Operation fallbacks (used when a failure carries no payload)
ERROR_FETCH_CART = "Failed to fetch cart"
ERROR_ADD_TO_CART = "Failed to add to cart"
ERROR_UPDATE_CART_ITEM = "Failed to update cart item"
ERROR_REMOVE_FROM_CART = "Failed to remove from cart"

# Transport errors
ERROR_SERVICE_UNAVAILABLE = "Cart service unavailable"


class CartError(Exception):
    """Base class for cart errors."""


class UserNotLoggedInError(CartError):
    """Raised before any network call when no user ID is available."""

    def __init__(self, message: str = ERROR_USER_NOT_LOGGED_IN):
        super().__init__(message)


class CartServiceError(CartError):
    """
    Failure reported by the cart service or its transport.

    Attributes:
        payload: Structured response body, if the service returned one
        status_code: HTTP status, or None for transport failures
    """

    def __init__(self, message: str, payload: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.payload = payload
        self.status_code = status_code


def extract_error_payload(error: BaseException) -> Any:
    """Prefer the structured response body, fall back to the message string."""
    payload = getattr(error, "payload", None)
    if payload:
        return payload
    return str(error)
