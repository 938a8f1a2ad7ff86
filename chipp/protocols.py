"""
Chipp Protocols

Defines the client interface used for dependency injection and testing,
plus the error taxonomy raised by the integration kit.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import ChippUser


# ====================
# Client Protocol
# ====================


@runtime_checkable
class ChippClientProtocol(Protocol):
    """Interface of the hosted credit service client"""

    async def get_user(self, user_id: str) -> ChippUser:
        """
        Get (or lazily create) the user record for an identifier.

        Args:
            user_id: Opaque identifier chosen by the integrating application

        Returns:
            User record with current credit balance
        """
        ...

    async def get_balance(self, user_id: str) -> int:
        """
        Get the user's current credit balance.

        Args:
            user_id: User identifier

        Returns:
            Credits available
        """
        ...

    async def deduct_credits(self, user_id: str, amount: int) -> int:
        """
        Deduct credits for a billable action.

        Args:
            user_id: User identifier
            amount: Credits to deduct (must be > 0)

        Returns:
            Balance after the deduction

        Raises:
            InsufficientCreditsError: If the balance does not cover amount
        """
        ...

    async def get_payment_url(self, user_id: str, return_to_url: Optional[str] = None) -> str:
        """
        Get a checkout link where the user can buy more credits.

        Args:
            user_id: User identifier
            return_to_url: Where checkout redirects after completion

        Returns:
            Payment URL
        """
        ...

    async def health_check(self) -> bool:
        """Check the remote service is reachable"""
        ...


# ====================
# Exceptions
# ====================


class ChippError(Exception):
    """Base exception for the Chipp integration kit"""
    pass


class ChippConfigurationError(ChippError):
    """Raised when required configuration (such as the API key) is missing"""
    pass


class ChippAuthenticationError(ChippError):
    """Raised when the credit service rejects the API key"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ChippUserNotFoundError(ChippError):
    """Raised when the credit service has no record for the user"""

    def __init__(self, message: str, user_id: Optional[str] = None):
        super().__init__(message)
        self.user_id = user_id


class InsufficientCreditsError(ChippError):
    """Raised when the user's balance does not cover a deduction"""

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        available: Optional[int] = None,
        required: Optional[int] = None,
        payment_url: Optional[str] = None,
    ):
        super().__init__(message)
        self.user_id = user_id
        self.available = available
        self.required = required
        self.payment_url = payment_url


class ChippAPIError(ChippError):
    """Raised when the credit service returns an unexpected response"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ChippConnectionError(ChippError):
    """Raised when the credit service cannot be reached"""
    pass


__all__ = [
    "ChippClientProtocol",
    "ChippError",
    "ChippConfigurationError",
    "ChippAuthenticationError",
    "ChippUserNotFoundError",
    "InsufficientCreditsError",
    "ChippAPIError",
    "ChippConnectionError",
]
