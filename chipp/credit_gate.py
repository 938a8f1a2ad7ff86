"""
Credit Gate

Server-side deduct-or-pay flow: charge the user for a billable action, and
when the balance falls short hand back a payment URL instead.
"""

import logging
from typing import Optional

from .models import ChargeResult
from .protocols import ChippClientProtocol, InsufficientCreditsError

logger = logging.getLogger(__name__)


class CreditGate:
    """
    Guards billable actions behind a credit deduction

    Example:
        >>> gate = CreditGate(client, default_return_url="https://app.example.com/billing")
        >>> result = await gate.charge("user123", 5)
        >>> if not result.success:
        ...     return redirect(result.payment_url)
    """

    def __init__(self, client: ChippClientProtocol, default_return_url: Optional[str] = None):
        self.client = client
        self.default_return_url = default_return_url

    async def charge(
        self,
        user_id: str,
        amount: int,
        return_to_url: Optional[str] = None,
    ) -> ChargeResult:
        """
        Deduct credits, or produce a payment URL when the balance is short

        The caller must not perform the billable action when the result
        is not successful.

        Args:
            user_id: User identifier
            amount: Credits the action costs (must be > 0)
            return_to_url: Checkout redirect (falls back to default_return_url)

        Returns:
            ChargeResult with either the new balance or a payment URL

        Raises:
            ValueError: If amount <= 0
            ChippError: Any failure other than insufficient balance
        """
        if amount <= 0:
            raise ValueError("Charge amount must be positive")

        try:
            balance = await self.client.deduct_credits(user_id, amount)
        except InsufficientCreditsError as e:
            payment_url = await self.client.get_payment_url(
                user_id, return_to_url or self.default_return_url
            )
            logger.info(f"Charge of {amount} declined for {user_id}; payment URL issued")
            return ChargeResult(
                success=False,
                user_id=user_id,
                amount=amount,
                balance=e.available,
                payment_url=payment_url,
                message="Insufficient credits",
            )

        return ChargeResult(
            success=True,
            user_id=user_id,
            amount=amount,
            balance=balance,
            message=f"Charged {amount} credits",
        )

    async def require(
        self,
        user_id: str,
        amount: int,
        return_to_url: Optional[str] = None,
    ) -> ChargeResult:
        """
        Charge, raising when the balance is short

        For route bodies that let register_exception_handlers turn the
        error into a 402 carrying the payment URL.

        Raises:
            InsufficientCreditsError: With payment_url and available set
        """
        result = await self.charge(user_id, amount, return_to_url)
        if not result.success:
            raise InsufficientCreditsError(
                "Insufficient credits",
                user_id=user_id,
                available=result.balance,
                required=amount,
                payment_url=result.payment_url,
            )
        return result

    async def check(self, user_id: str, amount: int) -> bool:
        """Whether the user can currently afford amount (no deduction)"""
        if amount <= 0:
            raise ValueError("Amount must be positive")
        balance = await self.client.get_balance(user_id)
        return balance >= amount


__all__ = ["CreditGate"]
