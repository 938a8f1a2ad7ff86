"""
Chipp Client

Async client for the hosted credit service: user lookup, balance reads,
credit deductions and payment URLs. One HTTP request per call.
"""

import httpx
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import ValidationError

from .client_base import BaseChippClient
from .models import ChippUser, DeductCreditsRequest, PaymentUrlRequest, PaymentUrlResponse
from .protocols import (
    ChippAPIError,
    ChippAuthenticationError,
    ChippConnectionError,
    ChippUserNotFoundError,
    InsufficientCreditsError,
)

logger = logging.getLogger(__name__)


def _validate_user_id(user_id: str) -> str:
    if not user_id or not user_id.strip():
        raise ValueError("user_id cannot be empty")
    return user_id.strip()


def _user_path(user_id: str, suffix: str = "") -> str:
    return f"/v1/users/{quote(user_id, safe='')}{suffix}"


class ChippClient(BaseChippClient):
    """Hosted credit service HTTP client"""

    # =============================================================================
    # Users
    # =============================================================================

    async def get_user(self, user_id: str) -> ChippUser:
        """
        Get the user record, creating it on first use

        Args:
            user_id: Caller-chosen identifier (hashed by the service)

        Returns:
            User record with current balance

        Example:
            >>> async with ChippClient(api_key="...", base_url="https://api.chipp.ai") as chipp:
            ...     user = await chipp.get_user("user123")
            ...     print(user.credits)
        """
        user_id = _validate_user_id(user_id)
        data = await self._request("POST", "/v1/users", json={"userId": user_id}, user_id=user_id)
        try:
            return ChippUser.model_validate(data)
        except ValidationError as e:
            raise ChippAPIError("Malformed user payload", detail=str(e))

    async def get_balance(self, user_id: str) -> int:
        """
        Get the user's current credit balance

        Args:
            user_id: User identifier

        Returns:
            Credits available
        """
        user = await self.get_user(user_id)
        return user.credits

    # =============================================================================
    # Credits
    # =============================================================================

    async def deduct_credits(self, user_id: str, amount: int) -> int:
        """
        Deduct credits for a billable action

        Args:
            user_id: User identifier
            amount: Credits to deduct (must be > 0)

        Returns:
            Balance after the deduction

        Raises:
            ValueError: If user_id is empty or amount <= 0
            InsufficientCreditsError: If the balance does not cover amount
            ChippUserNotFoundError: If the service has no such user

        Example:
            >>> try:
            ...     remaining = await chipp.deduct_credits("user123", 10)
            ... except InsufficientCreditsError:
            ...     url = await chipp.get_payment_url("user123")
        """
        user_id = _validate_user_id(user_id)
        if amount <= 0:
            raise ValueError("Deduction amount must be positive")

        payload = DeductCreditsRequest(amount=amount).model_dump()
        data = await self._request(
            "POST", _user_path(user_id, "/credits/deduct"),
            json=payload, user_id=user_id, amount=amount
        )

        credits = data.get("credits")
        if isinstance(credits, bool) or not isinstance(credits, int) or credits < 0:
            raise ChippAPIError("Deduction response missing credits", detail=str(data))

        logger.info(f"Deducted {amount} credits from {user_id}, {credits} remaining")
        return credits

    # =============================================================================
    # Payments
    # =============================================================================

    async def get_payment_url(self, user_id: str, return_to_url: Optional[str] = None) -> str:
        """
        Get a checkout link where the user can buy more credits

        The link is short-lived; request a fresh one each time it is shown.

        Args:
            user_id: User identifier
            return_to_url: Where checkout redirects afterwards (optional)

        Returns:
            Payment URL
        """
        user_id = _validate_user_id(user_id)
        payload = PaymentUrlRequest(return_to_url=return_to_url).model_dump(by_alias=True, exclude_none=True)
        data = await self._request(
            "POST", _user_path(user_id, "/payment-url"), json=payload, user_id=user_id
        )
        try:
            return PaymentUrlResponse.model_validate(data).url
        except ValidationError as e:
            raise ChippAPIError("Malformed payment URL payload", detail=str(e))

    # =============================================================================
    # Health
    # =============================================================================

    async def health_check(self) -> bool:
        """
        Health check

        Returns:
            Whether the credit service answered 200
        """
        try:
            response = await self.get("/health")
            return response.status_code == 200
        except Exception as e:
            logger.warning(f"Chipp health check failed: {e}")
            return False

    # =============================================================================
    # Internals
    # =============================================================================

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
        amount: Optional[int] = None
    ) -> Dict[str, Any]:
        """Send one request and translate the response into data or a ChippError"""
        try:
            if method == "GET":
                response = await self.get(path)
            else:
                response = await self.post(path, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"Chipp request timed out: {method} {path}")
            raise ChippConnectionError(f"Timed out calling credit service: {e}") from e
        except httpx.TransportError as e:
            logger.error(f"Chipp transport error: {method} {path}: {e}")
            raise ChippConnectionError(f"Could not reach credit service: {e}") from e

        status_code = response.status_code
        data = self._parse_body(response)

        if 200 <= status_code < 300:
            if data is None:
                raise ChippAPIError("Credit service returned a non-JSON body", status_code=status_code)
            return data

        detail = None
        if isinstance(data, dict):
            detail = data.get("error") or data.get("detail") or data.get("message")
        detail = detail or response.text

        if status_code in (401, 403):
            logger.error(f"Chipp rejected API key ({status_code})")
            raise ChippAuthenticationError("Invalid or missing Chipp API key", status_code=status_code)

        if status_code == 402:
            available = data.get("credits") if isinstance(data, dict) else None
            if isinstance(available, bool) or not isinstance(available, int) or available < 0:
                available = None
            logger.info(f"Insufficient credits for {user_id}: available={available}, required={amount}")
            raise InsufficientCreditsError(
                "Insufficient credits",
                user_id=user_id,
                available=available,
                required=amount,
            )

        if status_code == 404:
            raise ChippUserNotFoundError(f"User not found: {user_id}", user_id=user_id)

        logger.error(f"Chipp request failed: {method} {path} -> {status_code}")
        raise ChippAPIError(
            f"Credit service returned {status_code}",
            status_code=status_code,
            detail=detail,
        )

    @staticmethod
    def _parse_body(response) -> Optional[Dict[str, Any]]:
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None


__all__ = ["ChippClient"]
