"""
FastAPI Dependencies for Chipp

Identity resolution and credit-gating dependencies for routes that bill
their callers.
"""

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from fastapi import HTTPException, Request, status

from .credit_gate import CreditGate
from .models import ChargeResult
from .protocols import ChippClientProtocol

logger = logging.getLogger(__name__)

# Maps an inbound request to a user identifier; "" means unauthenticated.
IdentityResolver = Callable[[Request], Union[str, Awaitable[str]]]
ClientProvider = Callable[[], ChippClientProtocol]


async def resolve_identity(resolver: IdentityResolver, request: Request) -> str:
    """
    Run a sync or async identity resolver

    Returns:
        The stripped user identifier, or "" when identity is unknown
    """
    user_id = resolver(request)
    if inspect.isawaitable(user_id):
        user_id = await user_id
    if user_id is None:
        return ""
    if not isinstance(user_id, str):
        raise TypeError(f"Identity resolver must return str, got {type(user_id).__name__}")
    return user_id.strip()


class ChippIdentity:
    """
    Dependency returning the caller's user identifier

    Raises HTTP 401 when the resolver returns an empty string.

    Example:
        identity = ChippIdentity(lambda request: request.headers.get("X-User-Id", ""))

        @app.get("/api/me")
        async def me(user_id: str = Depends(identity)):
            return {"user_id": user_id}
    """

    def __init__(self, resolver: IdentityResolver):
        self.resolver = resolver

    async def __call__(self, request: Request) -> str:
        user_id = await resolve_identity(self.resolver, request)
        if not user_id:
            logger.debug(f"Unresolved identity for {request.url.path}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User authentication required"
            )
        return user_id


class RequireCredits:
    """
    Dependency charging the caller before the route body runs

    When the balance is short it raises HTTP 402 with the payment URL, so
    the route body (the billable action) never executes. FastAPI resolves
    dependencies before validating the request body; routes whose input
    must validate before charging should call CreditGate in the body.

    Example:
        @app.post("/api/generate")
        async def generate(charge: ChargeResult = Depends(RequireCredits(5, get_client, resolver))):
            return {"remaining": charge.balance}
    """

    def __init__(
        self,
        amount: int,
        client_provider: ClientProvider,
        resolver: IdentityResolver,
        return_to_url: Optional[str] = None,
    ):
        if amount <= 0:
            raise ValueError("amount must be positive")
        self.amount = amount
        self.client_provider = client_provider
        self.identity = ChippIdentity(resolver)
        self.return_to_url = return_to_url

    async def __call__(self, request: Request) -> ChargeResult:
        user_id = await self.identity(request)
        gate = CreditGate(self.client_provider(), default_return_url=self.return_to_url)
        result = await gate.charge(user_id, self.amount)

        if not result.success:
            raise HTTPException(
                status_code=status.HTTP_402_PAYMENT_REQUIRED,
                detail={
                    "error": "insufficient_credits",
                    "payment_url": result.payment_url,
                    "available": result.balance,
                    "required": self.amount,
                }
            )
        return result


__all__ = [
    "IdentityResolver",
    "ClientProvider",
    "resolve_identity",
    "ChippIdentity",
    "RequireCredits",
]
