"""
Chipp API Routes

Router an application mounts so its frontend can read the caller's balance
and request a payment URL, plus exception handlers for Chipp errors.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from .auth_dependencies import ChippIdentity, ClientProvider, IdentityResolver
from .models import ChippUser, ErrorResponse, PaymentUrlRequest, PaymentUrlResponse
from .protocols import (
    ChippAPIError,
    ChippAuthenticationError,
    ChippConfigurationError,
    ChippConnectionError,
    ChippError,
    ChippUserNotFoundError,
    InsufficientCreditsError,
)

logger = logging.getLogger(__name__)


def create_chipp_router(
    client_provider: ClientProvider,
    resolver: IdentityResolver,
    prefix: str = "/api/chipp",
    default_return_url: Optional[str] = None,
) -> APIRouter:
    """
    Build the balance/payment router

    Args:
        client_provider: Returns the ChippClient to use per request
        resolver: Maps a request to a user identifier ("" = unauthenticated)
        prefix: Mount prefix
        default_return_url: Checkout redirect when the request names none

    Returns:
        APIRouter with /user, /payment-url and /health
    """
    router = APIRouter(prefix=prefix, tags=["chipp"])
    identity = ChippIdentity(resolver)

    @router.get("/user", response_model=ChippUser)
    async def get_current_user(user_id: str = Depends(identity)):
        """Current user's record; the frontend calls this to refresh its balance"""
        return await client_provider().get_user(user_id)

    @router.post("/payment-url", response_model=PaymentUrlResponse)
    async def create_payment_url(
        body: Optional[PaymentUrlRequest] = Body(None),
        user_id: str = Depends(identity),
    ):
        """Fresh checkout link for the current user"""
        return_to_url = (body.return_to_url if body else None) or default_return_url
        url = await client_provider().get_payment_url(user_id, return_to_url)
        return PaymentUrlResponse(url=url)

    @router.get("/health")
    async def health():
        """Reachability of the credit service"""
        healthy = await client_provider().health_check()
        return {
            "status": "healthy" if healthy else "degraded",
            "chipp": healthy,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return router


# ====================
# Error handlers
# ====================

_STATUS_BY_ERROR = [
    (InsufficientCreditsError, status.HTTP_402_PAYMENT_REQUIRED, "insufficient_credits"),
    (ChippUserNotFoundError, status.HTTP_404_NOT_FOUND, "user_not_found"),
    (ChippAuthenticationError, status.HTTP_502_BAD_GATEWAY, "upstream_authentication_failed"),
    (ChippConnectionError, status.HTTP_503_SERVICE_UNAVAILABLE, "credit_service_unavailable"),
    (ChippAPIError, status.HTTP_502_BAD_GATEWAY, "credit_service_error"),
    (ChippConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "misconfigured"),
]


async def chipp_error_handler(request: Request, exc: ChippError):
    status_code, error = status.HTTP_500_INTERNAL_SERVER_ERROR, "chipp_error"
    for error_type, code, name in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code, error = code, name
            break

    if status_code >= 500:
        logger.error(f"Chipp error on {request.url.path}: {exc}")

    body = ErrorResponse(error=error, detail=str(exc))
    if isinstance(exc, InsufficientCreditsError):
        body.available = exc.available
        body.payment_url = exc.payment_url
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Translate ChippError subclasses raised in routes into JSON errors"""
    app.add_exception_handler(ChippError, chipp_error_handler)


__all__ = ["create_chipp_router", "chipp_error_handler", "register_exception_handlers"]
