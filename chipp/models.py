"""
Chipp Data Models

Wire and result models for the hosted credit service.
The service speaks camelCase JSON; Python attributes are snake_case.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ====================
# Core Data Models
# ====================

class ChippUser(BaseModel):
    """
    User record held by the credit service.
    The identifier is hashed remotely before it is used as a lookup key.
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1, description="Caller-chosen user identifier")
    credits: int = Field(..., ge=0, description="Current credit balance")

    @field_validator('user_id')
    @classmethod
    def validate_user_id(cls, v):
        """Validate user_id is not empty"""
        if not v or not v.strip():
            raise ValueError("user_id cannot be empty")
        return v.strip()


# ====================
# Request Models
# ====================

class DeductCreditsRequest(BaseModel):
    """Request body for a credit deduction"""
    amount: int = Field(..., gt=0, description="Credits to deduct")


class PaymentUrlRequest(BaseModel):
    """Request body for a payment URL"""
    model_config = ConfigDict(populate_by_name=True)

    return_to_url: Optional[str] = Field(None, alias="returnToUrl", description="Redirect after checkout")


# ====================
# Response Models
# ====================

class PaymentUrlResponse(BaseModel):
    """Checkout link returned by the credit service"""
    url: str = Field(..., min_length=1, description="Payment URL")


class ChargeResult(BaseModel):
    """
    Outcome of a deduct-or-pay charge.

    A successful charge carries the new balance; a failed one carries the
    payment URL the user should be sent to instead.
    """
    success: bool
    user_id: str
    amount: int = Field(..., gt=0)
    balance: Optional[int] = Field(None, ge=0, description="Balance after the charge, or available balance")
    payment_url: Optional[str] = None
    message: str = ""

    @model_validator(mode="after")
    def check_outcome(self):
        if self.success and self.balance is None:
            raise ValueError("successful charge must carry the new balance")
        if self.success and self.payment_url:
            raise ValueError("successful charge cannot carry a payment_url")
        if not self.success and not self.payment_url:
            raise ValueError("failed charge must carry a payment_url")
        return self


class BalanceSnapshot(BaseModel):
    """Point-in-time view of a cached balance"""
    balance: Optional[int] = Field(None, ge=0)
    is_loading: bool = False
    error: Optional[str] = None
    updated_at: Optional[datetime] = None


class ErrorResponse(BaseModel):
    """Standard error response"""
    success: bool = Field(default=False)
    error: str
    detail: Optional[str] = None
    payment_url: Optional[str] = None
    available: Optional[int] = None


__all__ = [
    "ChippUser",
    "DeductCreditsRequest",
    "PaymentUrlRequest",
    "PaymentUrlResponse",
    "ChargeResult",
    "BalanceSnapshot",
    "ErrorResponse",
]
