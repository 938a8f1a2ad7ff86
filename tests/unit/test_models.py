"""
Chipp Model Tests

Validation rules of the wire and result models.

Usage:
    pytest tests/unit/test_models.py -v
"""
import pytest
from pydantic import ValidationError

from chipp.models import (
    BalanceSnapshot,
    ChargeResult,
    ChippUser,
    DeductCreditsRequest,
    ErrorResponse,
    PaymentUrlRequest,
    PaymentUrlResponse,
)

pytestmark = [pytest.mark.unit]


class TestChippUser:

    def test_parses_camel_case_payload(self):
        user = ChippUser.model_validate({"userId": "user_1", "credits": 42})
        assert user.user_id == "user_1"
        assert user.credits == 42

    def test_accepts_field_names(self):
        user = ChippUser(user_id="user_1", credits=3)
        assert user.model_dump(by_alias=True) == {"userId": "user_1", "credits": 3}

    def test_user_id_is_stripped(self):
        assert ChippUser(user_id="  user_1  ", credits=0).user_id == "user_1"

    def test_blank_user_id_rejected(self):
        with pytest.raises(ValidationError):
            ChippUser(user_id="   ", credits=0)

    def test_negative_credits_rejected(self):
        with pytest.raises(ValidationError):
            ChippUser(user_id="user_1", credits=-1)

    def test_credits_required(self):
        with pytest.raises(ValidationError):
            ChippUser.model_validate({"userId": "user_1"})


class TestRequests:

    def test_deduct_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            DeductCreditsRequest(amount=0)
        assert DeductCreditsRequest(amount=1).model_dump() == {"amount": 1}

    def test_payment_url_request_serializes_alias(self):
        req = PaymentUrlRequest(return_to_url="https://app.test/billing")
        assert req.model_dump(by_alias=True) == {"returnToUrl": "https://app.test/billing"}

    def test_payment_url_request_drops_missing_return_url(self):
        assert PaymentUrlRequest().model_dump(by_alias=True, exclude_none=True) == {}

    def test_payment_url_response_requires_url(self):
        with pytest.raises(ValidationError):
            PaymentUrlResponse(url="")


class TestChargeResult:

    def test_success_carries_balance(self):
        result = ChargeResult(success=True, user_id="u", amount=5, balance=10)
        assert result.payment_url is None

    def test_success_requires_balance(self):
        with pytest.raises(ValidationError):
            ChargeResult(success=True, user_id="u", amount=5)

    def test_failure_requires_payment_url(self):
        with pytest.raises(ValidationError):
            ChargeResult(success=False, user_id="u", amount=5, balance=1)

    def test_success_cannot_carry_payment_url(self):
        with pytest.raises(ValidationError):
            ChargeResult(success=True, user_id="u", amount=5, balance=1, payment_url="https://pay")

    def test_failure_with_payment_url(self):
        result = ChargeResult(success=False, user_id="u", amount=5, balance=1, payment_url="https://pay")
        assert not result.success


class TestSnapshotsAndErrors:

    def test_snapshot_defaults(self):
        snap = BalanceSnapshot()
        assert snap.balance is None
        assert snap.is_loading is False
        assert snap.error is None

    def test_error_response_defaults(self):
        err = ErrorResponse(error="insufficient_credits")
        assert err.success is False
        assert err.model_dump(exclude_none=True) == {"success": False, "error": "insufficient_credits"}
