"""
Chipp integration kit

Async client, FastAPI dependencies and balance state for applications that
bill their users through the hosted Chipp credit service.
"""

__version__ = "0.1.0"

from .client import ChippClient
from .credit_gate import CreditGate
from .balance import BalanceState
from .factory import create_chipp_client
from .models import (
    ChippUser,
    ChargeResult,
    BalanceSnapshot,
    PaymentUrlResponse,
)
from .protocols import (
    ChippClientProtocol,
    ChippError,
    ChippConfigurationError,
    ChippAuthenticationError,
    ChippUserNotFoundError,
    InsufficientCreditsError,
    ChippAPIError,
    ChippConnectionError,
)

__all__ = [
    "__version__",
    "ChippClient",
    "CreditGate",
    "BalanceState",
    "create_chipp_client",
    "ChippUser",
    "ChargeResult",
    "BalanceSnapshot",
    "PaymentUrlResponse",
    "ChippClientProtocol",
    "ChippError",
    "ChippConfigurationError",
    "ChippAuthenticationError",
    "ChippUserNotFoundError",
    "InsufficientCreditsError",
    "ChippAPIError",
    "ChippConnectionError",
]
