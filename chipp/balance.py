"""
Balance State

Shared, cached view of one user's credit balance with a loading flag and a
manual refresh action. Consumers (dashboards, bots, CLIs) read the cached
value and call refresh() when they want a fresh one.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .models import BalanceSnapshot
from .protocols import ChippClientProtocol

logger = logging.getLogger(__name__)

BalanceListener = Callable[[BalanceSnapshot], None]


class BalanceState:
    """
    Cached credit balance for a single user

    Concurrent refresh() calls share one in-flight request.

    Example:
        >>> state = BalanceState(client, "user123")
        >>> state.subscribe(lambda snap: print(snap.balance))
        >>> await state.refresh()
    """

    def __init__(self, client: ChippClientProtocol, user_id: str):
        if not user_id or not user_id.strip():
            raise ValueError("user_id cannot be empty")
        self.client = client
        self.user_id = user_id.strip()

        self._balance: Optional[int] = None
        self._is_loading = False
        self._error: Optional[str] = None
        self._updated_at: Optional[datetime] = None
        self._inflight: Optional[asyncio.Task] = None
        self._listeners: List[BalanceListener] = []

    @property
    def balance(self) -> Optional[int]:
        """Last fetched balance, None before the first successful refresh"""
        return self._balance

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    def snapshot(self) -> BalanceSnapshot:
        return BalanceSnapshot(
            balance=self._balance,
            is_loading=self._is_loading,
            error=self._error,
            updated_at=self._updated_at,
        )

    async def refresh(self) -> int:
        """
        Fetch the balance from the credit service

        On failure the previous balance is kept, the error is recorded and
        the exception is re-raised.

        Returns:
            Fresh balance
        """
        if self._inflight is None:
            task = asyncio.ensure_future(self._fetch())
            task.add_done_callback(self._clear_inflight)
            self._inflight = task
        return await asyncio.shield(self._inflight)

    def set_balance(self, value: int) -> None:
        """Record a balance learned elsewhere, e.g. returned by a deduction"""
        if value < 0:
            raise ValueError("balance cannot be negative")
        self._balance = value
        self._error = None
        self._updated_at = datetime.now(timezone.utc)
        self._notify()

    def subscribe(self, listener: BalanceListener) -> Callable[[], None]:
        """
        Register a listener called with a BalanceSnapshot after each change

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _clear_inflight(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None
        # Waiters may all have been cancelled; mark the outcome as consumed
        if not task.cancelled():
            task.exception()

    async def _fetch(self) -> int:
        self._is_loading = True
        self._notify()
        try:
            balance = await self.client.get_balance(self.user_id)
        except Exception as e:
            self._error = str(e) or e.__class__.__name__
            logger.warning(f"Balance refresh failed for {self.user_id}: {self._error}")
            raise
        else:
            self._balance = balance
            self._error = None
            self._updated_at = datetime.now(timezone.utc)
            return balance
        finally:
            self._is_loading = False
            self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Balance listener {listener!r} failed: {e}")


__all__ = ["BalanceState", "BalanceListener"]
