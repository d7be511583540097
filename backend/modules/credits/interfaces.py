"""
Credits module interface.

The dashboard and consultation gates depend on ICreditsService; the
concrete implementation reads balances from the user profile row.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from .models import Credits, CreditType


@runtime_checkable
class ICreditsSubscription(Protocol):
    """Handle on a live credit subscription."""

    @property
    def active(self) -> bool:
        ...

    def unsubscribe(self) -> None:
        """Stop delivering updates. Safe to call more than once."""
        ...


@runtime_checkable
class ICreditsService(Protocol):
    """Interface for credit balance operations."""

    async def get_credits(self, user_id: str) -> Credits:
        """
        One-time read of a user's credits.

        Returns:
            Credits, with zeros for any counter missing from storage

        Raises:
            ProfileNotFoundError: If the user row doesn't exist
            UpstreamFailureError: If the store call fails
        """
        ...

    def subscribe(
        self,
        user_id: str,
        callback: Callable[[Credits], None],
        interval: Optional[float] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> ICreditsSubscription:
        """
        Start a live subscription to a user's credits.

        ``callback`` fires with the first value read and then on every
        change. Must be called from inside a running event loop.
        """
        ...

    async def grant_credits(self, user_id: str, credit_type: CreditType, amount: int) -> Credits:
        """
        Add credits of one type (admin operation).

        Raises:
            InvalidCreditAmountError: If ``amount`` is not positive
            ProfileNotFoundError: If the user row doesn't exist
        """
        ...
