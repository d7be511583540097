"""
Credits service implementation.

Balances live in the ``credits`` column of the user profile row. Live
updates are delivered by polling the row and diffing against the last
value seen; each subscription owns exactly one asyncio task.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from modules.profiles.exceptions import ProfileNotFoundError
from modules.profiles.repository import ProfileRepository
from shared.config import get_settings

from .interfaces import ICreditsService, ICreditsSubscription
from .models import Credits, CreditType
from .exceptions import InvalidCreditAmountError

logger = logging.getLogger(__name__)


class CreditsSubscription(ICreditsSubscription):
    """
    A live credit subscription for one user.

    Polls ``fetch`` every ``interval`` seconds and calls ``callback`` when
    the balance differs from the last delivered value. A missing user row
    delivers nothing. Fetch failures go to ``on_error`` and polling
    continues.
    """

    def __init__(
        self,
        user_id: str,
        fetch: Callable[[], Awaitable[Credits]],
        callback: Callable[[Credits], None],
        interval: float,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self.user_id = user_id
        self._fetch = fetch
        self._callback = callback
        self._interval = interval
        self._on_error = on_error
        self._last: Optional[Credits] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "CreditsSubscription":
        if self._task is not None:
            raise RuntimeError("Subscription already started")
        self._task = asyncio.create_task(self._run())
        return self

    def unsubscribe(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug(f"Unsubscribed from credits for user {self.user_id}")

    async def _run(self) -> None:
        while True:
            await self._poll_once()
            await asyncio.sleep(self._interval)

    async def _poll_once(self) -> None:
        try:
            credits = await self._fetch()
        except ProfileNotFoundError:
            return
        except Exception as e:
            logger.warning(f"Credit subscription read failed for user {self.user_id}: {e}")
            if self._on_error:
                self._on_error(e)
            return

        if credits != self._last:
            self._last = credits
            self._callback(credits)


class CreditsService(ICreditsService):
    """Credits service backed by the profile repository."""

    def __init__(
        self,
        repository: ProfileRepository,
        poll_interval: Optional[float] = None,
    ):
        self._repository = repository
        self._poll_interval = (
            poll_interval if poll_interval is not None else get_settings().credits_poll_interval
        )

    async def get_credits(self, user_id: str) -> Credits:
        row = self._repository.get_row(user_id)
        if row is None:
            raise ProfileNotFoundError(user_id)
        return Credits.from_row(row.get("credits"))

    def subscribe(
        self,
        user_id: str,
        callback: Callable[[Credits], None],
        interval: Optional[float] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> CreditsSubscription:
        subscription = CreditsSubscription(
            user_id=user_id,
            fetch=lambda: self.get_credits(user_id),
            callback=callback,
            interval=interval if interval is not None else self._poll_interval,
            on_error=on_error,
        )
        logger.debug(f"Subscribing to credits for user {user_id}")
        return subscription.start()

    async def grant_credits(self, user_id: str, credit_type: CreditType, amount: int) -> Credits:
        if amount <= 0:
            raise InvalidCreditAmountError(amount)

        current = await self.get_credits(user_id)
        credit_type = CreditType(credit_type)
        updated = current.model_copy(
            update={credit_type.value: current.get(credit_type) + amount}
        )

        # Read-modify-write; concurrent admin grants to one user are not expected.
        profile = self._repository.update(
            user_id,
            {
                "credits": updated.model_dump(),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        if profile is None:
            raise ProfileNotFoundError(user_id)

        logger.info(f"Granted {amount} {credit_type.value} credit(s) to user {user_id}")
        return profile.credits
