"""
Auth-state observer.

Subscribes once to the identity provider and keeps an ``AuthSession`` in
step with it. A profile is created asynchronously after sign-up, so right
after sign-in the profile read may come back empty; that read is retried
with exponential backoff before the session is treated as signed out.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from shared.config import get_settings
from shared.exceptions import CelestiaError, UpstreamFailureError
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import UserProfile

from .exceptions import TransientProfileNotFoundError
from .interfaces import IAuthProvider, Unsubscribe
from .models import AuthStateEvent
from .session import AuthSession

logger = logging.getLogger(__name__)


class AuthObserver:
    """
    Keeps ``session`` in sync with ``provider``.

    Each auth-state event is resolved in its own task. A newer event
    cancels the resolution still in flight, and ``stop()`` cancels
    whatever is pending so no retry timer outlives the observer.
    """

    def __init__(
        self,
        provider: IAuthProvider,
        profiles: IProfileService,
        session: AuthSession,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        settings = get_settings()
        self._provider = provider
        self._profiles = profiles
        self._session = session
        self._max_retries = (
            max_retries if max_retries is not None else settings.profile_fetch_max_retries
        )
        self._base_delay = (
            base_delay if base_delay is not None else settings.profile_fetch_base_delay
        )
        self._sleep = sleep
        self._unsubscribe: Optional[Unsubscribe] = None
        self._pending: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        """Subscribe to the provider. Only once per observer."""
        if self._unsubscribe is not None or self._stopped:
            raise RuntimeError("AuthObserver can only be started once")
        self._session.set_loading(True)
        self._unsubscribe = self._provider.on_auth_state_changed(self._on_event)
        logger.debug("Auth observer started")

    def stop(self) -> None:
        """Tear down the provider subscription and any pending resolution."""
        if self._stopped:
            return
        self._stopped = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._cancel_pending()
        logger.debug("Auth observer stopped")

    async def wait_idle(self) -> None:
        """Wait for the current resolution, if any, to finish."""
        if self._pending is not None and not self._pending.done():
            await asyncio.gather(self._pending, return_exceptions=True)

    def _on_event(self, event: AuthStateEvent) -> None:
        if self._stopped:
            return
        self._cancel_pending()
        self._pending = asyncio.create_task(self.resolve(event))

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def resolve(self, event: AuthStateEvent) -> None:
        """Bring the session in line with one auth-state event."""
        if not event.signed_in:
            self._session.clear()
            return

        self._session.set_loading(True)
        try:
            profile = await self.fetch_profile(event.user_id)
        except TransientProfileNotFoundError:
            logger.error(
                f"User profile not found for {event.user_id} after {self._max_retries} retries"
            )
            self._session.clear()
            return
        except UpstreamFailureError as e:
            logger.error(f"Error fetching user profile for {event.user_id}: {e}")
            self._session.clear()
            return
        except Exception:
            logger.exception(f"Unexpected error resolving profile for {event.user_id}")
            self._session.clear()
            return

        self._session.set_user(profile)

        try:
            await self._profiles.record_login(profile.id)
        except CelestiaError as e:
            logger.warning(f"Could not record login for {profile.id}: {e}")

    async def fetch_profile(self, user_id: str) -> UserProfile:
        """
        Read the profile, retrying while it does not exist yet.

        Delays double from ``base_delay``: with the defaults the profile is
        read at most six times over roughly 31 seconds.

        Raises:
            TransientProfileNotFoundError: If every attempt came back empty
            UpstreamFailureError: On a store failure (not retried)
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(multiplier=self._base_delay, exp_base=2),
            retry=retry_if_exception_type(TransientProfileNotFoundError),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                profile = await self._profiles.get_profile(user_id)
                if profile is None:
                    raise TransientProfileNotFoundError(
                        user_id, attempt.retry_state.attempt_number
                    )
        return profile

    def _log_retry(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.info(
            f"User profile not found, retrying in {delay:g}s... "
            f"(attempt {retry_state.attempt_number}/{self._max_retries})"
        )
