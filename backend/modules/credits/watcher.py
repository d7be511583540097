"""
Session-bound credit subscription.

Follows an ``AuthSession``: one live subscription for the signed-in user,
replaced when the user changes and torn down on sign-out.
"""

import logging
from typing import Callable, Optional

from modules.auth.session import AuthSession

from .interfaces import ICreditsService, ICreditsSubscription
from .models import Credits
from .validation import needs_purchase

logger = logging.getLogger(__name__)


class CreditsWatcher:
    """
    Live credits for whoever is signed in.

    At most one subscription is active at a time. ``on_change`` is called
    with the new balance on every update.
    """

    def __init__(
        self,
        session: AuthSession,
        service: ICreditsService,
        on_change: Optional[Callable[[Credits], None]] = None,
    ):
        self._session = session
        self._service = service
        self._on_change = on_change
        self._subscription: Optional[ICreditsSubscription] = None
        self._user_id: Optional[str] = None
        self._unsubscribe_session: Optional[Callable[[], None]] = None

        self.credits: Optional[Credits] = None
        self.is_loading = True
        self.error: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def needs_purchase(self) -> bool:
        return self.credits is not None and needs_purchase(self.credits)

    def start(self) -> None:
        if self._unsubscribe_session is not None:
            raise RuntimeError("CreditsWatcher already started")
        self._unsubscribe_session = self._session.subscribe(self._on_session_change)
        self._on_session_change(self._session)

    def close(self) -> None:
        if self._unsubscribe_session is not None:
            self._unsubscribe_session()
            self._unsubscribe_session = None
        self._teardown()

    def _on_session_change(self, session: AuthSession) -> None:
        user = session.current_user
        user_id = user.id if user else None
        if user_id is not None and user_id == self._user_id and self._subscription is not None:
            return

        self._teardown()
        self._user_id = user_id

        if user_id is None:
            self.credits = None
            self.is_loading = False
            self.error = None
            return

        self.is_loading = True
        self.error = None
        self._subscription = self._service.subscribe(
            user_id,
            self._on_credits,
            on_error=self._on_error,
        )

    def _on_credits(self, credits: Credits) -> None:
        self.credits = credits
        self.is_loading = False
        if self._on_change:
            self._on_change(credits)

    def _on_error(self, error: Exception) -> None:
        self.error = str(error) or "Failed to subscribe to credits"
        self.is_loading = False

    def _teardown(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
            logger.debug(f"Credits subscription closed for user {self._user_id}")
