"""
Reactive auth session state.

One ``AuthSession`` exists per running client. It is created by the
service container and passed to whatever needs it (route guard, credits
watcher, auth observer). The setter methods are the only way to change it.
"""

import logging
from typing import Callable, Optional

from modules.profiles.models import UserProfile

logger = logging.getLogger(__name__)

SessionListener = Callable[["AuthSession"], None]


class AuthSession:
    """
    Current user plus a loading flag.

    Lifecycle:
        loading, no user
          -> set_user(profile): user present, not loading
          -> clear(): no user, not loading
    """

    def __init__(self) -> None:
        self._current_user: Optional[UserProfile] = None
        self._is_loading = True
        self._listeners: list[SessionListener] = []

    @property
    def current_user(self) -> Optional[UserProfile]:
        return self._current_user

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def set_user(self, user: Optional[UserProfile]) -> None:
        """Set the current user and finish loading."""
        self._current_user = user
        self._is_loading = False
        self._notify()

    def set_loading(self, loading: bool) -> None:
        self._is_loading = loading
        self._notify()

    def clear(self) -> None:
        """Drop the current user and finish loading."""
        self._current_user = None
        self._is_loading = False
        self._notify()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Call ``listener`` after every change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        user_id = self._current_user.id if self._current_user else None
        logger.debug(f"Auth session changed: user={user_id} loading={self._is_loading}")
        for listener in list(self._listeners):
            listener(self)
