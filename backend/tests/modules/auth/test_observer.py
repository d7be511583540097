"""Tests for the auth-state observer."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.auth.models import AuthStateEvent
from modules.auth.observer import AuthObserver
from modules.auth.exceptions import TransientProfileNotFoundError
from modules.auth.session import AuthSession
from modules.profiles.exceptions import ProfileNotFoundError
from shared.exceptions import UpstreamFailureError
from tests.conftest import make_profile


class FakeProvider:
    def __init__(self):
        self.callbacks = []
        self.unsubscribe_calls = 0

    def on_auth_state_changed(self, callback):
        self.callbacks.append(callback)

        def unsubscribe():
            self.unsubscribe_calls += 1

        return unsubscribe

    async def sign_out(self):
        pass

    def emit(self, event):
        for callback in self.callbacks:
            callback(event)


class FakeSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def profiles():
    profiles = MagicMock()
    profiles.get_profile = AsyncMock(return_value=make_profile(id="alice"))
    profiles.record_login = AsyncMock()
    return profiles


@pytest.fixture
def session():
    return AuthSession()


@pytest.fixture
def sleep():
    return FakeSleep()


@pytest.fixture
def observer(provider, profiles, session, sleep):
    return AuthObserver(provider, profiles, session, max_retries=5, base_delay=1.0, sleep=sleep)


class TestObserverLifecycle:
    def test_start_subscribes_once(self, observer, provider, session):
        observer.start()

        assert len(provider.callbacks) == 1
        assert session.is_loading is True
        with pytest.raises(RuntimeError):
            observer.start()

    def test_stop_is_idempotent(self, observer, provider):
        observer.start()
        observer.stop()
        observer.stop()

        assert provider.unsubscribe_calls == 1
        assert observer.running is False

    @pytest.mark.asyncio
    async def test_events_after_stop_are_ignored(self, observer, provider, session, profiles):
        observer.start()
        observer.stop()

        provider.emit(AuthStateEvent(user_id="alice"))
        await observer.wait_idle()

        profiles.get_profile.assert_not_called()
        assert session.current_user is None


class TestResolve:
    @pytest.mark.asyncio
    async def test_sign_in_sets_user_and_records_login(self, observer, provider, session, profiles):
        observer.start()
        provider.emit(AuthStateEvent(user_id="alice", email="alice@example.com"))
        await observer.wait_idle()

        assert session.current_user.id == "alice"
        assert session.is_loading is False
        profiles.record_login.assert_awaited_once_with("alice")

    @pytest.mark.asyncio
    async def test_sign_out_clears(self, observer, provider, session):
        session.set_user(make_profile(id="alice"))
        observer.start()

        provider.emit(AuthStateEvent())
        await observer.wait_idle()

        assert session.current_user is None
        assert session.is_loading is False

    @pytest.mark.asyncio
    async def test_profile_appears_after_retries(self, observer, session, profiles, sleep):
        profiles.get_profile.side_effect = [None, None, make_profile(id="alice")]

        await observer.resolve(AuthStateEvent(user_id="alice"))

        assert session.current_user.id == "alice"
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, observer, session, profiles, sleep):
        """Six reads with 1, 2, 4, 8, 16 second gaps, then signed out."""
        profiles.get_profile.return_value = None

        await observer.resolve(AuthStateEvent(user_id="alice"))

        assert profiles.get_profile.await_count == 6
        assert sleep.delays == [1.0, 2.0, 4.0, 8.0, 16.0]
        assert session.current_user is None
        assert session.is_loading is False
        profiles.record_login.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_profile_raises_transient(self, observer, profiles):
        profiles.get_profile.return_value = None
        with pytest.raises(TransientProfileNotFoundError):
            await observer.fetch_profile("alice")

    @pytest.mark.asyncio
    async def test_store_failure_not_retried(self, observer, session, profiles, sleep):
        profiles.get_profile.side_effect = UpstreamFailureError("select failed")

        await observer.resolve(AuthStateEvent(user_id="alice"))

        assert profiles.get_profile.await_count == 1
        assert sleep.delays == []
        assert session.current_user is None

    @pytest.mark.asyncio
    async def test_login_stamp_failure_keeps_user(self, observer, session, profiles):
        profiles.record_login.side_effect = UpstreamFailureError("update failed")

        await observer.resolve(AuthStateEvent(user_id="alice"))

        assert session.current_user.id == "alice"

    @pytest.mark.asyncio
    async def test_malformed_profile_clears_session(self, observer, session, profiles, sleep):
        profiles.get_profile.side_effect = ValueError("bad row")

        await observer.resolve(AuthStateEvent(user_id="alice"))

        assert session.current_user is None
        assert session.is_loading is False
        assert sleep.delays == []
        profiles.record_login.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_login_stamp_missing_profile_keeps_user(self, observer, session, profiles):
        profiles.record_login.side_effect = ProfileNotFoundError("alice")

        await observer.resolve(AuthStateEvent(user_id="alice"))

        assert session.current_user.id == "alice"
        assert session.is_loading is False

    @pytest.mark.asyncio
    async def test_newer_event_cancels_pending_retry(self, provider, profiles, session):
        """A sign-out while the profile read is still retrying wins."""
        import asyncio

        gate = asyncio.Event()

        async def blocking_sleep(delay):
            await gate.wait()

        profiles.get_profile.return_value = None
        observer = AuthObserver(provider, profiles, session, max_retries=5, base_delay=1.0,
                                sleep=blocking_sleep)
        observer.start()

        provider.emit(AuthStateEvent(user_id="alice"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        provider.emit(AuthStateEvent())
        await observer.wait_idle()

        assert session.current_user is None
        assert session.is_loading is False
        observer.stop()

    @pytest.mark.asyncio
    async def test_stop_cancels_pending_resolution(self, provider, profiles, session):
        import asyncio

        never = asyncio.Event()

        async def blocking_sleep(delay):
            await never.wait()

        profiles.get_profile.return_value = None
        observer = AuthObserver(provider, profiles, session, sleep=blocking_sleep)
        observer.start()
        provider.emit(AuthStateEvent(user_id="alice"))
        pending = observer._pending

        observer.stop()
        await asyncio.gather(pending, return_exceptions=True)

        assert pending.cancelled()
