"""Tests for session lifecycle: creation, lookup, per-session locking."""

import asyncio

import pytest

from tictactoe.game import GameStage
from tictactoe.session import SessionManager


class TestSessionCreation:
    def test_create_session(self):
        manager = SessionManager()
        session = manager.get_or_create(None)

        assert session.session_id in manager.sessions
        assert session.game.stage is GameStage.NOT_STARTED

    def test_existing_session_is_reused(self):
        manager = SessionManager()
        session = manager.get_or_create(None)
        session.game.start_new_game()

        again = manager.get_or_create(session.session_id)
        assert again is session
        assert again.game.stage is GameStage.IN_PROGRESS

    def test_unknown_session_id_gets_fresh_session(self):
        manager = SessionManager()
        session = manager.get_or_create("stale-cookie")
        assert session.session_id != "stale-cookie"
        assert len(manager.sessions) == 1

    def test_sessions_do_not_share_games(self):
        manager = SessionManager()
        s1, s2 = manager.get_or_create(None), manager.get_or_create(None)
        assert s1.session_id != s2.session_id
        assert s1.game is not s2.game
        assert s1.game.board is not s2.game.board


class TestSessionLookup:
    def test_get_missing(self):
        manager = SessionManager()
        assert manager.get(None) is None
        assert manager.get("nope") is None

    def test_get_existing(self):
        manager = SessionManager()
        session = manager.get_or_create(None)
        assert manager.get(session.session_id) is session


class TestSessionLock:
    @pytest.mark.asyncio
    async def test_requests_for_same_session_are_serialized(self):
        manager = SessionManager()
        session = manager.get_or_create(None)
        order = []

        async def request(name):
            async with session.lock:
                order.append(f"{name}-start")
                await asyncio.sleep(0.01)
                order.append(f"{name}-end")

        await asyncio.gather(request("a"), request("b"))
        assert order == ["a-start", "a-end", "b-start", "b-end"]


class TestSessionExpiry:
    def test_idle_session_is_evicted(self):
        manager = SessionManager(ttl=60)
        stale = manager.get_or_create(None)
        fresh = manager.get_or_create(None)
        stale.last_seen -= 120

        assert manager.evict_expired() == 1
        assert stale.session_id not in manager.sessions
        assert fresh.session_id in manager.sessions

    def test_expired_session_is_not_returned(self):
        manager = SessionManager(ttl=60)
        session = manager.get_or_create(None)
        session.last_seen -= 120

        assert manager.get(session.session_id) is None
        replacement = manager.get_or_create(session.session_id)
        assert replacement is not session
        assert list(manager.sessions) == [replacement.session_id]

    def test_lookup_refreshes_last_seen(self):
        manager = SessionManager(ttl=60)
        session = manager.get_or_create(None)
        session.last_seen -= 50

        assert manager.get(session.session_id) is session
        session.last_seen -= 50
        assert manager.get(session.session_id) is session

    def test_new_sessions_sweep_expired_ones(self):
        manager = SessionManager(ttl=60)
        old = [manager.get_or_create(None) for _ in range(5)]
        for session in old:
            session.last_seen -= 120

        manager.get_or_create(None)
        assert len(manager.sessions) == 1

    def test_session_limit_drops_least_recently_seen(self):
        manager = SessionManager(max_sessions=3)
        first, second, third = (manager.get_or_create(None) for _ in range(3))
        first.last_seen -= 10
        second.last_seen -= 20

        newest = manager.get_or_create(None)
        assert len(manager.sessions) == 3
        assert second.session_id not in manager.sessions
        assert {first.session_id, third.session_id, newest.session_id} == set(manager.sessions)

    @pytest.mark.asyncio
    async def test_busy_session_is_kept(self):
        manager = SessionManager(ttl=60)
        session = manager.get_or_create(None)
        session.last_seen -= 120

        async with session.lock:
            assert manager.evict_expired() == 0
        assert manager.evict_expired() == 1
