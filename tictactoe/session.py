"""Session management: one GameState per browser session, expired when idle."""

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from dataclasses import dataclass, field

from tictactoe.game import GameState

DEFAULT_SESSION_TTL = 3600.0  # seconds of inactivity before a session is dropped
DEFAULT_MAX_SESSIONS = 10000

logger = logging.getLogger(__name__)


@dataclass
class Session:
    session_id: str
    game: GameState = field(default_factory=GameState)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    last_seen: float = field(default_factory=time.monotonic)

    def touch(self) -> None:
        self.last_seen = time.monotonic()


class SessionManager:
    def __init__(self, ttl: float = DEFAULT_SESSION_TTL, max_sessions: int = DEFAULT_MAX_SESSIONS):
        self.ttl = ttl
        self.max_sessions = max_sessions
        self.sessions: dict[str, Session] = {}

    def _generate_session_id(self) -> str:
        while True:
            session_id = secrets.token_urlsafe(16)
            if session_id not in self.sessions:
                return session_id

    def _is_expired(self, session: Session, now: float) -> bool:
        # A session mid-request is never dropped.
        return now - session.last_seen > self.ttl and not session.lock.locked()

    def evict_expired(self) -> int:
        """Drop sessions idle for longer than the TTL. Return how many were dropped."""
        now = time.monotonic()
        expired = [sid for sid, s in self.sessions.items() if self._is_expired(s, now)]
        for session_id in expired:
            del self.sessions[session_id]
        if expired:
            logger.info("Evicted %d idle sessions", len(expired))
        return len(expired)

    def _make_room(self) -> None:
        """Evict the least recently seen idle sessions until one more fits."""
        idle = sorted(
            (s for s in self.sessions.values() if not s.lock.locked()),
            key=lambda s: s.last_seen,
        )
        while len(self.sessions) >= self.max_sessions and idle:
            oldest = idle.pop(0)
            del self.sessions[oldest.session_id]
            logger.warning("Session limit reached; dropped session %s", oldest.session_id)

    def get_or_create(self, session_id: str | None) -> Session:
        """Return the session for session_id, creating a fresh one if it is unknown."""
        session = self.get(session_id)
        if session is not None:
            return session

        self.evict_expired()
        if len(self.sessions) >= self.max_sessions:
            self._make_room()

        session = Session(session_id=self._generate_session_id())
        self.sessions[session.session_id] = session
        logger.info("New GameState created for session %s", session.session_id)
        return session

    def get(self, session_id: str | None) -> Session | None:
        if session_id is None:
            return None
        session = self.sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session, time.monotonic()):
            del self.sessions[session_id]
            return None
        session.touch()
        return session


session_manager = SessionManager()
