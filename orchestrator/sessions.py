"""In-memory session store for generation and simplification sessions."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from orchestrator.exceptions import SessionNotFoundError
from orchestrator.state import SessionState

logger = logging.getLogger("justiceally.orchestrator.sessions")


@dataclass
class Session:
    """One user's state plus the bookkeeping for its in-flight request."""

    session_id: str
    state: SessionState = field(default_factory=SessionState)
    pending: asyncio.Task | None = None
    cancel_requested: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    last_active: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        self.last_active = datetime.now()


class SessionStore:
    """Process-wide session registry with TTL eviction.

    Nothing is persisted; a session lives until it is closed, idles past the
    TTL, or is evicted as the oldest when the store is full.
    """

    def __init__(self, ttl_minutes: int = 60, max_sessions: int = 1000) -> None:
        self.ttl = timedelta(minutes=ttl_minutes)
        self.max_sessions = max_sessions
        self._sessions: dict[str, Session] = {}

    def create(self) -> Session:
        """Create a new session, evicting expired ones first."""
        self._evict_expired()
        if len(self._sessions) >= self.max_sessions:
            oldest_id = min(self._sessions, key=lambda k: self._sessions[k].last_active)
            self._drop(oldest_id)
            logger.info(f"Session store full, evicted {oldest_id}")

        sid = uuid.uuid4().hex[:12]
        session = Session(session_id=sid)
        self._sessions[sid] = session
        return session

    def get(self, session_id: str) -> Session:
        """Look up a session by ID.

        Raises:
            SessionNotFoundError: If the session is unknown or has expired.
        """
        self._evict_expired()
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.touch()
        return session

    def delete(self, session_id: str) -> None:
        if session_id not in self._sessions:
            raise SessionNotFoundError(session_id)
        self._drop(session_id)

    def _drop(self, session_id: str) -> None:
        session = self._sessions.pop(session_id)
        if session.pending is not None and not session.pending.done():
            session.cancel_requested = True
            session.pending.cancel()

    def _evict_expired(self) -> int:
        """Remove idle sessions past the TTL. Returns count evicted."""
        now = datetime.now()
        expired = [
            sid for sid, s in self._sessions.items()
            if now - s.last_active > self.ttl and not s.state.busy
        ]
        for sid in expired:
            self._drop(sid)
        if expired:
            logger.debug(f"Evicted {len(expired)} expired sessions")
        return len(expired)

    @property
    def count(self) -> int:
        """Number of active sessions."""
        return len(self._sessions)
