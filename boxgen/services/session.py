"""Per-UI-session generation where newer input supersedes older passes.

CSG work runs in a worker thread, one pass at a time per session. Each
submission takes a ticket; a submission that is already superseded when its
turn comes is skipped, and a pass that finishes after a newer ticket was
issued is reported stale. Sessions keep only the ticket counter, never a
solid.
"""
from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict

from ..config import MAX_SESSIONS
from .engine import CsgEngine
from .generator import GenerationResult, generate
from .parameters import ParameterSet

log = logging.getLogger(__name__)


class GenerationSession:
    def __init__(self, engine: CsgEngine | None = None):
        self.engine = engine
        self._ticket = 0
        self._lock = asyncio.Lock()

    @property
    def ticket(self) -> int:
        return self._ticket

    async def submit(self, params: ParameterSet) -> tuple[GenerationResult | None, bool]:
        """Run one pass. Returns (result, stale); result is None when skipped."""
        self._ticket += 1
        ticket = self._ticket
        async with self._lock:
            if ticket != self._ticket:
                log.info("Skipping superseded generation %d (latest %d)", ticket, self._ticket)
                return None, True
            result = await asyncio.to_thread(generate, params, self.engine)
        if ticket != self._ticket:
            log.info("Discarding stale generation %d (latest %d)", ticket, self._ticket)
            return result, True
        return result, False


class SessionRegistry:
    """Bounded map of session id -> GenerationSession, oldest evicted first."""

    def __init__(self, max_sessions: int = MAX_SESSIONS, engine: CsgEngine | None = None):
        self.max_sessions = max_sessions
        self.engine = engine
        self._sessions: OrderedDict[str, GenerationSession] = OrderedDict()

    def get(self, session_id: str) -> GenerationSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = GenerationSession(self.engine)
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                dropped, _ = self._sessions.popitem(last=False)
                log.debug("Evicted session %s", dropped)
        else:
            self._sessions.move_to_end(session_id)
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
