"""
Session Store
=============
In-memory keyed cache of Dialogue Controllers, owned by the HTTP driver.

Lifetime:
    - Created on the 'start' action
    - Evicted SESSION_GRACE_SECONDS after the dialogue reaches 'finished'
    - Evicted SESSION_IDLE_TTL_SECONDS after its last access if never finished
    - Expiry is lazy: checked on every access and by purge_expired()

Concurrency:
    - Each entry carries an asyncio.Lock; the driver holds it for the whole
      turn so at most one request per session_id mutates the controller
    - Distinct sessions share nothing

In-memory only (no persistence). Restarting the process drops all sessions.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from intake.agents.dialogue_controller import DialogueController
from intake.core.config import SESSION_GRACE_SECONDS, SESSION_IDLE_TTL_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    controller: DialogueController
    expires_at: float
    finished: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class SessionStore:
    """
    Session id → DialogueController cache with TTL eviction.

    Usage:
        store = SessionStore()
        entry = store.create("abc")
        async with entry.lock:
            result = entry.controller.start("App crashes on save.")
            if result.next_step == "finished":
                store.mark_finished("abc")
    """

    def __init__(
        self,
        grace_seconds: float = SESSION_GRACE_SECONDS,
        idle_ttl_seconds: float = SESSION_IDLE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: Dict[str, SessionEntry] = {}
        self._grace_seconds = grace_seconds
        self._idle_ttl_seconds = idle_ttl_seconds
        self._clock = clock

    def create(self, session_id: str) -> SessionEntry:
        """Create (or replace) the session for session_id."""
        if session_id in self._entries:
            logger.debug("Replacing session %s", session_id)
        entry = SessionEntry(
            controller=DialogueController(session_id=session_id),
            expires_at=self._clock() + self._idle_ttl_seconds,
        )
        self._entries[session_id] = entry
        return entry

    def get(self, session_id: str) -> Optional[SessionEntry]:
        """
        Return the live entry for session_id, or None if absent / expired.

        Unfinished sessions have their idle deadline extended on access.
        """
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        now = self._clock()
        if now >= entry.expires_at:
            self._evict(session_id, "expired")
            return None
        if not entry.finished:
            entry.expires_at = now + self._idle_ttl_seconds
        return entry

    def mark_finished(self, session_id: str) -> None:
        """Schedule eviction of a finished session after the grace period."""
        entry = self._entries.get(session_id)
        if entry is None:
            return
        entry.finished = True
        entry.expires_at = self._clock() + self._grace_seconds
        logger.debug(
            "Session %s finished, evicting in %.0fs", session_id, self._grace_seconds
        )

    def remove(self, session_id: str) -> None:
        self._entries.pop(session_id, None)

    def purge_expired(self) -> int:
        """Evict every expired session. Returns the number evicted."""
        now = self._clock()
        expired = [sid for sid, e in self._entries.items() if now >= e.expires_at]
        for sid in expired:
            self._evict(sid, "expired")
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def _evict(self, session_id: str, reason: str) -> None:
        self._entries.pop(session_id, None)
        logger.info("Session %s evicted (%s)", session_id, reason)

    def __contains__(self, session_id: str) -> bool:
        return self.get(session_id) is not None

    def __len__(self) -> int:
        """Number of sessions held, including not-yet-purged expired ones."""
        return len(self._entries)
