from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Dict, List, Optional

from src.medinote_mock.domain.models.audio_chunk import AudioChunkRecord
from src.medinote_mock.domain.models.note_template import NoteTemplate
from src.medinote_mock.domain.models.patient import Patient
from src.medinote_mock.domain.models.recording_session import RecordingSession
from src.medinote_mock.domain.models.user import User
from src.medinote_mock.infra.db.seed import seed_store

logger = logging.getLogger("store")


@dataclass
class PendingCompletion:
    """A scheduled mock-completion effect for one session.

    Holds the session object itself rather than its id so the effect still
    lands on the same record even if the id were changed after scheduling.
    """

    session_id: str
    session: RecordingSession
    handle: Optional[asyncio.TimerHandle] = None

    def cancel(self) -> None:
        if self.handle is not None:
            self.handle.cancel()


class InMemoryStore:
    """Process-local entity store owned by a single application instance.

    Collections are plain dicts keyed by id (insertion ordered, so listings
    come back in creation order). Every service reads and writes through
    ``lock``; handlers run on one event loop, but the lock keeps the store
    consistent if it is touched from a worker thread as well.
    """

    def __init__(self, *, seed: bool = True) -> None:
        self.lock = RLock()
        self.users: Dict[str, User] = {}
        self.patients: Dict[str, Patient] = {}
        self.templates: Dict[str, NoteTemplate] = {}
        self.sessions: Dict[str, RecordingSession] = {}
        # session id -> chunk number (as string) -> partial record
        self.audio_chunks: Dict[str, Dict[str, AudioChunkRecord]] = {}
        self._pending: Dict[str, List[PendingCompletion]] = {}
        self._closed = False
        if seed:
            seed_store(self)

    # Deferred completions

    def track_pending(self, pending: PendingCompletion) -> None:
        with self.lock:
            self._pending.setdefault(pending.session_id, []).append(pending)

    def release_pending(self, pending: PendingCompletion) -> None:
        with self.lock:
            entries = self._pending.get(pending.session_id)
            if not entries:
                return
            if pending in entries:
                entries.remove(pending)
            if not entries:
                del self._pending[pending.session_id]

    def pending_for(self, session_id: str) -> List[PendingCompletion]:
        with self.lock:
            return list(self._pending.get(session_id, []))

    def cancel_pending(self, session_id: str) -> int:
        """Cancel every scheduled completion for ``session_id``.

        Returns the number of effects that were cancelled.
        """

        with self.lock:
            entries = self._pending.pop(session_id, [])
        for pending in entries:
            pending.cancel()
        return len(entries)

    # Lifecycle

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Cancel all outstanding deferred effects. Safe to call twice."""

        with self.lock:
            session_ids = list(self._pending)
            self._closed = True
        cancelled = sum(self.cancel_pending(session_id) for session_id in session_ids)
        if cancelled:
            logger.info("Cancelled %d pending session completion(s) on shutdown", cancelled)

    def counts(self) -> Dict[str, int]:
        with self.lock:
            return {
                "users": len(self.users),
                "patients": len(self.patients),
                "sessions": len(self.sessions),
                "templates": len(self.templates),
                "audioChunks": len(self.audio_chunks),
            }
