from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from src.medinote_mock.config import settings
from src.medinote_mock.domain.models.patient import PatientMapEntry
from src.medinote_mock.domain.models.recording_session import (
    EnrichedSession,
    RecordingSession,
    SessionStatus,
    SessionSummary,
    TranscriptStatus,
)
from src.medinote_mock.errors import ValidationError
from src.medinote_mock.infra.db.inmemory import InMemoryStore, PendingCompletion
from src.medinote_mock.services.audit.service import audit_service
from src.medinote_mock.services.chunks.service import ChunkTracker, require_chunk_ref
from src.medinote_mock.time_utils import utc_now, to_iso_z, utc_today

logger = logging.getLogger("lifecycle")

NEW_SESSION_TITLE = "New Recording Session"
MOCK_TRANSCRIPT = "This is a mock transcript generated for demo purposes."
MOCK_SUMMARY = "Mock session summary."


class SessionService:
    """Creates recording sessions and drives them through their lifecycle.

    A session starts in ``recording``. When the client reports its final
    chunk the session moves to ``processing`` straight away and a mock
    completion is scheduled on the event loop; once the delay elapses the
    session becomes ``completed`` with placeholder transcript and summary.

    The scheduled completion always fires unless the owning store is
    closed or ``InMemoryStore.cancel_pending`` is called for the session.
    Repeated final-chunk notifications each schedule their own completion.
    """

    def __init__(
        self,
        store: InMemoryStore,
        chunk_tracker: Optional[ChunkTracker] = None,
        *,
        completion_delay: Optional[float] = None,
    ) -> None:
        self._store = store
        self._chunks = chunk_tracker or ChunkTracker(store)
        self._completion_delay = completion_delay

    @property
    def completion_delay(self) -> float:
        if self._completion_delay is not None:
            return self._completion_delay
        return settings.mock_transcription_delay_seconds

    # Creation

    def create_session(
        self,
        *,
        patient_id: Any,
        user_id: Any,
        patient_name: Any,
        status: Any = None,
        start_time: Any = None,
        template_id: Any = None,
    ) -> str:
        """Store a new session in ``recording`` and return its id.

        Only presence is checked; any JSON value is stored in string form.
        """

        if not patient_id or not user_id or not patient_name:
            raise ValidationError("patientId, userId, patientName required")

        now = utc_now()
        session = RecordingSession(
            id=f"session_{uuid4()}",
            user_id=str(user_id),
            patient_id=str(patient_id),
            patient_name=str(patient_name),
            session_title=NEW_SESSION_TITLE,
            session_summary=None,
            transcript_status=TranscriptStatus.PENDING.value,
            transcript=None,
            status=str(status) if status else SessionStatus.RECORDING.value,
            date=utc_today(now),
            start_time=str(start_time) if start_time else to_iso_z(now),
            end_time=None,
            duration=None,
            template_id=str(template_id) if template_id is not None else None,
            clinical_notes=[],
        )
        with self._store.lock:
            self._store.sessions[session.id] = session

        audit_service.log_event(
            action="create_session",
            resource_type="recording_session",
            resource_id=session.id,
            extra={"status": session.status, "has_template": template_id is not None},
        )
        return session.id

    def get_session(self, session_id: str) -> Optional[RecordingSession]:
        with self._store.lock:
            return self._store.sessions.get(session_id)

    # Lifecycle

    def notify_chunk_uploaded(
        self,
        *,
        session_id: Any,
        chunk_number: Any,
        is_last: Any = False,
    ) -> None:
        """Record a client's upload confirmation for one chunk.

        Only a notification flagged as the last chunk changes the session;
        any truthy ``is_last`` counts. An unknown session id is accepted and
        ignored.

        Must be called from a running event loop when ``is_last`` is set,
        since that is where the deferred completion is scheduled.
        """

        session_id, key = require_chunk_ref(session_id, chunk_number)
        self._chunks.mark_notified(session_id, key)

        audit_service.log_event(
            action="notify_chunk_uploaded",
            resource_type="audio_chunk",
            resource_id=f"{session_id}/{key}",
            extra={"is_last": bool(is_last)},
        )

        if not is_last:
            return

        with self._store.lock:
            session = self._store.sessions.get(session_id)
            if session is None:
                logger.info("Final chunk reported for unknown session %s; ignoring", session_id)
                return
            session.status = SessionStatus.PROCESSING.value
            session.end_time = to_iso_z(utc_now())

        self._schedule_completion(session)

    def _schedule_completion(self, session: RecordingSession) -> Optional[PendingCompletion]:
        if self._store.closed:
            logger.warning("Store is closed; not scheduling completion for %s", session.id)
            return None

        loop = asyncio.get_running_loop()
        pending = PendingCompletion(session_id=session.id, session=session)
        pending.handle = loop.call_later(self.completion_delay, self._complete, pending)
        self._store.track_pending(pending)
        logger.debug("Scheduled mock completion for %s in %.2fs", session.id, self.completion_delay)
        return pending

    def _complete(self, pending: PendingCompletion) -> None:
        self._store.release_pending(pending)
        session = pending.session
        with self._store.lock:
            session.status = SessionStatus.COMPLETED.value
            session.transcript_status = TranscriptStatus.COMPLETED.value
            session.transcript = MOCK_TRANSCRIPT
            session.session_summary = MOCK_SUMMARY

        audit_service.log_event(
            action="complete_session",
            resource_type="recording_session",
            resource_id=pending.session_id,
        )

    # Queries

    def list_for_patient(self, patient_id: str) -> List[SessionSummary]:
        with self._store.lock:
            return [
                SessionSummary(
                    id=s.id,
                    date=s.date,
                    session_title=s.session_title,
                    session_summary=s.session_summary,
                    start_time=s.start_time,
                )
                for s in self._store.sessions.values()
                if s.patient_id == patient_id
            ]

    def list_enriched_for_user(
        self, user_id: Optional[str]
    ) -> Tuple[List[EnrichedSession], Dict[str, PatientMapEntry]]:
        """Return a user's sessions joined with patient details.

        The patient map covers every known patient, not only those with a
        session for this user.
        """

        if not user_id:
            raise ValidationError("userId parameter required")

        with self._store.lock:
            patients = dict(self._store.patients)
            sessions = [s for s in self._store.sessions.values() if s.user_id == user_id]

            patient_map = {
                p.id: PatientMapEntry(name=p.name, pronouns=p.pronouns) for p in patients.values()
            }

            enriched: List[EnrichedSession] = []
            for s in sessions:
                p = patients.get(s.patient_id)
                data = s.model_dump()
                data.update(
                    patient_name=p.name if p else "Unknown Patient",
                    pronouns=p.pronouns if p else None,
                    email=p.email if p else None,
                    background=p.background if p else None,
                    medical_history=p.medical_history if p else None,
                    family_history=p.family_history if p else None,
                    social_history=p.social_history if p else None,
                    previous_treatment=p.previous_treatment if p else None,
                    patient_pronouns=p.pronouns if p else None,
                )
                enriched.append(EnrichedSession(**data))

        return enriched, patient_map
