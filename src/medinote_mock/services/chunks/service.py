from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from src.medinote_mock.config import settings
from src.medinote_mock.domain.models.audio_chunk import AudioChunkRecord, PresignedUpload
from src.medinote_mock.errors import ValidationError
from src.medinote_mock.infra.db.inmemory import InMemoryStore
from src.medinote_mock.services.audit.service import audit_service
from src.medinote_mock.time_utils import utc_now_iso

ChunkNumber = Union[int, float, str]

DEFAULT_MIME_TYPE = "audio/wav"


def chunk_key(chunk_number: ChunkNumber) -> str:
    """Chunk numbers arrive as JSON numbers or path strings; key by string.

    Integral floats collapse to their integer form so ``1.0`` and ``"1"``
    address the same record.
    """

    if isinstance(chunk_number, float) and chunk_number.is_integer():
        chunk_number = int(chunk_number)
    return str(chunk_number)


def require_chunk_ref(session_id: Any, chunk_number: Any) -> Tuple[str, str]:
    """Reject a missing session id or chunk number; return both as keys.

    Values of any other JSON type are accepted as they are.
    """

    # chunk 0 is a valid chunk, so only a missing value is rejected
    if not session_id or chunk_number is None:
        raise ValidationError("sessionId and chunkNumber required")
    return str(session_id), chunk_key(chunk_number)


def presigned_upload(session_id: str, chunk_number: ChunkNumber, base_url: Optional[str] = None) -> PresignedUpload:
    """Build the same-host upload target for one chunk."""

    base = (base_url or settings.public_base_url).rstrip("/")
    key = chunk_key(chunk_number)
    return PresignedUpload(
        url=f"{base}/api/upload-chunk/{session_id}/{key}",
        gcs_path=f"sessions/{session_id}/chunk_{key}.wav",
        public_url=f"{base}/api/audio/{session_id}/chunk_{key}.wav",
    )


class ChunkTracker:
    """Records what is known about each (session, chunk) pair.

    Three unrelated calls report on a chunk: registration (a presigned URL
    was issued), upload (bytes were stored) and notification (the client
    says the transfer finished). They may arrive in any order or repeat.
    Each one creates the record if needed and sets only its own fields.

    Nothing checks that a chunk was uploaded before it is notified; the
    tracker records what clients assert.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _record(self, session_id: str, chunk_number: ChunkNumber) -> AudioChunkRecord:
        # Caller holds the store lock.
        chunks = self._store.audio_chunks.setdefault(session_id, {})
        key = chunk_key(chunk_number)
        record = chunks.get(key)
        if record is None:
            record = AudioChunkRecord()
            chunks[key] = record
        return record

    def register(
        self,
        session_id: str,
        chunk_number: ChunkNumber,
        mime_type: Any = None,
    ) -> AudioChunkRecord:
        with self._store.lock:
            record = self._record(session_id, chunk_number)
            if record.uploaded is None:
                record.uploaded = False
            record.mime_type = str(mime_type) if mime_type else DEFAULT_MIME_TYPE
            record.timestamp = utc_now_iso()

        audit_service.log_event(
            action="register_chunk",
            resource_type="audio_chunk",
            resource_id=f"{session_id}/{chunk_key(chunk_number)}",
            extra={"mime_type": record.mime_type},
        )
        return record

    def mark_uploaded(self, session_id: str, chunk_number: ChunkNumber, filepath: str) -> AudioChunkRecord:
        with self._store.lock:
            record = self._record(session_id, chunk_number)
            record.uploaded = True
            record.filepath = filepath
        return record

    def mark_notified(self, session_id: str, chunk_number: ChunkNumber) -> AudioChunkRecord:
        with self._store.lock:
            record = self._record(session_id, chunk_number)
            record.notified = True
        return record

    def get(self, session_id: str, chunk_number: ChunkNumber) -> Optional[AudioChunkRecord]:
        with self._store.lock:
            return self._store.audio_chunks.get(session_id, {}).get(chunk_key(chunk_number))

    def chunks_for(self, session_id: str) -> Dict[str, dict]:
        """Serialized chunk map for a session; empty if nothing is known."""

        with self._store.lock:
            chunks = self._store.audio_chunks.get(session_id, {})
            return {key: record.to_wire() for key, record in chunks.items()}

    def session_count(self) -> int:
        with self._store.lock:
            return len(self._store.audio_chunks)
