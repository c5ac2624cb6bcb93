from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field

from src.medinote_mock.api.deps import (
    get_audio_storage,
    get_chunk_tracker,
    get_session_service,
)
from src.medinote_mock.config import settings
from src.medinote_mock.domain.models.audio_chunk import PresignedUpload
from src.medinote_mock.errors import NotFoundError, PayloadTooLargeError
from src.medinote_mock.infra.storage.audio import AudioStorageBackend
from src.medinote_mock.security import get_current_user
from src.medinote_mock.services.audit.service import audit_service
from src.medinote_mock.services.chunks.service import (
    DEFAULT_MIME_TYPE,
    ChunkTracker,
    presigned_upload,
    require_chunk_ref,
)
from src.medinote_mock.services.sessions.service import SessionService

# Authenticated half of the chunked upload flow.
router = APIRouter(
    prefix="/api/v1",
    tags=["uploads"],
    dependencies=[Depends(get_current_user)],
)

# The presigned target itself is public, like a real signed storage URL.
public_router = APIRouter(prefix="/api", tags=["uploads"])


class PresignRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[Any] = Field(None, alias="sessionId")
    chunk_number: Optional[Any] = Field(None, alias="chunkNumber")
    mime_type: Optional[Any] = Field(None, alias="mimeType")


class NotifyChunkRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[Any] = Field(None, alias="sessionId")
    chunk_number: Optional[Any] = Field(None, alias="chunkNumber")
    is_last: Optional[Any] = Field(False, alias="isLast")


@router.post("/get-presigned-url", response_model=PresignedUpload)
async def get_presigned_url(
    payload: Optional[PresignRequest] = None,
    chunks: ChunkTracker = Depends(get_chunk_tracker),
) -> PresignedUpload:
    """Issue an upload target for one chunk and register the chunk."""

    payload = payload or PresignRequest()
    session_id, chunk_number = require_chunk_ref(payload.session_id, payload.chunk_number)

    target = presigned_upload(session_id, chunk_number)
    chunks.register(session_id, chunk_number, mime_type=payload.mime_type)
    return target


@router.post("/notify-chunk-uploaded")
async def notify_chunk_uploaded(
    payload: Optional[NotifyChunkRequest] = None,
    sessions: SessionService = Depends(get_session_service),
) -> dict:
    """Client confirmation that a chunk landed.

    Returns immediately; when ``isLast`` is set the session moves to
    ``processing`` now and to ``completed`` once the mock delay elapses.
    """

    payload = payload or NotifyChunkRequest()
    sessions.notify_chunk_uploaded(
        session_id=payload.session_id,
        chunk_number=payload.chunk_number,
        is_last=payload.is_last,
    )
    return {}


@public_router.put("/upload-chunk/{session_id}/{chunk_number}")
async def upload_chunk(
    session_id: str,
    chunk_number: str,
    request: Request,
    chunks: ChunkTracker = Depends(get_chunk_tracker),
    storage: AudioStorageBackend = Depends(get_audio_storage),
) -> Response:
    """Receive the raw bytes of one chunk at its presigned target."""

    content = await request.body()
    if len(content) > settings.max_upload_bytes:
        raise PayloadTooLargeError("Upload too large", details=f"Chunk exceeds {settings.max_upload_bytes} bytes")

    filepath = storage.save_chunk(session_id, chunk_number, content)
    chunks.mark_uploaded(session_id, chunk_number, filepath)

    audit_service.log_event(
        action="upload_chunk",
        resource_type="audio_chunk",
        resource_id=f"{session_id}/{chunk_number}",
        extra={"size_bytes": len(content)},
    )

    return Response(status_code=status.HTTP_200_OK)


@public_router.get("/audio/{session_id}/{filename}")
async def get_chunk_audio(
    session_id: str,
    filename: str,
    chunks: ChunkTracker = Depends(get_chunk_tracker),
    storage: AudioStorageBackend = Depends(get_audio_storage),
) -> FileResponse:
    """Serve a stored chunk at the ``publicUrl`` handed out with its target."""

    if not (filename.startswith("chunk_") and filename.endswith(".wav")):
        raise NotFoundError("Audio chunk not found")
    chunk_number = filename[len("chunk_") : -len(".wav")]

    path = storage.find_chunk(session_id, chunk_number)
    if path is None:
        raise NotFoundError("Audio chunk not found")

    record = chunks.get(session_id, chunk_number)
    media_type = (record.mime_type if record else None) or DEFAULT_MIME_TYPE
    return FileResponse(path, media_type=media_type)
