from __future__ import annotations

from fastapi import APIRouter, Depends

from src.medinote_mock.api.deps import get_chunk_tracker, get_store
from src.medinote_mock.infra.db.inmemory import InMemoryStore
from src.medinote_mock.services.chunks.service import ChunkTracker

# Unauthenticated introspection for frontend developers.
router = APIRouter(prefix="/api/debug", tags=["debug"])


@router.get("/all-data")
async def all_data(store: InMemoryStore = Depends(get_store)) -> dict:
    """Entity counts; ``audioChunks`` counts sessions with chunk records."""
    return store.counts()


@router.get("/chunks/{session_id}")
async def session_chunks(session_id: str, chunks: ChunkTracker = Depends(get_chunk_tracker)) -> dict:
    return chunks.chunks_for(session_id)
