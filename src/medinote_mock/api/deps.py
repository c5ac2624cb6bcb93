"""FastAPI dependencies that hand request handlers their collaborators.

The store and the audio storage backend are owned by the application
instance (see ``create_app``) and reached through ``request.app.state``;
services are thin wrappers built per request around them.
"""

from __future__ import annotations

from fastapi import Depends, Request

from src.medinote_mock.infra.db.inmemory import InMemoryStore
from src.medinote_mock.infra.storage.audio import AudioStorageBackend
from src.medinote_mock.services.chunks.service import ChunkTracker
from src.medinote_mock.services.patients.service import PatientService
from src.medinote_mock.services.sessions.service import SessionService
from src.medinote_mock.services.templates.service import TemplateService
from src.medinote_mock.services.users.service import UserService


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_audio_storage(request: Request) -> AudioStorageBackend:
    return request.app.state.audio_storage


def get_chunk_tracker(store: InMemoryStore = Depends(get_store)) -> ChunkTracker:
    return ChunkTracker(store)


def get_session_service(
    store: InMemoryStore = Depends(get_store),
    chunk_tracker: ChunkTracker = Depends(get_chunk_tracker),
) -> SessionService:
    return SessionService(store, chunk_tracker)


def get_patient_service(store: InMemoryStore = Depends(get_store)) -> PatientService:
    return PatientService(store)


def get_template_service(store: InMemoryStore = Depends(get_store)) -> TemplateService:
    return TemplateService(store)


def get_user_service(store: InMemoryStore = Depends(get_store)) -> UserService:
    return UserService(store)
