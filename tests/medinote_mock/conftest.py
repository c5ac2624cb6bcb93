import pytest
from httpx import ASGITransport, AsyncClient

from src.medinote_mock.config import settings
from src.medinote_mock.infra.db.inmemory import InMemoryStore
from src.medinote_mock.infra.storage.audio import LocalAudioStorageBackend
from src.medinote_mock.main import create_app

AUTH_HEADERS = {"Authorization": "Bearer demo_frontend_token"}

# Short enough to keep the suite fast, long enough to observe "processing".
FAST_COMPLETION_DELAY = 0.2


@pytest.fixture
def store():
    store = InMemoryStore()
    yield store
    store.close()


@pytest.fixture
def audio_storage(tmp_path):
    return LocalAudioStorageBackend(tmp_path / "uploads")


@pytest.fixture
def app(store, audio_storage):
    return create_app(store=store, audio_storage=audio_storage)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fast_completion(monkeypatch):
    monkeypatch.setattr(settings, "mock_transcription_delay_seconds", FAST_COMPLETION_DELAY)
    return FAST_COMPLETION_DELAY


@pytest.fixture
def auth_headers():
    return dict(AUTH_HEADERS)
