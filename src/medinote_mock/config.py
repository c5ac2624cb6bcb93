from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_public_base_url() -> str:
    explicit = os.getenv("PUBLIC_BASE_URL")
    if explicit:
        return explicit.rstrip("/")
    return f"http://localhost:{os.getenv('PORT', '3001')}"


@dataclass
class Settings:
    """Centralized application settings.

    This keeps environment-variable handling in one place so other modules can
    depend on strongly-typed attributes instead of calling os.getenv
    directly.
    """

    # Bind address used when the mock API is started via ``run()``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    # Base URL advertised in presigned upload targets. Defaults to the local
    # listener so the frontend uploads straight back to this process.
    public_base_url: str = field(default_factory=_default_public_base_url)

    # Version string reported by /health and /api/docs.
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Directory where raw audio chunks are written.
    audio_upload_dir: Path = Path(os.getenv("AUDIO_UPLOAD_DIR", "uploads"))

    # Raw chunk uploads larger than this are rejected (in bytes).
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

    # Seconds between the final chunk notification and the mock transcript
    # becoming available.
    mock_transcription_delay_seconds: float = float(os.getenv("MOCK_TRANSCRIPTION_DELAY_SECONDS", "2.0"))

    # Identity every accepted token resolves to.
    demo_user_id: str = os.getenv("DEMO_USER_ID", "user_123")

    # CORS configuration: comma-separated origins. Default is "*" (allow all),
    # which is what frontend developers running on arbitrary ports expect.
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", os.getenv("CORS_ORIGIN", "*"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
