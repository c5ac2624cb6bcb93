from fastapi import APIRouter

from src.medinote_mock.config import settings
from src.medinote_mock.time_utils import utc_now_iso

router = APIRouter(prefix="", tags=["system"])

API_TITLE = "MediNote Mock API"

ENDPOINTS = [
    "GET /health",
    "GET /api/v1/patients",
    "GET /api/users/asd3fd2faec",
    "POST /api/v1/add-patient-ext",
    "GET /api/v1/patient-details/:patientId",
    "GET /api/v1/fetch-session-by-patient/:patientId",
    "GET /api/v1/all-session",
    "GET /api/v1/fetch-default-template-ext",
    "POST /api/v1/upload-session",
    "POST /api/v1/get-presigned-url",
    "PUT /api/upload-chunk/:sessionId/:chunkNumber",
    "GET /api/audio/:sessionId/chunk_:chunkNumber.wav",
    "POST /api/v1/notify-chunk-uploaded",
    "GET /api/debug/all-data",
    "GET /api/debug/chunks/:sessionId",
]


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe; always public."""
    return {"status": "healthy", "timestamp": utc_now_iso(), "version": settings.api_version}


@router.get("/api/docs")
async def api_docs() -> dict:
    """Plain endpoint listing for frontend developers."""
    return {"title": API_TITLE, "version": settings.api_version, "endpoints": ENDPOINTS}
