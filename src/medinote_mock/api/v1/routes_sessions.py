from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from src.medinote_mock.api.deps import get_session_service
from src.medinote_mock.domain.models.patient import PatientMapEntry
from src.medinote_mock.domain.models.recording_session import EnrichedSession, SessionSummary
from src.medinote_mock.security import get_current_user
from src.medinote_mock.services.sessions.service import SessionService

router = APIRouter(
    prefix="/api/v1",
    tags=["sessions"],
    dependencies=[Depends(get_current_user)],
)


class CreateSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patient_id: Optional[Any] = Field(None, alias="patientId")
    user_id: Optional[Any] = Field(None, alias="userId")
    patient_name: Optional[Any] = Field(None, alias="patientName")
    status: Optional[Any] = None
    start_time: Optional[Any] = Field(None, alias="startTime")
    template_id: Optional[Any] = Field(None, alias="templateId")


class CreateSessionResponse(BaseModel):
    id: str


class PatientSessionsResponse(BaseModel):
    sessions: List[SessionSummary]


class AllSessionsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sessions: List[EnrichedSession]
    patient_map: Dict[str, PatientMapEntry] = Field(alias="patientMap")


@router.post("/upload-session", response_model=CreateSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: Optional[CreateSessionRequest] = None,
    sessions: SessionService = Depends(get_session_service),
) -> CreateSessionResponse:
    """Start a new recording session; returns only its id."""

    payload = payload or CreateSessionRequest()
    session_id = sessions.create_session(
        patient_id=payload.patient_id,
        user_id=payload.user_id,
        patient_name=payload.patient_name,
        status=payload.status,
        start_time=payload.start_time,
        template_id=payload.template_id,
    )
    return CreateSessionResponse(id=session_id)


@router.get("/fetch-session-by-patient/{patient_id}", response_model=PatientSessionsResponse)
async def fetch_sessions_by_patient(
    patient_id: str,
    sessions: SessionService = Depends(get_session_service),
) -> PatientSessionsResponse:
    return PatientSessionsResponse(sessions=sessions.list_for_patient(patient_id))


@router.get("/all-session", response_model=AllSessionsResponse)
async def list_all_sessions(
    user_id: Optional[Any] = Query(None, alias="userId"),
    sessions: SessionService = Depends(get_session_service),
) -> AllSessionsResponse:
    enriched, patient_map = sessions.list_enriched_for_user(user_id)
    return AllSessionsResponse(sessions=enriched, patient_map=patient_map)
