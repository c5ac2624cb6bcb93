from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    RECORDING = "recording"
    PROCESSING = "processing"
    COMPLETED = "completed"


class TranscriptStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class RecordingSession(BaseModel):
    """One clinical recording/transcription episode for a patient.

    ``status`` is kept as a plain string: clients may start a session in any
    status they like, so the lifecycle is advisory rather than validated.
    ``end_time`` stays ``None`` until the session leaves the recording state.
    """

    id: str
    user_id: str
    patient_id: str
    patient_name: Optional[str] = None
    session_title: Optional[str] = None
    session_summary: Optional[str] = None
    transcript_status: Optional[str] = None
    transcript: Optional[str] = None
    status: str
    date: str
    start_time: str
    end_time: Optional[str] = None
    duration: Optional[str] = None
    template_id: Optional[str] = None
    clinical_notes: List[Any] = Field(default_factory=list)


class SessionSummary(BaseModel):
    """Compact listing entry used when browsing a patient's history."""

    id: str
    date: str
    session_title: Optional[str] = None
    session_summary: Optional[str] = None
    start_time: str


class EnrichedSession(RecordingSession):
    """A session joined with the demographic fields of its patient."""

    pronouns: Optional[str] = None
    email: Optional[str] = None
    background: Optional[str] = None
    medical_history: Optional[str] = None
    family_history: Optional[str] = None
    social_history: Optional[str] = None
    previous_treatment: Optional[str] = None
    patient_pronouns: Optional[str] = None
