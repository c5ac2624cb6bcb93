from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Patient(BaseModel):
    """Full patient record as returned by the patient-details endpoint.

    Everything beyond identity and ownership is optional; patients created
    through the "add patient" flow start with only a name.
    """

    id: str
    name: str
    user_id: str
    pronouns: Optional[str] = None
    email: Optional[str] = None
    background: Optional[str] = None
    medical_history: Optional[str] = None
    family_history: Optional[str] = None
    social_history: Optional[str] = None
    previous_treatment: Optional[str] = None


class PatientSummary(BaseModel):
    id: str
    name: str


class PatientMapEntry(BaseModel):
    name: str
    pronouns: Optional[str] = None
