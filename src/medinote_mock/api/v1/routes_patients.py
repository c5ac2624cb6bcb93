from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.medinote_mock.api.deps import get_patient_service
from src.medinote_mock.domain.models.patient import Patient, PatientSummary
from src.medinote_mock.security import get_current_user
from src.medinote_mock.services.patients.service import PatientService


router = APIRouter(
    prefix="/api/v1",
    tags=["patients"],
    dependencies=[Depends(get_current_user)],
)


class PatientListResponse(BaseModel):
    patients: List[PatientSummary]


class AddPatientRequest(BaseModel):
    name: Optional[Any] = None
    user_id: Optional[Any] = Field(None, alias="userId")


class AddPatientResponse(BaseModel):
    patient: Patient


@router.get("/patients", response_model=PatientListResponse)
async def list_patients(
    user_id: Optional[str] = Query(None, alias="userId"),
    patients: PatientService = Depends(get_patient_service),
) -> PatientListResponse:
    return PatientListResponse(patients=patients.list_for_user(user_id))


@router.post("/add-patient-ext", response_model=AddPatientResponse, status_code=status.HTTP_201_CREATED)
async def add_patient(
    payload: Optional[AddPatientRequest] = None,
    patients: PatientService = Depends(get_patient_service),
) -> AddPatientResponse:
    payload = payload or AddPatientRequest()
    patient = patients.add_patient(name=payload.name, user_id=payload.user_id)
    return AddPatientResponse(patient=patient)


@router.get("/patient-details/{patient_id}", response_model=Patient)
async def get_patient_details(
    patient_id: str,
    patients: PatientService = Depends(get_patient_service),
) -> Patient:
    return patients.get_patient(patient_id)
