from __future__ import annotations

from typing import Any, List, Optional
from uuid import uuid4

from src.medinote_mock.domain.models.patient import Patient, PatientSummary
from src.medinote_mock.errors import NotFoundError, ValidationError
from src.medinote_mock.infra.db.inmemory import InMemoryStore
from src.medinote_mock.services.audit.service import audit_service


class PatientService:
    """Patient listing, lookup and creation over the in-memory store."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_for_user(self, user_id: Optional[str]) -> List[PatientSummary]:
        if not user_id:
            raise ValidationError("userId parameter required")
        with self._store.lock:
            return [
                PatientSummary(id=p.id, name=p.name)
                for p in self._store.patients.values()
                if p.user_id == user_id
            ]

    def add_patient(self, *, name: Any, user_id: Any) -> Patient:
        if not name or not user_id:
            raise ValidationError("name and userId are required")

        patient = Patient(id=f"patient_{uuid4()}", name=str(name), user_id=str(user_id))
        with self._store.lock:
            self._store.patients[patient.id] = patient

        audit_service.log_event(
            action="add_patient",
            resource_type="patient",
            resource_id=patient.id,
        )
        return patient

    def get_patient(self, patient_id: str) -> Patient:
        with self._store.lock:
            patient = self._store.patients.get(patient_id)
        if patient is None:
            raise NotFoundError("Patient not found")
        return patient
