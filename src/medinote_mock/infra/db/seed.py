from __future__ import annotations

from typing import TYPE_CHECKING

from src.medinote_mock.domain.models.note_template import NoteTemplate
from src.medinote_mock.domain.models.patient import Patient
from src.medinote_mock.domain.models.recording_session import RecordingSession
from src.medinote_mock.domain.models.user import User

if TYPE_CHECKING:
    from src.medinote_mock.infra.db.inmemory import InMemoryStore


def seed_store(store: "InMemoryStore") -> None:
    """Load the fixture data the frontend team develops against.

    The ids are stable so UI fixtures and manual test scripts can refer to
    them directly (``user_123``, ``patient_123``, ``session_123``...).
    """

    for user in (
        User(id="user_123", email="john.doe@example.com", name="John Doe"),
        User(id="user_456", email="jane.smith@example.com", name="Jane Smith"),
    ):
        store.users[user.id] = user

    for patient in (
        Patient(
            id="patient_123",
            name="Alice Johnson",
            user_id="user_123",
            pronouns="she/her",
            email="alice.johnson@example.com",
            background="Regular patient",
            medical_history="Type 2 diabetes",
            family_history="Diabetes",
            social_history="Active",
            previous_treatment="Metformin",
        ),
        Patient(
            id="patient_456",
            name="Bob Wilson",
            user_id="user_123",
            pronouns="he/him",
            email="bob.wilson@example.com",
            background="New patient",
            medical_history="Allergies",
            family_history="None",
            social_history="Active",
            previous_treatment="Antihistamines",
        ),
    ):
        store.patients[patient.id] = patient

    for template in (
        NoteTemplate(id="template_123", title="New Patient Visit", type="default", user_id="user_123"),
        NoteTemplate(id="template_456", title="Follow-up Visit", type="predefined", user_id="user_123"),
    ):
        store.templates[template.id] = template

    session = RecordingSession(
        id="session_123",
        user_id="user_123",
        patient_id="patient_123",
        patient_name="Alice Johnson",
        session_title="Diabetes Follow-up",
        session_summary="Discussed medication adjustments",
        transcript_status="completed",
        transcript="Doctor: ... Patient: ...",
        status="completed",
        date="2024-01-15",
        start_time="2024-01-15T10:00:00Z",
        end_time="2024-01-15T10:30:00Z",
        duration="30 minutes",
        template_id="template_456",
        clinical_notes=[],
    )
    store.sessions[session.id] = session
