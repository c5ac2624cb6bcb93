from __future__ import annotations

from typing import List, Optional

from src.medinote_mock.domain.models.note_template import NoteTemplateSummary
from src.medinote_mock.errors import ValidationError
from src.medinote_mock.infra.db.inmemory import InMemoryStore


class TemplateService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_for_user(self, user_id: Optional[str]) -> List[NoteTemplateSummary]:
        """Return the note templates available to ``user_id``."""

        if not user_id:
            raise ValidationError("userId parameter required")
        with self._store.lock:
            return [
                NoteTemplateSummary(id=t.id, title=t.title, type=t.type)
                for t in self._store.templates.values()
                if t.user_id == user_id
            ]
