from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.medinote_mock.api.deps import get_template_service
from src.medinote_mock.domain.models.note_template import NoteTemplateSummary
from src.medinote_mock.security import get_current_user
from src.medinote_mock.services.templates.service import TemplateService


router = APIRouter(
    prefix="/api/v1",
    tags=["templates"],
    dependencies=[Depends(get_current_user)],
)


class TemplateListResponse(BaseModel):
    success: bool = True
    data: List[NoteTemplateSummary]


@router.get("/fetch-default-template-ext", response_model=TemplateListResponse)
async def fetch_default_templates(
    user_id: Optional[str] = Query(None, alias="userId"),
    templates: TemplateService = Depends(get_template_service),
) -> TemplateListResponse:
    return TemplateListResponse(success=True, data=templates.list_for_user(user_id))
