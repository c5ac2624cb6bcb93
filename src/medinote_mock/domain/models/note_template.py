from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NoteTemplate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    # "default" or "predefined"
    type: str
    user_id: str = Field(alias="userId")


class NoteTemplateSummary(BaseModel):
    id: str
    title: str
    type: str
