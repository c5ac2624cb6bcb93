from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AudioChunkRecord(BaseModel):
    """Partial status record for one (session, chunk number) pair.

    Registration, raw upload and client notification each fill in their own
    fields; a field left as ``None`` simply means that call has not happened
    yet and is omitted from the serialized form.
    """

    model_config = ConfigDict(populate_by_name=True)

    uploaded: Optional[bool] = None
    notified: Optional[bool] = None
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    timestamp: Optional[str] = None
    filepath: Optional[str] = None

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class PresignedUpload(BaseModel):
    """Upload target handed to the client before it sends a chunk."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    gcs_path: str = Field(alias="gcsPath")
    public_url: str = Field(alias="publicUrl")
