from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DocumentRef(BaseModel):
    filename: str = Field(min_length=1, max_length=255)
    path: str = Field(min_length=1, max_length=512)
    uploaded_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class UploadResult(BaseModel):
    message: str = "Files uploaded successfully"
    documents: list[DocumentRef]
