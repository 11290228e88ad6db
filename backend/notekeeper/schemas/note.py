"""Pydantic schemas for notes."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints

from .response import OKResponse

NoteTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class NoteWrite(BaseModel):
    """Body of create and update requests."""

    title: NoteTitle
    content: str = ""


class NoteRead(BaseModel):
    id: int
    user_id: int = Field(validation_alias=AliasChoices("owner_id", "user_id"))
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteResponse(OKResponse):
    note: NoteRead


class NoteListResponse(OKResponse):
    notes: list[NoteRead]
