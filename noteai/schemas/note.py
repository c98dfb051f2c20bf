from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class NoteCreate(BaseModel):
    # Length rules are enforced by the content validator so each entry point
    # can report its own message.
    title: str = ""
    content: str = ""


class NoteUpdate(BaseModel):
    title: str = ""
    content: str = ""


class NoteContentUpdate(BaseModel):
    content: str = ""


class Note(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


class NoteSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    model: str
    content: str
    created_at: datetime


class NoteDetail(Note):
    tags: List[str] = Field(default_factory=list)
    summary: Optional[NoteSummary] = None


class NotesListResponse(BaseModel):
    notes: List[Note]
    total_count: int
    current_page: int
    total_pages: int
    page_size: int


class NoteCreateResponse(BaseModel):
    note_id: str
