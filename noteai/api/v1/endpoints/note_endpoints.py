from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from noteai.api.deps import get_db, get_current_user, get_note_service
from noteai.common.constants import NoteSort
from noteai.schemas.auth import CurrentUser
from noteai.schemas.note import NoteCreate, NoteUpdate, NoteContentUpdate
from noteai.services.note_service import NoteService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_new_note(
    note_data: NoteCreate,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Create a new note.

    - **title**: 1-200 characters
    - **content**: 1-10,000 characters
    """
    return note_service.create_note(
        db=db,
        current_user=current_user,
        title=note_data.title,
        content=note_data.content,
    ).to_response()


@router.get("")
async def list_notes(
    page: int = Query(1, description="Page number, values below 1 are treated as 1"),
    sort: str = Query(NoteSort.DEFAULT, description="newest, oldest, title-asc, title-desc or updated"),
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Get the current user's notes, 20 per page.
    """
    return note_service.get_notes(db=db, current_user=current_user, page=page, sort_by=sort).to_response()


@router.get("/{note_id}")
async def get_note(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Get a single note by ID, with its tags and summary.
    """
    return note_service.get_note_by_id(db=db, current_user=current_user, note_id=note_id).to_response()


@router.put("/{note_id}")
async def update_existing_note(
    note_id: str,
    update_data: NoteUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Update a note's title (max 100 characters) and content.
    """
    return note_service.update_note(
        db=db,
        current_user=current_user,
        note_id=note_id,
        title=update_data.title,
        content=update_data.content,
    ).to_response()


@router.patch("/{note_id}/content")
async def update_note_content(
    note_id: str,
    update_data: NoteContentUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Update only the content of a note.
    """
    return note_service.update_note_content(
        db=db,
        current_user=current_user,
        note_id=note_id,
        content=update_data.content,
    ).to_response()


@router.delete("/{note_id}", status_code=status.HTTP_200_OK)
async def delete_existing_note(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Delete a note permanently, together with its tags and summary.
    """
    return note_service.delete_note(db=db, current_user=current_user, note_id=note_id).to_response()


@router.post("/{note_id}/summary")
async def generate_note_summary(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Generate an AI summary of the note and store it.
    """
    result = await note_service.generate_summary_for_note(db=db, current_user=current_user, note_id=note_id)
    return result.to_response()


@router.post("/{note_id}/tags")
async def generate_note_tags(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Generate up to 6 AI tags for the note and store them.
    """
    result = await note_service.generate_tags_for_note(db=db, current_user=current_user, note_id=note_id)
    return result.to_response()


@router.post("/{note_id}/ai/regenerate")
async def regenerate_note_ai(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[CurrentUser] = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Generate a summary and tags together. The results are returned, not stored.
    """
    result = await note_service.regenerate_ai_for_note(db=db, current_user=current_user, note_id=note_id)
    return result.to_response()
