import logging
from typing import List, Optional

from fastapi import status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from noteai.common.common_message import CommonMessage
from noteai.common.constants import NoteLimits, NoteSort, Pagination
from noteai.common.exceptions import (
    NotFound,
    NoteAIError,
    PersistenceFailure,
    ValidationFailed,
)
from noteai.common.pagination_utils import PaginationHelper
from noteai.common.response_common import ResponseCommon
from noteai.core.view_invalidation import NOTES_LIST_PATH, ViewInvalidator, note_detail_path
from noteai.models import Note, NoteTag, Summary
from noteai.models.base_import import utc_now
from noteai.schemas.auth import CurrentUser
from noteai.schemas.note import (
    Note as NoteSchema,
    NoteCreateResponse,
    NoteDetail,
    NoteSummary,
    NotesListResponse,
)
from noteai.services.ai_service import AIService
from noteai.services.auth_service import require_user
from noteai.services.profile_service import ensure_profile
from noteai.services.validation_service import validate_content, validate_note_input

logger = logging.getLogger(__name__)


_SORT_ORDERS = {
    NoteSort.NEWEST: lambda: [Note.created_at.desc()],
    NoteSort.OLDEST: lambda: [Note.created_at.asc()],
    NoteSort.TITLE_ASC: lambda: [Note.title.asc(), Note.created_at.desc()],
    NoteSort.TITLE_DESC: lambda: [Note.title.desc(), Note.created_at.desc()],
    NoteSort.UPDATED: lambda: [Note.updated_at.desc()],
}


def _empty_notes_page() -> NotesListResponse:
    return NotesListResponse(
        notes=[],
        total_count=0,
        current_page=1,
        total_pages=0,
        page_size=Pagination.NOTES_PAGE_SIZE,
    )


class NoteService:
    """
    Note actions for the authenticated caller.

    Every query is scoped by the caller's id, so another user's note and a
    missing note both come back as "not found". Each action returns a
    ``ResponseCommon``; failures never raise out of an action.
    """

    def __init__(self, views: ViewInvalidator, ai_service: AIService):
        self.views = views
        self.ai_service = ai_service

    # Helpers

    def _get_owned_note(self, db: Session, note_id: str, user_id: str) -> Note:
        note = db.query(Note).filter(
            Note.id == note_id,
            Note.user_id == user_id
        ).first()

        if not note:
            raise NotFound()
        return note

    def _upsert_summary(self, db: Session, note_id: str, model: str, content: str) -> None:
        existing = db.query(Summary).filter(Summary.note_id == note_id).first()
        if existing is None:
            db.add(Summary(note_id=note_id, model=model, content=content))
            try:
                db.commit()
                return
            except IntegrityError:
                db.rollback()
                logger.info("Summary for note %s already exists; updating instead", note_id)

        db.query(Summary).filter(Summary.note_id == note_id).update(
            {"model": model, "content": content, "created_at": utc_now()},
            synchronize_session=False,
        )
        db.commit()

    def _replace_tags(self, db: Session, note_id: str, tags: List[str]) -> None:
        db.query(NoteTag).filter(NoteTag.note_id == note_id).delete(synchronize_session=False)
        for tag in tags:
            db.add(NoteTag(note_id=note_id, tag=tag))
        db.commit()

    def _invalidate(self, user_id: str, note_id: Optional[str] = None) -> None:
        paths = [NOTES_LIST_PATH]
        if note_id is not None:
            paths.append(note_detail_path(note_id))
        self.views.invalidate(user_id, *paths)

    def _checked_content(self, note: Note) -> str:
        if not note.content or not note.content.strip():
            raise ValidationFailed("content", CommonMessage.NOTE_CONTENT_EMPTY)
        return note.content

    def _load_failed(self, db: Session, note_id: str, e: SQLAlchemyError) -> ResponseCommon:
        db.rollback()
        logger.error("Failed to load note %s: %s", note_id, e, exc_info=True)
        return ResponseCommon.from_error(PersistenceFailure(CommonMessage.NOTE_RETRIEVE_FAILED))

    # CRUD

    def create_note(
        self,
        db: Session,
        current_user: Optional[CurrentUser],
        title: str,
        content: str,
    ) -> ResponseCommon:
        """
        Create a note owned by the caller.

        Args:
            db: Database session
            current_user: Caller resolved from the auth provider, or None
            title: Note title, 1-200 characters
            content: Note body, 1-10,000 characters

        Returns:
            ResponseCommon with the new note id
        """
        try:
            user = require_user(current_user)
            validate_note_input(title, content, NoteLimits.CREATE_TITLE_MAX_LENGTH)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)

        try:
            ensure_profile(db, user.id)

            note = Note(
                user_id=user.id,
                title=title.strip(),
                content=content.strip(),
            )
            db.add(note)
            db.commit()
            db.refresh(note)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to create note: %s", e, exc_info=True)
            return ResponseCommon.from_error(PersistenceFailure(CommonMessage.NOTE_CREATE_FAILED))

        self._invalidate(user.id)
        logger.info("Created note %s for user %s", note.id, user.id)
        return ResponseCommon.success_response(
            code=status.HTTP_201_CREATED,
            data=NoteCreateResponse(note_id=note.id),
            message=CommonMessage.NOTE_CREATED_SUCCESS
        )

    def get_notes(
        self,
        db: Session,
        current_user: Optional[CurrentUser],
        page: int = 1,
        sort_by: str = NoteSort.DEFAULT,
    ) -> ResponseCommon:
        """
        List the caller's notes, 20 per page.

        Args:
            db: Database session
            current_user: Caller, or None
            page: Page number; values below 1 are treated as 1
            sort_by: newest, oldest, title-asc, title-desc or updated

        Returns:
            ResponseCommon with a NotesListResponse
        """
        try:
            user = require_user(current_user)
        except NoteAIError as e:
            return ResponseCommon.from_error(e, data=_empty_notes_page())

        page = PaginationHelper.clamp_page(page)
        if sort_by not in _SORT_ORDERS:
            sort_by = NoteSort.DEFAULT

        page_size = Pagination.NOTES_PAGE_SIZE
        try:
            query = db.query(Note).filter(Note.user_id == user.id).order_by(*_SORT_ORDERS[sort_by]())
            notes = PaginationHelper.page_slice(query, page, page_size)
            total_count = db.query(func.count(Note.id)).filter(Note.user_id == user.id).scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Failed to list notes for user %s: %s", user.id, e, exc_info=True)
            return ResponseCommon.from_error(PersistenceFailure(CommonMessage.NOTES_LIST_FAILED), data=_empty_notes_page())

        meta = PaginationHelper.create_meta(page=page, page_size=page_size, total_items=total_count)
        result = NotesListResponse(
            notes=[NoteSchema.model_validate(note) for note in notes],
            total_count=total_count,
            current_page=page,
            total_pages=meta.page_count,
            page_size=page_size,
        )
        return ResponseCommon.success_response(data=result, message=CommonMessage.NOTES_LIST_RETRIEVED_SUCCESS)

    def get_note_by_id(self, db: Session, current_user: Optional[CurrentUser], note_id: str) -> ResponseCommon:
        """
        Get one of the caller's notes with its tags and summary.
        """
        try:
            user = require_user(current_user)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)

        try:
            note = self._get_owned_note(db, note_id, user.id)
            tags = [
                row.tag for row in
                db.query(NoteTag).filter(NoteTag.note_id == note.id).order_by(NoteTag.tag.asc()).all()
            ]
            summary = db.query(Summary).filter(Summary.note_id == note.id).first()
        except NoteAIError as e:
            return ResponseCommon.from_error(e)
        except SQLAlchemyError as e:
            return self._load_failed(db, note_id, e)

        detail = NoteDetail(
            **NoteSchema.model_validate(note).model_dump(),
            tags=tags,
            summary=NoteSummary.model_validate(summary) if summary else None,
        )
        return ResponseCommon.success_response(data=detail, message=CommonMessage.NOTE_RETRIEVED_SUCCESS)

    def update_note(
        self,
        db: Session,
        current_user: Optional[CurrentUser],
        note_id: str,
        title: str,
        content: str,
    ) -> ResponseCommon:
        """
        Replace a note's title and content. Titles are limited to 100
        characters here.
        """
        try:
            user = require_user(current_user)
            validate_note_input(title, content, NoteLimits.UPDATE_TITLE_MAX_LENGTH)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)

        return self._apply_update(
            db,
            user,
            note_id,
            {"title": title.strip(), "content": content.strip()},
        )

    def update_note_content(
        self,
        db: Session,
        current_user: Optional[CurrentUser],
        note_id: str,
        content: str,
    ) -> ResponseCommon:
        """Replace only the content of a note (editor autosave)."""
        try:
            user = require_user(current_user)
            validate_content(content, NoteLimits.CONTENT_MAX_LENGTH)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)

        return self._apply_update(db, user, note_id, {"content": content.strip()})

    def _apply_update(self, db: Session, user: CurrentUser, note_id: str, values: dict) -> ResponseCommon:
        # Ownership is part of the UPDATE predicate; no separate lookup.
        values["updated_at"] = utc_now()
        try:
            updated = db.query(Note).filter(
                Note.id == note_id,
                Note.user_id == user.id
            ).update(values, synchronize_session=False)

            if not updated:
                db.rollback()
                return ResponseCommon.from_error(NotFound())

            db.commit()
            note = self._get_owned_note(db, note_id, user.id)
            db.refresh(note)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to update note %s: %s", note_id, e, exc_info=True)
            return ResponseCommon.from_error(PersistenceFailure(CommonMessage.NOTE_UPDATE_FAILED))
        except NoteAIError as e:
            return ResponseCommon.from_error(e)

        self._invalidate(user.id, note_id)
        logger.info("Updated note %s", note_id)
        return ResponseCommon.success_response(
            data=NoteSchema.model_validate(note),
            message=CommonMessage.NOTE_UPDATED_SUCCESS
        )

    def delete_note(self, db: Session, current_user: Optional[CurrentUser], note_id: str) -> ResponseCommon:
        """
        Delete a note. Its tags and summary go with it (ON DELETE CASCADE).
        """
        try:
            user = require_user(current_user)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)

        try:
            deleted = db.query(Note).filter(
                Note.id == note_id,
                Note.user_id == user.id
            ).delete(synchronize_session=False)

            if not deleted:
                db.rollback()
                return ResponseCommon.from_error(NotFound())

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to delete note %s: %s", note_id, e, exc_info=True)
            return ResponseCommon.from_error(PersistenceFailure(CommonMessage.NOTE_DELETE_FAILED))

        self._invalidate(user.id, note_id)
        logger.info("Deleted note %s", note_id)
        return ResponseCommon.success_response(message=CommonMessage.NOTE_DELETED_SUCCESS)

    # AI

    async def generate_summary_for_note(
        self,
        db: Session,
        current_user: Optional[CurrentUser],
        note_id: str,
    ) -> ResponseCommon:
        """
        Summarize a note with Gemini and store the summary (one per note,
        overwritten on regeneration).
        """
        try:
            user = require_user(current_user)
            note = self._get_owned_note(db, note_id, user.id)
            content = self._checked_content(note)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)
        except SQLAlchemyError as e:
            return self._load_failed(db, note_id, e)

        result = await self.ai_service.summarize(content)
        if not result.success:
            return ResponseCommon.error_response(
                message=CommonMessage.SUMMARY_GENERATION_FAILED.format(error=result.error),
                code=status.HTTP_502_BAD_GATEWAY
            )

        summary = result.data
        try:
            self._upsert_summary(db, note_id, summary.model, summary.content)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to save summary for note %s: %s", note_id, e, exc_info=True)
            return ResponseCommon.from_error(PersistenceFailure(CommonMessage.SUMMARY_SAVE_FAILED))

        self._invalidate(user.id, note_id)
        logger.info("Stored %s summary for note %s", summary.model, note_id)
        return ResponseCommon.success_response(
            data=summary,
            message=CommonMessage.SUMMARY_CREATED_SUCCESS
        )

    async def generate_tags_for_note(
        self,
        db: Session,
        current_user: Optional[CurrentUser],
        note_id: str,
    ) -> ResponseCommon:
        """Generate tags for a note and replace its stored tag set."""
        try:
            user = require_user(current_user)
            note = self._get_owned_note(db, note_id, user.id)
            content = self._checked_content(note)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)
        except SQLAlchemyError as e:
            return self._load_failed(db, note_id, e)

        result = await self.ai_service.tag(content)
        if not result.success:
            return ResponseCommon.error_response(
                message=CommonMessage.TAG_GENERATION_FAILED.format(error=result.error),
                code=status.HTTP_502_BAD_GATEWAY
            )

        try:
            self._replace_tags(db, note_id, result.data.tags)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to save tags for note %s: %s", note_id, e, exc_info=True)
            return ResponseCommon.from_error(PersistenceFailure(CommonMessage.TAGS_SAVE_FAILED))

        self._invalidate(user.id, note_id)
        return ResponseCommon.success_response(
            data=result.data,
            message=CommonMessage.TAGS_CREATED_SUCCESS
        )

    async def regenerate_ai_for_note(
        self,
        db: Session,
        current_user: Optional[CurrentUser],
        note_id: str,
    ) -> ResponseCommon:
        """
        Generate a summary and tags concurrently and return both.

        Nothing is stored; use the summary and tags actions to persist.
        """
        try:
            user = require_user(current_user)
            note = self._get_owned_note(db, note_id, user.id)
            content = self._checked_content(note)
        except NoteAIError as e:
            return ResponseCommon.from_error(e)
        except SQLAlchemyError as e:
            return self._load_failed(db, note_id, e)

        result = await self.ai_service.summarize_and_tag(content)
        if not result.success:
            return ResponseCommon.error_response(
                message=result.error,
                code=status.HTTP_502_BAD_GATEWAY
            )

        self._invalidate(user.id, note_id)
        return ResponseCommon.success_response(
            data={
                "summary": result.data.summary.content,
                "tags": result.data.tags.tags,
                "model": result.data.summary.model,
            },
            message=CommonMessage.AI_REGENERATED_SUCCESS
        )
