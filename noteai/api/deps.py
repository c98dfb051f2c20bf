from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from noteai.db.session import SessionLocal
from noteai.schemas.auth import CurrentUser
from noteai.services.ai_service import AIService
from noteai.services.api_call_logger import ApiCallLogger
from noteai.services.auth_service import verify_token
from noteai.services.note_service import NoteService
from noteai.services.profile_service import ProfileService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    """
    The caller, or None when the request carries no valid token.

    Note actions report a missing identity themselves ("Login required.").
    """
    if credentials is None:
        return None
    return verify_token(credentials.credentials)


def get_api_logger(request: Request) -> ApiCallLogger:
    return request.app.state.api_logger


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service
