"""Shared fixtures.

The database is an in-memory SQLite engine (one connection shared through
StaticPool) built fresh for each test. The Gemini gateway is replaced by
``FakeGateway`` unless a test exercises the real gateway with a mocked SDK
client.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""
os.environ["JWT_SECRET_KEY"] = "test-secret"

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from noteai.common.constants import AIOperation  # noqa: E402
from noteai.core.view_invalidation import ViewInvalidator  # noqa: E402
from noteai.db.base import Base  # noqa: E402
from noteai.db.session import build_engine  # noqa: E402
from noteai.models import Note, UserProfile  # noqa: E402
from noteai.schemas.ai import GatewayResult  # noqa: E402
from noteai.schemas.auth import CurrentUser  # noqa: E402
from noteai.services.ai_service import AIService  # noqa: E402
from noteai.services.api_call_logger import ApiCallLogger  # noqa: E402
from noteai.services.note_service import NoteService  # noqa: E402


class FakeGateway:
    """Stands in for GeminiGateway; answers with canned text or errors."""

    def __init__(
        self,
        summary_text: Optional[str] = "First point\nSecond point\nThird point",
        tag_text: Optional[str] = "python, testing, notes",
        summary_error: Optional[str] = None,
        tag_error: Optional[str] = None,
        model: str = "gemini-test",
    ):
        self.summary_text = summary_text
        self.tag_text = tag_text
        self.summary_error = summary_error
        self.tag_error = tag_error
        self.model = model
        self.calls: List[tuple] = []

    def has_api_key(self) -> bool:
        return True

    def _result(self, operation: str, content: str, text: Optional[str], error: Optional[str]) -> GatewayResult:
        self.calls.append((operation, content))
        if error:
            return GatewayResult(success=False, operation=operation, model=self.model, error=error)
        return GatewayResult(success=True, operation=operation, model=self.model, text=text, input_tokens=10)

    async def generate_summary(self, content: str) -> GatewayResult:
        return self._result(AIOperation.SUMMARIZE, content, self.summary_text, self.summary_error)

    async def generate_tags(self, content: str) -> GatewayResult:
        return self._result(AIOperation.TAG, content, self.tag_text, self.tag_error)


class FrozenClock:
    """Callable clock for ApiCallLogger that tests can move forward or back."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def alice() -> CurrentUser:
    return CurrentUser(id="11111111-1111-1111-1111-111111111111", email="alice@example.com")


@pytest.fixture
def bob() -> CurrentUser:
    return CurrentUser(id="22222222-2222-2222-2222-222222222222", email="bob@example.com")


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def api_logger(clock) -> ApiCallLogger:
    return ApiCallLogger(clock=clock)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def ai_service(fake_gateway, api_logger) -> AIService:
    return AIService(gateway=fake_gateway, api_logger=api_logger)


@pytest.fixture
def make_ai_service(api_logger):
    """Build an AIService over a FakeGateway configured with ``kwargs``."""

    def _make(**kwargs) -> AIService:
        return AIService(gateway=FakeGateway(**kwargs), api_logger=api_logger)

    return _make


@pytest.fixture
def views() -> ViewInvalidator:
    return ViewInvalidator()


@pytest.fixture
def note_service(views, ai_service) -> NoteService:
    return NoteService(views=views, ai_service=ai_service)


@pytest.fixture
def make_note(db):
    """Insert a note directly, creating the owner's profile if needed."""
    base_time = datetime(2026, 1, 1, 9, 0)

    def _make(
        user: CurrentUser,
        title: str = "Title",
        content: str = "Some content",
        minutes: int = 0,
        updated_minutes: Optional[int] = None,
    ) -> Note:
        if db.get(UserProfile, user.id) is None:
            db.add(UserProfile(id=user.id))
            db.commit()
        created = base_time + timedelta(minutes=minutes)
        updated = base_time + timedelta(minutes=updated_minutes if updated_minutes is not None else minutes)
        note = Note(user_id=user.id, title=title, content=content, created_at=created, updated_at=updated)
        db.add(note)
        db.commit()
        db.refresh(note)
        return note

    return _make
