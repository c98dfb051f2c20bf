from datetime import datetime, timezone
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

ApiOperation = Literal["summarize", "tag", "client_init"]

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SummaryResponse(BaseModel):
    content: str
    model: str
    created_at: datetime = Field(default_factory=_utc_now)


class TagResponse(BaseModel):
    tags: List[str]
    model: str
    created_at: datetime = Field(default_factory=_utc_now)


class GatewayResult(BaseModel):
    """Provider call outcome. Raw SDK responses never leave the gateway."""

    success: bool
    operation: ApiOperation
    model: str
    text: Optional[str] = None
    error: Optional[str] = None
    input_tokens: int = 0
    created_at: datetime = Field(default_factory=_utc_now)


class AIOperationResult(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


class SummaryAndTags(BaseModel):
    summary: SummaryResponse
    tags: TagResponse


class QualityReport(BaseModel):
    is_valid: bool
    issues: List[str] = Field(default_factory=list)


class ApiCallLog(BaseModel):
    timestamp: datetime
    operation: str  # summarize, tag, client_init or any caller-defined name
    success: bool
    duration: float  # milliseconds
    token_count: Optional[int] = None
    error: Optional[str] = None
    model: Optional[str] = None


class TokenUsage(BaseModel):
    date: str  # YYYY-MM-DD
    total_tokens: int = 0
    summarize_tokens: int = 0
    tag_tokens: int = 0
    api_calls: int = 0


class ApiStats(BaseModel):
    total_calls: int = 0
    success_rate: float = 0.0
    average_duration: float = 0.0
    total_tokens: int = 0
    error_count: int = 0


class AIGenerateRequest(BaseModel):
    action: str
    content: Optional[str] = None
