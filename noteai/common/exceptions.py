"""
Exception hierarchy for note actions and the AI layer.

Services raise these internally; action boundaries turn them into a
``ResponseCommon`` error carrying ``code`` as the HTTP status.
"""
from typing import Optional

from fastapi import status

from noteai.common.common_message import CommonMessage


class NoteAIError(Exception):
    """Base exception for all application errors."""

    code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class AuthenticationRequired(NoteAIError):
    code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = CommonMessage.LOGIN_REQUIRED):
        super().__init__(message)


class ValidationFailed(NoteAIError):
    """Raised when a title or content check fails. ``field`` names the input."""

    code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, message: str):
        super().__init__(message, context={"field": field})
        self.field = field


class NotFound(NoteAIError):
    """Missing, or owned by someone else. The two cases are not distinguished."""

    code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = CommonMessage.NOTE_NOT_FOUND):
        super().__init__(message)


class PersistenceFailure(NoteAIError):
    code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AIProviderFailure(NoteAIError):
    """Network or service error from the generative model provider."""

    code = status.HTTP_502_BAD_GATEWAY


class AIEmptyResponse(AIProviderFailure):
    """The model answered but nothing usable survived parsing."""

    def __init__(self, message: str = CommonMessage.AI_EMPTY_RESPONSE):
        super().__init__(message)
