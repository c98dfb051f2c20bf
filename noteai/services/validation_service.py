"""
Title/content checks shared by the note actions.

Create and update allow different title lengths (200 and 100 characters);
both limits are kept as separate entry points.
"""
from typing import Optional

from noteai.common.common_message import CommonMessage
from noteai.common.constants import NoteLimits
from noteai.common.exceptions import ValidationFailed


def validate_title(title: Optional[str], max_length: int = NoteLimits.CREATE_TITLE_MAX_LENGTH) -> None:
    if not title or not title.strip():
        raise ValidationFailed("title", CommonMessage.TITLE_REQUIRED)
    if len(title) > max_length:
        raise ValidationFailed("title", CommonMessage.TITLE_TOO_LONG.format(max_length=max_length))


def validate_content(content: Optional[str], max_length: Optional[int] = NoteLimits.CONTENT_MAX_LENGTH) -> None:
    if not content or not content.strip():
        raise ValidationFailed("content", CommonMessage.CONTENT_REQUIRED)
    if max_length is not None and len(content) > max_length:
        raise ValidationFailed("content", CommonMessage.CONTENT_TOO_LONG)


def validate_note_input(
    title: Optional[str],
    content: Optional[str],
    max_title_length: int = NoteLimits.CREATE_TITLE_MAX_LENGTH,
) -> None:
    """
    Validate a title/content pair, title first.

    Raises:
        ValidationFailed: with the offending field and a user-facing message
    """
    validate_title(title, max_title_length)
    validate_content(content)
