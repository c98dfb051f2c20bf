import logging
from typing import Optional

from jose import jwt, JWTError

from noteai.common.exceptions import AuthenticationRequired
from noteai.config import settings
from noteai.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)


def verify_token(token: str, secret_key: Optional[str] = None) -> Optional[CurrentUser]:
    """
    Resolve the caller from an access token issued by the auth provider.

    The token's ``sub`` claim is the user id. Returns None for a missing,
    expired or otherwise invalid token.
    """
    secret_key = secret_key or settings.JWT_SECRET_KEY
    if not token or not secret_key:
        return None

    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        logger.info("Access token has expired")
        return None
    except JWTError as e:
        # Other JWT errors (invalid signature, malformed token, etc.)
        logger.info("Rejected access token: %s", e)
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None
    return CurrentUser(id=str(user_id), email=payload.get("email"))


def require_user(current_user: Optional[CurrentUser]) -> CurrentUser:
    if current_user is None:
        raise AuthenticationRequired()
    return current_user
