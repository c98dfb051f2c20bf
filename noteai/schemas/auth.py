from typing import Optional

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Identity resolved from the external auth provider's token."""

    id: str
    email: Optional[str] = None
