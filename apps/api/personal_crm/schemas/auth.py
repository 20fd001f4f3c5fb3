"""Authentication-related Pydantic schemas."""

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Decoded JWT payload structure."""
    sub: int  # user_id
    account_id: int
    token_version: int


class UserSession(BaseModel):
    """
    Full session context for authenticated requests.

    This is returned by get_current_session dependency
    and carries the account every query must be scoped to.
    """
    user_id: int
    account_id: int
    email: str
