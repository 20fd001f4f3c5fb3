"""FastAPI dependencies for authentication and database access."""

import logging
from typing import Generator

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from personal_crm.core.security import decode_session_token
from personal_crm.db.session import SessionLocal

logger = logging.getLogger(__name__)

# Cookie name for browser sessions; API clients send a bearer token
COOKIE_NAME = "crm_session"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _read_token(request: Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(COOKIE_NAME)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get authenticated user from the bearer token (or session cookie).

    Validates:
    - Token exists
    - JWT is valid and not expired
    - User exists and is active
    - Token version matches (for revocation support)

    Raises:
        HTTPException 401: Authentication failed
    """
    # Import here to avoid circular imports
    from personal_crm.services import user_service

    token = _read_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_session_token(token)
        user_id = int(payload["sub"])
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid session")

    user = user_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")

    # Token version check (revocation support)
    if user.token_version != payload.get("token_version"):
        logger.info("Rejected revoked session for user %s", user.id)
        raise HTTPException(status_code=401, detail="Session revoked")

    return user


def get_current_session(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get full session context: user_id, account_id.

    This is the PRIMARY auth dependency for every endpoint.
    Every list/detail query MUST filter by ``account_id``
    to ensure proper tenant isolation.

    Raises:
        HTTPException 401: Not authenticated
    """
    from personal_crm.schemas.auth import UserSession

    user = get_current_user(request, db)
    request.state.user_id = user.id
    request.state.account_id = user.account_id

    return UserSession(
        user_id=user.id,
        account_id=user.account_id,
        email=user.email,
    )
