"""User service - lookups used by authentication."""

from sqlalchemy.orm import Session

from personal_crm.db.models import User


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def revoke_all_sessions(db: Session, user: User) -> None:
    """Invalidate every token issued to the user by bumping token_version."""
    user.token_version += 1
    db.commit()
