"""Gift service - account-scoped CRUD for gifts and the gift presenter."""

import logging

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session, joinedload

from personal_crm.db.models import Contact, Gift
from personal_crm.schemas.common import AccountRef
from personal_crm.schemas.gift import GiftCreate, GiftRead, GiftUpdate
from personal_crm.services.contact_service import to_contact_short
from personal_crm.utils.pagination import PaginationParams, paginate_query
from personal_crm.utils.presentation import format_timestamp

logger = logging.getLogger(__name__)


class GiftServiceError(Exception):
    """Base exception for gift service errors."""

    pass


class GiftPersistenceError(GiftServiceError):
    """The database rejected the write."""

    pass


def _scoped_query(db: Session, account_id: int):
    return db.query(Gift).options(joinedload(Gift.contact)).filter(
        Gift.account_id == account_id,
    )


def list_gifts(
    db: Session,
    account_id: int,
    pagination: PaginationParams,
    contact: Contact | None = None,
) -> tuple[list[Gift], int]:
    """List an account's gifts, newest first. Optionally narrowed to one contact."""
    query = _scoped_query(db, account_id)
    if contact is not None:
        query = query.filter(Gift.contact_id == contact.id)
    query = query.order_by(Gift.created_at.desc(), Gift.id.desc())
    return paginate_query(query, pagination)


def get_gift(db: Session, account_id: int, gift_id: int) -> Gift | None:
    """Get a gift by ID (account-scoped)."""
    return _scoped_query(db, account_id).filter(Gift.id == gift_id).first()


def _commit(db: Session, gift: Gift, action: str) -> None:
    try:
        db.commit()
    except (IntegrityError, DataError) as exc:
        db.rollback()
        logger.warning("Gift %s rejected by database: %s", action, exc.orig)
        raise GiftPersistenceError(str(exc.orig)) from exc
    db.refresh(gift)


def create_gift(
    db: Session,
    account_id: int,
    contact: Contact,
    data: GiftCreate,
) -> Gift:
    gift = Gift(
        account_id=account_id,
        contact=contact,
        body=data.body,
    )
    db.add(gift)
    _commit(db, gift, "create")
    return gift


def update_gift(
    db: Session,
    gift: Gift,
    contact: Contact,
    data: GiftUpdate,
) -> Gift:
    gift.contact = contact
    gift.body = data.body
    _commit(db, gift, "update")
    return gift


def delete_gift(db: Session, gift: Gift) -> int:
    gift_id = gift.id
    db.delete(gift)
    db.commit()
    return gift_id


def to_gift_read(gift: Gift) -> GiftRead:
    """
    Convert Gift model to GiftRead schema.

    Pure mapping: reads only the gift and its loaded contact.
    A missing ``updated_at`` is kept as ``None`` so it serializes as null.
    """
    return GiftRead(
        id=gift.id,
        body=gift.body,
        account=AccountRef(id=gift.account_id),
        contact=to_contact_short(gift.contact),
        created_at=format_timestamp(gift.created_at),
        updated_at=format_timestamp(gift.updated_at),
    )
