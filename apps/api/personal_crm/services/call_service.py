"""Call service - account-scoped CRUD for logged phone calls."""

import logging

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session, joinedload

from personal_crm.db.models import Call, Contact
from personal_crm.schemas.call import CallCreate, CallRead, CallUpdate
from personal_crm.schemas.common import AccountRef
from personal_crm.services.contact_service import to_contact_short
from personal_crm.utils.pagination import PaginationParams, paginate_query
from personal_crm.utils.presentation import as_utc, format_timestamp

logger = logging.getLogger(__name__)


class CallServiceError(Exception):
    """Base exception for call service errors."""

    pass


class CallPersistenceError(CallServiceError):
    """The database rejected the write."""

    pass


def _scoped_query(db: Session, account_id: int):
    return db.query(Call).options(joinedload(Call.contact)).filter(
        Call.account_id == account_id,
    )


def list_calls(
    db: Session,
    account_id: int,
    pagination: PaginationParams,
) -> tuple[list[Call], int]:
    """List an account's calls, most recent first."""
    query = _scoped_query(db, account_id).order_by(Call.called_at.desc(), Call.id.desc())
    return paginate_query(query, pagination)


def list_calls_for_contact(
    db: Session,
    account_id: int,
    contact: Contact,
    pagination: PaginationParams,
) -> tuple[list[Call], int]:
    """List calls for a contact that was already resolved in the account."""
    query = _scoped_query(db, account_id).filter(
        Call.contact_id == contact.id,
    ).order_by(Call.called_at.desc(), Call.id.desc())
    return paginate_query(query, pagination)


def get_call(db: Session, account_id: int, call_id: int) -> Call | None:
    """Get a call by ID (account-scoped)."""
    return _scoped_query(db, account_id).filter(Call.id == call_id).first()


def _commit(db: Session, call: Call, action: str) -> None:
    try:
        db.commit()
    except (IntegrityError, DataError) as exc:
        db.rollback()
        logger.warning("Call %s rejected by database: %s", action, exc.orig)
        raise CallPersistenceError(str(exc.orig)) from exc
    db.refresh(call)


def create_call(
    db: Session,
    account_id: int,
    contact: Contact,
    data: CallCreate,
) -> Call:
    """Create a call for a contact. ``account_id`` always comes from the session."""
    call = Call(
        account_id=account_id,
        contact=contact,
        content=data.content,
        called_at=as_utc(data.called_at),
    )
    db.add(call)
    _commit(db, call, "create")
    return call


def update_call(
    db: Session,
    call: Call,
    contact: Contact,
    data: CallUpdate,
) -> Call:
    """Overwrite every editable field of a call."""
    call.contact = contact
    call.content = data.content
    call.called_at = as_utc(data.called_at)
    _commit(db, call, "update")
    return call


def delete_call(db: Session, call: Call) -> int:
    """Delete a call and return its ID."""
    call_id = call.id
    db.delete(call)
    db.commit()
    return call_id


def to_call_read(call: Call) -> CallRead:
    """Convert Call model to CallRead schema."""
    return CallRead(
        id=call.id,
        called_at=format_timestamp(call.called_at),
        content=call.content,
        contact=to_contact_short(call.contact),
        account=AccountRef(id=call.account_id),
        created_at=format_timestamp(call.created_at),
        updated_at=format_timestamp(call.updated_at),
    )
