"""Calls router - API endpoints for logged phone calls.

Every lookup is scoped to the session's account before it is scoped by ID,
so a call or contact from another account is indistinguishable from a
missing one.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Request
from sqlalchemy.orm import Session

from personal_crm.core.deps import get_current_session, get_db
from personal_crm.core.errors import InvalidParametersError, NotFoundError, validate_payload
from personal_crm.schemas.auth import UserSession
from personal_crm.schemas.call import CallCreate, CallRead, CallUpdate
from personal_crm.schemas.common import MAX_ID, DeletedResponse, ResourceResponse
from personal_crm.services import call_service, contact_service
from personal_crm.services.call_service import CallPersistenceError
from personal_crm.utils.pagination import PaginatedResponse, PaginationParams, get_pagination

router = APIRouter()

PathId = Annotated[int, Path(ge=1, le=MAX_ID)]


def _page(request: Request, calls, total: int, pagination: PaginationParams):
    return PaginatedResponse[CallRead].create(
        [call_service.to_call_read(c) for c in calls], total, pagination, request
    )


@router.get("/calls", response_model=PaginatedResponse[CallRead])
def list_calls(
    request: Request,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
):
    """List the account's calls."""
    calls, total = call_service.list_calls(db, session.account_id, pagination)
    return _page(request, calls, total, pagination)


@router.get("/calls/{call_id}", response_model=ResourceResponse[CallRead])
def get_call(
    call_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    call = call_service.get_call(db, session.account_id, call_id)
    if not call:
        raise NotFoundError()
    return ResourceResponse[CallRead](data=call_service.to_call_read(call))


@router.post("/calls", response_model=ResourceResponse[CallRead], status_code=201)
def create_call(
    data: CallCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Log a call against one of the account's contacts."""
    contact = contact_service.get_contact(db, session.account_id, data.contact_id)
    if not contact:
        raise NotFoundError()

    try:
        call = call_service.create_call(db, session.account_id, contact, data)
    except CallPersistenceError:
        raise InvalidParametersError()

    return ResourceResponse[CallRead](data=call_service.to_call_read(call))


@router.put("/calls/{call_id}", response_model=ResourceResponse[CallRead])
def update_call(
    call_id: PathId,
    payload: Any = Body(None),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Replace a call.

    The call is looked up before the body is validated, so a bad body
    sent to a missing call is still a 404. All fields are required; there
    is no partial update.
    """
    call = call_service.get_call(db, session.account_id, call_id)
    if not call:
        raise NotFoundError()

    data = validate_payload(CallUpdate, payload)

    contact = contact_service.get_contact(db, session.account_id, data.contact_id)
    if not contact:
        raise NotFoundError()

    try:
        call = call_service.update_call(db, call, contact, data)
    except CallPersistenceError:
        raise InvalidParametersError()

    return ResourceResponse[CallRead](data=call_service.to_call_read(call))


@router.delete("/calls/{call_id}", response_model=DeletedResponse)
def delete_call(
    call_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    call = call_service.get_call(db, session.account_id, call_id)
    if not call:
        raise NotFoundError()

    deleted_id = call_service.delete_call(db, call)
    return DeletedResponse(id=deleted_id)


@router.get("/contacts/{contact_id}/calls", response_model=PaginatedResponse[CallRead])
def list_contact_calls(
    request: Request,
    contact_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
):
    """List calls for a contact. A contact outside the account is a 404, not an empty list."""
    contact = contact_service.get_contact(db, session.account_id, contact_id)
    if not contact:
        raise NotFoundError()

    calls, total = call_service.list_calls_for_contact(
        db, session.account_id, contact, pagination
    )
    return _page(request, calls, total, pagination)
