"""Gifts router - API endpoints for gifts."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Request
from sqlalchemy.orm import Session

from personal_crm.core.deps import get_current_session, get_db
from personal_crm.core.errors import InvalidParametersError, NotFoundError, validate_payload
from personal_crm.schemas.auth import UserSession
from personal_crm.schemas.common import MAX_ID, DeletedResponse, ResourceResponse
from personal_crm.schemas.gift import GiftCreate, GiftRead, GiftUpdate
from personal_crm.services import contact_service, gift_service
from personal_crm.services.gift_service import GiftPersistenceError
from personal_crm.utils.pagination import PaginatedResponse, PaginationParams, get_pagination

router = APIRouter()

PathId = Annotated[int, Path(ge=1, le=MAX_ID)]


@router.get("/gifts", response_model=PaginatedResponse[GiftRead])
def list_gifts(
    request: Request,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
):
    gifts, total = gift_service.list_gifts(db, session.account_id, pagination)
    return PaginatedResponse[GiftRead].create(
        [gift_service.to_gift_read(g) for g in gifts], total, pagination, request
    )


@router.get("/gifts/{gift_id}", response_model=ResourceResponse[GiftRead])
def get_gift(
    gift_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    gift = gift_service.get_gift(db, session.account_id, gift_id)
    if not gift:
        raise NotFoundError()
    return ResourceResponse[GiftRead](data=gift_service.to_gift_read(gift))


@router.post("/gifts", response_model=ResourceResponse[GiftRead], status_code=201)
def create_gift(
    data: GiftCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    contact = contact_service.get_contact(db, session.account_id, data.contact_id)
    if not contact:
        raise NotFoundError()

    try:
        gift = gift_service.create_gift(db, session.account_id, contact, data)
    except GiftPersistenceError:
        raise InvalidParametersError()

    return ResourceResponse[GiftRead](data=gift_service.to_gift_read(gift))


@router.put("/gifts/{gift_id}", response_model=ResourceResponse[GiftRead])
def update_gift(
    gift_id: PathId,
    payload: Any = Body(None),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    gift = gift_service.get_gift(db, session.account_id, gift_id)
    if not gift:
        raise NotFoundError()

    data = validate_payload(GiftUpdate, payload)

    contact = contact_service.get_contact(db, session.account_id, data.contact_id)
    if not contact:
        raise NotFoundError()

    try:
        gift = gift_service.update_gift(db, gift, contact, data)
    except GiftPersistenceError:
        raise InvalidParametersError()

    return ResourceResponse[GiftRead](data=gift_service.to_gift_read(gift))


@router.delete("/gifts/{gift_id}", response_model=DeletedResponse)
def delete_gift(
    gift_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    gift = gift_service.get_gift(db, session.account_id, gift_id)
    if not gift:
        raise NotFoundError()

    return DeletedResponse(id=gift_service.delete_gift(db, gift))


@router.get("/contacts/{contact_id}/gifts", response_model=PaginatedResponse[GiftRead])
def list_contact_gifts(
    request: Request,
    contact_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
):
    contact = contact_service.get_contact(db, session.account_id, contact_id)
    if not contact:
        raise NotFoundError()

    gifts, total = gift_service.list_gifts(db, session.account_id, pagination, contact=contact)
    return PaginatedResponse[GiftRead].create(
        [gift_service.to_gift_read(g) for g in gifts], total, pagination, request
    )
