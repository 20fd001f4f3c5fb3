"""Pydantic schemas for API request/response models."""

from personal_crm.schemas.auth import TokenPayload, UserSession
from personal_crm.schemas.call import CallCreate, CallRead, CallUpdate
from personal_crm.schemas.common import AccountRef, DeletedResponse, ResourceResponse
from personal_crm.schemas.contact import ContactShortRead
from personal_crm.schemas.gift import GiftCreate, GiftRead, GiftUpdate

__all__ = [
    "TokenPayload",
    "UserSession",
    "AccountRef",
    "DeletedResponse",
    "ResourceResponse",
    "ContactShortRead",
    "CallCreate",
    "CallRead",
    "CallUpdate",
    "GiftCreate",
    "GiftRead",
    "GiftUpdate",
]
