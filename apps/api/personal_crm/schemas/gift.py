"""Pydantic schemas for gifts."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from personal_crm.schemas.common import AccountRef, ResourceId
from personal_crm.schemas.contact import ContactShortRead

BODY_MAX_LENGTH = 100000


class GiftCreate(BaseModel):
    """Request to record a gift."""
    model_config = ConfigDict(str_strip_whitespace=True)

    body: str = Field(..., min_length=1, max_length=BODY_MAX_LENGTH)
    contact_id: ResourceId


class GiftUpdate(GiftCreate):
    """Request to update a gift. Every field is replaced."""


class GiftRead(BaseModel):
    """Gift resource. ``updated_at`` is null until the gift is edited."""
    id: int
    object: Literal["gift"] = "gift"
    body: str
    account: AccountRef
    contact: ContactShortRead
    created_at: str
    updated_at: str | None
