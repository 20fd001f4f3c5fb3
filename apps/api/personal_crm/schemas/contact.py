"""Pydantic schemas for contacts."""

from typing import Literal

from pydantic import BaseModel

from personal_crm.schemas.common import AccountRef


class ContactShortRead(BaseModel):
    """Short contact representation nested inside other resources."""
    id: int
    object: Literal["contact"] = "contact"
    first_name: str
    last_name: str | None
    gender: str | None
    is_partial: bool
    account: AccountRef
