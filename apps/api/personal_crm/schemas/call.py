"""Pydantic schemas for calls."""

import re
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from personal_crm.schemas.common import AccountRef, ResourceId
from personal_crm.schemas.contact import ContactShortRead
from personal_crm.utils.presentation import as_utc

CONTENT_MAX_LENGTH = 100000

_NUMERIC = re.compile(r"[+-]?\d+(\.\d+)?")


class CallCreate(BaseModel):
    """Request to log a call."""
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    called_at: datetime
    contact_id: ResourceId

    @field_validator("called_at", mode="before")
    @classmethod
    def called_at_must_be_date_string(cls, value: Any) -> Any:
        # Unix timestamps are not dates here
        if isinstance(value, (int, float)) or (
            isinstance(value, str) and _NUMERIC.fullmatch(value.strip())
        ):
            raise PydanticCustomError("datetime_type", "Input should be a date string")
        return value

    @field_validator("called_at")
    @classmethod
    def called_at_to_utc(cls, value: datetime) -> datetime:
        try:
            return as_utc(value)
        except OverflowError:
            raise PydanticCustomError("datetime_range", "Date is out of range in UTC")


class CallUpdate(CallCreate):
    """Request to update a call. Every field is replaced."""


class CallRead(BaseModel):
    """Call resource. Timestamps are pre-formatted strings."""
    id: int
    object: Literal["call"] = "call"
    called_at: str
    content: str
    contact: ContactShortRead
    account: AccountRef
    created_at: str
    updated_at: str | None
