"""Shared response envelopes and field types."""

from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

# Integer primary keys; anything larger cannot be bound as a query parameter
MAX_ID = 2**31 - 1

ResourceId = Annotated[int, Field(ge=1, le=MAX_ID)]


class AccountRef(BaseModel):
    id: int


class ResourceResponse(BaseModel, Generic[T]):
    """Single resource wrapped in a ``data`` key."""
    data: T


class DeletedResponse(BaseModel):
    """Confirmation returned after a delete."""
    deleted: bool = True
    id: int
