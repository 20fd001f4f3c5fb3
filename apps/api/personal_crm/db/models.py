"""SQLAlchemy ORM models for accounts, users, contacts and their activities."""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from personal_crm.db.base import Base


# =============================================================================
# Tenant Models
# =============================================================================

class Account(Base):
    """
    A tenant in the multi-tenant system.

    All domain entities belong to an account
    and must be scoped by account_id in all queries.
    """
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False
    )

    # Relationships
    users: Mapped[list["User"]] = relationship(
        back_populates="account",
        cascade="all, delete-orphan"
    )


class User(Base):
    """Application user. Belongs to exactly one account."""
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_account_id", "account_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    token_version: Mapped[int] = mapped_column(
        Integer,
        default=1,
        server_default="1",
        nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default="1",
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False
    )

    # Relationships
    account: Mapped["Account"] = relationship(back_populates="users")


# =============================================================================
# Contacts & Activities
# =============================================================================

class Contact(Base):
    """A person tracked by an account."""
    __tablename__ = "contacts"
    __table_args__ = (
        Index("idx_contacts_account_id", "account_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_partial: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default="0",
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        onupdate=func.now(),
        nullable=True
    )


class Call(Base):
    """A phone call logged against a contact."""
    __tablename__ = "calls"
    __table_args__ = (
        Index("idx_calls_account_contact", "account_id", "contact_id"),
        Index("idx_calls_account_called_at", "account_id", "called_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False
    )
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    called_at: Mapped[datetime] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False
    )
    # Null until the call is first edited
    updated_at: Mapped[datetime | None] = mapped_column(
        onupdate=func.now(),
        nullable=True
    )

    # Relationships
    contact: Mapped["Contact"] = relationship()


class Gift(Base):
    """A gift given to (or planned for) a contact."""
    __tablename__ = "gifts"
    __table_args__ = (
        Index("idx_gifts_account_contact", "account_id", "contact_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False
    )
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        onupdate=func.now(),
        nullable=True
    )

    # Relationships
    contact: Mapped["Contact"] = relationship()
