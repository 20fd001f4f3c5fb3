"""Contact service - account-scoped contact lookups and the short presenter."""

from sqlalchemy.orm import Session

from personal_crm.db.models import Contact
from personal_crm.schemas.common import AccountRef
from personal_crm.schemas.contact import ContactShortRead


def get_contact(db: Session, account_id: int, contact_id: int) -> Contact | None:
    """Get a contact by ID (account-scoped)."""
    return db.query(Contact).filter(
        Contact.account_id == account_id,
        Contact.id == contact_id,
    ).first()


def to_contact_short(contact: Contact) -> ContactShortRead:
    """Convert Contact model to the short nested representation."""
    return ContactShortRead(
        id=contact.id,
        first_name=contact.first_name,
        last_name=contact.last_name,
        gender=contact.gender,
        is_partial=contact.is_partial,
        account=AccountRef(id=contact.account_id),
    )
