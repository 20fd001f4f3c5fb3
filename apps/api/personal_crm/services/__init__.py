"""Service layer modules."""

from personal_crm.services.user_service import get_user_by_id, revoke_all_sessions

# Import service modules (not individual functions) for cleaner access
from personal_crm.services import contact_service
from personal_crm.services import call_service
from personal_crm.services import gift_service

__all__ = [
    "get_user_by_id",
    "revoke_all_sessions",
    "contact_service",
    "call_service",
    "gift_service",
]
