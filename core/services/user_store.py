# =============================================================================
# core/services/user_store.py - User Store
# =============================================================================

from core.models.user import UserDocument
from core.services.resource_store import ResourceStore


class UserStore(ResourceStore):
    """
    CRUD over the "users" collection.

    Emails are unique: a second user with the same email is rejected by the
    index and reported as DuplicateKey.
    """

    collection_name = "users"
    schema = UserDocument
    unique_fields = ("email",)
