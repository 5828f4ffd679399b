# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: Singleton wrapper around the async MongoDB client
# - utils.py: Shared utilities (ObjectId parsing, serialization, errors)
# =============================================================================

from lib.mongo_client import MongoClient, MongoClientError
from lib.utils import ApplicationError, parse_object_id, serialize_document, utcnow

__all__ = [
    # MongoDB
    "MongoClient",
    "MongoClientError",
    # Utils
    "ApplicationError",
    "parse_object_id",
    "serialize_document",
    "utcnow",
]
