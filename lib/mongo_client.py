# =============================================================================
# lib/mongo_client.py - MongoDB Client Wrapper
# =============================================================================
# This module owns the single AsyncMongoClient used by the application.
# It implements the singleton pattern to reuse one connection pool and
# provides small helpers for:
# - Resolving the configured database and its collections
# - Connectivity checks (used by the readiness endpoint)
# - Closing the client on shutdown
#
# Usage:
#   from lib.mongo_client import MongoClient
#   books = MongoClient.get_collection("books")
#   await MongoClient.ping()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


class MongoClientError(ApplicationError):
    """Error while setting up or reaching the MongoDB client."""

    def __init__(
        self,
        message: str,
        code: str = "MONGODB_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class MongoClient:
    """
    Wrapper around the process-wide AsyncMongoClient.

    All methods are class methods for easy access without instantiation.
    The driver connects lazily, so creating the client never blocks; the
    first real operation (or `ping`) opens the connection.

    Example:
        users = MongoClient.get_collection("users")
        doc = await users.find_one({"email": "ada@example.com"})
    """

    _instance: AsyncMongoClient | None = None

    @classmethod
    def get_client(cls) -> AsyncMongoClient:
        """
        Get or create the singleton client.

        Raises:
            MongoClientError: If the URI is missing or the client cannot be created
        """
        if cls._instance is None:
            if not settings.MONGODB_URI:
                raise MongoClientError(
                    message="MONGODB_URI is not configured",
                    code="MISSING_URI",
                    suggestion="Set MONGODB_URI in your environment or .env file"
                )
            try:
                cls._instance = AsyncMongoClient(
                    settings.MONGODB_URI,
                    serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                    tz_aware=True,
                )
                logger.info("MongoDB client initialized successfully")
            except Exception as e:
                raise MongoClientError(
                    message=f"Failed to create MongoDB client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check MONGODB_URI in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def get_database(cls) -> AsyncDatabase:
        """Return the configured database handle."""
        return cls.get_client()[settings.MONGODB_DATABASE]

    @classmethod
    def get_collection(cls, name: str) -> AsyncCollection:
        """Return a collection handle from the configured database."""
        return cls.get_database()[name]

    @classmethod
    async def ping(cls) -> bool:
        """
        Check that the server answers.

        Returns:
            True when the server replied to a ping

        Raises:
            pymongo.errors.PyMongoError: If the server cannot be reached
        """
        await cls.get_database().command("ping")
        return True

    @classmethod
    async def close(cls) -> None:
        """Close the client and forget the singleton."""
        if cls._instance is not None:
            await cls._instance.close()
            cls._instance = None
            logger.info("MongoDB client closed")
