# db.py
import asyncio
from typing import Optional, ClassVar

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)

from libs.logger import get_logger
from libs.settings import settings

logger = get_logger(__name__)


# ──────────────────────────────────────────────
# Custom Exceptions
# ──────────────────────────────────────────────
class DatabaseConnectionError(Exception):
    """Raised when database connection fails or is not initialized."""


# ──────────────────────────────────────────────
# Database Class
# ──────────────────────────────────────────────
class Database:
    """
    Singleton-style holder of the process-wide Motor client.

    The client owns the connection pool; request handlers only ever borrow
    collections from it.
    """

    _client: ClassVar[Optional[AsyncIOMotorClient]] = None
    _db: ClassVar[Optional[AsyncIOMotorDatabase]] = None
    _lock: ClassVar[asyncio.Lock] = asyncio.Lock()

    @classmethod
    async def connect(cls) -> None:
        """
        Establish the MongoDB connection.
        Safe to call multiple times, the client is created only once.
        """
        async with cls._lock:
            if cls._client is not None:
                return  # already connected

            try:
                client = AsyncIOMotorClient(
                    settings.mongo_uri,
                    tz_aware=True,
                    serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
                )
                await client.admin.command("ping")

                cls._client = client
                cls._db = client[settings.database_name]

                logger.info(
                    f"Connected to MongoDB → {settings.mongo_uri}/{settings.database_name}"
                )
            except Exception as e:
                logger.exception("Failed to connect to MongoDB.")
                # Reset on failure to avoid stale references
                cls._client = None
                cls._db = None
                raise DatabaseConnectionError(str(e)) from e

    @classmethod
    async def disconnect(cls) -> None:
        """Close the MongoDB connection."""
        if cls._client:
            cls._client.close()
            cls._client = None
            cls._db = None

        logger.info("Disconnected from MongoDB.")

    # ──────────────────────────────────────────
    # Accessors
    # ──────────────────────────────────────────
    @classmethod
    async def get_database(cls) -> AsyncIOMotorDatabase:
        """
        Return the database object, auto-connecting if needed.
        """
        if cls._db is None:
            await cls.connect()
        if cls._db is None:
            raise DatabaseConnectionError("Database client not connected.")
        return cls._db

    @classmethod
    async def get_collection(cls, name: str) -> AsyncIOMotorCollection:
        """
        Get a collection from the database.
        """
        db = await cls.get_database()
        return db[name]
