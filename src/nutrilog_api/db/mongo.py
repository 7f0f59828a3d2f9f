"""MongoDB connection management using Motor async driver."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

logger = logging.getLogger(__name__)

# Collection names shared by repositories and index setup
MEALS = "meals"
WEIGHT_ENTRIES = "weight_entries"
SETTINGS = "settings"
RECIPE_SESSIONS = "recipe_sessions"


class MongoDB:
    """
    Process-wide Motor client holder.

    One client (and its connection pool) lives for the whole application
    lifespan; repositories borrow collections from it per request.
    """

    client: AsyncIOMotorClient | None = None
    _db_name: str = "nutrilog"

    @classmethod
    def connect(cls, uri: str, db_name: str = "nutrilog") -> None:
        """
        Open the client.

        Args:
            uri: MongoDB connection URI
            db_name: Default database for this deployment
        """
        cls.client = AsyncIOMotorClient(uri)
        cls._db_name = db_name

    @classmethod
    def close(cls) -> None:
        if cls.client is not None:
            cls.client.close()
            cls.client = None

    @classmethod
    def get_database(cls, name: str | None = None) -> AsyncIOMotorDatabase:
        """
        Get the configured database.

        Raises:
            RuntimeError: If connect() has not been called
        """
        if cls.client is None:
            raise RuntimeError("MongoDB not connected. Call MongoDB.connect() first.")
        return cls.client[name or cls._db_name]

    @classmethod
    def is_connected(cls) -> bool:
        return cls.client is not None

    @classmethod
    async def ensure_indexes(cls) -> None:
        """Create the single-field indexes the range queries sort and filter on."""
        db = cls.get_database()
        await db[MEALS].create_index([("timestamp", ASCENDING)])
        await db[WEIGHT_ENTRIES].create_index([("date", ASCENDING)])
        logger.info("MongoDB indexes ensured")
