"""
MongoDB database connection and configuration following FastAPI best practices
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from resource_service.core.config import Config
from resource_service.core.errors import StoreUnavailableError
from resource_service.core.logger import logger


class Database:
    """Database connection manager"""

    def __init__(self, settings: Config):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Create database connection"""
        logger.info("Connecting to MongoDB...")

        try:
            # tz_aware keeps stored timestamps comparable with UTC-aware datetimes
            self.client = AsyncIOMotorClient(self.settings.mongodb_url, tz_aware=True)
            self.database = self.client[self.settings.mongodb_database]

            # Test connection
            await self.client.admin.command('ping')

            logger.info(
                f"Successfully connected to MongoDB database '{self.settings.mongodb_database}'",
                metadata={
                    "event": "mongodb_connected",
                    "database": self.settings.mongodb_database,
                    "host": self.settings.mongodb_host,
                    "port": self.settings.mongodb_port,
                },
            )
        except Exception as e:
            logger.error(
                f"Could not connect to MongoDB: {e}",
                metadata={"event": "mongodb_connection_error", "error": str(e)},
            )
            raise StoreUnavailableError(f"Could not connect to MongoDB: {e}")

    async def close(self) -> None:
        """Close database connection"""
        logger.info("Closing connection to MongoDB...")
        if self.client is not None:
            self.client.close()
            self.client = None
            self.database = None

    def resource_collection(self) -> AsyncIOMotorCollection:
        """Get resources collection"""
        if self.database is None:
            raise StoreUnavailableError("MongoDB is not connected")
        return self.database[self.settings.mongodb_collection]
