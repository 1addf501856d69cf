"""
MongoDB client lifecycle
Lazily connects on first acquire and closes once the last holder releases
"""

import asyncio
import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from .config import BaseSettings

logger = logging.getLogger(__name__)


class DatabaseHandle:
    """Reference-counted handle around a single MongoDB client"""

    def __init__(self, settings: BaseSettings):
        self.settings = settings
        self.client: Optional[AsyncMongoClient] = None
        self.references = 0
        self._lock = asyncio.Lock()

    async def acquire(self) -> AsyncCollection:
        """Get the course collection, connecting on first use"""
        async with self._lock:
            if self.client is None:
                if not self.settings.mongodb_uri:
                    raise RuntimeError("MONGODB_URI is not set")

                self.client = AsyncMongoClient(
                    self.settings.mongodb_uri,
                    tz_aware=True,
                    serverSelectionTimeoutMS=self.settings.mongodb_timeout_ms,
                )
                logger.info(
                    f"Connected to MongoDB database {self.settings.mongodb_database}"
                )

            self.references += 1
            return self.collection

    @property
    def collection(self) -> AsyncCollection:
        if self.client is None:
            raise RuntimeError("Database handle has not been acquired")
        database = self.client[self.settings.mongodb_database]
        return database[self.settings.mongodb_collection]

    async def release(self) -> None:
        """Drop one reference, closing the client when none remain"""
        async with self._lock:
            if self.references == 0:
                return

            self.references -= 1
            if self.references == 0:
                await self._close_client()

    async def close(self) -> None:
        """Close the client regardless of outstanding references"""
        async with self._lock:
            self.references = 0
            await self._close_client()

    async def _close_client(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None
            logger.info("MongoDB connection closed")
