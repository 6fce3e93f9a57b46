# safepsy_api/database/connection.py
import logging
from typing import Optional

import asyncpg

from safepsy_api.config import Settings

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Owns the asyncpg pool; opened on app startup and closed on shutdown"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pool: Optional[asyncpg.Pool] = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database connection pool is not open")
        return self._pool

    async def open(self) -> asyncpg.Pool:
        """Create the connection pool if it does not exist yet"""
        if self._pool is None:
            if not self.settings.database_url:
                raise ValueError("DATABASE_URL environment variable not set")

            try:
                self._pool = await asyncpg.create_pool(
                    self.settings.database_url,
                    min_size=self.settings.db_pool_min_size,
                    max_size=self.settings.db_pool_max_size,
                    command_timeout=self.settings.db_command_timeout
                )
                logger.info("Database connection pool created")
            except Exception as e:
                logger.error(f"Failed to create database pool: {e}")
                raise
        return self._pool

    async def close(self):
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database connection pool closed")

    def acquire(self):
        """Borrow a connection: ``async with db.acquire() as connection``"""
        return self.pool.acquire()

    async def ping(self) -> bool:
        try:
            async with self.acquire() as connection:
                await connection.fetchval("SELECT 1")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False
