"""Explicitly owned database handle for the reporting services.

The FastAPI lifespan and the CLI each construct one DataStore, connect it,
hand it to the code that queries, and close it on the way out. Services
never reach for a module-level client; they query through
``store.connection``.
"""

import logging
from typing import Optional

from tortoise import BaseDBAsyncClient, Tortoise, connections

from .config import DATABASE_URL, build_tortoise_config

logger = logging.getLogger(__name__)


class DataStore:
    """
    Owner of the process-wide Tortoise connections.

    Tortoise keeps one global registry, so only one DataStore may be connected
    at a time; connecting a second raises until the first is closed.
    """

    _active: Optional["DataStore"] = None

    def __init__(self, db_url: str = DATABASE_URL, generate_schemas: bool = False):
        self.db_url = db_url
        self.generate_schemas = generate_schemas
        self.config = build_tortoise_config(db_url)
        self._connection: Optional[BaseDBAsyncClient] = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def connection(self) -> BaseDBAsyncClient:
        if self._connection is None:
            raise RuntimeError("DataStore is not connected; call connect() first.")
        return self._connection

    async def connect(self) -> "DataStore":
        if self._connection is not None:
            return self
        if DataStore._active is not None:
            raise RuntimeError("Another DataStore is already connected; close it first.")
        await Tortoise.init(config=self.config)
        self._connection = connections.get("default")
        DataStore._active = self
        if self.generate_schemas:
            try:
                await Tortoise.generate_schemas(safe=True)
            except Exception:
                await self.close()
                raise
        logger.info("Connected to reporting database (%s)", self._safe_url())
        return self

    async def close(self) -> None:
        if self._connection is None:
            return
        await Tortoise.close_connections()
        self._connection = None
        DataStore._active = None
        logger.info("Reporting database connections closed.")

    async def __aenter__(self) -> "DataStore":
        return await self.connect()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _safe_url(self) -> str:
        # Hide credentials in postgres/mysql style URLs.
        scheme, sep, rest = self.db_url.partition("://")
        if "@" in rest:
            rest = rest.split("@", 1)[1]
            return f"{scheme}{sep}***@{rest}"
        return self.db_url
