"""
HRMS Employee Service — Database Connection Management
=======================================================

What:  Builds the single MongoDB handle shared by every request, and the FastAPI
       dependency that hands the employees collection to route handlers.
How:   `connect()` runs once in the lifespan handler: it creates an async PyMongo
       client, pings the primary within CONNECT_TIMEOUT_SECONDS and selects the
       fixed database. The result is a frozen `MongoInstance` stored on
       `app.state.mongo`; handlers receive it through `Depends`, never through
       a module global.

Failure policy:
    Any error while connecting propagates out of the lifespan, which makes
    uvicorn abort startup. There is no retry and no reconnect-on-failure;
    the driver's own server monitoring is all the recovery there is.
"""

import asyncio
import logging
from dataclasses import dataclass

from fastapi import Request
from pymongo import AsyncMongoClient, ReadPreference
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from hrms.config import (
    COLLECTION_NAME,
    CONNECT_TIMEOUT_SECONDS,
    DATABASE_NAME,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MongoInstance:
    """Client plus the selected database. Read-only once constructed."""

    client: AsyncMongoClient
    db: AsyncDatabase

    @property
    def employees(self) -> AsyncCollection:
        return self.db[COLLECTION_NAME]

    async def ping(self) -> None:
        """Liveness check against the primary node; raises on failure."""
        await self.client.admin.command("ping", read_preference=ReadPreference.PRIMARY)

    async def close(self) -> None:
        await self.client.close()


async def connect(connection_string: str) -> MongoInstance:
    """
    Open the shared connection and verify it is usable.

    The client is created with a direct connection and driver timeouts matching
    CONNECT_TIMEOUT_SECONDS; the ping is additionally wrapped in
    `asyncio.wait_for` so the whole step is bounded.

    Raises:
        asyncio.TimeoutError: the primary did not answer in time
        pymongo.errors.PyMongoError: bad URI, auth failure, unreachable server
    """
    timeout_ms = CONNECT_TIMEOUT_SECONDS * 1000
    client = AsyncMongoClient(
        connection_string,
        directConnection=True,
        connectTimeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
    )
    instance = MongoInstance(client=client, db=client[DATABASE_NAME])

    try:
        await asyncio.wait_for(instance.ping(), timeout=CONNECT_TIMEOUT_SECONDS)
    except Exception:
        await client.close()
        raise

    logger.info("Connected to MongoDB database '%s'", DATABASE_NAME)
    return instance


# ── Request Dependencies ──────────────────────────────────────────────────
def get_mongo(request: Request) -> MongoInstance:
    """FastAPI dependency returning the handle created at startup."""
    return request.app.state.mongo


def get_employee_collection(request: Request) -> AsyncCollection:
    """
    FastAPI dependency returning the `employees` collection.

    Tests replace this through `app.dependency_overrides` with an in-memory
    collection, so nothing below the routes needs a live server.
    """
    return get_mongo(request).employees
