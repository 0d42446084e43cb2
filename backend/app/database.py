"""
Trainer API Backend: MongoDB Connection Management
===================================================

What:  Opens the async MongoDB client, verifies it with a ping, and hands out
       the trainers collection.
Why:   Centralizes all connection logic in one place; the rest of the app only
       ever sees a collection handle wrapped in a repository.
How:   pymongo's native asyncio client (AsyncMongoClient). The client owns its
       connection pool and is safe to share between concurrent requests.
Who:   Called by the lifespan handler in main.py.
When:  Once at startup (connect) and once at shutdown (close).

Failure policy:
    Connection and ping errors are fatal. There is no retry, no backoff and no
    reconnection logic: a server that cannot reach its database at startup
    refuses to start.
"""

import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from app.config import Credential
from app.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


async def connect_to_mongo(credential: Credential, scheme: str = "mongodb+srv") -> AsyncMongoClient:
    """
    Connect to MongoDB and check the connection.

    What:    Builds the URI from the credential, creates the client and pings.
    Returns: A connected AsyncMongoClient.

    Raises:
        DatabaseConnectionError: invalid URI, unreachable server or failed ping.
            The client is closed before raising.
    """
    uri = credential.mongo_uri(scheme)
    client = None
    try:
        client = AsyncMongoClient(uri)
        # The client connects lazily; ping forces server selection now
        await client.admin.command("ping")
    except PyMongoError as e:
        logger.error("Failed to connect to MongoDB at %s: %s", credential.host, e)
        if client is not None:
            await client.close()
        raise DatabaseConnectionError(
            message=f"Could not connect to MongoDB: {e}",
            context={"host": credential.host, "scheme": scheme},
        ) from e

    logger.info("Connected to MongoDB!")
    return client


def get_trainer_collection(
    client: AsyncMongoClient,
    database: str = "pokemon",
    collection: str = "trainers",
) -> AsyncCollection:
    """Return the collection used by every trainer operation."""
    return client[database][collection]


async def close_mongo(client: AsyncMongoClient) -> None:
    """
    Close all pooled connections.

    When: Application shutdown (lifespan).
    """
    await client.close()
    logger.info("MongoDB connection closed")
