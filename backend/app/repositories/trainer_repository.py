"""
Trainer API Backend: Trainer Repository
========================================

What:  All queries against the `trainers` collection.
Why:   Keeps driver calls and driver error translation out of the route handlers.
How:   Wraps an async pymongo collection. Every driver failure is translated
       into DatabaseError; a missing trainer becomes NotFoundError.
Who:   Constructed once in the lifespan, injected into routes via
       `get_trainer_repository`.

Error Handling Strategy:
    Only `PyMongoError` is caught and wrapped, with the driver message kept
    behind the `[MongoBD] ` prefix. A stored document that cannot be decoded
    does not fail the listing: it is logged and skipped.
"""

import logging
from typing import Any, List

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError
from pymongo.asynchronous.collection import AsyncCollection
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.trainer import from_document, to_document
from app.schemas.trainer import Trainer

logger = logging.getLogger(__name__)


class TrainerRepository:
    """
    Data access for trainers.

    The collection handle is shared by all concurrent requests; the driver
    handles pooling. The repository holds no other state, so there is nothing
    to lock.
    """

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def list_all(self) -> List[Trainer]:
        """
        Return every trainer in natural cursor order.

        Documents that fail to decode are skipped with a warning; the
        remaining trainers are still returned.

        Raises:
            DatabaseError: the query or the cursor iteration failed.
        """
        trainers: List[Trainer] = []
        skipped = 0
        try:
            cursor = self.collection.find({})
            async for doc in cursor:
                try:
                    trainers.append(from_document(doc))
                except PydanticValidationError as e:
                    skipped += 1
                    logger.warning(
                        "Skipping undecodable trainer document %s: %s",
                        doc.get("_id"),
                        e,
                    )
        except PyMongoError as e:
            logger.error("[MongoDB] Error listing trainers: %s", e)
            raise DatabaseError(str(e), operation="find") from e

        logger.info("Found %d trainer documents (%d skipped)", len(trainers), skipped)
        return trainers

    async def find_by_name(self, name: str) -> Trainer:
        """
        Return the first trainer whose name equals `name` exactly.

        With several trainers of the same name the database chooses which one.

        Raises:
            NotFoundError: no document has this name.
            DatabaseError: the query failed or the document cannot be decoded.
        """
        try:
            doc = await self.collection.find_one({"name": name})
        except PyMongoError as e:
            logger.error("[MongoDB] Error finding trainer %r: %s", name, e)
            raise DatabaseError(str(e), operation="find_one") from e

        if doc is None:
            raise NotFoundError(resource="trainer", key=name)

        try:
            trainer = from_document(doc)
        except PydanticValidationError as e:
            logger.error("Undecodable trainer document %s: %s", doc.get("_id"), e)
            raise DatabaseError(
                f"cannot decode trainer document: {e.error_count()} error(s)",
                operation="decode",
            ) from e

        logger.info("Found a single document: %s", trainer)
        return trainer

    async def insert(self, trainer: Trainer) -> Any:
        """
        Store `trainer` as a new document and return the generated `_id`.

        No duplicate-name check: inserting the same trainer twice stores two
        documents.

        Raises:
            ValidationError: the trainer cannot be encoded as BSON (lone
                surrogates in a string, an integer wider than 64 bits).
            DatabaseError: the insert failed.
        """
        try:
            result = await self.collection.insert_one(to_document(trainer))
        except (BSONError, OverflowError, UnicodeEncodeError) as e:
            logger.warning("Trainer rejected by the BSON encoder: %s", e)
            raise ValidationError(context={"reason": str(e)}) from e
        except PyMongoError as e:
            logger.error("[MongoDB] Error inserting trainer: %s", e)
            raise DatabaseError(str(e), operation="insert_one") from e

        logger.info("Inserted a single document: %s", result.inserted_id)
        return result.inserted_id

    async def delete_all(self) -> int:
        """
        Delete every trainer and return how many were removed.

        Irreversible; calling it on an empty collection returns 0.

        Raises:
            DatabaseError: the delete failed.
        """
        try:
            result = await self.collection.delete_many({})
        except PyMongoError as e:
            logger.error("[MongoDB] Error deleting trainers: %s", e)
            raise DatabaseError(str(e), operation="delete_many") from e

        logger.info("Deleted %d documents in the trainers collection", result.deleted_count)
        return result.deleted_count

    async def ping(self) -> None:
        """Round-trip to the server holding the collection (used by /health)."""
        await self.collection.database.command("ping")


def get_trainer_repository(request: Request) -> TrainerRepository:
    """
    FastAPI dependency returning the repository built at startup.

    Tests install their own repository on `app.state` instead.

    Raises:
        RuntimeError: the lifespan has not run, so no repository exists.
    """
    repository = getattr(request.app.state, "trainer_repository", None)
    if repository is None:
        raise RuntimeError("Trainer repository is not initialized; was the lifespan run?")
    return repository
