"""
Dealerships API — Review Repository
=====================================

What:  Operations over the reviews collection: list, filter by dealership,
       compute the next review id, insert.
Who:   Called by the review route handlers.

Id Assignment:
    Review ids are assigned by the application, not the store:
        next id = max(existing id) + 1, or 1 when the collection is empty.
    "Read max, then insert" is not atomic, so two concurrent inserts can
    pick the same id. The `id` field carries a unique index (created by the
    DatabaseInitializer); the losing insert gets DuplicateKeyError and
    tenacity re-runs the read-then-insert with a fresh max. Sequential
    inserts see plain max + 1 numbering.
"""

import logging
from typing import Any, Dict, List, Mapping

from fastapi import Depends
from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random,
)

from dealer_api.config import settings
from dealer_api.database import get_database
from dealer_api.exceptions import DatabaseError
from dealer_api.repositories.base import STORE_ERRORS, BaseRepository, to_document

logger = logging.getLogger(__name__)

INSERT_ERROR = "Error inserting review"


class ReviewRepository(BaseRepository):
    """Review documents keyed by an application-assigned integer `id`."""

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self._find_many({}, "Error fetching reviews")

    async def list_by_dealership(self, dealership_id: int) -> List[Dict[str, Any]]:
        return await self._find_many(
            {"dealership": dealership_id}, "Error fetching reviews by dealer id"
        )

    async def next_id(self) -> int:
        """Highest existing `id` plus one; 1 for an empty collection."""
        last = await self._find_one({}, INSERT_ERROR, sort=[("id", DESCENDING)])
        if last is None or last.get("id") is None:
            return 1
        return int(last["id"]) + 1

    async def insert(self, review: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Assign the next id to `review` and persist it.

        Any client-supplied `_id` or `id` is discarded: the store assigns
        `_id`, the repository assigns `id`.

        Returns:
            The stored document, including `_id` (as a string) and `id`.

        Raises:
            DatabaseError: the store failed, or every attempt collided with
                a concurrent insert.
        """
        fields = {k: v for k, v in review.items() if k not in ("_id", "id")}
        try:
            return await self._insert_with_next_id(fields)
        except DuplicateKeyError as e:
            self._log.error(
                "Gave up assigning a review id after %d attempts",
                settings.review_insert_max_attempts,
            )
            raise DatabaseError(
                message=INSERT_ERROR,
                context={"error_type": type(e).__name__},
            ) from e

    @retry(
        retry=retry_if_exception_type(DuplicateKeyError),
        stop=stop_after_attempt(settings.review_insert_max_attempts),
        # Small random pause so colliding writers do not re-read in lockstep
        wait=wait_random(min=0, max=0.05),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _insert_with_next_id(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        new_id = await self.next_id()
        doc = {**fields, "id": new_id}
        try:
            result = await self._collection.insert_one(doc)
        except DuplicateKeyError:
            self._log.warning("Review id %d was taken by a concurrent insert", new_id)
            raise
        except STORE_ERRORS as e:
            self._log.error("Error inserting review: %s", e)
            raise DatabaseError(
                message=INSERT_ERROR,
                context={"error_type": type(e).__name__},
            ) from e

        doc["_id"] = result.inserted_id
        self._log.info("Inserted review %d for dealership %s", new_id, doc.get("dealership"))
        return to_document(doc)


def get_review_repository(
    database: AsyncDatabase = Depends(get_database),
) -> ReviewRepository:
    """FastAPI dependency: a repository bound to the reviews collection."""
    return ReviewRepository(database[settings.reviews_collection])
