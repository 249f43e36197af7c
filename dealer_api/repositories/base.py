"""Repository base class shared by the collection-scoped repositories."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from bson.errors import BSONError
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from dealer_api.exceptions import DatabaseError

# Driver failures plus values BSON cannot encode (e.g. ints beyond int64)
STORE_ERRORS = (PyMongoError, BSONError, OverflowError)


def to_document(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a stored document into a JSON-safe dict.

    Mongo's internal key is an ObjectId; it is rendered as its hex string and
    kept under ``_id``. Every other field is passed through unchanged.
    """
    doc = dict(raw)
    if "_id" in doc and doc["_id"] is not None:
        doc["_id"] = str(doc["_id"])
    return doc


class BaseRepository:
    """Typed access to a single collection.

    Sub-classes call :meth:`_find_many` / :meth:`_find_one` with the fixed
    error message of the calling operation; any driver error is logged and
    re-raised as :class:`DatabaseError` carrying that message. Filters BSON
    cannot encode are treated the same way.
    """

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection
        self._log = logging.getLogger(f"dealer_api.repository.{type(self).__name__}")

    @property
    def collection(self) -> AsyncCollection:
        return self._collection

    async def _find_many(
        self, query: Mapping[str, Any], error_message: str
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self._collection.find(query)
            raw_docs = await cursor.to_list(length=None)
        except STORE_ERRORS as e:
            self._log.error("%s (query=%s): %s", error_message, dict(query), e)
            raise DatabaseError(
                message=error_message,
                context={"query": dict(query), "error_type": type(e).__name__},
            ) from e
        return [to_document(doc) for doc in raw_docs]

    async def _find_one(
        self,
        query: Mapping[str, Any],
        error_message: str,
        sort: Optional[List[Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            raw = await self._collection.find_one(query, sort=sort)
        except STORE_ERRORS as e:
            self._log.error("%s (query=%s): %s", error_message, dict(query), e)
            raise DatabaseError(
                message=error_message,
                context={"query": dict(query), "error_type": type(e).__name__},
            ) from e
        return to_document(raw) if raw is not None else None
