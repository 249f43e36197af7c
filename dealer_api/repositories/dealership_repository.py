"""
Dealerships API — Dealership Repository
=========================================

What:  Read-only operations over the dealerships collection.
Who:   Called by the dealership route handlers.

Matching rules:
    - `id` is the public lookup key (an integer assigned by the seed data),
      distinct from Mongo's `_id`. Lookups compare it as an integer.
    - `state` is matched exactly, using the casing the caller supplied.
      "Texas" and "texas" are different filters.
"""

from typing import Any, Dict, List

from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from dealer_api.config import settings
from dealer_api.database import get_database
from dealer_api.exceptions import NotFoundError
from dealer_api.repositories.base import BaseRepository


class DealershipRepository(BaseRepository):
    """Dealership documents: list all, filter by state, fetch one by id."""

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self._find_many({}, "Error fetching dealerships")

    async def list_by_state(self, state: str) -> List[Dict[str, Any]]:
        return await self._find_many({"state": state}, "Error fetching dealerships by state")

    async def find_by_id(self, dealer_id: int) -> Dict[str, Any]:
        """
        Fetch the dealership whose public `id` equals `dealer_id`.

        Raises:
            NotFoundError: no dealership has that id (→ 404)
            DatabaseError: the query itself failed (→ 500)
        """
        doc = await self._find_one({"id": dealer_id}, "Error fetching dealer by id")
        if doc is None:
            raise NotFoundError(
                message="Dealer not found",
                resource="dealership",
                resource_id=dealer_id,
            )
        return doc


def get_dealership_repository(
    database: AsyncDatabase = Depends(get_database),
) -> DealershipRepository:
    """FastAPI dependency: a repository bound to the dealerships collection."""
    return DealershipRepository(database[settings.dealerships_collection])
