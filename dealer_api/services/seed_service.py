"""
Dealerships API — Seed Loader & Database Initializer
======================================================

What:  Loads the static review/dealership JSON files and reloads both
       collections from them at startup.
Why:   The API serves a fixed demo dataset; every process start resets the
       store to that dataset.
How:   SeedLoader reads both files with aiofiles and checks their shape.
       DatabaseInitializer clears both collections, builds the indexes on
       the empty collections, then bulk-inserts the seed documents.
Who:   Called once by the application lifespan (main.py).
When:  After the store connection has been verified, before traffic.

Failure Policy:
    Seeding failures (unreadable file, wrong shape, store error during
    clear/insert) are logged and swallowed. The process keeps running and
    serves whatever the collections contain; nothing is retried.
    Connection failure is NOT handled here: it is fatal and raised earlier
    by database.connect().

Seed file shapes:
    reviews.json      {"reviews":     [{id, dealership, name, review, ...}, ...]}
    dealerships.json  {"dealerships": [{id, state, ...}, ...]}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
from pymongo import ASCENDING
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from dealer_api.config import Settings, settings
from dealer_api.exceptions import SeedDataError

logger = logging.getLogger(__name__)


@dataclass
class SeedData:
    """Parsed contents of both seed files."""

    reviews: List[Dict[str, Any]] = field(default_factory=list)
    dealerships: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class SeedResult:
    """Outcome of one initializer run."""

    reviews_inserted: int = 0
    dealerships_inserted: int = 0
    succeeded: bool = False
    error: Optional[str] = None


class SeedLoader:
    """Reads the two seed files into memory."""

    def __init__(self, reviews_path: Path, dealerships_path: Path) -> None:
        self.reviews_path = Path(reviews_path)
        self.dealerships_path = Path(dealerships_path)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "SeedLoader":
        return cls(config.reviews_seed_file, config.dealerships_seed_file)

    async def load(self) -> SeedData:
        """
        Read and validate both seed files.

        Raises:
            SeedDataError: a file is missing, is not valid JSON, or lacks
                its top-level list.
        """
        reviews = await self._read_list(self.reviews_path, "reviews")
        dealerships = await self._read_list(self.dealerships_path, "dealerships")
        logger.info(
            "Loaded seed data: %d reviews, %d dealerships",
            len(reviews),
            len(dealerships),
        )
        return SeedData(reviews=reviews, dealerships=dealerships)

    @staticmethod
    async def _read_list(path: Path, key: str) -> List[Dict[str, Any]]:
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise SeedDataError(
                message=f"Could not read seed file {path}: {e}", path=str(path)
            ) from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SeedDataError(
                message=f"Seed file {path} is not valid JSON: {e}", path=str(path)
            ) from e

        if not isinstance(payload, dict) or not isinstance(payload.get(key), list):
            raise SeedDataError(
                message=f"Seed file {path} must contain a top-level '{key}' list",
                path=str(path),
            )

        documents = payload[key]
        if not all(isinstance(doc, dict) for doc in documents):
            raise SeedDataError(
                message=f"Every entry of '{key}' in {path} must be an object",
                path=str(path),
            )
        return documents


class DatabaseInitializer:
    """
    Clears and reseeds both collections.

    Runs once per process start. `run()` never raises for seeding problems;
    it reports them through the returned SeedResult and the log.
    """

    def __init__(
        self,
        database: AsyncDatabase,
        loader: SeedLoader,
        config: Settings = settings,
    ) -> None:
        self.reviews = database[config.reviews_collection]
        self.dealerships = database[config.dealerships_collection]
        self.loader = loader

    async def ensure_indexes(self) -> None:
        """
        Unique index on reviews.id; plain index on dealerships.id.

        The unique index is what turns a racing duplicate review id into a
        DuplicateKeyError that ReviewRepository can retry. MongoDB refuses to
        build it over existing duplicate ids; that failure is only logged here.
        """
        try:
            await self._create_indexes()
        except PyMongoError as e:
            logger.error("Error creating indexes: %s", e)

    async def _create_indexes(self) -> None:
        await self.reviews.create_index([("id", ASCENDING)], unique=True)
        await self.dealerships.create_index([("id", ASCENDING)])

    async def run(self) -> SeedResult:
        """
        Clear both collections, build the indexes, insert the seed data.

        Indexes are built on the emptied collections so leftover duplicate
        review ids cannot block the unique index.
        """
        result = SeedResult()
        try:
            await self.reviews.delete_many({})
            await self.dealerships.delete_many({})
            logger.info("Cleared existing data from reviews and dealerships collections.")

            await self._create_indexes()

            data = await self.loader.load()

            if data.reviews:
                inserted = await self.reviews.insert_many(data.reviews)
                result.reviews_inserted = len(inserted.inserted_ids)
            if data.dealerships:
                inserted = await self.dealerships.insert_many(data.dealerships)
                result.dealerships_inserted = len(inserted.inserted_ids)
        except (PyMongoError, SeedDataError) as e:
            result.error = str(e)
            logger.error("Error initializing database: %s", e)
            return result

        result.succeeded = True
        logger.info(
            "Database initialized from seed files: %d reviews, %d dealerships",
            result.reviews_inserted,
            result.dealerships_inserted,
        )
        return result


async def initialize_database(
    database: AsyncDatabase, config: Settings = settings
) -> SeedResult:
    """Startup entry point: the reseed, or only the indexes when seeding is off."""
    initializer = DatabaseInitializer(database, SeedLoader.from_settings(config), config)
    if not config.seed_on_startup:
        logger.info("Seeding disabled (SEED_ON_STARTUP=false); keeping existing data")
        await initializer.ensure_indexes()
        return SeedResult(succeeded=True)
    return await initializer.run()
