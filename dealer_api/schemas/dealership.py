"""
Dealerships API — Dealership Schemas

Dealerships are created only by the seed data and are read-only through the
API, so there is a response model and no request model. Descriptive
attributes (city, address, zip, lat, long, names, ...) are passed through as
extra fields.
"""

from typing import Optional

from pydantic import BaseModel, Field


class DealershipOut(BaseModel):
    """A stored dealership as returned by the fetch endpoints."""
    mongo_id: Optional[str] = Field(
        default=None,
        alias="_id",
        description="Store-assigned internal key (ObjectId hex string)",
    )
    id: Optional[int] = Field(default=None, description="Public dealership id")
    state: Optional[str] = Field(default=None, description="Region name, e.g. 'Kansas'")

    model_config = {"extra": "allow", "populate_by_name": True}
