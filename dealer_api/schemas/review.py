"""
Dealerships API — Review Schemas
==================================

What:  Pydantic models for review request bodies and responses.
Why:   Documents are schemaless in the store; these models are the explicit
       contract at the API boundary and drive the OpenAPI docs.

Pass-through:
    Both models allow extra fields. A client may send attributes beyond the
    ones listed here and they are stored and returned unchanged.
"""

from typing import Optional

from pydantic import BaseModel, Field

from dealer_api.schemas.common import BSON_INT_MAX, BSON_INT_MIN


class ReviewCreate(BaseModel):
    """
    What:  Body of POST /insert_review.
    Note:  No `id` field; the repository assigns it.
    """
    name: str = Field(description="Reviewer name")
    dealership: int = Field(
        ge=BSON_INT_MIN, le=BSON_INT_MAX, description="Public id of the reviewed dealership"
    )
    review: str = Field(description="Review text")
    purchase: bool = Field(description="Whether the reviewer bought a car")
    purchase_date: str = Field(description="Purchase date as entered by the client")
    car_make: str = Field(description="Make of the purchased car")
    car_model: str = Field(description="Model of the purchased car")
    car_year: int = Field(
        ge=BSON_INT_MIN, le=BSON_INT_MAX, description="Model year of the purchased car"
    )

    model_config = {
        "extra": "allow",
        "json_schema_extra": {
            "example": {
                "name": "Berkly Shepley",
                "dealership": 15,
                "review": "Total grid-enabled service-desk",
                "purchase": True,
                "purchase_date": "07/11/2020",
                "car_make": "Audi",
                "car_model": "A6",
                "car_year": 2010,
            }
        },
    }


class ReviewOut(BaseModel):
    """
    What:  A stored review as returned by the fetch and insert endpoints.
    Who:   GET /fetchReviews, GET /fetchReviews/dealer/{id}, POST /insert_review.
    """
    mongo_id: Optional[str] = Field(
        default=None,
        alias="_id",
        description="Store-assigned internal key (ObjectId hex string)",
    )
    # Optional so documents stored without these fields still serialize
    id: Optional[int] = Field(
        default=None, description="Application-assigned sequential review id"
    )
    dealership: Optional[int] = Field(
        default=None, description="Public id of the reviewed dealership"
    )

    model_config = {"extra": "allow", "populate_by_name": True}
