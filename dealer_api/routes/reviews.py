"""
Dealerships API — Review Route Handlers
=========================================

What:  GET /fetchReviews, GET /fetchReviews/dealer/{id}, POST /insert_review.
How:   Each handler makes exactly one repository call. Store failures raise
       DatabaseError inside the repository and are turned into a 500 by the
       global handler in main.py.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path

from dealer_api.exceptions import ValidationError
from dealer_api.repositories.review_repository import (
    ReviewRepository,
    get_review_repository,
)
from dealer_api.schemas.common import BSON_INT_MAX, BSON_INT_MIN, ErrorResponse
from dealer_api.schemas.review import ReviewCreate, ReviewOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reviews"])


@router.get(
    "/fetchReviews",
    response_model=List[ReviewOut],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all reviews",
)
async def fetch_reviews(
    repository: ReviewRepository = Depends(get_review_repository),
) -> List[Dict[str, Any]]:
    return await repository.list_all()


@router.get(
    "/fetchReviews/dealer/{dealer_id}",
    response_model=List[ReviewOut],
    responses={
        400: {"description": "Dealer id is not a 64-bit integer", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="List the reviews of one dealership",
)
async def fetch_reviews_by_dealer(
    dealer_id: int = Path(ge=BSON_INT_MIN, le=BSON_INT_MAX),
    repository: ReviewRepository = Depends(get_review_repository),
) -> List[Dict[str, Any]]:
    """Returns exactly the reviews whose `dealership` equals `dealer_id`."""
    return await repository.list_by_dealership(dealer_id)


@router.post(
    "/insert_review",
    status_code=201,
    response_model=ReviewOut,
    responses={
        201: {"description": "Review stored", "model": ReviewOut},
        400: {"description": "Missing or malformed body", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Insert a review",
    description=(
        "Stores a new review. The review id is assigned by the server as the "
        "highest existing id plus one (1 for the first review)."
    ),
)
async def insert_review(
    review: Optional[ReviewCreate] = Body(default=None),
    repository: ReviewRepository = Depends(get_review_repository),
) -> Dict[str, Any]:
    """
    Insert a review and return the stored document.

    Error responses (handled by global exception handlers):
        HTTP 400: body missing (ValidationError) or not a valid review
                  (RequestValidationError)
        HTTP 500: store failure or id assignment gave up (DatabaseError)
    """
    if review is None:
        raise ValidationError(message="Review data is missing", field="body")

    return await repository.insert(review.model_dump())
