"""
Dealerships API — Dealership Route Handlers
=============================================

What:  GET /fetchDealers, GET /fetchDealers/{state}, GET /fetchDealer/{id}.
Who:   Called by the frontend dealer list, state filter and dealer detail pages.

Matching:
    - The state filter is an exact match on the casing sent by the client.
    - Dealer ids are 64-bit integers; a non-numeric or out-of-range id is
      rejected with 400 before the store is queried.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path

from dealer_api.repositories.dealership_repository import (
    DealershipRepository,
    get_dealership_repository,
)
from dealer_api.schemas.common import BSON_INT_MAX, BSON_INT_MIN, ErrorResponse
from dealer_api.schemas.dealership import DealershipOut

router = APIRouter(tags=["Dealerships"])


@router.get(
    "/fetchDealers",
    response_model=List[DealershipOut],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all dealerships",
)
async def fetch_dealers(
    repository: DealershipRepository = Depends(get_dealership_repository),
) -> List[Dict[str, Any]]:
    return await repository.list_all()


@router.get(
    "/fetchDealers/{state}",
    response_model=List[DealershipOut],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List the dealerships of one state",
)
async def fetch_dealers_by_state(
    state: str,
    repository: DealershipRepository = Depends(get_dealership_repository),
) -> List[Dict[str, Any]]:
    return await repository.list_by_state(state)


@router.get(
    "/fetchDealer/{dealer_id}",
    response_model=DealershipOut,
    responses={
        400: {"description": "Dealer id is not a 64-bit integer", "model": ErrorResponse},
        404: {"description": "Dealer not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single dealership by id",
)
async def fetch_dealer(
    dealer_id: int = Path(ge=BSON_INT_MIN, le=BSON_INT_MAX),
    repository: DealershipRepository = Depends(get_dealership_repository),
) -> Dict[str, Any]:
    # NotFoundError from the repository becomes a 404
    return await repository.find_by_id(dealer_id)
