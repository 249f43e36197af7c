"""Repository package: exposes the collection-scoped repositories from one import."""
from .dealership_repository import DealershipRepository, get_dealership_repository
from .review_repository import ReviewRepository, get_review_repository

__all__ = [
    "DealershipRepository",
    "ReviewRepository",
    "get_dealership_repository",
    "get_review_repository",
]
