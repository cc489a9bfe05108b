"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from ratestore.api import admin, auth, health, profile, ratings, store_owner, stores
from ratestore.schemas.common import ErrorResponse

# Every failure is rendered as {"error": "..."} by the handlers in ratestore.main.
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 500)
}

router = APIRouter(responses=ERROR_RESPONSES)
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(stores.router, prefix="/stores", tags=["stores"])
router.include_router(ratings.router, prefix="/ratings", tags=["ratings"])
router.include_router(store_owner.router, prefix="/store", tags=["store-owner"])
