"""API v1 main router.

Aggregates all v1 API routers into a single router for inclusion in the app.
"""

from fastapi import APIRouter, Depends

from bookcatalog.api.v1.auth import router as auth_router
from bookcatalog.api.v1.books import router as books_router
from bookcatalog.dependencies import require_auth

router = APIRouter()

router.include_router(auth_router, prefix="/auth", tags=["Auth"])
router.include_router(
    books_router,
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(require_auth)],
)
