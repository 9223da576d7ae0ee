"""API v2 main router."""

from fastapi import APIRouter, Depends

from bookcatalog.api.v2.books import router as books_router
from bookcatalog.dependencies import require_auth

router = APIRouter()

router.include_router(
    books_router,
    prefix="/books",
    tags=["Books v2"],
    dependencies=[Depends(require_auth)],
)
