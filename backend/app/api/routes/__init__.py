"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .data import router as data_router
from .insights import router as insights_router
from .views import router as views_router

api_router = APIRouter()
api_router.include_router(views_router, prefix="/networth", tags=["views"])
api_router.include_router(data_router, prefix="/networth", tags=["data"])
api_router.include_router(insights_router, prefix="/networth", tags=["insights"])

__all__ = ["api_router"]
