"""Top-level API router; mounted under ``settings.api_v1_prefix``."""

from fastapi import APIRouter

from app.api.routes import patents

api_router = APIRouter()
api_router.include_router(patents.router)
