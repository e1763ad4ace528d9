"""API route registration."""

from fastapi import APIRouter

from servantfs.api.routes import fs, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(fs.router, prefix="/fs", tags=["fs"])
