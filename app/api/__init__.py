"""API routes."""
from fastapi import APIRouter

from app.api import auth, feedback, images, notes, public, shares, stats

api_router = APIRouter(prefix="/api")

# Authenticated
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(notes.router, prefix="/notes", tags=["Notes"])
api_router.include_router(shares.router, prefix="/shares", tags=["Shares"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])

# Public
api_router.include_router(public.router, prefix="/public/notes", tags=["Shared Notes"])
api_router.include_router(stats.router, prefix="/public/stats", tags=["Stats"])
api_router.include_router(images.router, prefix="/images", tags=["Images"])
