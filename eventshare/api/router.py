from fastapi import APIRouter

from eventshare.api.share import router as share_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(share_router, prefix="/api", tags=["share"])
