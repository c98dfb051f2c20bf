from fastapi import APIRouter

from noteai.api.v1.endpoints import (
    note_endpoints,
    ai_endpoints,
    profile_endpoints,
)

api_router = APIRouter()

api_router.include_router(note_endpoints.router, prefix="/notes", tags=["notes"])
api_router.include_router(ai_endpoints.router, prefix="/ai", tags=["ai"])
api_router.include_router(profile_endpoints.router, prefix="/profile", tags=["profile"])
