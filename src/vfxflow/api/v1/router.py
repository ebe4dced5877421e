from fastapi import APIRouter

from src.vfxflow.api.v1 import artist_views, audit, projects, sharing, statuses

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(statuses.router)
api_router.include_router(projects.router)
api_router.include_router(sharing.router)
api_router.include_router(artist_views.router)
api_router.include_router(audit.router)
