from fastapi import APIRouter

from devcore.api.index import router as index_router
from devcore.api.languages import router as languages_router
from devcore.api.projects import router as projects_router
from devcore.api.templates import router as templates_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(index_router, tags=["index"])
api_router.include_router(languages_router, tags=["languages"])
api_router.include_router(projects_router, tags=["projects"])
api_router.include_router(templates_router, tags=["templates"])
