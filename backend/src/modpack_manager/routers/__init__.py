from fastapi import APIRouter

from modpack_manager.routers.classify import router as classify_router
from modpack_manager.routers.pack import router as pack_router
from modpack_manager.routers.snapshots import router as snapshots_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(classify_router)
api_router.include_router(snapshots_router)
api_router.include_router(pack_router)
