"""Endpoints that sync mods into the primary profile before and after a game session."""

from fastapi import APIRouter, Depends

from modpack_manager.config import Settings
from modpack_manager.routers.deps import get_settings
from modpack_manager.schemas.pack import ClearResult, CopyResult
from modpack_manager.services.pack_service import clear_mods, copy_mods

router = APIRouter(prefix="/pack", tags=["pack"])


@router.post("/copy", response_model=CopyResult)
def copy_to_primary(settings: Settings = Depends(get_settings)) -> CopyResult:
    return copy_mods(settings)


@router.post("/clear", response_model=ClearResult)
def clear_primary(settings: Settings = Depends(get_settings)) -> ClearResult:
    return clear_mods(settings)
