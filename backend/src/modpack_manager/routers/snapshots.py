"""Endpoints for creating, comparing and reading snapshot reports."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from modpack_manager.config import Settings
from modpack_manager.routers.deps import get_settings
from modpack_manager.schemas.snapshot import (
    DiffRequest,
    Report,
    ReportFile,
    Snapshot,
    SnapshotResult,
)
from modpack_manager.services.snapshot_service import create_snapshot
from modpack_manager.services.snapshot_store import latest_report, list_reports
from modpack_manager.snapshots.report import build_report


router = APIRouter(prefix="/snapshots", tags=["snapshots"])


@router.get("/", response_model=list[ReportFile])
async def list_snapshot_reports(settings: Settings = Depends(get_settings)) -> list[ReportFile]:
    """List saved report files, newest first."""
    files: list[ReportFile] = []
    for path in reversed(list_reports(settings.snapshots_dir)):
        stat = path.stat()
        files.append(
            ReportFile(
                name=path.name,
                size=stat.st_size,
                modified_at=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
            )
        )
    return files


@router.post("/", response_model=SnapshotResult, status_code=201)
def take_snapshot(settings: Settings = Depends(get_settings)) -> SnapshotResult:
    """Gather the configured profiles and save a new snapshot report."""
    return create_snapshot(settings)


@router.get("/latest", response_class=PlainTextResponse)
async def read_latest_report(settings: Settings = Depends(get_settings)) -> str:
    path = latest_report(settings.snapshots_dir)
    if path is None:
        raise HTTPException(404, "No snapshot reports found")
    return path.read_text(encoding="utf-8")


@router.post("/diff", response_model=Report)
async def diff_snapshots(data: DiffRequest) -> Report:
    """Render a report for two posted snapshots without touching the disk."""
    return build_report(data.previous or Snapshot(), data.current, data.duplicates)
