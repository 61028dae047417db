"""On-disk snapshot state: the latest JSON snapshot and timestamped report files."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from modpack_manager.constants import LATEST_SNAPSHOT_FILE, REPORT_SUFFIX
from modpack_manager.schemas.snapshot import Report, Snapshot

logger = logging.getLogger(__name__)


def load_previous(folder: Path) -> Snapshot:
    """Load ``latest_snapshot.json``; a missing or corrupt file yields an empty snapshot."""
    path = folder / LATEST_SNAPSHOT_FILE
    try:
        return Snapshot.model_validate_json(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.info("No previous snapshot found in %s", folder)
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Unreadable previous snapshot %s, starting fresh: %s", path, exc)
    return Snapshot()


def save_latest(folder: Path, snapshot: Snapshot) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / LATEST_SNAPSHOT_FILE
    path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Latest snapshot saved to %s", path)
    return path


def report_filename(kind: str, now: datetime | None = None) -> str:
    stamp = (now or datetime.now(UTC)).strftime("%Y-%m-%d_%H-%M-%S")
    return f"{kind}_snapshot_{stamp}{REPORT_SUFFIX}"


def save_report(folder: Path, report: Report, now: datetime | None = None) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / report_filename(report.kind, now)
    path.write_text(report.text, encoding="utf-8")
    logger.info("Saved %s report to %s", report.kind, path)
    return path


def list_reports(folder: Path) -> list[Path]:
    """Report files, oldest first."""
    if not folder.is_dir():
        return []
    reports = [f for f in folder.iterdir() if f.is_file() and f.suffix == REPORT_SUFFIX]
    return sorted(reports, key=lambda f: (f.stat().st_mtime, f.name))


def latest_report(folder: Path) -> Path | None:
    reports = list_reports(folder)
    return reports[-1] if reports else None


def enforce_limit(folder: Path, maximum: int) -> Path | None:
    """Delete the oldest report once the report count has reached *maximum*.

    Runs after every new report, so the folder settles at ``maximum - 1`` reports.
    """
    reports = list_reports(folder)
    if not reports or len(reports) < maximum:
        return None
    oldest = reports[0]
    try:
        oldest.unlink()
    except OSError as exc:
        logger.warning("Failed to delete old snapshot %s: %s", oldest, exc)
        return None
    logger.info("Deleted oldest snapshot %s", oldest)
    return oldest
