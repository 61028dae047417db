"""Snapshot creation workflow: gather, compare, clean up duplicates, persist."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from modpack_manager.config import Settings
from modpack_manager.matching.classifier import ClassifierContext, FilenameClassifier
from modpack_manager.scanner.gather import GatherResult, gather_profiles
from modpack_manager.schemas.snapshot import SnapshotResult
from modpack_manager.services.duplicates import delete_duplicates
from modpack_manager.services.snapshot_store import (
    enforce_limit,
    load_previous,
    save_latest,
    save_report,
)
from modpack_manager.snapshots.report import build_report

logger = logging.getLogger(__name__)


def classifier_context(settings: Settings) -> ClassifierContext:
    return ClassifierContext.create(
        platform_version=settings.platform_version,
        loader=settings.loader,
        known_platform_versions=settings.known_platform_versions,
    )


def gather(settings: Settings) -> GatherResult:
    classifier = FilenameClassifier(classifier_context(settings))
    return gather_profiles(settings.profiles_root, settings.profiles, classifier)


def create_snapshot(settings: Settings) -> SnapshotResult:
    """Record the current mod setup and write a diff (or full) report next to it."""
    start = time.perf_counter()
    folder = settings.snapshots_dir

    gathered = gather(settings)
    previous = load_previous(folder)

    deleted = delete_duplicates(gathered.duplicates, settings.protected_profiles)
    removed = {str(p) for p in deleted}
    duplicates = [
        entry.model_copy(update={"deleted": str(Path(entry.path)) in removed})
        for entry in gathered.duplicates
    ]
    report = build_report(previous, gathered.snapshot, duplicates)

    save_latest(folder, gathered.snapshot)
    report_path = save_report(folder, report)
    enforce_limit(folder, settings.maximum_snapshots)

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        "Snapshot created (%s report, %d mods, %d duplicates) in %dms",
        report.kind,
        gathered.mod_count,
        len(gathered.duplicates),
        elapsed_ms,
    )
    return SnapshotResult(
        report_kind=report.kind,
        report_file=report_path.name,
        profiles=len(gathered.snapshot.profiles),
        mods=gathered.mod_count,
        duplicates=len(gathered.duplicates),
        deleted=len(removed),
    )
