"""Sync gathered mods into the primary profile launched by the game."""

import logging
import shutil

from modpack_manager.config import Settings
from modpack_manager.scanner.gather import MODS_DIR
from modpack_manager.schemas.pack import ClearResult, CopyResult
from modpack_manager.services.snapshot_service import gather

logger = logging.getLogger(__name__)


def copy_mods(settings: Settings) -> CopyResult:
    """Copy every gathered mod into the primary profile, skipping files already there."""
    destination = settings.primary_profile_path / MODS_DIR
    destination.mkdir(parents=True, exist_ok=True)

    copied = skipped = failed = 0
    for inventory in gather(settings).snapshot.profiles:
        for record in inventory.mods:
            target = destination / record.file_name
            if target.exists():
                skipped += 1
                continue
            try:
                shutil.copy2(record.file_path, target)
            except OSError as exc:
                logger.warning("Failed to copy %s: %s", record.file_name, exc)
                failed += 1
                continue
            copied += 1

    logger.info(
        "Copied %d mods to %s (%d skipped, %d failed)", copied, destination, skipped, failed
    )
    return CopyResult(copied=copied, skipped=skipped, failed=failed)


def clear_mods(settings: Settings) -> ClearResult:
    """Remove every file from the primary profile's mods folder."""
    mods_path = settings.primary_profile_path / MODS_DIR
    if not mods_path.is_dir():
        logger.info("Mods folder %s does not exist, nothing to clear", mods_path)
        return ClearResult(deleted=0)

    deleted = 0
    for path in mods_path.iterdir():
        if not path.is_file():
            continue
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not delete %s: %s", path, exc)
            continue
        deleted += 1

    logger.info("Cleared %d mods from %s", deleted, mods_path)
    return ClearResult(deleted=deleted)
