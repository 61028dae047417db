import logging
from collections.abc import Iterable
from pathlib import Path

from modpack_manager.schemas.snapshot import DuplicateEntry

logger = logging.getLogger(__name__)


def delete_duplicates(
    duplicates: Iterable[DuplicateEntry],
    protected_profiles: Iterable[str] = ("1. Library",),
) -> list[Path]:
    """Delete filename duplicates, leaving protected profiles untouched.

    Same-mod entries (``reason == "identity"``) are distinct files and never deleted.
    """
    protected = set(protected_profiles)
    deleted: list[Path] = []
    for entry in duplicates:
        if entry.reason != "filename":
            continue
        if entry.profile in protected:
            logger.info("Keeping duplicate %s in protected profile '%s'", entry.path, entry.profile)
            continue
        path = Path(entry.path)
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Failed to delete duplicate %s: %s", path, exc)
            continue
        logger.info("Deleted duplicate %s", path)
        deleted.append(path)
    return deleted
