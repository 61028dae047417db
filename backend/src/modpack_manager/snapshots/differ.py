"""Compare two snapshots profile by profile.

Profiles are matched by the base name of their path; mods inside a profile
are matched by :func:`~modpack_manager.snapshots.keys.key_of`, so a renamed
file that still classifies to the same mod shows up as an update rather than
as a removal plus an addition.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from modpack_manager.schemas.snapshot import (
    DuplicateEntry,
    ModRecord,
    ModUpdate,
    ProfileChanges,
    ProfileInventory,
    Snapshot,
    SnapshotDiff,
)
from modpack_manager.snapshots.keys import key_of

logger = logging.getLogger(__name__)

_PATH_SEP_RE = re.compile(r"[\\/]+")

IDENTITY_FIELDS = ("name", "version", "platform_version", "loader")


def profile_name(inventory: ProfileInventory) -> str:
    """Base name of the profile path; handles both Windows and POSIX separators."""
    parts = _PATH_SEP_RE.split(inventory.profile_path.rstrip("\\/"))
    return parts[-1] if parts else inventory.profile_path


def _index_profiles(snapshot: Snapshot) -> dict[str, ProfileInventory]:
    return {profile_name(p): p for p in snapshot.profiles}


def _index_mods(inventory: ProfileInventory) -> dict[str, ModRecord]:
    mods: dict[str, ModRecord] = {}
    for record in inventory.mods:
        key = key_of(record)
        if key in mods:
            logger.warning(
                "Key %r maps to both %s and %s in %s; keeping the first",
                key,
                mods[key].file_name,
                record.file_name,
                profile_name(inventory),
            )
            continue
        mods[key] = record
    return mods


def _identity_value(record: ModRecord, field: str) -> str:
    if record.identity is None:
        return ""
    return getattr(record.identity, field) or ""


def changed_fields(old: ModRecord, new: ModRecord) -> dict[str, str | None]:
    """Return ``{field: old_value}`` for every field that differs between *old* and *new*."""
    changes: dict[str, str | None] = {}
    if old.file_name != new.file_name:
        changes["file_name"] = old.file_name
    if old.modified_at != new.modified_at:
        changes["modified_at"] = old.modified_at.isoformat() if old.modified_at else None
    for field in IDENTITY_FIELDS:
        old_value = _identity_value(old, field)
        if old_value != _identity_value(new, field):
            changes[field] = old_value or None
    return changes


def diff_profile(name: str, old: ProfileInventory, new: ProfileInventory) -> ProfileChanges:
    old_mods = _index_mods(old)
    new_mods = _index_mods(new)
    changes = ProfileChanges(profile_name=name, inventory=new)

    for key, record in new_mods.items():
        previous = old_mods.get(key)
        if previous is None:
            changes.added.append(record)
            continue
        fields = changed_fields(previous, record)
        if fields:
            changes.updated.append(ModUpdate(record=record, changed_fields=fields))

    changes.removed.extend(record for key, record in old_mods.items() if key not in new_mods)
    return changes


def diff_snapshots(
    previous: Snapshot,
    current: Snapshot,
    duplicates: Iterable[DuplicateEntry] = (),
) -> SnapshotDiff | None:
    """Compute the per-profile changes between *previous* and *current*.

    Returns ``None`` when nothing changed and no duplicate was deleted,
    so callers can fall back to a full inventory report.  An empty
    *previous* snapshot yields a diff flagged ``first_snapshot``.
    """
    duplicates = list(duplicates)
    if previous.is_empty:
        return SnapshotDiff(first_snapshot=True, duplicates=duplicates)

    old_profiles = _index_profiles(previous)
    new_profiles = _index_profiles(current)
    diff = SnapshotDiff(duplicates=duplicates)

    for name, inventory in new_profiles.items():
        if name not in old_profiles:
            diff.added_profiles.append(inventory)

    for name, inventory in old_profiles.items():
        if name not in new_profiles:
            diff.removed_profiles.append(inventory)

    for name, inventory in new_profiles.items():
        old = old_profiles.get(name)
        if old is None:
            continue
        changes = diff_profile(name, old, inventory)
        if changes.has_changes:
            diff.changed_profiles.append(changes)

    deleted = any(entry.deleted for entry in duplicates)
    if not (diff.added_profiles or diff.removed_profiles or diff.changed_profiles or deleted):
        return None

    logger.info(
        "Snapshot diff: %d new profiles, %d removed profiles, %d changed profiles, %d duplicates",
        len(diff.added_profiles),
        len(diff.removed_profiles),
        len(diff.changed_profiles),
        len(duplicates),
    )
    return diff
