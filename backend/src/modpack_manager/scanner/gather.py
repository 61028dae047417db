"""Gather per-profile mod inventories from disk.

Profiles are visited in the order given.  A filename that already belongs to
an earlier profile, or a file that resolves to an identity key already taken
in its own profile, is reported as a :class:`DuplicateEntry` owned by the
first record seen. Same-mod entries stay in the inventory; only filename
duplicates are left out of it and offered for deletion.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from modpack_manager.matching.classifier import FilenameClassifier
from modpack_manager.schemas.snapshot import (
    DuplicateEntry,
    ModRecord,
    ProfileInventory,
    Snapshot,
)
from modpack_manager.snapshots.keys import key_of

logger = logging.getLogger(__name__)

MODS_DIR = "mods"


@dataclass
class GatherResult:
    snapshot: Snapshot
    duplicates: list[DuplicateEntry] = field(default_factory=list)

    @property
    def mod_count(self) -> int:
        return sum(len(p.mods) for p in self.snapshot.profiles)


def _discover_mod_files(mods_path: Path, extensions: Iterable[str]) -> list[Path]:
    suffixes = {ext.lower() for ext in extensions}
    return sorted(
        (f for f in mods_path.iterdir() if f.is_file() and f.suffix.lower() in suffixes),
        key=lambda f: f.name.lower(),
    )


def gather_profiles(
    profiles_root: Path,
    profile_names: Iterable[str],
    classifier: FilenameClassifier | None = None,
) -> GatherResult:
    classifier = classifier or FilenameClassifier()
    extensions = classifier.context.extensions
    result = GatherResult(snapshot=Snapshot(created_at=datetime.now(UTC)))
    owners: dict[str, ModRecord] = {}

    for profile in profile_names:
        profile_path = profiles_root / profile
        mods_path = profile_path / MODS_DIR
        logger.info("Processing profile '%s'", profile)

        if not profile_path.is_dir():
            logger.warning("Profile '%s' not found at %s", profile, profile_path)
            continue
        if not mods_path.is_dir():
            logger.warning("No mods folder for profile '%s' at %s", profile, mods_path)
            continue

        inventory = ProfileInventory(profile_path=str(profile_path), mods_path=str(mods_path))
        keys: dict[str, ModRecord] = {}
        profile_duplicates = 0

        for file_path in _discover_mod_files(mods_path, extensions):
            owner = owners.get(file_path.name)
            if owner is None:
                try:
                    mtime = file_path.stat().st_mtime
                except OSError as exc:
                    logger.warning("Failed to stat %s: %s", file_path, exc)
                    continue
                record = ModRecord(
                    file_name=file_path.name,
                    file_path=str(file_path),
                    modified_at=datetime.fromtimestamp(mtime, tz=UTC),
                    identity=classifier.classify(file_path.name),
                )
                owners[record.file_name] = record
                inventory.mods.append(record)

                # Same mod under another filename: reported, never deleted
                same_mod = keys.setdefault(key_of(record), record)
                if same_mod is not record:
                    result.duplicates.append(
                        DuplicateEntry(
                            profile=profile,
                            file_name=record.file_name,
                            path=record.file_path,
                            existing_owner=same_mod,
                            reason="identity",
                            deleted=False,
                        )
                    )
                    profile_duplicates += 1
                continue

            result.duplicates.append(
                DuplicateEntry(
                    profile=profile,
                    file_name=file_path.name,
                    path=str(file_path),
                    existing_owner=owner,
                    deleted=False,
                )
            )
            profile_duplicates += 1

        result.snapshot.profiles.append(inventory)
        logger.info(
            "Profile '%s': %d mods, %d duplicates",
            profile,
            len(inventory.mods),
            profile_duplicates,
        )

    logger.info(
        "Gathered %d mods across %d profiles, %d duplicates",
        result.mod_count,
        len(result.snapshot.profiles),
        len(result.duplicates),
    )
    return result
