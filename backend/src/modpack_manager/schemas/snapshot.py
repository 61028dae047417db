"""Snapshot data model: classified identities, per-profile inventories and diffs."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ModIdentity(BaseModel):
    """Identity recovered from a mod filename.

    Every field is optional so that records written by older runs, or
    records whose classification failed, still load and render.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    version: str | None = None
    platform_version: str | None = None
    loader: str | None = None
    valid_platform_version: bool = False


class ModRecord(BaseModel):
    file_name: str
    file_path: str = ""
    modified_at: datetime | None = None
    identity: ModIdentity | None = None


class ProfileInventory(BaseModel):
    profile_path: str
    mods_path: str = ""
    mods: list[ModRecord] = []


class Snapshot(BaseModel):
    created_at: datetime | None = None
    profiles: list[ProfileInventory] = []

    @property
    def is_empty(self) -> bool:
        return not self.profiles


class DuplicateEntry(BaseModel):
    """A mod file that another record already claims.

    ``reason`` is ``"filename"`` when an earlier profile holds the same file and
    ``"identity"`` when a different file in the same profile resolves to the same
    mod. Only filename duplicates are ever deleted; ``deleted`` is False for
    entries left on disk.
    """

    profile: str
    file_name: str
    path: str
    existing_owner: ModRecord | None = None
    reason: Literal["filename", "identity"] = "filename"
    deleted: bool = True


class ModUpdate(BaseModel):
    record: ModRecord
    changed_fields: dict[str, str | None] = Field(default_factory=dict)


class ProfileChanges(BaseModel):
    profile_name: str
    inventory: ProfileInventory
    added: list[ModRecord] = []
    removed: list[ModRecord] = []
    updated: list[ModUpdate] = []

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.updated)


class SnapshotDiff(BaseModel):
    first_snapshot: bool = False
    added_profiles: list[ProfileInventory] = []
    removed_profiles: list[ProfileInventory] = []
    changed_profiles: list[ProfileChanges] = []
    duplicates: list[DuplicateEntry] = []

    @property
    def profiles_with_added(self) -> int:
        return sum(1 for p in self.changed_profiles if p.added)

    @property
    def profiles_with_removed(self) -> int:
        return sum(1 for p in self.changed_profiles if p.removed)

    @property
    def profiles_with_updated(self) -> int:
        return sum(1 for p in self.changed_profiles if p.updated)


class Report(BaseModel):
    kind: str
    text: str
    duplicates: list[DuplicateEntry] = []


# --- API payloads ---


class DiffRequest(BaseModel):
    previous: Snapshot | None = None
    current: Snapshot
    duplicates: list[DuplicateEntry] = []


class SnapshotResult(BaseModel):
    report_kind: str
    report_file: str | None = None
    profiles: int
    mods: int
    duplicates: int
    deleted: int


class ReportFile(BaseModel):
    name: str
    size: int
    modified_at: datetime
