"""Render snapshot diffs and full inventories as indented text outlines."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from modpack_manager.constants import REPORT_SEPARATOR
from modpack_manager.schemas.snapshot import (
    DuplicateEntry,
    ModRecord,
    ProfileInventory,
    Report,
    Snapshot,
    SnapshotDiff,
)
from modpack_manager.snapshots.differ import diff_snapshots, profile_name

FIELD_LABELS = {
    "file_name": "File Name",
    "modified_at": "Modified",
    "name": "Name",
    "version": "Version",
    "platform_version": "Platform Version",
    "loader": "Loader",
}

KEPT_REASONS = {
    "filename": "deletion skipped",
    "identity": "same mod as the existing file",
}


@dataclass
class Outline:
    """Lines tagged with an indentation level, joined with tabs on render."""

    tabs: int = 1
    lines: list[tuple[int, str]] = field(default_factory=list)

    def add(self, content: str, level: int = 0) -> None:
        self.lines.append((level, content))

    def blank(self) -> None:
        self.lines.append((0, ""))

    def render(self) -> str:
        return "\n".join("\t" * (self.tabs * level) + content for level, content in self.lines)


def _timestamp(record: ModRecord) -> str | None:
    return record.modified_at.isoformat() if record.modified_at else None


def render_mod(
    out: Outline,
    record: ModRecord,
    level: int,
    prefix: str = "- File:",
    timestamp_label: str = "Modified",
) -> None:
    line = f"{prefix} {record.file_name}"
    if ts := _timestamp(record):
        line += f" ({timestamp_label}: {ts})"
    out.add(line, level)

    identity = record.identity
    if identity is not None and identity.name:
        out.add(f"- Name: {identity.name}", level + 1)
    if identity is not None and identity.version:
        out.add(f"- Version: {identity.version}", level + 1)
    out.add(REPORT_SEPARATOR, level + 1)
    if identity is not None and identity.platform_version:
        out.add(f"- Platform Version: {identity.platform_version}", level + 1)
    if identity is not None and identity.loader:
        out.add(f"- Loader: {identity.loader}", level + 1)
    out.blank()


def render_changes(out: Outline, changed: dict[str, str | None], level: int) -> None:
    if not changed:
        return
    out.add("- Changes:", level)
    for key, old_value in changed.items():
        label = FIELD_LABELS.get(key, key.replace("_", " ").title())
        out.add(f"🔖 {label}: ({old_value if old_value is not None else 'none'}) ++", level + 1)


def render_profile_header(out: Outline, inventory: ProfileInventory, label: str = "") -> None:
    name = profile_name(inventory)
    out.add(f"Profile: {name} ({label})" if label else f"Profile: {name}")
    out.add(f"- Profile Path: {inventory.profile_path}", 1)
    out.add(f"- Mods Directory: {inventory.mods_path}", 1)
    out.blank()


def group_duplicates(duplicates: Iterable[DuplicateEntry]) -> dict[str, list[DuplicateEntry]]:
    groups: dict[str, list[DuplicateEntry]] = {}
    for entry in duplicates:
        groups.setdefault(entry.profile, []).append(entry)
    return groups


def _render_owner(out: Outline, entry: DuplicateEntry) -> None:
    owner = entry.existing_owner
    if owner is not None:
        out.add(f"- Existing Mod: {owner.file_name}", 2)
        if owner.file_path:
            out.add(f"- Path: {owner.file_path}", 3)


def render_duplicates(out: Outline, duplicates: list[DuplicateEntry]) -> None:
    deleted = [d for d in duplicates if d.deleted]
    kept = [d for d in duplicates if not d.deleted]

    if not deleted:
        out.add("✋ No mods were deleted.")
    else:
        out.add(f"## Deleted Duplicates Report | Total Deleted: {len(deleted)}")
        out.blank()
        for profile, entries in group_duplicates(deleted).items():
            out.add(f"Profile: {profile}")
            for entry in entries:
                out.add(f"🗑️ Deleted Mod: {entry.file_name}", 1)
                out.add(f"- Original Path: {entry.path}", 2)
                _render_owner(out, entry)
                out.blank()

    if not kept:
        return
    out.blank()
    out.add(f"## Kept Duplicates | Total Kept: {len(kept)}")
    out.blank()
    for profile, entries in group_duplicates(kept).items():
        out.add(f"Profile: {profile}")
        for entry in entries:
            out.add(f"📌 Kept Mod: {entry.file_name}", 1)
            out.add(f"- Path: {entry.path}", 2)
            out.add(f"- Reason: {KEPT_REASONS[entry.reason]}", 2)
            _render_owner(out, entry)
            out.blank()


def deleted_count(duplicates: Iterable[DuplicateEntry]) -> int:
    return sum(1 for d in duplicates if d.deleted)


def _render_inventory_block(
    out: Outline, inventory: ProfileInventory, label: str, removed: bool
) -> None:
    render_profile_header(out, inventory, label)
    out.add("Discovered Mods:", 1)
    if not inventory.mods:
        out.add("✋ No mods found.", 2)
    for record in inventory.mods:
        render_mod(out, record, 2, timestamp_label="Last Modified" if removed else "Modified")
    out.blank()


def render_diff_report(diff: SnapshotDiff) -> str:
    """Render a :class:`SnapshotDiff`.

    Header counts are the number of profiles with at least one added,
    removed or updated mod, not the number of mods.
    """
    out = Outline(tabs=1)
    out.add(
        "# Snapshot Diff Report"
        f" | Profiles with additions: {diff.profiles_with_added},"
        f" removals: {diff.profiles_with_removed},"
        f" updates: {diff.profiles_with_updated}"
        f" | Duplicates deleted: {deleted_count(diff.duplicates)}"
    )
    out.blank()

    if diff.first_snapshot:
        return out.render()

    for inventory in diff.added_profiles:
        _render_inventory_block(out, inventory, "New Profile", removed=False)

    for inventory in diff.removed_profiles:
        _render_inventory_block(out, inventory, "Removed Profile", removed=True)

    for changes in diff.changed_profiles:
        render_profile_header(out, changes.inventory)
        out.add("Mod Changes:", 1)
        if changes.added:
            out.add("➕ Added Mods:", 2)
            for record in changes.added:
                render_mod(out, record, 3)
        if changes.removed:
            out.add("🗑️ Removed Mods:", 2)
            for record in changes.removed:
                render_mod(out, record, 3, timestamp_label="Last Modified")
        if changes.updated:
            out.add("🔄 Updated Mods:", 2)
            for update in changes.updated:
                render_mod(out, update.record, 3)
                render_changes(out, update.changed_fields, 3)
        out.blank()

    render_duplicates(out, diff.duplicates)
    return out.render()


def render_full_report(snapshot: Snapshot, duplicates: Iterable[DuplicateEntry] = ()) -> str:
    duplicates = list(duplicates)
    mod_count = sum(len(p.mods) for p in snapshot.profiles)

    out = Outline(tabs=2)
    out.add(
        f"# Full Snapshot Report | Profiles: {len(snapshot.profiles)}, Mods: {mod_count}"
        f" | Duplicates deleted: {deleted_count(duplicates)}"
    )
    out.blank()

    if snapshot.is_empty:
        out.add("✋ No snapshot data available.")
        return out.render()

    for inventory in snapshot.profiles:
        render_profile_header(out, inventory)
        out.add("Discovered Mods:", 1)
        if not inventory.mods:
            out.add("- No mods found.", 2)
        for record in inventory.mods:
            render_mod(out, record, 2, prefix="-")
        out.blank()

    render_duplicates(out, duplicates)
    return out.render()


def build_report(
    previous: Snapshot,
    current: Snapshot,
    duplicates: Iterable[DuplicateEntry] = (),
) -> Report:
    """Diff report when anything changed, otherwise a full inventory report."""
    duplicates = list(duplicates)
    diff = diff_snapshots(previous, current, duplicates)
    if diff is not None:
        return Report(kind="diff", text=render_diff_report(diff), duplicates=duplicates)
    return Report(kind="full", text=render_full_report(current, duplicates), duplicates=duplicates)
