"""Snapshot comparison core: identity keys, differ and report rendering."""

from modpack_manager.snapshots.differ import diff_snapshots
from modpack_manager.snapshots.keys import key_of, normalize_mod_name
from modpack_manager.snapshots.report import (
    build_report,
    render_diff_report,
    render_full_report,
)

__all__ = [
    "build_report",
    "diff_snapshots",
    "key_of",
    "normalize_mod_name",
    "render_diff_report",
    "render_full_report",
]
