from modpack_manager.constants import LATEST_SNAPSHOT_FILE
from modpack_manager.services.snapshot_service import classifier_context, create_snapshot
from modpack_manager.services.snapshot_store import list_reports, load_previous


class TestClassifierContext:
    def test_uses_settings(self, settings):
        settings.known_platform_versions = ["1.21.1", "1.20.1"]
        context = classifier_context(settings)
        assert context.platform_version == "1.21.1"
        assert context.loader == "neoforge"
        assert context.known_platform_versions == frozenset({"1.21.1", "1.20.1"})


class TestCreateSnapshot:
    def test_first_run_writes_diff_report(self, settings, make_mods):
        make_mods("1. Library", "a-1.0.jar")
        make_mods("2. Optimization", "b-2.0.jar")

        result = create_snapshot(settings)

        assert result.report_kind == "diff"
        assert result.profiles == 2
        assert result.mods == 2
        assert result.duplicates == 0
        assert result.report_file.startswith("diff_snapshot_")
        assert (settings.snapshots_dir / LATEST_SNAPSHOT_FILE).exists()
        assert len(load_previous(settings.snapshots_dir).profiles) == 2

    def test_unchanged_second_run_writes_full_report(self, settings, make_mods):
        make_mods("1. Library", "a-1.0.jar")
        create_snapshot(settings)

        result = create_snapshot(settings)

        assert result.report_kind == "full"
        assert result.report_file.startswith("full_snapshot_")
        text = (settings.snapshots_dir / result.report_file).read_text(encoding="utf-8")
        assert text.startswith("# Full Snapshot Report | Profiles: 1, Mods: 1")

    def test_changes_show_in_next_report(self, settings, make_mods):
        mods = make_mods("1. Library", "a-1.0.jar")
        create_snapshot(settings)
        (mods / "a-1.0.jar").rename(mods / "a-1.1.jar")

        result = create_snapshot(settings)

        text = (settings.snapshots_dir / result.report_file).read_text(encoding="utf-8")
        assert result.report_kind == "diff"
        assert "🔄 Updated Mods:" in text
        assert "🔖 File Name: (a-1.0.jar) ++" in text

    def test_deletes_filename_duplicates_only(self, settings, make_mods):
        library = make_mods("1. Library", "shared.jar", "foo-1.0.jar", "foo-2.0.jar")
        optimization = make_mods("2. Optimization", "shared.jar")

        result = create_snapshot(settings)

        assert result.duplicates == 2
        assert result.deleted == 1
        assert not (optimization / "shared.jar").exists()
        assert (library / "shared.jar").exists()
        assert (library / "foo-2.0.jar").exists()
        text = (settings.snapshots_dir / result.report_file).read_text(encoding="utf-8")
        assert "Duplicates deleted: 1" in text.splitlines()[0]

    def test_versions_of_same_mod_are_kept(self, settings, make_mods):
        mods = make_mods("2. Optimization", "sodium-0.5.8.jar", "sodium-0.5.9.jar")

        result = create_snapshot(settings)

        assert result.duplicates == 1
        assert result.deleted == 0
        assert (mods / "sodium-0.5.8.jar").exists()
        assert (mods / "sodium-0.5.9.jar").exists()

    def test_loader_variants_are_kept(self, settings, make_mods):
        mods = make_mods(
            "2. Optimization", "jei-1.20.1-fabric-15.2.jar", "jei-1.20.1-forge-15.2.jar"
        )

        create_snapshot(settings)

        assert sorted(p.name for p in mods.iterdir()) == [
            "jei-1.20.1-fabric-15.2.jar",
            "jei-1.20.1-forge-15.2.jar",
        ]

    def test_protected_duplicate_reported_as_kept(self, settings, make_mods):
        settings.protected_profiles = ["2. Optimization"]
        make_mods("1. Library", "shared.jar")
        optimization = make_mods("2. Optimization", "shared.jar")
        create_snapshot(settings)

        result = create_snapshot(settings)

        assert result.deleted == 0
        assert (optimization / "shared.jar").exists()
        assert result.report_kind == "full"
        text = (settings.snapshots_dir / result.report_file).read_text(encoding="utf-8")
        assert "Duplicates deleted: 0" in text.splitlines()[0]
        assert "🗑️ Deleted Mod:" not in text
        assert "📌 Kept Mod: shared.jar" in text
        assert "- Reason: deletion skipped" in text

    def test_report_count_limited(self, settings, make_mods):
        settings.maximum_snapshots = 2
        make_mods("1. Library", "a-1.0.jar")
        create_snapshot(settings)
        create_snapshot(settings)
        assert [p.name[:5] for p in list_reports(settings.snapshots_dir)] == ["full_"]
