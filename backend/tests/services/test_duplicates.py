from modpack_manager.schemas.snapshot import DuplicateEntry
from modpack_manager.services.duplicates import delete_duplicates


def _entry(path, profile="2. Optimization"):
    return DuplicateEntry(profile=profile, file_name=path.name, path=str(path))


class TestDeleteDuplicates:
    def test_deletes_files(self, tmp_path):
        target = tmp_path / "a.jar"
        target.write_bytes(b"PK")
        assert delete_duplicates([_entry(target)]) == [target]
        assert not target.exists()

    def test_protected_profile_untouched(self, tmp_path):
        target = tmp_path / "a.jar"
        target.write_bytes(b"PK")
        assert delete_duplicates([_entry(target, profile="1. Library")]) == []
        assert target.exists()

    def test_custom_protected_profiles(self, tmp_path):
        target = tmp_path / "a.jar"
        target.write_bytes(b"PK")
        deleted = delete_duplicates([_entry(target, profile="1. Library")], protected_profiles=[])
        assert deleted == [target]

    def test_failure_does_not_stop_the_rest(self, tmp_path):
        missing = tmp_path / "missing.jar"
        present = tmp_path / "present.jar"
        present.write_bytes(b"PK")
        assert delete_duplicates([_entry(missing), _entry(present)]) == [present]

    def test_same_mod_entries_never_deleted(self, tmp_path):
        target = tmp_path / "sodium-0.5.9.jar"
        target.write_bytes(b"PK")
        entry = _entry(target).model_copy(update={"reason": "identity"})
        assert delete_duplicates([entry]) == []
        assert target.exists()
