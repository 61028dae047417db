from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from modpack_manager.config import Settings
from modpack_manager.main import app
from modpack_manager.matching.classifier import ClassifierContext
from modpack_manager.routers.deps import get_settings
from modpack_manager.schemas.snapshot import ModIdentity, ModRecord, ProfileInventory

T0 = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def context() -> ClassifierContext:
    return ClassifierContext.create(platform_version="1.21.1", loader="unknown")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        profiles_root=tmp_path / "profiles",
        profiles=["1. Library", "2. Optimization"],
        primary_profile="Primary",
        maximum_snapshots=3,
    )


@pytest.fixture
def client(settings, monkeypatch):
    monkeypatch.setattr("modpack_manager.main.settings", settings)
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture
def make_mods(settings):
    """Create jar files under ``<profiles_root>/<profile>/mods``."""

    def _make(profile: str, *file_names: str):
        mods = settings.profiles_root / profile / "mods"
        mods.mkdir(parents=True, exist_ok=True)
        for name in file_names:
            (mods / name).write_bytes(b"PK")
        return mods

    return _make


@pytest.fixture
def make_record():
    def _make(
        file_name: str,
        name: str = "",
        version: str | None = None,
        platform_version: str | None = "1.21.1",
        loader: str | None = "neoforge",
        modified_at: datetime | None = T0,
        with_identity: bool = True,
    ) -> ModRecord:
        identity = (
            ModIdentity(
                name=name,
                version=version,
                platform_version=platform_version,
                loader=loader,
            )
            if with_identity
            else None
        )
        return ModRecord(
            file_name=file_name,
            file_path=f"/profiles/mods/{file_name}",
            modified_at=modified_at,
            identity=identity,
        )

    return _make


@pytest.fixture
def make_profile():
    def _make(name: str, *mods: ModRecord) -> ProfileInventory:
        return ProfileInventory(
            profile_path=f"/profiles/{name}",
            mods_path=f"/profiles/{name}/mods",
            mods=list(mods),
        )

    return _make
