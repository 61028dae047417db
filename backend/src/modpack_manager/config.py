import os
import sys
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROFILES = [
    "1. Library",
    "2. Optimization",
    "3. Integration",
    "4. UI",
    "5. Terrain",
    "6. World",
    "7. Dimension",
    "8. Mobs",
    "9. NPCs",
    "10. Gameplay",
    "11. Technology",
    "12. Magic",
    "13. Farming",
    "14. Combat",
    "15. Weapons",
    "16. Tools",
    "17. Storage",
    "18. Transportation",
    "19. Adventure",
    "20. Decoration",
    "21. Graphics",
    "22. Quality-of-life",
]


def _default_data_dir() -> Path:
    if env := os.environ.get("MPM_DATA_DIR"):
        return Path(env)
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "modpack-manager"


def _default_profiles_root() -> Path:
    if appdata := os.environ.get("APPDATA"):
        return Path(appdata) / "ModrinthApp" / "profiles"
    return Path.home() / ".modrinth" / "profiles"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MPM_",
        extra="ignore",
    )

    data_dir: Path = Path("")
    profiles_root: Path = Path("")
    snapshots_dir: Path = Path("")
    profiles: list[str] = DEFAULT_PROFILES
    primary_profile: str = "undefined"
    protected_profiles: list[str] = ["1. Library"]
    maximum_snapshots: int = 5
    platform_version: str = "1.21.1"
    loader: str = "neoforge"
    known_platform_versions: list[str] = []
    host: str = "127.0.0.1"
    port: int = 8426

    @model_validator(mode="after")
    def _resolve_data_paths(self) -> "Settings":
        if self.data_dir == Path(""):
            self.data_dir = _default_data_dir()
        if self.profiles_root == Path(""):
            self.profiles_root = _default_profiles_root()
        if self.snapshots_dir == Path(""):
            self.snapshots_dir = self.data_dir / "snapshots"
        return self

    @property
    def primary_profile_path(self) -> Path:
        return self.profiles_root / self.primary_profile


settings = Settings()
