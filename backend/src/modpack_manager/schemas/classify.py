from pydantic import BaseModel

from modpack_manager.schemas.snapshot import ModIdentity


class ClassifyRequest(BaseModel):
    file_names: list[str]
    platform_version: str | None = None
    loader: str | None = None
    known_platform_versions: list[str] | None = None


class ClassifiedFile(BaseModel):
    file_name: str
    key: str
    rule: str
    identity: ModIdentity
