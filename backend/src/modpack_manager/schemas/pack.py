from pydantic import BaseModel


class CopyResult(BaseModel):
    copied: int
    skipped: int
    failed: int


class ClearResult(BaseModel):
    deleted: int
