"""Shared FastAPI dependencies used across routers."""

from modpack_manager.config import Settings, settings


def get_settings() -> Settings:
    return settings
