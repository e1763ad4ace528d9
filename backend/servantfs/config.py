"""Servant FS configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Servant FS"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8025
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:8025",
    ]

    # File streaming
    stream_chunk_size: int = 64 * 1024  # 64 KB

    # Path mapping: drive letters and UNC shares onto local directories
    drive_mounts: dict[str, str] = {}  # {"C": "/mnt/c"}
    share_mounts: dict[str, str] = {}  # {"\\\\nas\\media": "/mnt/media"}
    local_host_aliases: list[str] = []  # extra names that mean "this machine"

    uvicorn_workers: int = 1

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="SERVANTFS_",
        extra="ignore",
    )

    @field_validator("cors_origins", "local_host_aliases", mode="before")
    @classmethod
    def assemble_list(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value

    @field_validator("stream_chunk_size")
    @classmethod
    def _positive_chunk_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("stream_chunk_size must be positive")
        return value

    @field_validator("drive_mounts")
    @classmethod
    def _normalize_drive_letters(cls, value: dict[str, str]) -> dict[str, str]:
        normalized = {}
        for letter, target in value.items():
            letter = letter.strip().rstrip(":\\/").upper()
            if len(letter) != 1 or not letter.isalpha():
                raise ValueError(f"invalid drive letter: {letter!r}")
            normalized[letter] = target
        return normalized

    @field_validator("share_mounts")
    @classmethod
    def _normalize_share_keys(cls, value: dict[str, str]) -> dict[str, str]:
        normalized = {}
        for prefix, target in value.items():
            parts = [p for p in prefix.replace("/", "\\").split("\\") if p]
            if len(parts) != 2:
                raise ValueError(f"share mount must be \\\\host\\share, got {prefix!r}")
            normalized["\\\\" + "\\".join(parts).lower()] = target
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
