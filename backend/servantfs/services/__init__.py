"""File-system services — wiring and singleton registry."""

from __future__ import annotations

import logging

from servantfs.config import settings
from servantfs.schemas.fs import DriveInfoModel
from servantfs.services.action_dispatcher import ActionDispatcher, ActionResult
from servantfs.services.content_resolver import ContentDescriptor, ContentResolver
from servantfs.services.copy_engine import CopyEngine
from servantfs.services.drive_enumerator import DriveEnumerator
from servantfs.services.path_resolver import PathResolver
from servantfs.services.path_validator import validate_path

logger = logging.getLogger(__name__)


class FileSystemService:
    """Facade over the validator, resolvers, enumerator and dispatcher."""

    def __init__(self, resolver: PathResolver | None = None, chunk_size: int | None = None):
        self.resolver = resolver or PathResolver()
        self.content = ContentResolver(self.resolver, chunk_size=chunk_size)
        self.drives = DriveEnumerator()
        self.dispatcher = ActionDispatcher(CopyEngine(self.resolver))

    def get_content(self, raw_path: str | None, download: bool = False) -> ContentDescriptor:
        return self.content.resolve(validate_path(raw_path, "Path"), download)

    def list_drives(self) -> list[DriveInfoModel]:
        return self.drives.list_drives()

    def execute(self, action: str | None, params: dict[str, str]) -> ActionResult:
        return self.dispatcher.dispatch(action, params)


_file_system_service: FileSystemService | None = None


def init_services() -> None:
    """Create the service singletons from settings."""
    global _file_system_service
    _file_system_service = FileSystemService()
    logger.info(
        "File system services initialized (%d drive mounts, %d share mounts)",
        len(settings.drive_mounts), len(settings.share_mounts),
    )


def shutdown_services() -> None:
    global _file_system_service
    _file_system_service = None


def get_file_system_service() -> FileSystemService:
    if _file_system_service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _file_system_service
