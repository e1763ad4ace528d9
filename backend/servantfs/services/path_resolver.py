"""Map validated paths (POSIX, drive, UNC) onto host paths."""

from __future__ import annotations

import logging
import os
import re
import socket
from pathlib import Path

from servantfs.config import settings
from servantfs.services.path_validator import FilePath, PathKind

logger = logging.getLogger(__name__)

_ADMIN_SHARE_RE = re.compile(r"^(?P<letter>[A-Za-z])\$$")

BUILTIN_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "."})


class PathResolver:
    """Normalises path syntax so equivalent local and UNC forms meet.

    ``\\\\localhost\\C$\\data`` and ``C:\\data`` resolve to the same host
    path. Drive letters and ``\\\\host\\share`` prefixes can be mounted onto
    local directories, which is how non-Windows hosts serve them.
    """

    def __init__(
        self,
        drive_mounts: dict[str, str] | None = None,
        share_mounts: dict[str, str] | None = None,
        local_host_aliases: list[str] | None = None,
        native_windows: bool | None = None,
    ):
        self._drive_mounts = {
            k.upper(): Path(v)
            for k, v in (settings.drive_mounts if drive_mounts is None else drive_mounts).items()
        }
        self._share_mounts = {
            k.lower(): Path(v)
            for k, v in (settings.share_mounts if share_mounts is None else share_mounts).items()
        }
        aliases = settings.local_host_aliases if local_host_aliases is None else local_host_aliases
        self._local_hosts = BUILTIN_LOCAL_HOSTS | {socket.gethostname().lower()} | {
            a.lower() for a in aliases
        }
        self._native_windows = os.name == "nt" if native_windows is None else native_windows

    def is_local_host(self, host: str) -> bool:
        return host.lower() in self._local_hosts

    def to_local(self, path: FilePath) -> Path | None:
        """Return the host path for ``path``, or None if nothing maps it."""
        if path.kind is PathKind.POSIX:
            return Path(path.raw)
        if path.kind is PathKind.UNC:
            return self._resolve_unc(path)
        return self._resolve_drive(path.drive, path.parts, path.raw)

    def _resolve_unc(self, path: FilePath) -> Path | None:
        admin = _ADMIN_SHARE_RE.match(path.share)
        if admin and self.is_local_host(path.host):
            letter = admin.group("letter").upper()
            logger.debug("UNC %s mapped to local drive %s:", path.raw, letter)
            return self._resolve_drive(letter, path.parts, path.raw)

        key = f"\\\\{path.host}\\{path.share}".lower()
        mount = self._share_mounts.get(key)
        if mount is not None:
            return mount.joinpath(*path.parts)
        if self._native_windows:
            return Path(path.raw)
        logger.debug("No mount configured for share %s", key)
        return None

    def _resolve_drive(self, letter: str, parts: tuple[str, ...], raw: str) -> Path | None:
        mount = self._drive_mounts.get(letter)
        if mount is not None:
            return mount.joinpath(*parts)
        if self._native_windows:
            return Path(f"{letter}:\\").joinpath(*parts)
        logger.debug("No mount configured for drive %s: (%s)", letter, raw)
        return None
