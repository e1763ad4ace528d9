"""Copy files and directory trees with an explicit overwrite policy.

A copy is checked up front: a missing source raises
:class:`PathNotFoundError`, an existing destination without ``overwrite``
raises :class:`DestinationExistsError`. Both leave the destination exactly as
it was. Past that point the copy is best effort: a host error halfway through
a tree leaves already-copied entries in place.

Directory copies with ``overwrite`` merge into the destination. Same-named
files are replaced, same-named directories are merged recursively, and
entries that only exist in the destination are kept.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from servantfs.exceptions import (
    DestinationExistsError,
    InvalidCopyTargetError,
    PathNotFoundError,
)
from servantfs.services.path_resolver import PathResolver
from servantfs.services.path_validator import FilePath

logger = logging.getLogger(__name__)


@dataclass
class CopyResult:
    kind: str  # file | directory
    files_copied: int = 0
    directories_created: int = 0
    bytes_copied: int = 0


class CopyEngine:
    """Copies a validated source onto a validated destination."""

    def __init__(self, resolver: PathResolver):
        self._resolver = resolver

    def copy(self, source: FilePath, dest: FilePath, overwrite: bool = False) -> CopyResult:
        src = self._resolver.to_local(source)
        if src is None or not src.exists():
            raise PathNotFoundError(source)

        dst = self._resolver.to_local(dest)
        if dst is None:
            raise FileNotFoundError(errno.ENOENT, "Destination location is not reachable", str(dest))

        if src.is_dir():
            result = self._copy_directory(src, dst, overwrite)
        else:
            result = self._copy_single_file(src, dst, overwrite)

        logger.info(
            "Copied %s %s -> %s (%d files, %d dirs, %d bytes, overwrite=%s)",
            result.kind, source, dest, result.files_copied,
            result.directories_created, result.bytes_copied, overwrite,
        )
        return result

    # -- files ------------------------------------------------------------

    def _copy_single_file(self, src: Path, dst: Path, overwrite: bool) -> CopyResult:
        if dst.exists() and not overwrite:
            raise DestinationExistsError(dst)
        if dst.is_dir():
            raise IsADirectoryError(errno.EISDIR, "Destination is an existing directory", str(dst))
        if not dst.parent.is_dir():
            raise FileNotFoundError(errno.ENOENT, "Could not find a part of the path", str(dst))

        result = CopyResult(kind="file")
        self._write_file(src, dst, result)
        return result

    def _write_file(self, src: Path, dst: Path, result: CopyResult) -> None:
        """Copy into a temp sibling, then swap it in with os.replace."""
        fd, tmp_name = tempfile.mkstemp(prefix=f".{dst.name}.", suffix=".part", dir=dst.parent)
        os.close(fd)
        tmp = Path(tmp_name)
        try:
            shutil.copy2(src, tmp)
            os.replace(tmp, dst)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

        result.files_copied += 1
        result.bytes_copied += dst.stat().st_size
        logger.debug("Copied file %s -> %s", src, dst)

    # -- directories ------------------------------------------------------

    def _copy_directory(self, src: Path, dst: Path, overwrite: bool) -> CopyResult:
        src_real = src.resolve()
        dst_real = dst.resolve()
        if dst_real == src_real or src_real in dst_real.parents or dst_real in src_real.parents:
            raise InvalidCopyTargetError(src, dst)

        if dst.exists():
            if not overwrite:
                raise DestinationExistsError(dst)
            if not dst.is_dir():
                raise NotADirectoryError(errno.ENOTDIR, "Destination is an existing file", str(dst))
        elif not dst.parent.is_dir():
            raise FileNotFoundError(errno.ENOENT, "Could not find a part of the path", str(dst))

        result = CopyResult(kind="directory")
        self._ensure_directory(dst, result)
        self._merge_tree(src, dst, result)
        return result

    def _ensure_directory(self, path: Path, result: CopyResult) -> None:
        if path.is_dir():
            return
        path.mkdir()
        result.directories_created += 1

    def _merge_tree(self, src: Path, dst: Path, result: CopyResult) -> None:
        for entry in sorted(src.iterdir(), key=lambda p: p.name):
            target = dst / entry.name
            if entry.is_dir():
                if target.exists() and not target.is_dir():
                    raise NotADirectoryError(
                        errno.ENOTDIR, "Cannot merge a directory onto a file", str(target)
                    )
                self._ensure_directory(target, result)
                self._merge_tree(entry, target, result)
            else:
                if target.is_dir():
                    raise IsADirectoryError(
                        errno.EISDIR, "Cannot overwrite a directory with a file", str(target)
                    )
                self._write_file(entry, target, result)
