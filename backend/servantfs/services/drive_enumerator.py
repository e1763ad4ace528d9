"""Host volume enumeration via psutil."""

from __future__ import annotations

import logging
from pathlib import PurePath

import psutil

from servantfs.schemas.fs import DriveInfoModel

logger = logging.getLogger(__name__)

NETWORK_FSTYPES = frozenset({"nfs", "nfs4", "cifs", "smbfs", "smb3", "sshfs", "fuse.sshfs", "afpfs", "9p"})
RAM_FSTYPES = frozenset({"tmpfs", "ramfs"})


def _drive_type(partition) -> str:
    opts = {o.strip().lower() for o in partition.opts.split(",")}
    fstype = partition.fstype.lower()
    if "cdrom" in opts or fstype in ("iso9660", "udf", "cdfs"):
        return "cdrom"
    if "removable" in opts:
        return "removable"
    if "remote" in opts or fstype in NETWORK_FSTYPES:
        return "network"
    if fstype in RAM_FSTYPES:
        return "ram"
    return "fixed"


def _volume_label(partition) -> str:
    # psutil has no label API; the mount point's last segment is the closest
    return PurePath(partition.mountpoint).name


class DriveEnumerator:
    """Lists ready volumes, re-querying the host on every call."""

    def __init__(self, all_partitions: bool = False):
        self._all = all_partitions

    def list_drives(self) -> list[DriveInfoModel]:
        drives: list[DriveInfoModel] = []
        for part in psutil.disk_partitions(all=self._all):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError as e:
                logger.debug("Skipping drive %s: not ready (%s)", part.mountpoint, e)
                continue

            drives.append(
                DriveInfoModel(
                    name=part.mountpoint,
                    root_directory=part.mountpoint,
                    drive_type=_drive_type(part),
                    drive_format=part.fstype,
                    total_size=usage.total,
                    total_free_space=usage.total - usage.used,
                    available_free_space=usage.free,
                    volume_label=_volume_label(part),
                )
            )
        return drives
