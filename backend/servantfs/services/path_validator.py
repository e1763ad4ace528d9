"""Syntactic validation of caller-supplied paths — no I/O."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from servantfs.exceptions import FieldValidationError

# Characters the host file systems reject in a path
INVALID_PATH_CHARS = frozenset('<>"|?*') | frozenset(chr(c) for c in range(32))

_DRIVE_RE = re.compile(r"^(?P<letter>[A-Za-z]):[\\/]")
_UNC_RE = re.compile(r"^(?:\\\\|//)(?P<host>[^\\/]+)[\\/](?P<share>[^\\/]+)(?P<rest>[\\/].*)?$")

# `//host/share` is a UNC path only on Windows; elsewhere it is a POSIX path
FORWARD_SLASH_UNC = os.name == "nt"


class PathKind(str, Enum):
    POSIX = "posix"
    DRIVE = "drive"
    UNC = "unc"


@dataclass(frozen=True)
class FilePath:
    """A validated, rooted path. Only built by :func:`validate_path`."""

    raw: str
    kind: PathKind
    drive: str | None = None  # drive letter, upper-case
    host: str | None = None  # UNC host
    share: str | None = None  # UNC share
    parts: tuple[str, ...] = ()  # components below the root

    def __str__(self) -> str:
        return self.raw


def _split(rest: str) -> tuple[str, ...]:
    return tuple(p for p in re.split(r"[\\/]", rest) if p)


def _parse(raw: str) -> FilePath | None:
    unc = _UNC_RE.match(raw)
    if unc and raw.startswith("//") and not FORWARD_SLASH_UNC:
        unc = None
    if unc:
        return FilePath(
            raw=raw,
            kind=PathKind.UNC,
            host=unc.group("host"),
            share=unc.group("share"),
            parts=_split(unc.group("rest") or ""),
        )
    drive = _DRIVE_RE.match(raw)
    if drive:
        if ":" in raw[2:]:
            return None
        return FilePath(
            raw=raw,
            kind=PathKind.DRIVE,
            drive=drive.group("letter").upper(),
            parts=_split(raw[3:]),
        )
    if raw.startswith("/") and (not raw.startswith("//") or not FORWARD_SLASH_UNC):
        return FilePath(raw=raw, kind=PathKind.POSIX, parts=_split(raw))
    return None


def validate_path(raw: str | None, field: str = "Path") -> FilePath:
    """Validate ``raw`` and return an immutable :class:`FilePath`.

    Raises :class:`FieldValidationError` keyed by ``field`` when the value is
    missing, contains illegal characters, or is not rooted.
    """
    if raw is None or not raw.strip():
        raise FieldValidationError.single(field, f"The {field} field is required.")

    bad = sorted({c for c in raw if c in INVALID_PATH_CHARS})
    if bad:
        shown = ", ".join(repr(c) for c in bad)
        raise FieldValidationError.single(field, f"The {field} contains illegal characters: {shown}.")

    parsed = _parse(raw)
    if parsed is None:
        raise FieldValidationError.single(
            field, f"The {field} must be an absolute (rooted) path, got '{raw}'."
        )
    return parsed


def collect_paths(fields: Mapping[str, str | None]) -> dict[str, FilePath]:
    """Validate several path fields, aggregating every violation."""
    valid: dict[str, FilePath] = {}
    errors: dict[str, list[str]] = {}
    for field, raw in fields.items():
        try:
            valid[field] = validate_path(raw, field)
        except FieldValidationError as exc:
            errors.update(exc.errors)
    if errors:
        raise FieldValidationError(errors)
    return valid
