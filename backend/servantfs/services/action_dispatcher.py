"""Action keyword dispatch (``COPY`` ...) with per-field validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping

from servantfs.exceptions import ActionRequestError, FieldValidationError
from servantfs.services.copy_engine import CopyEngine, CopyResult
from servantfs.services.path_validator import FilePath, collect_paths

logger = logging.getLogger(__name__)

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off", ""})


class FileAction(str, Enum):
    COPY = "COPY"

    @classmethod
    def parse(cls, raw: str | None) -> FileAction:
        if raw is None or not raw.strip():
            raise ActionRequestError("A value for action is not provided.")
        try:
            return cls(raw.strip().upper())
        except ValueError:
            raise ActionRequestError(f"Unknown action command - '{raw.strip()}'.") from None


@dataclass(frozen=True)
class CopyRequest:
    source_path: FilePath
    dest_path: FilePath
    overwrite: bool = False


@dataclass
class ActionResult:
    action: FileAction
    request: CopyRequest
    outcome: CopyResult


def _param_key(name: str) -> str:
    return name.replace("_", "").lower()


def parse_bool(raw: str | None, field: str) -> bool:
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise FieldValidationError.single(field, f"The value '{raw}' is not valid for {field}.")


class ActionDispatcher:
    """Maps a :class:`FileAction` to its handler, rejecting anything else."""

    def __init__(self, copy_engine: CopyEngine):
        self._copy_engine = copy_engine
        self._handlers: dict[FileAction, Callable[[dict[str, str]], ActionResult]] = {
            FileAction.COPY: self._copy,
        }

    def dispatch(self, action: str | None, params: Mapping[str, str]) -> ActionResult:
        kind = FileAction.parse(action)
        normalized = {_param_key(k): v for k, v in params.items()}
        return self._handlers[kind](normalized)

    def _copy(self, params: dict[str, str]) -> ActionResult:
        errors: dict[str, list[str]] = {}
        paths: dict[str, FilePath] = {}
        overwrite = False

        try:
            paths = collect_paths({
                "SourcePath": params.get("sourcepath"),
                "DestPath": params.get("destpath"),
            })
        except FieldValidationError as exc:
            errors.update(exc.errors)
        try:
            overwrite = parse_bool(params.get("overwrite"), "Overwrite")
        except FieldValidationError as exc:
            errors.update(exc.errors)
        if errors:
            logger.warning("Rejected COPY request: %s", errors)
            raise FieldValidationError(errors)

        request = CopyRequest(paths["SourcePath"], paths["DestPath"], overwrite)
        outcome = self._copy_engine.copy(request.source_path, request.dest_path, request.overwrite)
        return ActionResult(FileAction.COPY, request, outcome)
