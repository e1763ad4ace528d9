"""File-system routes — retrieval, drive listing and actions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from servantfs.api.deps import get_action_params, get_file_system
from servantfs.schemas.fs import (
    CopyResponse,
    DriveInfoModel,
    ErrorResponse,
    HostErrorResponse,
    ValidationErrorResponse,
)
from servantfs.services import FileSystemService

logger = logging.getLogger(__name__)
router = APIRouter()

_ERRORS = {
    400: {"model": ValidationErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": HostErrorResponse},
}


@router.get("/get", responses=_ERRORS)
def get_file(
    path: str | None = None,
    download: bool = False,
    fs: FileSystemService = Depends(get_file_system),
):
    """Stream a file — inline by extension, or as a binary attachment."""
    descriptor = fs.get_content(path, download)
    return StreamingResponse(
        descriptor.iter_bytes(),
        media_type=descriptor.media_type,
        headers={"Content-Disposition": descriptor.content_disposition},
        background=BackgroundTask(descriptor.close),
    )


@router.get("/drives", response_model=list[DriveInfoModel])
def list_drives(fs: FileSystemService = Depends(get_file_system)):
    """Ready volumes visible to the host."""
    return fs.list_drives()


@router.post("", response_model=CopyResponse, responses=_ERRORS)
def run_action(
    params: dict[str, str] = Depends(get_action_params),
    fs: FileSystemService = Depends(get_file_system),
):
    """Execute an action such as ``COPY`` on sourcePath/destPath."""
    action = next((v for k, v in params.items() if k.lower() == "action"), None)
    result = fs.execute(action, params)
    return CopyResponse(
        action=result.action.value,
        source_path=str(result.request.source_path),
        dest_path=str(result.request.dest_path),
        kind=result.outcome.kind,
        files_copied=result.outcome.files_copied,
        directories_created=result.outcome.directories_created,
        bytes_copied=result.outcome.bytes_copied,
    )
