"""File-system API schemas."""

from pydantic import BaseModel


class DriveInfoModel(BaseModel):
    """A ready volume as reported by the host."""
    name: str
    root_directory: str
    drive_type: str  # fixed, removable, cdrom, network, ram
    drive_format: str
    is_ready: bool = True
    total_size: int
    total_free_space: int
    available_free_space: int
    volume_label: str = ""


class CopyResponse(BaseModel):
    """Successful COPY action."""
    action: str
    source_path: str
    dest_path: str
    kind: str  # file | directory
    files_copied: int
    directories_created: int
    bytes_copied: int


class ErrorResponse(BaseModel):
    detail: str


class ValidationErrorResponse(ErrorResponse):
    errors: dict[str, list[str]]


class HostErrorResponse(ErrorResponse):
    exception_type: str
    exception_message: str
