"""FastAPI dependency injection — file system service and request bodies."""

from __future__ import annotations

import json
import logging

from fastapi import Request

from servantfs.exceptions import FieldValidationError
from servantfs.services import FileSystemService, get_file_system_service

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_file_system() -> FileSystemService:
    """Overridable in tests via ``app.dependency_overrides``."""
    return get_file_system_service()


async def get_action_params(request: Request) -> dict[str, str]:
    """Read the action body as form fields or a flat JSON object."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}

    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise FieldValidationError.single("Body", "The request body is not valid JSON or form data.")
    if not isinstance(data, dict):
        raise FieldValidationError.single("Body", "The request body must be an object.")
    return {
        k: ("true" if v is True else "false" if v is False else str(v))
        for k, v in data.items()
        if v is not None
    }
