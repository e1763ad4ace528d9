"""Content negotiation and streaming for file retrieval."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import BinaryIO, Iterator
from urllib.parse import quote

from servantfs.config import settings
from servantfs.exceptions import PathNotFoundError
from servantfs.services.path_resolver import PathResolver
from servantfs.services.path_validator import FilePath

logger = logging.getLogger(__name__)

BINARY_MEDIA_TYPE = "application/octet-stream"
INLINE = "inline"
ATTACHMENT = "attachment"

# Pinned so the answer does not depend on the host's mime.types files
_PINNED_TYPES = {
    ".txt": "text/plain",
    ".log": "text/plain",
    ".xml": "text/xml",
    ".htm": "text/html",
    ".html": "text/html",
    ".css": "text/css",
    ".csv": "text/csv",
    ".js": "application/javascript",
    ".json": "application/json",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
}

# Built-in table only; MimeTypes() without filenames ignores system files
_DEFAULT_TYPES = mimetypes.MimeTypes()


def media_type_for(name: str) -> str:
    """Media type for a file name, by extension."""
    suffix = Path(name).suffix.lower()
    if suffix in _PINNED_TYPES:
        return _PINNED_TYPES[suffix]
    guessed, _ = _DEFAULT_TYPES.guess_type("file" + suffix, strict=False) if suffix else (None, None)
    return guessed or BINARY_MEDIA_TYPE


def content_disposition(disposition_type: str, filename: str) -> str:
    """Build a Content-Disposition header value (RFC 6266 / 5987)."""
    try:
        filename.encode("ascii")
    except UnicodeEncodeError:
        return f"{disposition_type}; filename*=UTF-8''{quote(filename)}"
    escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
    return f'{disposition_type}; filename="{escaped}"'


class ContentDescriptor:
    """An open file plus the headers it should be served with.

    The handle is released when the stream is exhausted, when the consumer
    stops early (generator close), or on :meth:`close`, whichever is first.
    """

    def __init__(
        self,
        path: Path,
        handle: BinaryIO,
        media_type: str,
        disposition_type: str,
        chunk_size: int,
    ):
        self.path = path
        self.media_type = media_type
        self.disposition_type = disposition_type
        self.chunk_size = chunk_size
        self._handle = handle

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def content_disposition(self) -> str:
        return content_disposition(self.disposition_type, self.filename)

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def iter_bytes(self) -> Iterator[bytes]:
        try:
            while chunk := self._handle.read(self.chunk_size):
                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()
            logger.debug("Released handle for %s", self.path)

    def __enter__(self) -> ContentDescriptor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class ContentResolver:
    """Resolves a validated path to a streamable :class:`ContentDescriptor`."""

    def __init__(self, resolver: PathResolver, chunk_size: int | None = None):
        self._resolver = resolver
        self._chunk_size = chunk_size or settings.stream_chunk_size

    def resolve(self, path: FilePath, download: bool = False) -> ContentDescriptor:
        local = self._resolver.to_local(path)
        if local is None or not local.is_file():
            raise PathNotFoundError(path)

        if download:
            media_type, disposition = BINARY_MEDIA_TYPE, ATTACHMENT
        else:
            media_type, disposition = media_type_for(local.name), INLINE

        try:
            handle = local.open("rb")
        except FileNotFoundError:
            raise PathNotFoundError(path) from None
        logger.debug("Serving %s as %s (%s)", local, media_type, disposition)
        return ContentDescriptor(local, handle, media_type, disposition, self._chunk_size)
