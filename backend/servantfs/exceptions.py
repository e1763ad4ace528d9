"""Exceptions raised by the file-system services."""

from __future__ import annotations

import errno


class ServantError(Exception):
    """Base class for request-level errors that never reach the disk."""


class FieldValidationError(ServantError):
    """Raised when one or more request fields are malformed.

    All violations are collected before raising so the caller sees every
    invalid field at once.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        """Initialize FieldValidationError.

        Args:
            errors: Mapping of field name to one or more messages.
        """
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid request fields: {fields}")

    @classmethod
    def single(cls, field: str, message: str) -> FieldValidationError:
        return cls({field: [message]})


class ActionRequestError(ServantError):
    """Raised when the action keyword is missing or unknown."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PathNotFoundError(ServantError):
    """Raised when the requested path does not exist on the host."""

    def __init__(self, path: object) -> None:
        self.path = str(path)
        super().__init__(f"Could not find '{self.path}'.")


class DestinationExistsError(FileExistsError):
    """Raised when a copy target exists and overwrite was not requested."""

    def __init__(self, path: object) -> None:
        super().__init__(
            errno.EEXIST,
            f"The target '{path}' already exists and overwrite is not enabled",
            str(path),
        )


class InvalidCopyTargetError(OSError):
    """Raised when source and destination directories overlap."""

    def __init__(self, source: object, dest: object) -> None:
        super().__init__(
            errno.EINVAL,
            f"Cannot copy directory '{source}' onto '{dest}': the trees overlap",
            str(dest),
        )
