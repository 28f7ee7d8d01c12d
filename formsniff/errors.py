from __future__ import annotations


class FormSniffError(Exception):
    """Base error for formsniff."""


class InvalidInputError(FormSniffError):
    """Raised when the field set cannot be turned into a multipart body."""

    def __init__(self, message: str, field: str | None = None, value_type: str | None = None) -> None:
        super().__init__(message)
        self.field = field
        self.value_type = value_type


class IOFailureError(FormSniffError):
    """Raised when a file named in a file field cannot be read."""

    def __init__(self, message: str, field: str, path: str) -> None:
        super().__init__(message)
        self.field = field
        self.path = path
