"""Errors raised while driving the panel, each carrying an HTTP status."""

from __future__ import annotations


class PanelError(Exception):
    """Base class for every error the controller reports."""

    prefix = "Error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class StorageError(PanelError):
    """Persistent storage could not be read or written."""

    prefix = "Storage"


class UartError(PanelError):
    """The serial link to the panel failed."""

    prefix = "Uart"


class InternalError(PanelError):
    """An unexpected internal failure."""

    prefix = "Internal"


class NotFoundError(PanelError):
    """A requested page or schedule does not exist."""

    prefix = "Not found"
    status_code = 404


class BadRequestError(PanelError):
    """The caller supplied invalid input."""

    prefix = "Bad request"
    status_code = 400