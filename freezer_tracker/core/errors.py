"""Exceptions raised by the core modules.

The HTTP layer maps each class to a status code; see app/main.py.
"""


class FreezerError(Exception):
    """Base class for all freezer tracker errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FreezerError):
    """A required field is missing or a value is out of range."""

    status_code = 400


class NotFoundError(FreezerError):
    """The targeted row does not exist or is in the wrong lifecycle state."""

    status_code = 404


class AlreadyRemovedError(NotFoundError):
    """Take-out was requested for an item that is already consumed."""


class InternalError(FreezerError):
    """Unexpected storage or export failure."""

    status_code = 500
