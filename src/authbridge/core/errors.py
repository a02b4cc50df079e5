"""Error taxonomy for identity and tenant resolution."""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


class ResolutionError(Exception):
    """Base class for failures that abort a resolution."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(ResolutionError):
    """A required argument was missing or empty."""

    kind = ErrorKind.INVALID_INPUT


class NotFoundError(ResolutionError):
    """The primary record of a resolution does not exist."""

    kind = ErrorKind.NOT_FOUND


class StoreError(ResolutionError):
    """The entity store failed; ``message`` carries the underlying fault text."""

    kind = ErrorKind.STORE_ERROR
