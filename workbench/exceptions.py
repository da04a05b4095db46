"""Exception types raised by the persistence and service layers."""

from typing import Any, Optional


class StorageError(Exception):
    """Any fault raised while talking to the store.

    The original exception (driver error, bad value, ...) is kept on
    ``cause`` so callers can log it; they only need to catch this type.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None and str(self.cause) not in message:
            return f"{message} (cause: {self.cause})"
        return message


class DbConnectionError(StorageError):
    """A connection could not be acquired or released."""


class BindError(StorageError):
    """A parameter value does not fit its declared SQL type."""


class MappingError(StorageError):
    """A fetched row does not have the columns an entity needs."""


class TransactionError(StorageError):
    """Begin, commit or rollback failed."""


class NotFoundError(Exception):
    """No project exists with the requested id."""

    def __init__(self, project_id: Any, message: str = None):
        super().__init__(message or f"Project with project ID={project_id} does not exist.")
        self.project_id = project_id
