"""Error kinds recorded on inventory state and the exceptions behind them."""

import enum


class ErrorKind(str, enum.Enum):
    STORAGE_UNAVAILABLE = "storage_unavailable"
    PERSISTENCE = "persistence"
    CORRUPT_DATA = "corrupt_data"
    INVALID_IMPORT = "invalid_import"
    IMPORT_FAILED = "import_failed"


class StockroomError(Exception):
    """Base class for every failure the store knows how to record."""

    kind: ErrorKind = ErrorKind.PERSISTENCE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageUnavailableError(StockroomError):
    """Durable storage could not be reached (read or write)."""

    kind = ErrorKind.STORAGE_UNAVAILABLE


class CorruptDataError(StockroomError):
    """A stored collection is not valid JSON or does not match its record shape."""

    kind = ErrorKind.CORRUPT_DATA


class InvalidImportError(StockroomError):
    """An import document failed structural validation. Nothing was written."""

    kind = ErrorKind.INVALID_IMPORT

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []
