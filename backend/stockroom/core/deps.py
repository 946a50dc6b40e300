"""Dependency injection: the application's Store and store-error translation."""

from fastapi import HTTPException, Request, status

from stockroom.core.errors import ErrorKind
from stockroom.schemas.state import InventoryError
from stockroom.store.store import Store

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.PERSISTENCE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.CORRUPT_DATA: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INVALID_IMPORT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.IMPORT_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_store(request: Request) -> Store:
    """Return the Store created by the application lifespan."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Inventory store is not initialised",
        )
    return store


def raise_for_new_error(store: Store, previous: InventoryError | None) -> None:
    """Raise if the last store action recorded an error that was not there before."""
    error = store.state.error
    if error is not None and error is not previous:
        raise HTTPException(status_code=ERROR_STATUS[error.kind], detail=error.message)
