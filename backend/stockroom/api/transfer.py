"""Export/import of the whole inventory, reload from storage, and store status."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from stockroom.core.deps import get_store, raise_for_new_error
from stockroom.schemas.state import InventoryError
from stockroom.services.transfer import dump_export, export_filename
from stockroom.store.store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/data", tags=["data"])


class StoreStatus(BaseModel):
    products: int
    categories: int
    movements: int
    selected_product_id: str | None
    is_loading: bool
    error: InventoryError | None


class ImportResult(BaseModel):
    imported: bool
    products: int
    categories: int
    movements: int


def _status(store: Store) -> StoreStatus:
    state = store.state
    return StoreStatus(
        products=len(state.products),
        categories=len(state.categories),
        movements=len(state.movements),
        selected_product_id=state.selected_product_id,
        is_loading=state.is_loading,
        error=state.error,
    )


@router.get("/status", response_model=StoreStatus)
async def get_status(store: Store = Depends(get_store)):
    return _status(store)


@router.post("/reload", response_model=StoreStatus)
async def reload_data(store: Store = Depends(get_store)):
    """Re-read every collection from storage."""
    previous = store.state.error
    store.load_data()
    raise_for_new_error(store, previous)
    return _status(store)


@router.get("/export")
async def export_data(store: Store = Depends(get_store)):
    """Download the full inventory as ``inventory_export_<date>.json``."""
    document = store.export_data()
    filename = export_filename(document.exported_at, prefix=store.settings.EXPORT_FILENAME_PREFIX)
    return Response(
        content=dump_export(document),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_data(file: UploadFile = File(...), store: Store = Depends(get_store)):
    """Replace the inventory with an uploaded export document."""
    raw = await file.read()
    logger.info("Import requested: %s (%d bytes)", file.filename, len(raw))

    previous = store.state.error
    if not store.import_data(raw):
        raise_for_new_error(store, previous)
        raise HTTPException(400, "Import failed")

    state = store.state
    return ImportResult(
        imported=True,
        products=len(state.products),
        categories=len(state.categories),
        movements=len(state.movements),
    )
