"""Stock movement log endpoints (append-only)."""

from fastapi import APIRouter, Depends, HTTPException, status

from stockroom.core.deps import get_store, raise_for_new_error
from stockroom.schemas.movement import StockMovement, StockMovementCreate
from stockroom.store.store import Store

router = APIRouter(prefix="/api/v1/movements", tags=["movements"])


@router.get("", response_model=list[StockMovement])
async def list_movements(
    product_id: str | None = None,
    store: Store = Depends(get_store),
):
    """List logged movements in recording order, optionally for one product."""
    movements = store.state.movements
    if product_id:
        movements = [m for m in movements if m.product_id == product_id]
    return movements


@router.post("", response_model=StockMovement, status_code=status.HTTP_201_CREATED)
async def create_movement(body: StockMovementCreate, store: Store = Depends(get_store)):
    """Record a movement without touching product stock."""
    if store.get_product(body.product_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    previous = store.state.error
    movement = store.add_stock_movement(body)
    raise_for_new_error(store, previous)
    return movement
