from fastapi import APIRouter, Depends, HTTPException, Query

from stockroom.core.deps import get_store, raise_for_new_error
from stockroom.schemas.filters import (
    SearchFilters, SearchFiltersUpdate, SortKey, SortOrder, StatusFilter, StockLevel,
)
from stockroom.schemas.movement import StockMovement
from stockroom.schemas.product import Product, ProductCreate, ProductUpdate, StockUpdate
from stockroom.services.queries import generate_sku
from stockroom.store.store import Store

router = APIRouter(prefix="/api/v1/products", tags=["products"])


def _get_or_404(store: Store, product_id: str) -> Product:
    product = store.get_product(product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


def _check_category(store: Store, category_id: str) -> None:
    if store.get_category(category_id) is None:
        raise HTTPException(400, f"Category '{category_id}' does not exist")


@router.get("", response_model=list[Product])
async def list_products(
    query: str | None = None,
    category: str | None = None,
    status_filter: StatusFilter | None = Query(None, alias="status"),
    stock_level: StockLevel | None = Query(None, alias="stockLevel"),
    sort_by: SortKey | None = Query(None, alias="sortBy"),
    sort_order: SortOrder | None = Query(None, alias="sortOrder"),
    store: Store = Depends(get_store),
):
    """Filtered product view. Any selector passed here is merged into the store's filters first."""
    changes = SearchFiltersUpdate(
        query=query,
        category=category,
        status=status_filter,
        stock_level=stock_level,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    if changes.model_dump(exclude_none=True):
        store.set_filters(changes)
    return store.get_filtered_products()


@router.get("/filters", response_model=SearchFilters)
async def get_filters(store: Store = Depends(get_store)):
    return store.state.filters


@router.delete("/filters", response_model=SearchFilters)
async def clear_filters(store: Store = Depends(get_store)):
    store.clear_filters()
    return store.state.filters


@router.get("/selection", response_model=Product | None)
async def get_selected_product(store: Store = Depends(get_store)):
    return store.selected_product


@router.delete("/selection", status_code=204)
async def clear_selection(store: Store = Depends(get_store)):
    store.select_product(None)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, store: Store = Depends(get_store)):
    return _get_or_404(store, product_id)


@router.post("", response_model=Product, status_code=201)
async def create_product(data: ProductCreate, store: Store = Depends(get_store)):
    _check_category(store, data.category_id)

    if not data.sku:
        category = store.get_category(data.category_id)
        data = data.model_copy(update={"sku": generate_sku(category.name)})

    previous = store.state.error
    product = store.add_product(data)
    raise_for_new_error(store, previous)
    return product


@router.patch("/{product_id}", response_model=Product)
async def update_product(product_id: str, data: ProductUpdate, store: Store = Depends(get_store)):
    _get_or_404(store, product_id)
    if data.category_id is not None:
        _check_category(store, data.category_id)

    previous = store.state.error
    product = store.update_product(product_id, data)
    raise_for_new_error(store, previous)
    return product


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, store: Store = Depends(get_store)):
    _get_or_404(store, product_id)
    previous = store.state.error
    store.delete_product(product_id)
    raise_for_new_error(store, previous)


@router.put("/{product_id}/stock", response_model=StockMovement)
async def set_stock(product_id: str, data: StockUpdate, store: Store = Depends(get_store)):
    """Set an absolute stock level; the response is the movement that was logged."""
    _get_or_404(store, product_id)
    previous = store.state.error
    movement = store.update_stock(product_id, data.quantity, data.reason)
    raise_for_new_error(store, previous)
    return movement


@router.post("/{product_id}/select", response_model=Product)
async def select_product(product_id: str, store: Store = Depends(get_store)):
    product = _get_or_404(store, product_id)
    store.select_product(product_id)
    return product
