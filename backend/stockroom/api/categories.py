"""Category endpoints. Deleting a category in use is refused here, not in the store."""

from fastapi import APIRouter, Depends, HTTPException, status

from stockroom.core.deps import get_store, raise_for_new_error
from stockroom.schemas.category import Category, CategoryCreate, CategoryResponse, CategoryUpdate
from stockroom.services.queries import count_products_in_category
from stockroom.store.store import Store

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


def _to_response(store: Store, category: Category) -> CategoryResponse:
    return CategoryResponse(
        **category.model_dump(),
        product_count=count_products_in_category(store.state.products, category.id),
    )


def _get_or_404(store: Store, category_id: str) -> Category:
    category = store.get_category(category_id)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )
    return category


def _check_name_available(store: Store, name: str, exclude_id: str | None = None) -> None:
    if any(c.name == name and c.id != exclude_id for c in store.state.categories):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category with this name already exists",
        )


@router.get("", response_model=list[CategoryResponse])
async def list_categories(store: Store = Depends(get_store)):
    """List categories with the number of products assigned to each."""
    return [_to_response(store, c) for c in store.state.categories]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, store: Store = Depends(get_store)):
    return _to_response(store, _get_or_404(store, category_id))


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(body: CategoryCreate, store: Store = Depends(get_store)):
    _check_name_available(store, body.name)

    previous = store.state.error
    category = store.add_category(body)
    raise_for_new_error(store, previous)
    return _to_response(store, category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: str, body: CategoryUpdate, store: Store = Depends(get_store)):
    category = _get_or_404(store, category_id)
    if body.name and body.name != category.name:
        _check_name_available(store, body.name, exclude_id=category_id)

    previous = store.state.error
    updated = store.update_category(category_id, body)
    raise_for_new_error(store, previous)
    return _to_response(store, updated)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: str, store: Store = Depends(get_store)):
    category = _get_or_404(store, category_id)

    in_use = count_products_in_category(store.state.products, category_id)
    if in_use > 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot delete category '{category.name}': {in_use} product(s) still assigned",
        )

    previous = store.state.error
    store.delete_category(category_id)
    raise_for_new_error(store, previous)
