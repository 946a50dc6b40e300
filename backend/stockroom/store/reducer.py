"""Pure reducer: ``reduce(state, action) -> new state``.

The input state is never modified; every handler returns a copy with the
affected fields replaced. Unknown actions return the state unchanged.
"""

from typing import Callable

from stockroom.schemas.filters import SearchFilters
from stockroom.schemas.state import InventoryState
from stockroom.store import actions as a


def _set_loading(state: InventoryState, action: a.SetLoading) -> InventoryState:
    return state.model_copy(update={"is_loading": action.is_loading})


def _set_error(state: InventoryState, action: a.SetError) -> InventoryState:
    return state.model_copy(update={"error": action.error})


def _set_products(state: InventoryState, action: a.SetProducts) -> InventoryState:
    return state.model_copy(update={"products": list(action.products)})


def _add_product(state: InventoryState, action: a.AddProduct) -> InventoryState:
    return state.model_copy(update={"products": [*state.products, action.product]})


def _update_product(state: InventoryState, action: a.UpdateProduct) -> InventoryState:
    updated = action.product
    return state.model_copy(update={
        "products": [updated if p.id == updated.id else p for p in state.products],
    })


def _delete_product(state: InventoryState, action: a.DeleteProduct) -> InventoryState:
    selected = state.selected_product_id
    return state.model_copy(update={
        "products": [p for p in state.products if p.id != action.product_id],
        "selected_product_id": None if selected == action.product_id else selected,
    })


def _set_categories(state: InventoryState, action: a.SetCategories) -> InventoryState:
    return state.model_copy(update={"categories": list(action.categories)})


def _add_category(state: InventoryState, action: a.AddCategory) -> InventoryState:
    return state.model_copy(update={"categories": [*state.categories, action.category]})


def _update_category(state: InventoryState, action: a.UpdateCategory) -> InventoryState:
    updated = action.category
    return state.model_copy(update={
        "categories": [updated if c.id == updated.id else c for c in state.categories],
    })


def _delete_category(state: InventoryState, action: a.DeleteCategory) -> InventoryState:
    return state.model_copy(update={
        "categories": [c for c in state.categories if c.id != action.category_id],
    })


def _set_movements(state: InventoryState, action: a.SetMovements) -> InventoryState:
    return state.model_copy(update={"movements": list(action.movements)})


def _add_movement(state: InventoryState, action: a.AddMovement) -> InventoryState:
    return state.model_copy(update={"movements": [*state.movements, action.movement]})


def _set_filters(state: InventoryState, action: a.SetFilters) -> InventoryState:
    changes = action.changes.model_dump(exclude_none=True)
    return state.model_copy(update={"filters": state.filters.model_copy(update=changes)})


def _reset_filters(state: InventoryState, action: a.ResetFilters) -> InventoryState:
    return state.model_copy(update={"filters": SearchFilters()})


def _select_product(state: InventoryState, action: a.SelectProduct) -> InventoryState:
    return state.model_copy(update={"selected_product_id": action.product_id})


def _update_stock(state: InventoryState, action: a.UpdateStock) -> InventoryState:
    return state.model_copy(update={
        "products": [
            p.model_copy(update={"stock": action.quantity, "updated_at": action.updated_at})
            if p.id == action.product_id else p
            for p in state.products
        ],
    })


_HANDLERS: dict[type, Callable] = {
    a.SetLoading: _set_loading,
    a.SetError: _set_error,
    a.SetProducts: _set_products,
    a.AddProduct: _add_product,
    a.UpdateProduct: _update_product,
    a.DeleteProduct: _delete_product,
    a.SetCategories: _set_categories,
    a.AddCategory: _add_category,
    a.UpdateCategory: _update_category,
    a.DeleteCategory: _delete_category,
    a.SetMovements: _set_movements,
    a.AddMovement: _add_movement,
    a.SetFilters: _set_filters,
    a.ResetFilters: _reset_filters,
    a.SelectProduct: _select_product,
    a.UpdateStock: _update_stock,
}


def reduce(state: InventoryState, action: a.Action) -> InventoryState:
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)
