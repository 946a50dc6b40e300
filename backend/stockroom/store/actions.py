"""Actions accepted by the inventory reducer."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from stockroom.schemas.category import Category
from stockroom.schemas.filters import SearchFiltersUpdate
from stockroom.schemas.movement import StockMovement
from stockroom.schemas.product import Product
from stockroom.schemas.state import InventoryError


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetLoading(Action):
    is_loading: bool


class SetError(Action):
    error: InventoryError | None


class SetProducts(Action):
    products: list[Product]


class AddProduct(Action):
    product: Product


class UpdateProduct(Action):
    product: Product


class DeleteProduct(Action):
    product_id: str


class SetCategories(Action):
    categories: list[Category]


class AddCategory(Action):
    category: Category


class UpdateCategory(Action):
    category: Category


class DeleteCategory(Action):
    category_id: str


class SetMovements(Action):
    movements: list[StockMovement]


class AddMovement(Action):
    movement: StockMovement


class SetFilters(Action):
    changes: SearchFiltersUpdate


class ResetFilters(Action):
    pass


class SelectProduct(Action):
    product_id: str | None


class UpdateStock(Action):
    product_id: str
    quantity: int
    updated_at: datetime


InventoryAction = (
    SetLoading | SetError | SetProducts | AddProduct | UpdateProduct | DeleteProduct
    | SetCategories | AddCategory | UpdateCategory | DeleteCategory
    | SetMovements | AddMovement | SetFilters | ResetFilters | SelectProduct | UpdateStock
)
