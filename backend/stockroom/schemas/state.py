"""Inventory state, statistics and chart schemas."""

from datetime import date

from pydantic import BaseModel, Field

from stockroom.core.errors import ErrorKind
from stockroom.schemas.category import Category
from stockroom.schemas.filters import SearchFilters
from stockroom.schemas.movement import StockMovement
from stockroom.schemas.product import Product


class InventoryError(BaseModel):
    kind: ErrorKind
    message: str


class InventoryState(BaseModel):
    """Snapshot owned by one Store. Replaced, never mutated, by the reducer."""
    products: list[Product] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    movements: list[StockMovement] = Field(default_factory=list)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    selected_product_id: str | None = None
    is_loading: bool = False
    error: InventoryError | None = None


class InventoryStats(BaseModel):
    total_products: int
    total_value: float
    low_stock_count: int
    out_of_stock_count: int
    total_categories: int
    recent_movements: int


class StockAlerts(BaseModel):
    low_stock: list[Product]
    out_of_stock: list[Product]


class CategorySummary(BaseModel):
    category_id: str
    name: str
    color: str
    products: int
    value: float
    stock: int


class StockLevelDistribution(BaseModel):
    in_stock: int
    low_stock: int
    out_of_stock: int


class ProductValue(BaseModel):
    product_id: str
    name: str
    value: float
    stock: int


class DailyActivity(BaseModel):
    day: date
    movements: int
    units_in: int
    units_out: int


class ChartData(BaseModel):
    categories: list[CategorySummary]
    stock_levels: StockLevelDistribution
    top_products: list[ProductValue]
    activity: list[DailyActivity]
