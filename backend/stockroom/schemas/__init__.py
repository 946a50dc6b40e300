from stockroom.schemas.product import (
    Product, ProductCreate, ProductUpdate, ProductStatus, StockUpdate,
)
from stockroom.schemas.category import (
    Category, CategoryCreate, CategoryUpdate, CategoryResponse,
)
from stockroom.schemas.movement import (
    MovementType, StockMovement, StockMovementCreate,
)
from stockroom.schemas.filters import (
    SearchFilters, SearchFiltersUpdate, SortKey, SortOrder, StatusFilter, StockLevel,
)
from stockroom.schemas.state import InventoryError, InventoryState, InventoryStats
from stockroom.schemas.transfer import ExportDocument

__all__ = [
    "Product", "ProductCreate", "ProductUpdate", "ProductStatus", "StockUpdate",
    "Category", "CategoryCreate", "CategoryUpdate", "CategoryResponse",
    "MovementType", "StockMovement", "StockMovementCreate",
    "SearchFilters", "SearchFiltersUpdate", "SortKey", "SortOrder", "StatusFilter", "StockLevel",
    "InventoryError", "InventoryState", "InventoryStats",
    "ExportDocument",
]
