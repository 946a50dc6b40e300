"""Search/filter/sort selectors. Each dimension is a closed set of values."""

import enum

from stockroom.schemas.common import CamelModel

ALL_CATEGORIES = "all"


class StatusFilter(str, enum.Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class StockLevel(str, enum.Enum):
    ALL = "all"
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class SortKey(str, enum.Enum):
    NAME = "name"
    PRICE = "price"
    STOCK = "stock"
    CREATED_AT = "createdAt"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class SearchFilters(CamelModel):
    query: str = ""
    category: str = ALL_CATEGORIES  # "all" or a category id
    status: StatusFilter = StatusFilter.ALL
    stock_level: StockLevel = StockLevel.ALL
    sort_by: SortKey = SortKey.NAME
    sort_order: SortOrder = SortOrder.ASC


class SearchFiltersUpdate(CamelModel):
    """Partial filters; only the fields that are set get merged."""
    query: str | None = None
    category: str | None = None
    status: StatusFilter | None = None
    stock_level: StockLevel | None = None
    sort_by: SortKey | None = None
    sort_order: SortOrder | None = None
