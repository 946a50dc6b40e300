"""Pure search/filter/sort/aggregate functions over product collections."""

import time
import unicodedata
from collections import Counter
from datetime import datetime, timedelta, timezone

from stockroom.schemas.category import Category
from stockroom.schemas.filters import (
    ALL_CATEGORIES, SearchFilters, SortKey, SortOrder, StatusFilter, StockLevel,
)
from stockroom.schemas.movement import MovementType, StockMovement
from stockroom.schemas.product import Product
from stockroom.schemas.state import (
    CategorySummary, DailyActivity, InventoryStats, ProductValue,
    StockAlerts, StockLevelDistribution,
)


# ── Stock-level buckets ──────────────────────────

def stock_level_of(product: Product) -> StockLevel:
    """Classify a product into exactly one bucket."""
    if product.stock <= 0:
        return StockLevel.OUT_OF_STOCK
    if product.stock <= product.min_stock:
        return StockLevel.LOW_STOCK
    return StockLevel.IN_STOCK


# ── Search / filter / sort ──────────────────────────

def search_products(
    products: list[Product],
    query: str,
    categories: list[Category] | None = None,
) -> list[Product]:
    """Case-insensitive substring search over name, description, sku and category name.

    A blank query returns the input unchanged.
    """
    if not query.strip():
        return products

    term = query.lower()
    names = {c.id: c.name for c in categories or []}
    return [
        p for p in products
        if term in p.name.lower()
        or term in p.description.lower()
        or term in p.sku.lower()
        or term in names.get(p.category_id, "").lower()
    ]


def filter_products(products: list[Product], filters: SearchFilters) -> list[Product]:
    """Conjunction of the category, status and stock-level selectors."""
    def matches(product: Product) -> bool:
        if filters.category != ALL_CATEGORIES and product.category_id != filters.category:
            return False
        if filters.status != StatusFilter.ALL and product.status.value != filters.status.value:
            return False
        if filters.stock_level != StockLevel.ALL and stock_level_of(product) != filters.stock_level:
            return False
        return True

    return [p for p in products if matches(p)]


def _collation_key(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


_SORT_KEYS = {
    # accent- and case-insensitive first, exact spelling breaks ties
    SortKey.NAME: lambda p: (_collation_key(p.name), p.name),
    SortKey.PRICE: lambda p: p.price,
    SortKey.STOCK: lambda p: p.stock,
    SortKey.CREATED_AT: lambda p: p.created_at,
}


def sort_products(
    products: list[Product],
    sort_by: SortKey = SortKey.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Product]:
    """Stable sort; equal keys keep their input order in both directions."""
    return sorted(products, key=_SORT_KEYS[sort_by], reverse=sort_order == SortOrder.DESC)


# ── Aggregates ──────────────────────────

def inventory_value(products: list[Product]) -> float:
    return sum(p.price * p.stock for p in products)


def compute_stats(
    products: list[Product],
    categories: list[Category],
    movements: list[StockMovement],
    now: datetime | None = None,
    recent_hours: int = 24,
) -> InventoryStats:
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(hours=recent_hours)
    levels = Counter(stock_level_of(p) for p in products)

    return InventoryStats(
        total_products=len(products),
        total_value=inventory_value(products),
        low_stock_count=levels[StockLevel.LOW_STOCK],
        out_of_stock_count=levels[StockLevel.OUT_OF_STOCK],
        total_categories=len(categories),
        recent_movements=sum(1 for m in movements if m.created_at > since),
    )


def stock_alerts(products: list[Product]) -> StockAlerts:
    return StockAlerts(
        low_stock=[p for p in products if stock_level_of(p) == StockLevel.LOW_STOCK],
        out_of_stock=[p for p in products if stock_level_of(p) == StockLevel.OUT_OF_STOCK],
    )


def count_products_in_category(products: list[Product], category_id: str) -> int:
    return sum(1 for p in products if p.category_id == category_id)


def category_breakdown(products: list[Product], categories: list[Category]) -> list[CategorySummary]:
    summaries = []
    for category in categories:
        members = [p for p in products if p.category_id == category.id]
        summaries.append(CategorySummary(
            category_id=category.id,
            name=category.name,
            color=category.color,
            products=len(members),
            value=inventory_value(members),
            stock=sum(p.stock for p in members),
        ))
    return summaries


def stock_level_distribution(products: list[Product]) -> StockLevelDistribution:
    levels = Counter(stock_level_of(p) for p in products)
    return StockLevelDistribution(
        in_stock=levels[StockLevel.IN_STOCK],
        low_stock=levels[StockLevel.LOW_STOCK],
        out_of_stock=levels[StockLevel.OUT_OF_STOCK],
    )


def top_products_by_value(products: list[Product], limit: int = 8) -> list[ProductValue]:
    ranked = sorted(products, key=lambda p: p.price * p.stock, reverse=True)[:limit]
    return [
        ProductValue(product_id=p.id, name=p.name, value=p.price * p.stock, stock=p.stock)
        for p in ranked
    ]


def movement_activity(
    movements: list[StockMovement],
    days: int = 7,
    now: datetime | None = None,
) -> list[DailyActivity]:
    """Per-day movement counts for the trailing ``days`` days, oldest first."""
    today = (now or datetime.now(timezone.utc)).date()
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    buckets = {day: DailyActivity(day=day, movements=0, units_in=0, units_out=0) for day in window}

    for movement in movements:
        bucket = buckets.get(movement.created_at.date())
        if bucket is None:
            continue
        bucket.movements += 1
        if movement.type == MovementType.IN:
            bucket.units_in += movement.quantity
        elif movement.type == MovementType.OUT:
            bucket.units_out += movement.quantity

    return [buckets[day] for day in window]


def generate_sku(category_name: str, now: float | None = None) -> str:
    """``ELE-123456``: category prefix plus the last six digits of the epoch-ms clock."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"{category_name[:3].upper()}-{str(millis)[-6:]}"
