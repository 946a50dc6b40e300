"""Dashboard statistics, stock alerts and chart data."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from stockroom.core.deps import get_store
from stockroom.schemas.state import ChartData, InventoryStats, StockAlerts
from stockroom.services import queries
from stockroom.store.store import Store

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("/stats", response_model=InventoryStats)
async def get_stats(store: Store = Depends(get_store)):
    return store.get_stats()


@router.get("/alerts", response_model=StockAlerts)
async def get_stock_alerts(store: Store = Depends(get_store)):
    """Products that are low on stock or out of stock."""
    return queries.stock_alerts(store.state.products)


@router.get("/charts", response_model=ChartData)
async def get_chart_data(
    top: int = Query(8, ge=1, le=50),
    days: int = Query(7, ge=1, le=90),
    store: Store = Depends(get_store),
):
    state = store.state
    return ChartData(
        categories=queries.category_breakdown(state.products, state.categories),
        stock_levels=queries.stock_level_distribution(state.products),
        top_products=queries.top_products_by_value(state.products, limit=top),
        activity=queries.movement_activity(state.movements, days=days, now=datetime.now(timezone.utc)),
    )
