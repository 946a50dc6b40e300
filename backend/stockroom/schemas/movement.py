"""Stock movement schemas. Movements form an append-only log."""

import enum

from pydantic import Field

from stockroom.schemas.common import CamelModel, UtcDateTime


class MovementType(str, enum.Enum):
    IN = "in"
    OUT = "out"
    ADJUSTMENT = "adjustment"


class StockMovementCreate(CamelModel):
    """Schema for recording a movement (id and timestamp are assigned by the store)."""
    product_id: str
    type: MovementType
    quantity: int = Field(..., ge=0, description="Units moved, always non-negative")
    reason: str = Field(..., max_length=200)
    notes: str | None = Field(None, max_length=500)
    created_by: str | None = Field(None, max_length=100, description="Defaults to the configured movement author")


class StockMovement(StockMovementCreate):
    id: str
    created_by: str
    created_at: UtcDateTime
