"""Category schemas."""

from pydantic import Field

from stockroom.schemas.common import CamelModel, UtcDateTime

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"

DEFAULT_COLORS = [
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # yellow
    "#8B5CF6",  # purple
    "#EF4444",  # red
    "#06B6D4",  # cyan
    "#84CC16",  # lime
    "#F97316",  # orange
    "#EC4899",  # pink
    "#6B7280",  # gray
]


class CategoryBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    color: str = Field(DEFAULT_COLORS[0], pattern=HEX_COLOR)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    color: str | None = Field(None, pattern=HEX_COLOR)


class Category(CategoryBase):
    id: str
    created_at: UtcDateTime


class CategoryResponse(Category):
    product_count: int = 0
