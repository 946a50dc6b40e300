import enum

from pydantic import Field

from stockroom.schemas.common import CamelModel, UtcDateTime


class ProductStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProductBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    category_id: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=5, ge=0)
    sku: str = Field("", max_length=50)
    barcode: str | None = Field(None, max_length=100)
    image: str | None = None
    status: ProductStatus = ProductStatus.ACTIVE


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    category_id: str | None = None
    price: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    min_stock: int | None = Field(None, ge=0)
    sku: str | None = Field(None, max_length=50)
    barcode: str | None = None
    image: str | None = None
    status: ProductStatus | None = None


class Product(ProductBase):
    """Stored record. Stock is whatever the last count set, which may fall below zero."""
    id: str
    stock: int = 0
    created_at: UtcDateTime
    updated_at: UtcDateTime


class StockUpdate(CamelModel):
    """Set an absolute stock quantity; the implied movement is recorded by the store."""
    quantity: int = Field(..., ge=0)
    reason: str = Field(..., min_length=1, max_length=200)
